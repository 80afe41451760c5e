"""
Industry Classifier

Maps raw RFP text to one of a fixed set of industries plus derived project
type, core requirements, tech stack, deliverables and timeline.

Rules (in priority order):
1. An explicit trade keyword in the text means construction. Always.
2. Without one, construction is never selected; an LLM answer naming it
   (or naming an unknown industry) is replaced by keyword scoring.
3. Keyword scoring is the fallback whenever the LLM is unavailable or fails.

Only the RFP text is ever classified. Portfolio content never reaches this
module.
"""
import re
import logging
from typing import Any, Dict, List, Optional

from app.domain.constants import (
    DELIVERABLE_PATTERNS,
    GENERIC_PROJECT_TYPES,
    INDUSTRY_KEYWORDS,
    INDUSTRY_LABELS,
    PROJECT_TYPE_PATTERNS,
    REQUIREMENT_PATTERNS,
    TECH_FALLBACK_KEYWORDS,
    TECH_STACK_PATTERNS,
    TIMELINE_PATTERN,
    TRADE_KEYWORDS,
)
from app.models.proposal_schema import ClassifiedProject
from app.utils.prompt_engine import PromptEngine
from app.utils.text_analysis import (
    as_optional_string,
    as_string_list,
    contains_any,
    dedupe_preserving_order,
    find_keywords,
    parse_json_object,
)

logger = logging.getLogger(__name__)

CONSTRUCTION = "construction"
MIN_CONFIDENT_SCORE = 3
FALLBACK_PROJECT_TYPE = "Custom Web Project"


# ===================== PATTERN HELPERS =====================

def has_trade_keyword(text: str) -> bool:
    return contains_any(text, TRADE_KEYWORDS)


def extract_project_type(text: str) -> str:
    """First matching concrete project type; never a generic label."""
    text_lower = text.lower()
    for pattern, project_type in PROJECT_TYPE_PATTERNS:
        if re.search(pattern, text_lower):
            return project_type
    return FALLBACK_PROJECT_TYPE


def _collect(text: str, patterns) -> List[str]:
    text_lower = text.lower()
    return dedupe_preserving_order(label for pattern, label in patterns if re.search(pattern, text_lower))


def extract_requirements(text: str) -> List[str]:
    return _collect(text, REQUIREMENT_PATTERNS) or ["Custom development"]


def extract_tech_stack(text: str) -> List[str]:
    return _collect(text, TECH_STACK_PATTERNS)


def extract_deliverables(text: str) -> List[str]:
    return _collect(text, DELIVERABLE_PATTERNS) or ["Project deliverables"]


def extract_timeline(text: str) -> Optional[str]:
    match = re.search(TIMELINE_PATTERN, text, re.IGNORECASE)
    if not match:
        return None
    return match.group(0).strip()


def is_generic_project_type(project_type: Optional[str]) -> bool:
    return (project_type or "").strip().lower() in GENERIC_PROJECT_TYPES


# ===================== KEYWORD SCORING =====================

def score_industries(text: str) -> Dict[str, int]:
    """
    Keyword score per industry: +3 for keywords longer than 5 chars, +1 otherwise.

    Construction is excluded; it is only reachable through the trade allow-list.
    """
    scores: Dict[str, int] = {}
    for industry, keywords in INDUSTRY_KEYWORDS.items():
        if industry == CONSTRUCTION:
            continue
        hits = find_keywords(text, keywords)
        scores[industry] = sum(3 if len(kw) > 5 else 1 for kw in hits)
    return scores


def classify_by_keywords(rfp_text: str) -> ClassifiedProject:
    """Deterministic classification from the RFP text alone."""
    if has_trade_keyword(rfp_text):
        industry, confidence = CONSTRUCTION, 0.9
    else:
        scores = score_industries(rfp_text)
        best_industry, best_score = "general-business", 0
        for industry, score in scores.items():
            if score > best_score:
                best_industry, best_score = industry, score

        if best_score < MIN_CONFIDENT_SCORE:
            industry = "web-development" if contains_any(rfp_text, TECH_FALLBACK_KEYWORDS) else "general-business"
        else:
            industry = best_industry

        confidence = 0.9 if best_score > 10 else 0.7 if best_score > 5 else 0.5

    return ClassifiedProject(
        industry=industry,
        industry_label=INDUSTRY_LABELS[industry],
        project_type=extract_project_type(rfp_text),
        core_requirements=extract_requirements(rfp_text),
        tech_stack=extract_tech_stack(rfp_text),
        deliverables=extract_deliverables(rfp_text),
        timeline=extract_timeline(rfp_text),
        confidence=confidence,
        method="keywords",
    )


# ===================== CLASSIFIER =====================

class IndustryClassifier:
    """
    LLM-assisted classifier with deterministic guard rails.

    The LLM refines labels and lists; the trade allow-list decides whether
    construction is possible at all.
    """

    def __init__(self, completion_service=None, prompt_engine: Optional[PromptEngine] = None):
        self.completion_service = completion_service
        self.prompt_engine = prompt_engine or PromptEngine()

    async def classify(self, rfp_text: str) -> ClassifiedProject:
        """
        Classify an RFP.

        Args:
            rfp_text: Raw RFP text (never portfolio content)

        Returns:
            ClassifiedProject with a concrete project type
        """
        keyword_result = classify_by_keywords(rfp_text)

        if keyword_result.industry == CONSTRUCTION:
            logger.info("[IndustryClassifier] Explicit trade keyword found -> construction")
            return keyword_result

        if self.completion_service is None:
            return keyword_result

        try:
            system_prompt, user_prompt = self.prompt_engine.build_classification_prompt(rfp_text)
            raw = await self.completion_service.complete(
                system_prompt,
                user_prompt,
                temperature=0.2,
                max_tokens=1000,
                response_format="json",
            )
            data = parse_json_object(raw)
        except Exception as e:
            logger.warning(f"[IndustryClassifier] LLM classification failed, using keywords: {e}")
            return keyword_result

        return self._merge_llm_result(data, keyword_result)

    def _merge_llm_result(self, data: Dict[str, Any], keyword_result: ClassifiedProject) -> ClassifiedProject:
        industry = str(data.get("industry") or "").strip().lower()

        if industry == CONSTRUCTION or industry not in INDUSTRY_LABELS:
            # No trade keyword reached this point, so construction is off the table
            logger.info(
                f"[IndustryClassifier] Rejected LLM industry '{industry}', "
                f"using keyword result '{keyword_result.industry}'"
            )
            industry = keyword_result.industry

        project_type = as_optional_string(data.get("projectType"))
        if is_generic_project_type(project_type):
            project_type = keyword_result.project_type

        try:
            confidence = float(data.get("confidence", keyword_result.confidence))
        except (TypeError, ValueError):
            confidence = keyword_result.confidence

        result = ClassifiedProject(
            industry=industry,
            industry_label=INDUSTRY_LABELS[industry],
            project_type=project_type,
            core_requirements=as_string_list(data.get("coreRequirements")) or keyword_result.core_requirements,
            tech_stack=dedupe_preserving_order(as_string_list(data.get("techStack")), keyword_result.tech_stack),
            deliverables=as_string_list(data.get("deliverables")) or keyword_result.deliverables,
            timeline=as_optional_string(data.get("timeline")) or keyword_result.timeline,
            confidence=max(0.0, min(1.0, confidence)),
            method="llm",
        )
        logger.info(
            f"[IndustryClassifier] {result.industry} / {result.project_type} "
            f"(confidence {result.confidence:.2f})"
        )
        return result
