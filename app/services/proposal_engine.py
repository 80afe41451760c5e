"""
Multi-Stage Proposal Engine

Three sequential, non-skippable stages:
- Stage A (analysis): RFP + extraction + industry intelligence + portfolio -> AnalysisResult
- Stage B (structure): AnalysisResult -> StructurePlan (template sections are mandatory)
- Stage C (writing): StructurePlan -> proposal text under persona, tone, length,
  style and language directives

Any stage without usable output raises GenerationStageFailure; there is no
structural fallback for a missing stage artifact. Quality evaluation runs
afterwards and degrades to None on failure.
"""

import re
import logging
from typing import Any, Dict, List, Optional, Sequence

from app.domain.constants import BANNED_PHRASES, LENGTH_MAX_TOKENS
from app.domain.errors import EvaluationFailure, GenerationStageFailure
from app.domain.templates import ProposalTemplate, get_template
from app.models.proposal_schema import (
    AnalysisResult,
    ExtractedRFP,
    GenerationRequest,
    GenerationResult,
    IndustryIntelligence,
    MatchedPortfolioItem,
    PlanSection,
    StructurePlan,
)
from app.services.quality_evaluator import QualityEvaluator
from app.utils.prompt_engine import DEFAULT_SECTIONS, PromptEngine, resolve_length
from app.utils.text_analysis import as_string_list, parse_json_object, word_count

logger = logging.getLogger(__name__)

STAGE_ANALYSIS = "analysis"
STAGE_STRUCTURE = "structure"
STAGE_WRITING = "writing"

VALID_COMPLEXITY = {"simple", "moderate", "complex"}
MIN_PROPOSAL_WORDS = 100

SELF_REFERENCE_PATTERNS = [
    re.compile(r"As an AI[^.\n]*[.,]?\s*", re.IGNORECASE),
    re.compile(r"As a language model[^.\n]*[.,]?\s*", re.IGNORECASE),
    re.compile(r"I apologize, but\s*", re.IGNORECASE),
]


# ===================== POST-PROCESSING =====================

def cleanup_proposal(proposal: str) -> str:
    """Strip leaked AI self-references, instruction lines and deep headings."""
    cleaned = proposal
    for pattern in SELF_REFERENCE_PATTERNS:
        cleaned = pattern.sub("", cleaned)

    cleaned = re.sub(r"\n{4,}", "\n\n\n", cleaned)
    cleaned = re.sub(r"^#{4,}", "###", cleaned, flags=re.MULTILINE)
    cleaned = re.sub(r"^.*\*\*CRITICAL\*\*:.*(?:\n|$)", "", cleaned, flags=re.MULTILINE | re.IGNORECASE)
    cleaned = re.sub(r"^## MANDATORY STRUCTURE.*(?:\n|$)", "", cleaned, flags=re.MULTILINE | re.IGNORECASE)
    return cleaned.strip()


def validate_proposal_quality(proposal: str) -> List[str]:
    """Cheap local checks; returns a list of issues (empty when clean)."""
    issues = []
    if word_count(proposal) < MIN_PROPOSAL_WORDS:
        issues.append("Proposal too short")
    proposal_lower = proposal.lower()
    for phrase in BANNED_PHRASES:
        if phrase.lower() in proposal_lower:
            issues.append(f"Contains banned phrase: {phrase}")
    return issues


# ===================== PLAN CONFORMANCE =====================

def _section_guidance_map(raw_sections: Any) -> Dict[str, str]:
    """Accept [{"name", "guidance"}], {"name": "guidance"} or ["name"] from the model."""
    guidance: Dict[str, str] = {}
    if isinstance(raw_sections, dict):
        for name, text in raw_sections.items():
            guidance[str(name).strip().lower()] = str(text or "").strip()
    elif isinstance(raw_sections, list):
        for entry in raw_sections:
            if isinstance(entry, dict):
                name = entry.get("name") or entry.get("section") or entry.get("key")
                text = entry.get("guidance") or entry.get("description") or entry.get("content") or ""
            else:
                name, text = entry, ""
            if name:
                guidance.setdefault(str(name).strip().lower(), str(text).strip())
    return guidance


def build_section_plan(raw_sections: Any, template: Optional[ProposalTemplate]) -> List[PlanSection]:
    """
    Resolve the ordered section list.

    With a template the result is exactly the template's keys, in template
    order; model guidance is kept for known keys and unknown keys are dropped.
    Without one the model's plan is used, or the default plan if it gave none.
    """
    guidance = _section_guidance_map(raw_sections)

    if template is not None:
        return [
            PlanSection(name=key, guidance=guidance.get(key.lower()) or default)
            for key, default in template.default_sections.items()
        ]

    if guidance:
        return [PlanSection(name=name, guidance=text) for name, text in guidance.items()]

    return [PlanSection(name=name, guidance=text) for name, text in DEFAULT_SECTIONS]


class ProposalEngine:
    """
    Orchestrates Stage A -> Stage B -> Stage C.

    Each stage passes a typed artifact to the next; nothing is mutated between stages.
    """

    def __init__(
        self,
        completion_service,
        evaluator: Optional[QualityEvaluator] = None,
        prompt_engine: Optional[PromptEngine] = None,
    ):
        """
        Args:
            completion_service: Completion client (proposal model)
            evaluator: Quality evaluator; evaluation is skipped when None
            prompt_engine: Prompt builder
        """
        self.completion_service = completion_service
        self.evaluator = evaluator
        self.prompt_engine = prompt_engine or PromptEngine()

    async def generate(
        self,
        request: GenerationRequest,
        extracted: ExtractedRFP,
        intelligence: IndustryIntelligence,
        matches: Sequence[MatchedPortfolioItem],
        smart_length: Optional[str] = None,
        evaluate_quality: bool = True,
    ) -> GenerationResult:
        """
        Run the full generation sequence.

        Args:
            request: Validated generation request
            extracted: Extractor output
            intelligence: Industry knowledge block
            matches: Top portfolio matches
            smart_length: Complexity-based length recommendation, if computed
            evaluate_quality: Run the quality evaluator after writing

        Returns:
            GenerationResult

        Raises:
            GenerationStageFailure: If any stage produces no usable output
        """
        template = get_template(request.template_id)
        length = resolve_length(request.length_adjustment, smart_length)
        logger.info(
            f"[ProposalEngine] Starting generation: platform={request.platform}, "
            f"industry={extracted.industry}, length={length}, template={request.template_id}"
        )

        analysis = await self.run_analysis(request, extracted, intelligence, matches)
        plan = await self.run_structure(request, analysis, intelligence, matches, template)
        content = await self.run_writing(
            request, extracted, intelligence, matches, analysis, plan, length, template
        )

        issues = validate_proposal_quality(content)
        if issues:
            logger.warning(f"[ProposalEngine] Local quality issues: {issues}")

        result = GenerationResult(content=content, analysis=analysis, plan=plan)

        if evaluate_quality and self.evaluator is not None:
            try:
                result.quality_evaluation = await self.evaluator.evaluate(
                    content, request.rfp_text, request.platform, extracted.industry_label
                )
            except EvaluationFailure as e:
                logger.warning(f"[ProposalEngine] Quality evaluation skipped: {e}")

        logger.info(
            f"[ProposalEngine] Generated {result.word_count} words, quality={result.quality_score}"
        )
        return result

    # ===================== STAGES =====================

    async def _complete_json(self, stage: str, prompt, temperature: float, max_tokens: int) -> Dict[str, Any]:
        system_prompt, user_prompt = prompt
        try:
            raw = await self.completion_service.complete(
                system_prompt,
                user_prompt,
                temperature=temperature,
                max_tokens=max_tokens,
                response_format="json",
            )
        except Exception as e:
            raise GenerationStageFailure(stage, f"completion call failed: {e}") from e

        try:
            return parse_json_object(raw)
        except ValueError as e:
            raise GenerationStageFailure(stage, f"unparseable output: {e}") from e

    async def run_analysis(
        self,
        request: GenerationRequest,
        extracted: ExtractedRFP,
        intelligence: IndustryIntelligence,
        matches: Sequence[MatchedPortfolioItem],
    ) -> AnalysisResult:
        """Stage A: deep analysis. No proposal prose."""
        prompt = self.prompt_engine.build_analysis_prompt(request, extracted, intelligence, matches)
        data = await self._complete_json(STAGE_ANALYSIS, prompt, temperature=0.4, max_tokens=1000)

        complexity = str(data.get("projectComplexity") or "moderate").lower()
        analysis = AnalysisResult(
            key_goals=as_string_list(data.get("keyGoals")),
            pain_points=as_string_list(data.get("painPoints")),
            differentiators=as_string_list(data.get("differentiators")),
            hidden_opportunities=as_string_list(data.get("hiddenOpportunities")),
            risks=as_string_list(data.get("risks")),
            missing_info=as_string_list(data.get("missingInfo")),
            client_profile=str(data.get("clientProfile") or ""),
            project_complexity=complexity if complexity in VALID_COMPLEXITY else "moderate",
            recommended_approach=str(data.get("recommendedApproach") or ""),
        )
        logger.info(
            f"[ProposalEngine] Stage A: {len(analysis.key_goals)} goals, "
            f"{len(analysis.pain_points)} pain points, complexity={analysis.project_complexity}"
        )
        return analysis

    async def run_structure(
        self,
        request: GenerationRequest,
        analysis: AnalysisResult,
        intelligence: IndustryIntelligence,
        matches: Sequence[MatchedPortfolioItem],
        template: Optional[ProposalTemplate] = None,
    ) -> StructurePlan:
        """Stage B: section plan; template section keys and order are enforced."""
        prompt = self.prompt_engine.build_structure_prompt(request, analysis, intelligence, matches, template)
        data = await self._complete_json(STAGE_STRUCTURE, prompt, temperature=0.5, max_tokens=1500)

        plan = StructurePlan(
            sections=build_section_plan(data.get("sections"), template),
            opening_hook=str(data.get("openingHook") or ""),
            key_messages=as_string_list(data.get("keyMessages")),
            differentiators=as_string_list(data.get("differentiators")),
            objection_handlers=as_string_list(data.get("objectionHandlers")),
            pricing_strategy=str(data.get("pricingStrategy") or ""),
            timeline_approach=str(data.get("timelineApproach") or ""),
            cta_strategy=str(data.get("ctaStrategy") or ""),
            template_id=template.id if template else None,
            tone_hint=template.tone_hint if template else None,
        )
        logger.info(f"[ProposalEngine] Stage B: sections={plan.section_names}")
        return plan

    async def run_writing(
        self,
        request: GenerationRequest,
        extracted: ExtractedRFP,
        intelligence: IndustryIntelligence,
        matches: Sequence[MatchedPortfolioItem],
        analysis: AnalysisResult,
        plan: StructurePlan,
        length: str,
        template: Optional[ProposalTemplate] = None,
    ) -> str:
        """Stage C: final prose."""
        system_prompt, user_prompt = self.prompt_engine.build_writing_prompt(
            request, extracted, intelligence, matches, analysis, plan, length, template
        )
        try:
            raw = await self.completion_service.complete(
                system_prompt,
                user_prompt,
                temperature=0.7,
                max_tokens=LENGTH_MAX_TOKENS.get(length, LENGTH_MAX_TOKENS["same"]),
            )
        except Exception as e:
            raise GenerationStageFailure(STAGE_WRITING, f"completion call failed: {e}") from e

        content = cleanup_proposal(raw or "")
        if not content:
            raise GenerationStageFailure(STAGE_WRITING, "empty proposal text")

        logger.info(f"[ProposalEngine] Stage C: {word_count(content)} words")
        return content
