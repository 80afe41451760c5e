"""
RFP Extractor Service

Turns free-text RFPs into an ExtractedRFP.

Flow:
1. Classify the raw text first (industry ground truth comes from the text)
2. One JSON-mode extraction call for requirements, budget, tone, etc.
3. Merge: classifier owns industry fields; extractor wins on project type and
   timeline when it found one; deliverables are the de-duplicated union

An extraction failure never fails the request: the classifier result alone
is returned with empty requirement/deliverable lists.
"""

import logging
from typing import Any, Dict, Optional

from app.config import settings
from app.domain.constants import ClientTone
from app.domain.errors import ExtractionDegraded
from app.models.proposal_schema import ClassifiedProject, ExtractedRFP
from app.utils.industry_classifier import IndustryClassifier
from app.utils.prompt_engine import PromptEngine
from app.utils.text_analysis import (
    as_optional_string,
    as_string_list,
    dedupe_preserving_order,
    parse_json_object,
    truncate,
)

logger = logging.getLogger(__name__)

VALID_TONES = {t.value for t in ClientTone}


class RFPExtractorService:
    """
    Service for extracting structured facts from RFP text.

    Always runs the classifier before the extraction call.
    """

    def __init__(
        self,
        completion_service=None,
        classifier: Optional[IndustryClassifier] = None,
        prompt_engine: Optional[PromptEngine] = None,
        max_rfp_chars: Optional[int] = None,
    ):
        """
        Initialize with dependencies.

        Args:
            completion_service: Completion client (helper model)
            classifier: Industry classifier; built on the same client when omitted
            prompt_engine: Prompt builder
            max_rfp_chars: Input truncation limit
        """
        self.completion_service = completion_service
        self.prompt_engine = prompt_engine or PromptEngine()
        self.classifier = classifier or IndustryClassifier(completion_service, self.prompt_engine)
        self.max_rfp_chars = max_rfp_chars or settings.MAX_RFP_CHARS

    async def extract(self, rfp_text: str) -> ExtractedRFP:
        """
        Extract structured data from an RFP.

        Args:
            rfp_text: Raw RFP text

        Returns:
            ExtractedRFP (degraded=True when only classifier data was available)
        """
        rfp_text = truncate(rfp_text, self.max_rfp_chars)
        classified = await self.classifier.classify(rfp_text)

        try:
            extracted_data = await self._extract_structured(rfp_text)
        except ExtractionDegraded as e:
            logger.warning(f"[RFPExtractor] {e} - falling back to classifier data")
            return self._create_fallback_extraction(classified)

        result = self._merge(extracted_data, classified)
        logger.info(
            f"[RFPExtractor] Extracted {len(result.requirements)} requirements, "
            f"{len(result.deliverables)} deliverables, industry={result.industry}, tone={result.tone}"
        )
        return result

    async def _extract_structured(self, rfp_text: str) -> Dict[str, Any]:
        """
        Run the JSON extraction call.

        Raises:
            ExtractionDegraded: On provider error or unparseable output
        """
        if self.completion_service is None:
            raise ExtractionDegraded("No completion service configured")

        system_prompt, user_prompt = self.prompt_engine.build_extraction_prompt(rfp_text)
        try:
            raw = await self.completion_service.complete(
                system_prompt,
                user_prompt,
                temperature=0.2,
                max_tokens=1500,
                response_format="json",
            )
            return parse_json_object(raw)
        except Exception as e:
            raise ExtractionDegraded(f"Structured extraction failed: {e}") from e

    def _merge(self, data: Dict[str, Any], classified: ClassifiedProject) -> ExtractedRFP:
        tone = str(data.get("tone") or "").strip().lower()
        if tone not in VALID_TONES:
            tone = ClientTone.PROFESSIONAL.value

        return ExtractedRFP(
            requirements=as_string_list(data.get("requirements")),
            deliverables=dedupe_preserving_order(
                as_string_list(data.get("deliverables")), classified.deliverables
            ),
            budget=as_optional_string(data.get("budget")),
            timeline=as_optional_string(data.get("timeline")) or classified.timeline,
            red_flags=as_string_list(data.get("redFlags")),
            client_name=as_optional_string(data.get("clientName")),
            project_type=as_optional_string(data.get("projectType")) or classified.project_type,
            skills=as_string_list(data.get("skills")),
            tone=tone,
            industry=classified.industry,
            industry_label=classified.industry_label,
            core_requirements=list(classified.core_requirements),
            tech_stack=list(classified.tech_stack),
        )

    def _create_fallback_extraction(self, classified: ClassifiedProject) -> ExtractedRFP:
        """Classifier-only data; no requirements or deliverables are invented."""
        return ExtractedRFP(
            requirements=[],
            deliverables=[],
            budget=None,
            timeline=classified.timeline,
            red_flags=[],
            client_name=None,
            project_type=classified.project_type,
            skills=list(classified.tech_stack),
            tone=ClientTone.PROFESSIONAL.value,
            industry=classified.industry,
            industry_label=classified.industry_label,
            core_requirements=list(classified.core_requirements),
            tech_stack=list(classified.tech_stack),
            degraded=True,
        )
