"""
Quality Evaluator Service

Scores a finished proposal against a 7-criterion rubric with one JSON-mode
call. Code-fenced JSON is accepted; anything unparseable or out of range
raises EvaluationFailure. No fallback scores are ever produced here.
"""

import logging
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from app.domain.errors import EvaluationFailure
from app.models.proposal_schema import QualityEvaluation
from app.utils.prompt_engine import PromptEngine
from app.utils.text_analysis import parse_json_object

logger = logging.getLogger(__name__)


class QualityEvaluator:
    """Rubric scoring for generated proposals."""

    def __init__(self, completion_service, prompt_engine: Optional[PromptEngine] = None):
        self.completion_service = completion_service
        self.prompt_engine = prompt_engine or PromptEngine()

    async def evaluate(self, proposal_text: str, rfp_text: str, platform: str, industry: str) -> QualityEvaluation:
        """
        Evaluate a proposal.

        Args:
            proposal_text: Final proposal text
            rfp_text: Original RFP
            platform: Target platform
            industry: Classified industry label or id

        Returns:
            QualityEvaluation

        Raises:
            EvaluationFailure: Provider error, unparseable JSON or schema violation
        """
        system_prompt, user_prompt = self.prompt_engine.build_evaluation_prompt(
            proposal_text, rfp_text, platform, industry
        )
        try:
            raw = await self.completion_service.complete(
                system_prompt,
                user_prompt,
                temperature=0.3,
                max_tokens=1000,
                response_format="json",
            )
        except Exception as e:
            raise EvaluationFailure(f"Evaluation call failed: {e}") from e

        return self.parse_evaluation(raw)

    @staticmethod
    def parse_evaluation(raw: Optional[str]) -> QualityEvaluation:
        """Parse provider output (optionally fenced) into a QualityEvaluation."""
        try:
            data = parse_json_object(raw)
        except ValueError as e:
            raise EvaluationFailure(f"Unparseable evaluation output: {e}") from e

        try:
            evaluation = QualityEvaluation.model_validate(data)
        except PydanticValidationError as e:
            raise EvaluationFailure(f"Evaluation output failed validation: {e.error_count()} errors") from e

        logger.info(f"[QualityEvaluator] Score {evaluation.score}/100")
        return evaluation
