"""
Pipeline error taxonomy and the degraded-result type

Failed requests:
- InvalidRequestError: malformed input, rejected before any LLM call
- QuotaExceeded / RateLimited: gate rejections, rejected before any LLM call
- GenerationStageFailure: Stage A/B/C produced no usable output

Recovered locally:
- ExtractionDegraded: extractor falls back to classifier-only data
- EvaluationFailure: proposal is stored with a null quality score
- AuxiliaryGeneratorFailure: the enrichment field is omitted
"""
from dataclasses import dataclass
from typing import Any, Generic, List, Optional, TypeVar

T = TypeVar("T")


class ProposalPipelineError(Exception):
    """Base class for all pipeline errors."""


class InvalidRequestError(ProposalPipelineError):
    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or [message]


class QuotaExceeded(ProposalPipelineError):
    def __init__(self, used: int, limit: int, plan: str, message: Optional[str] = None):
        super().__init__(message or f"Proposal quota reached ({used}/{limit} on {plan} plan)")
        self.used = used
        self.limit = limit
        self.plan = plan

    def to_dict(self) -> dict:
        return {"used": self.used, "limit": self.limit, "plan": self.plan, "message": str(self)}


class RateLimited(ProposalPipelineError):
    def __init__(self, limit: int, retry_after: int):
        super().__init__(f"Rate limit exceeded ({limit} requests). Retry in {retry_after}s")
        self.limit = limit
        self.retry_after = retry_after


class ExtractionDegraded(ProposalPipelineError):
    """Structured extraction failed; classifier data is used instead."""


class GenerationStageFailure(ProposalPipelineError):
    def __init__(self, stage: str, message: str):
        super().__init__(f"Stage {stage} failed: {message}")
        self.stage = stage


class EvaluationFailure(ProposalPipelineError):
    """Quality evaluator output was missing or unparseable."""


class AuxiliaryGeneratorFailure(ProposalPipelineError):
    def __init__(self, generator: str, message: str):
        super().__init__(f"{generator} failed: {message}")
        self.generator = generator


@dataclass(frozen=True)
class AuxiliaryResult(Generic[T]):
    """
    Outcome of one optional enrichment step.

    Exactly one of value / failure is set. Callers read `.value` and get None
    when the step degraded.
    """
    name: str
    value: Optional[T] = None
    failure: Optional[AuxiliaryGeneratorFailure] = None

    @classmethod
    def ok(cls, name: str, value: T) -> "AuxiliaryResult[T]":
        return cls(name=name, value=value)

    @classmethod
    def degraded(cls, name: str, error: Any) -> "AuxiliaryResult[T]":
        return cls(name=name, failure=AuxiliaryGeneratorFailure(name, str(error)))

    @property
    def is_degraded(self) -> bool:
        return self.failure is not None
