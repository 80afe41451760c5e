"""
Typed artifacts for the proposal generation pipeline

Defines the objects passed between pipeline stages:
- ClassifiedProject / ExtractedRFP: what the RFP asks for
- IndustryIntelligence: static knowledge block per industry
- PortfolioItem / MatchedPortfolioItem: evidence selected for the proposal
- GenerationRequest: validated, immutable pipeline input
- AnalysisResult -> StructurePlan -> proposal text: stage artifacts
- QualityEvaluation: rubric score, validated from provider JSON
"""
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from app.domain.constants import (
    Language,
    LengthAdjustment,
    Platform,
    ProposalStyle,
    ToneAdjustment,
)
from app.domain.errors import InvalidRequestError
from app.domain.templates import get_template


MIN_RFP_CHARS = 50


# ===================== CLASSIFICATION & EXTRACTION =====================

@dataclass(frozen=True)
class ClassifiedProject:
    """Industry classification derived from raw RFP text only."""
    industry: str
    industry_label: str
    project_type: str
    core_requirements: List[str] = field(default_factory=list)
    tech_stack: List[str] = field(default_factory=list)
    deliverables: List[str] = field(default_factory=list)
    timeline: Optional[str] = None
    confidence: float = 0.5
    method: str = "keywords"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ExtractedRFP:
    """Structured facts pulled from an RFP, merged with classifier output."""
    requirements: List[str]
    deliverables: List[str]
    budget: Optional[str]
    timeline: Optional[str]
    red_flags: List[str]
    client_name: Optional[str]
    project_type: Optional[str]
    skills: List[str]
    tone: str
    industry: str
    industry_label: str
    core_requirements: List[str] = field(default_factory=list)
    tech_stack: List[str] = field(default_factory=list)
    degraded: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ===================== INDUSTRY INTELLIGENCE =====================

@dataclass(frozen=True)
class IndustryIntelligence:
    """Read-only knowledge block used to ground prompts in industry language."""
    key: str
    name: str
    terminology: Tuple[str, ...]
    kpis: Tuple[str, ...]
    ux_needs: Tuple[str, ...]
    seo_needs: Tuple[str, ...]
    pain_points: Tuple[str, ...]
    conversion_principles: Tuple[str, ...]
    technical_requirements: Tuple[str, ...]


# ===================== PORTFOLIO =====================

@dataclass(frozen=True)
class PortfolioItem:
    """Portfolio entry supplied by the persistence layer."""
    id: str
    title: str
    description: str = ""
    tags: Tuple[str, ...] = ()
    skills: Tuple[str, ...] = ()
    url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PortfolioItem":
        return cls(
            id=str(data.get("id") or data.get("item_id") or data.get("_id") or ""),
            title=data.get("title") or data.get("company_name") or "",
            description=data.get("description") or "",
            tags=tuple(data.get("tags") or data.get("deliverables") or ()),
            skills=tuple(data.get("skills") or ()),
            url=data.get("url") or data.get("portfolio_url"),
        )


@dataclass(frozen=True)
class MatchedPortfolioItem:
    item: PortfolioItem
    score: float
    rank: int
    matched_keywords: Tuple[str, ...] = ()

    @property
    def title(self) -> str:
        return self.item.title


# ===================== REQUEST =====================

@dataclass(frozen=True)
class GenerationRequest:
    """
    Validated input for one pipeline run.

    Validation happens once in __post_init__; instances are frozen afterwards.

    Raises:
        InvalidRequestError: If any field is malformed
    """
    user_id: str
    rfp_text: str
    platform: str = Platform.UPWORK.value
    portfolio_items: Tuple[PortfolioItem, ...] = ()
    user_industry: Optional[str] = None
    company_name: Optional[str] = None
    tone_preference: Optional[str] = None
    project_value: Optional[float] = None
    proposal_title: Optional[str] = None
    style: str = ProposalStyle.MODERN_CLEAN.value
    language: str = Language.EN.value
    include_pricing: bool = False
    length_adjustment: str = LengthAdjustment.SAME.value
    tone_adjustment: str = ToneAdjustment.SAME.value
    template_id: Optional[str] = None

    def __post_init__(self):
        errors = []

        if not self.user_id:
            errors.append("user_id is required")
        if not self.rfp_text or len(self.rfp_text.strip()) < MIN_RFP_CHARS:
            errors.append(f"rfp_text must be at least {MIN_RFP_CHARS} characters")
        if self.platform not in {p.value for p in Platform}:
            errors.append(f"Unsupported platform: {self.platform}")
        if self.style not in {s.value for s in ProposalStyle}:
            errors.append(f"Unsupported style: {self.style}")
        if self.language not in {lang.value for lang in Language}:
            errors.append(f"Unsupported language: {self.language}")
        if self.length_adjustment not in {length.value for length in LengthAdjustment}:
            errors.append(f"Unsupported length adjustment: {self.length_adjustment}")
        if self.tone_adjustment not in {t.value for t in ToneAdjustment}:
            errors.append(f"Unsupported tone adjustment: {self.tone_adjustment}")
        if self.project_value is not None and self.project_value <= 0:
            errors.append("project_value must be positive")
        if self.template_id is not None and get_template(self.template_id) is None:
            errors.append(f"Unknown template: {self.template_id}")

        if errors:
            raise InvalidRequestError("; ".join(errors), errors=errors)

        # Normalize to tuple so the frozen instance holds no mutable list
        object.__setattr__(self, "portfolio_items", tuple(self.portfolio_items))


# ===================== STAGE ARTIFACTS =====================

@dataclass(frozen=True)
class AnalysisResult:
    """Stage A output: what the client really needs."""
    key_goals: List[str] = field(default_factory=list)
    pain_points: List[str] = field(default_factory=list)
    differentiators: List[str] = field(default_factory=list)
    hidden_opportunities: List[str] = field(default_factory=list)
    risks: List[str] = field(default_factory=list)
    missing_info: List[str] = field(default_factory=list)
    client_profile: str = ""
    project_complexity: str = "moderate"
    recommended_approach: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PlanSection:
    name: str
    guidance: str


@dataclass(frozen=True)
class StructurePlan:
    """Stage B output: ordered section plan plus messaging strategy."""
    sections: List[PlanSection]
    opening_hook: str = ""
    key_messages: List[str] = field(default_factory=list)
    differentiators: List[str] = field(default_factory=list)
    objection_handlers: List[str] = field(default_factory=list)
    pricing_strategy: str = ""
    timeline_approach: str = ""
    cta_strategy: str = ""
    template_id: Optional[str] = None
    tone_hint: Optional[str] = None

    @property
    def section_names(self) -> List[str]:
        return [s.name for s in self.sections]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ===================== QUALITY =====================

class QualityCriteria(BaseModel):
    """Seven 1-10 rubric sub-scores."""
    model_config = ConfigDict(populate_by_name=True)

    clarity: int = Field(..., ge=1, le=10)
    relevance: int = Field(..., ge=1, le=10)
    industry_alignment: int = Field(..., ge=1, le=10, alias="industryAlignment")
    tone_accuracy: int = Field(..., ge=1, le=10, alias="toneAccuracy")
    differentiator_strength: int = Field(..., ge=1, le=10, alias="differentiatorStrength")
    structure: int = Field(..., ge=1, le=10)
    platform_fit: int = Field(..., ge=1, le=10, alias="platformFit")


class QualityEvaluation(BaseModel):
    """Rubric evaluation of a finished proposal."""
    model_config = ConfigDict(populate_by_name=True)

    score: int = Field(..., ge=0, le=100)
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    criteria: QualityCriteria


# ===================== RESULTS =====================

@dataclass
class GenerationResult:
    content: str
    analysis: AnalysisResult
    plan: StructurePlan
    quality_evaluation: Optional[QualityEvaluation] = None

    @property
    def word_count(self) -> int:
        return len(self.content.split())

    @property
    def quality_score(self) -> Optional[int]:
        return self.quality_evaluation.score if self.quality_evaluation else None


@dataclass
class PipelineOutcome:
    """Everything produced by one end-to-end generation request."""
    proposal_id: str
    result: GenerationResult
    extracted: ExtractedRFP
    intelligence: IndustryIntelligence
    matches: List[MatchedPortfolioItem]
    recommended_length: str
    pricing_table: Optional[Dict[str, Any]] = None
    timeline: Optional[Dict[str, Any]] = None
    cta_suggestion: Optional[Dict[str, Any]] = None
    cover_page: Optional[Dict[str, Any]] = None
    degraded: List[str] = field(default_factory=list)
    usage: Optional[Dict[str, Any]] = None
