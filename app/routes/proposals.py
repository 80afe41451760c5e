"""
Proposal Generation Routes

- POST /generate: full pipeline (extraction -> intelligence -> matching ->
  Stage A/B/C -> evaluation -> enrichments -> persistence)
- GET /templates: proposal templates, optionally filtered by category
- GET /options: supported platforms, styles, languages, lengths and tones

The caller is identified by the X-User-Id header (set by the upstream gateway).
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Header, HTTPException
from pydantic import BaseModel, Field

from app.domain.constants import (
    ClientTone,
    Language,
    LANGUAGE_NAMES,
    LengthAdjustment,
    Platform,
    ProposalStyle,
    ToneAdjustment,
)
from app.domain.errors import (
    GenerationStageFailure,
    InvalidRequestError,
    QuotaExceeded,
    RateLimited,
)
from app.domain.templates import list_templates
from app.models.proposal_schema import GenerationRequest, PipelineOutcome, PortfolioItem
from app.services.proposal_service import ProposalService, get_proposal_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/proposals", tags=["proposals"])


# ===================== REQUEST/RESPONSE MODELS =====================

class PortfolioItemInput(BaseModel):
    """Portfolio item supplied inline with the request"""
    id: str = Field(..., description="Portfolio item ID")
    title: str = Field(..., description="Project title")
    description: str = Field("", description="What was built")
    tags: List[str] = Field(default_factory=list, description="Industry or deliverable tags")
    skills: List[str] = Field(default_factory=list, description="Tech stack used")
    url: Optional[str] = Field(None, description="Link to the live work")


class GenerateProposalRequest(BaseModel):
    """Request to generate a proposal from an RFP"""
    rfp_text: str = Field(..., description="Full RFP / job post text (min 50 characters)")
    platform: str = Field(Platform.UPWORK.value, description="Target platform (see /options)")
    portfolio_items: Optional[List[PortfolioItemInput]] = Field(
        None, description="Inline portfolio; the stored portfolio is used when omitted"
    )
    user_industry: Optional[str] = Field(None, description="Your industry, used when the RFP is ambiguous")
    company_name: Optional[str] = Field(None, description="Client company name")
    tone_preference: Optional[str] = Field(None, description="Preferred tone")
    project_value: Optional[float] = Field(None, description="Expected project value in USD")
    proposal_title: Optional[str] = Field(None, description="Title for the proposal / cover page")
    style: str = Field(ProposalStyle.MODERN_CLEAN.value, description="Formatting style")
    language: str = Field(Language.EN.value, description="Output language code")
    include_pricing: bool = Field(False, description="Generate pricing table and timeline")
    length_adjustment: str = Field(LengthAdjustment.SAME.value, description="shorter, same or longer")
    tone_adjustment: str = Field(ToneAdjustment.SAME.value, description="same, more_formal or more_casual")
    template_id: Optional[str] = Field(None, description="Proposal template ID (see /templates)")


class MatchedPortfolioResponse(BaseModel):
    id: str
    title: str
    score: float
    rank: int
    url: Optional[str] = None
    matched_keywords: List[str] = Field(default_factory=list)


class GenerateProposalResponse(BaseModel):
    """Generated proposal with all pipeline artifacts"""
    success: bool
    proposal_id: str
    generated_proposal: str
    word_count: int
    quality_score: Optional[int] = Field(None, description="0-100, null when evaluation was unavailable")
    quality_evaluation: Optional[Dict[str, Any]] = None
    industry: str
    industry_intelligence: str
    extracted: Dict[str, Any]
    matched_portfolio: List[MatchedPortfolioResponse]
    recommended_length: str
    pricing_table: Optional[Dict[str, Any]] = None
    timeline: Optional[Dict[str, Any]] = None
    cta_suggestion: Optional[Dict[str, Any]] = None
    cover_page: Optional[Dict[str, Any]] = None
    degraded: List[str] = Field(default_factory=list, description="Optional steps that fell back")
    usage: Optional[Dict[str, Any]] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


# ===================== HELPER FUNCTIONS =====================

def _to_generation_request(user_id: str, request: GenerateProposalRequest) -> GenerationRequest:
    """Convert the HTTP payload into the validated pipeline request."""
    portfolio = tuple(
        PortfolioItem.from_dict(item.model_dump()) for item in request.portfolio_items or []
    )
    return GenerationRequest(
        user_id=user_id,
        rfp_text=request.rfp_text,
        platform=request.platform,
        portfolio_items=portfolio,
        user_industry=request.user_industry,
        company_name=request.company_name,
        tone_preference=request.tone_preference,
        project_value=request.project_value,
        proposal_title=request.proposal_title,
        style=request.style,
        language=request.language,
        include_pricing=request.include_pricing,
        length_adjustment=request.length_adjustment,
        tone_adjustment=request.tone_adjustment,
        template_id=request.template_id,
    )


def _to_response(outcome: PipelineOutcome) -> GenerateProposalResponse:
    result = outcome.result
    evaluation = result.quality_evaluation
    return GenerateProposalResponse(
        success=True,
        proposal_id=outcome.proposal_id,
        generated_proposal=result.content,
        word_count=result.word_count,
        quality_score=result.quality_score,
        quality_evaluation=evaluation.model_dump(by_alias=True) if evaluation else None,
        industry=outcome.extracted.industry,
        industry_intelligence=outcome.intelligence.name,
        extracted=outcome.extracted.to_dict(),
        matched_portfolio=[
            MatchedPortfolioResponse(
                id=m.item.id,
                title=m.title,
                score=m.score,
                rank=m.rank,
                url=m.item.url,
                matched_keywords=list(m.matched_keywords),
            )
            for m in outcome.matches
        ],
        recommended_length=outcome.recommended_length,
        pricing_table=outcome.pricing_table,
        timeline=outcome.timeline,
        cta_suggestion=outcome.cta_suggestion,
        cover_page=outcome.cover_page,
        degraded=outcome.degraded,
        usage=outcome.usage,
        metadata={
            "analysis": result.analysis.to_dict(),
            "sections": result.plan.section_names,
            "template_id": result.plan.template_id,
        },
    )


# ===================== MAIN ENDPOINT =====================

@router.post(
    "/generate",
    response_model=GenerateProposalResponse,
    status_code=200,
    summary="Generate a proposal from an RFP",
    responses={
        200: {"description": "Proposal generated successfully"},
        400: {"description": "Invalid request"},
        402: {"description": "Monthly proposal quota reached"},
        429: {"description": "Rate limit exceeded"},
        502: {"description": "Generation stage failed"},
        500: {"description": "Unexpected error"},
    },
)
async def generate_proposal(
    request: GenerateProposalRequest,
    x_user_id: str = Header(..., alias="X-User-Id"),
    service: ProposalService = Depends(get_proposal_service),
):
    """
    Generate a proposal.

    **Request Example:**
    ```json
    {
        "rfp_text": "We need a React dashboard with Stripe subscriptions and OAuth login...",
        "platform": "Upwork",
        "style": "modern_clean",
        "language": "en",
        "include_pricing": true,
        "template_id": "web-dev-full-stack"
    }
    ```
    """
    try:
        generation_request = _to_generation_request(x_user_id, request)
    except InvalidRequestError as e:
        raise HTTPException(status_code=400, detail={"message": str(e), "errors": e.errors})

    try:
        outcome = await service.generate(generation_request)
        return _to_response(outcome)

    except RateLimited as e:
        raise HTTPException(
            status_code=429,
            detail={"message": str(e), "limit": e.limit, "retry_after": e.retry_after},
            headers={"Retry-After": str(e.retry_after)},
        )
    except QuotaExceeded as e:
        raise HTTPException(status_code=402, detail=e.to_dict())
    except GenerationStageFailure as e:
        logger.error(f"[ProposalAPI] Generation failed at stage {e.stage}: {e}", exc_info=True)
        raise HTTPException(status_code=502, detail={"message": str(e), "stage": e.stage})
    except Exception as e:
        logger.error(f"[ProposalAPI] Error generating proposal: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to generate proposal: {str(e)}")


# ===================== CATALOG ENDPOINTS =====================

@router.get("/templates", summary="List proposal templates")
async def get_templates(category: Optional[str] = None):
    templates = list_templates(category)
    return {"templates": [t.to_dict() for t in templates], "total": len(templates)}


@router.get("/options", summary="Supported generation options")
async def get_options():
    return {
        "platforms": [p.value for p in Platform],
        "styles": [s.value for s in ProposalStyle],
        "languages": [{"code": lang.value, "name": LANGUAGE_NAMES[lang.value]} for lang in Language],
        "length_adjustments": [length.value for length in LengthAdjustment],
        "tone_adjustments": [tone.value for tone in ToneAdjustment],
        "tones": [tone.value for tone in ClientTone],
    }
