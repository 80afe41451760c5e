"""
Proposal Service

End-to-end orchestration of one proposal request:
- Rate limit and plan quota gates (before any LLM call)
- RFP extraction (classifier + structured extraction)
- Industry intelligence and portfolio matching
- Complexity-based length recommendation
- Multi-stage generation with quality evaluation
- Auxiliary enrichments (pricing, timeline, CTA, cover page)
- Persistence and usage accounting
"""
import json
import logging
from typing import Dict, List, Optional

from app.config import settings
from app.domain.errors import AuxiliaryResult, QuotaExceeded, RateLimited
from app.models.proposal_schema import (
    ExtractedRFP,
    GenerationRequest,
    GenerationResult,
    IndustryIntelligence,
    MatchedPortfolioItem,
    PipelineOutcome,
    PortfolioItem,
)
from app.services.auxiliary_generators import (
    COVER_PAGE,
    CTA,
    PRICING,
    TIMELINE,
    AuxiliaryGenerators,
    render_pricing_markdown,
    render_timeline_markdown,
)
from app.services.collaborators import PortfolioStore, ProposalStore, QuotaGate, RateLimiter
from app.services.proposal_engine import ProposalEngine
from app.services.quality_evaluator import QualityEvaluator
from app.services.rfp_extractor_service import RFPExtractorService
from app.utils import industry_intelligence, portfolio_matcher
from app.utils.text_analysis import analyze_rfp_complexity, get_smart_length_adjustment

logger = logging.getLogger(__name__)

RATE_LIMIT_ENDPOINT = "generate_proposal"
GENERAL_BUSINESS = "general-business"


class ProposalService:
    """
    Service for proposal generation.

    Orchestrates:
    - RFPExtractorService for structured RFP understanding
    - industry_intelligence / portfolio_matcher for context
    - ProposalEngine for Stage A -> B -> C (+ QualityEvaluator)
    - AuxiliaryGenerators for optional enrichments
    """

    def __init__(
        self,
        extractor: RFPExtractorService,
        engine: ProposalEngine,
        auxiliary: AuxiliaryGenerators,
        proposal_store: ProposalStore,
        quota_gate: QuotaGate,
        rate_limiter: RateLimiter,
        portfolio_store: Optional[PortfolioStore] = None,
        top_n: Optional[int] = None,
        evaluate_quality: Optional[bool] = None,
    ):
        """
        Initialize with dependencies.

        Args:
            extractor: RFP extractor (runs the classifier first)
            engine: Multi-stage proposal engine
            auxiliary: Pricing/timeline/CTA/cover generators
            proposal_store: Persistence for finished proposals
            quota_gate: Monthly plan quota
            rate_limiter: Per-user request limiter
            portfolio_store: Source of portfolio items when the request carries none
            top_n: Number of portfolio matches to keep
            evaluate_quality: Run the quality evaluator after writing
        """
        self.extractor = extractor
        self.engine = engine
        self.auxiliary = auxiliary
        self.proposal_store = proposal_store
        self.quota_gate = quota_gate
        self.rate_limiter = rate_limiter
        self.portfolio_store = portfolio_store
        self.top_n = top_n or settings.PORTFOLIO_TOP_N
        self.evaluate_quality = settings.EVALUATE_QUALITY if evaluate_quality is None else evaluate_quality

    async def generate(self, request: GenerationRequest) -> PipelineOutcome:
        """
        Generate, enrich and persist a proposal.

        Args:
            request: Validated GenerationRequest

        Returns:
            PipelineOutcome with the stored proposal id and all artifacts

        Raises:
            RateLimited: Too many requests in the current window
            QuotaExceeded: Monthly plan quota used up
            GenerationStageFailure: Stage A/B/C failed; nothing is persisted
        """
        logger.info(f"[ProposalService] Request from {request.user_id}: platform={request.platform}")

        # Step 1: Gates (no LLM call may precede these)
        self._check_rate_limit(request.user_id)
        quota = self._check_quota(request.user_id)

        # Step 2: Extraction
        extracted = await self.extractor.extract(request.rfp_text)

        # Step 3: Industry intelligence
        intelligence = self._lookup_intelligence(request, extracted)

        # Step 4: Portfolio matching
        matches = portfolio_matcher.match(
            self._load_portfolio(request),
            request.rfp_text,
            extracted.skills or extracted.tech_stack,
            top_n=self.top_n,
        )

        # Step 5: Complexity -> length recommendation
        complexity = analyze_rfp_complexity(
            request.rfp_text,
            len(extracted.requirements),
            len(extracted.deliverables),
            request.platform,
            extracted.industry,
        )
        recommended_length = get_smart_length_adjustment(request.length_adjustment, complexity)
        logger.info(f"[ProposalService] {complexity.reasoning}; length={recommended_length}")

        # Step 6: Stage A -> B -> C (+ evaluation)
        result = await self.engine.generate(
            request,
            extracted,
            intelligence,
            matches,
            smart_length=complexity.recommended_length,
            evaluate_quality=self.evaluate_quality,
        )

        # Step 7: Auxiliary enrichments
        auxiliary = await self.auxiliary.generate_all(request, extracted, result.content)
        degraded = [name for name, outcome in auxiliary.items() if outcome.is_degraded]
        if extracted.degraded:
            degraded.insert(0, "extraction")
        if self.evaluate_quality and result.quality_evaluation is None:
            degraded.append("quality_evaluation")
        result.content = self._append_enrichments(result.content, auxiliary)

        # Step 8: Persist
        outcome = PipelineOutcome(
            proposal_id="",
            result=result,
            extracted=extracted,
            intelligence=intelligence,
            matches=matches,
            recommended_length=recommended_length,
            pricing_table=self._value(auxiliary, PRICING),
            timeline=self._value(auxiliary, TIMELINE),
            cta_suggestion=self._value(auxiliary, CTA),
            cover_page=self._value(auxiliary, COVER_PAGE),
            degraded=degraded,
        )
        outcome.proposal_id = self.proposal_store.save(self._build_record(request, outcome))

        # Step 9: Usage accounting
        self.quota_gate.increment(request.user_id)
        used = quota.used + 1
        outcome.usage = {
            "used": used,
            "limit": quota.limit,
            "plan": quota.plan,
            "remaining": max(0, quota.limit - used),
        }

        logger.info(
            f"[ProposalService] Stored proposal {outcome.proposal_id}: "
            f"{result.word_count} words, quality={result.quality_score}, degraded={degraded}"
        )
        return outcome

    # ===================== GATES =====================

    def _check_rate_limit(self, user_id: str) -> None:
        status = self.rate_limiter.check(f"{user_id}:{RATE_LIMIT_ENDPOINT}")
        if not status.allowed:
            raise RateLimited(status.limit, status.retry_after)

    def _check_quota(self, user_id: str):
        status = self.quota_gate.check(user_id)
        if not status.allowed:
            raise QuotaExceeded(status.used, status.limit, status.plan, status.message)
        return status

    # ===================== CONTEXT =====================

    def _lookup_intelligence(self, request: GenerationRequest, extracted: ExtractedRFP) -> IndustryIntelligence:
        industry = extracted.industry
        if industry == GENERAL_BUSINESS and request.user_industry:
            industry = request.user_industry
        intelligence = industry_intelligence.lookup(industry, extracted.project_type, request.rfp_text)
        logger.info(f"[ProposalService] Industry intelligence: {intelligence.name} (classified {extracted.industry})")
        return intelligence

    def _load_portfolio(self, request: GenerationRequest) -> List[PortfolioItem]:
        if request.portfolio_items:
            return list(request.portfolio_items)
        if self.portfolio_store is None:
            return []
        return [PortfolioItem.from_dict(doc) for doc in self.portfolio_store.list_for_user(request.user_id)]

    # ===================== ASSEMBLY =====================

    @staticmethod
    def _value(auxiliary: Dict[str, AuxiliaryResult], name: str):
        outcome = auxiliary.get(name)
        return outcome.value if outcome else None

    def _append_enrichments(self, content: str, auxiliary: Dict[str, AuxiliaryResult]) -> str:
        blocks = [content]
        pricing = self._value(auxiliary, PRICING)
        if pricing:
            blocks.append(render_pricing_markdown(pricing))
        timeline = self._value(auxiliary, TIMELINE)
        if timeline:
            blocks.append(render_timeline_markdown(timeline))
        return "\n\n".join(blocks)

    @staticmethod
    def _build_record(request: GenerationRequest, outcome: PipelineOutcome) -> Dict:
        result: GenerationResult = outcome.result
        extracted = outcome.extracted
        matches: List[MatchedPortfolioItem] = outcome.matches
        evaluation = result.quality_evaluation

        return {
            "user_id": request.user_id,
            "title": request.proposal_title or f"{extracted.project_type or 'Project'} Proposal",
            "rfp_text": request.rfp_text,
            "generated_proposal": result.content,
            "platform": request.platform,
            "style": request.style,
            "language": request.language,
            "proposal_length": outcome.recommended_length,
            "tone": request.tone_adjustment if request.tone_adjustment != "same" else request.tone_preference,
            "industry": extracted.industry,
            "quality_score": result.quality_score,
            "quality_evaluation": evaluation.model_dump(by_alias=True) if evaluation else None,
            "extracted_data": json.dumps(extracted.to_dict()),
            "matched_portfolio_items": [m.item.id for m in matches],
            "pricing_table": outcome.pricing_table,
            "timeline": outcome.timeline,
            "cover_page_data": outcome.cover_page,
            "cta_suggestion": outcome.cta_suggestion,
            "template_used_id": request.template_id,
            "include_pricing": request.include_pricing,
            "degraded": list(outcome.degraded),
            "status": "draft",
        }


# ===================== SERVICE FACTORY =====================

_proposal_service_instance: Optional[ProposalService] = None


def get_proposal_service() -> ProposalService:
    """
    Get or create the singleton ProposalService wired to OpenAI and MongoDB.

    Returns:
        ProposalService instance
    """
    global _proposal_service_instance

    if _proposal_service_instance is None:
        from app.infra.cache import get_rate_limiter
        from app.infra.mongodb.repositories import get_portfolio_repo, get_proposal_repo, get_quota_gate
        from app.utils.openai_service import OpenAIService

        proposal_llm = OpenAIService(api_key=settings.OPENAI_API_KEY, llm_model=settings.PROPOSAL_MODEL)
        helper_llm = OpenAIService(api_key=settings.OPENAI_API_KEY, llm_model=settings.HELPER_MODEL)

        _proposal_service_instance = ProposalService(
            extractor=RFPExtractorService(completion_service=helper_llm),
            engine=ProposalEngine(proposal_llm, evaluator=QualityEvaluator(helper_llm)),
            auxiliary=AuxiliaryGenerators(helper_llm),
            proposal_store=get_proposal_repo(),
            quota_gate=get_quota_gate(),
            rate_limiter=get_rate_limiter(),
            portfolio_store=get_portfolio_repo(),
        )
        logger.info("[ProposalService] Service initialized")

    return _proposal_service_instance
