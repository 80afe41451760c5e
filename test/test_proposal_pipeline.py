"""
End-to-end pipeline tests with scripted completions and in-memory stores.
"""

import asyncio
import json
import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from app.domain.errors import GenerationStageFailure, QuotaExceeded, RateLimited
from app.models.proposal_schema import GenerationRequest, PortfolioItem
from app.services.auxiliary_generators import AuxiliaryGenerators
from app.services.proposal_engine import ProposalEngine
from app.services.proposal_service import ProposalService
from app.services.quality_evaluator import QualityEvaluator
from app.services.rfp_extractor_service import RFPExtractorService
from fakes import (
    CLASSIFY,
    EXTRACT,
    PRICING,
    STRUCTURE,
    WRITING,
    FakeCompletionService,
    FakeQuotaGate,
    FakeRateLimiter,
    InMemoryPortfolioStore,
    InMemoryProposalStore,
)

SAAS_RFP = "We need a React dashboard with Stripe subscriptions and OAuth login"

PORTFOLIO_DOCS = [
    {"item_id": "p1", "title": "Bakery landing page", "description": "Brochure site", "user_id": "user-1"},
    {
        "item_id": "p2",
        "title": "Subscription dashboard",
        "description": "React dashboard with Stripe billing and OAuth login",
        "skills": ["React", "Stripe"],
        "user_id": "user-1",
    },
]


def build_service(fake=None, quota=None, limiter=None, store=None, portfolio=None):
    fake = fake or FakeCompletionService()
    service = ProposalService(
        extractor=RFPExtractorService(completion_service=fake),
        engine=ProposalEngine(fake, evaluator=QualityEvaluator(fake)),
        auxiliary=AuxiliaryGenerators(fake),
        proposal_store=store if store is not None else InMemoryProposalStore(),
        quota_gate=quota or FakeQuotaGate(),
        rate_limiter=limiter or FakeRateLimiter(),
        portfolio_store=portfolio if portfolio is not None else InMemoryPortfolioStore(PORTFOLIO_DOCS),
        top_n=3,
        evaluate_quality=True,
    )
    return service, fake


def generate(service, **request_fields):
    fields = {"user_id": "user-1", "rfp_text": SAAS_RFP}
    fields.update(request_fields)
    return asyncio.run(service.generate(GenerationRequest(**fields)))


def test_saas_rfp_end_to_end():
    store = InMemoryProposalStore()
    quota = FakeQuotaGate(used=4, limit=100)
    service, fake = build_service(store=store, quota=quota)

    outcome = generate(service)

    assert outcome.extracted.industry == "saas"
    assert outcome.intelligence.key == "saas"
    assert outcome.proposal_id == "prop_1"
    assert outcome.result.quality_score == 84
    assert outcome.matches[0].item.id == "p2"
    assert outcome.degraded == []
    assert outcome.usage == {"used": 5, "limit": 100, "plan": "starter", "remaining": 95}
    assert quota.used == 5

    writing_prompt = fake.calls_for(WRITING)[0]["user_prompt"]
    assert "activation rate" in writing_prompt
    for term in ("permit compliance", "before/after showcases", "subcontractor coordination"):
        assert term not in writing_prompt

    record = store.records[0]
    assert record["user_id"] == "user-1"
    assert record["matched_portfolio_items"][0] == "p2"
    assert record["quality_evaluation"]["criteria"]["industryAlignment"] == 8
    assert json.loads(record["extracted_data"])["industry"] == "saas"
    assert record["status"] == "draft"


def test_general_business_uses_user_industry_for_intelligence():
    fake = FakeCompletionService(overrides={
        CLASSIFY: {"industry": "general-business", "projectType": "Custom project"},
        EXTRACT: {"requirements": ["Quarterly plan"], "tone": "casual"},
    })
    service, _ = build_service(fake=fake)

    outcome = generate(
        service,
        rfp_text="Need help planning the next quarter for our small family business, details on a call.",
        user_industry="logistics",
    )

    assert outcome.extracted.industry == "general-business"
    assert outcome.intelligence.key == "logistics"


def test_request_portfolio_overrides_store():
    service, _ = build_service()
    inline = (PortfolioItem(id="inline-1", title="Stripe subscription dashboard", skills=("React",)),)

    outcome = generate(service, portfolio_items=inline)

    assert [m.item.id for m in outcome.matches] == ["inline-1"]


def test_quota_exceeded_makes_no_completion_calls():
    store = InMemoryProposalStore()
    service, fake = build_service(quota=FakeQuotaGate(used=3, limit=3, plan="free"), store=store)

    with pytest.raises(QuotaExceeded) as exc_info:
        generate(service)

    assert exc_info.value.used == 3
    assert exc_info.value.plan == "free"
    assert fake.calls == []
    assert store.records == []


def test_rate_limited_makes_no_completion_calls():
    limiter = FakeRateLimiter(allowed=False, retry_after=42)
    quota = FakeQuotaGate()
    service, fake = build_service(limiter=limiter, quota=quota)

    with pytest.raises(RateLimited) as exc_info:
        generate(service)

    assert exc_info.value.retry_after == 42
    assert limiter.keys == ["user-1:generate_proposal"]
    assert fake.calls == []
    assert quota.used == 0


def test_stage_failure_persists_nothing():
    store = InMemoryProposalStore()
    quota = FakeQuotaGate()
    fake = FakeCompletionService(overrides={STRUCTURE: RuntimeError("provider down")})
    service, _ = build_service(fake=fake, store=store, quota=quota)

    with pytest.raises(GenerationStageFailure):
        generate(service)

    assert store.records == []
    assert quota.used == 0


def test_auxiliary_failure_still_persists():
    store = InMemoryProposalStore()
    fake = FakeCompletionService(overrides={PRICING: RuntimeError("pricing down")})
    service, _ = build_service(fake=fake, store=store)

    outcome = generate(service, include_pricing=True)

    assert outcome.pricing_table is None
    assert outcome.timeline is not None
    assert "pricing_table" in outcome.degraded
    assert "## Project Timeline" in outcome.result.content
    assert "## Investment Options" not in outcome.result.content
    assert store.records[0]["pricing_table"] is None
    assert store.records[0]["timeline"]["total_duration"] == "6 weeks"


def test_extraction_failure_is_degraded_not_fatal():
    fake = FakeCompletionService(overrides={EXTRACT: RuntimeError("extractor down")})
    service, _ = build_service(fake=fake)

    outcome = generate(service)

    assert outcome.extracted.degraded
    assert "extraction" in outcome.degraded
    assert outcome.result.content


def test_template_sections_reach_storage():
    store = InMemoryProposalStore()
    service, _ = build_service(store=store)

    outcome = generate(service, template_id="web-dev-full-stack")

    assert outcome.result.plan.section_names == [
        "opening", "approach", "timeline", "deliverables", "investment", "cta",
    ]
    assert store.records[0]["template_used_id"] == "web-dev-full-stack"
