"""
Tests for the auxiliary generators: each degrades on its own.
"""

import asyncio
import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.models.proposal_schema import ExtractedRFP, GenerationRequest
from app.services.auxiliary_generators import (
    AuxiliaryGenerators,
    render_pricing_markdown,
    render_timeline_markdown,
)
from fakes import COVER, CTA, PRICING, SAMPLE_PROPOSAL, TIMELINE, FakeCompletionService

RFP = "We need a React dashboard with Stripe subscriptions and OAuth login"


def make_extracted(client_name=None):
    return ExtractedRFP(
        requirements=[], deliverables=[], budget=None, timeline=None, red_flags=[],
        client_name=client_name, project_type="Dashboard Application", skills=[],
        tone="professional", industry="saas", industry_label="SaaS / Software Product",
    )


def run_all(fake, include_pricing=True):
    request = GenerationRequest(user_id="u1", rfp_text=RFP, include_pricing=include_pricing, proposal_title="Dashboard")
    generators = AuxiliaryGenerators(fake)
    return asyncio.run(generators.generate_all(request, make_extracted("Acme"), SAMPLE_PROPOSAL))


def test_all_generators_succeed():
    results = run_all(FakeCompletionService())

    assert set(results) == {"pricing_table", "timeline", "cta_suggestion", "cover_page"}
    assert not any(r.is_degraded for r in results.values())
    assert results["timeline"].value["total_duration"] == "6 weeks"
    assert results["cover_page"].value["client_name"] == "Acme Analytics"
    assert results["pricing_table"].value["tiers"][0]["name"] == "Essential"


def test_pricing_and_timeline_skipped_without_include_pricing():
    fake = FakeCompletionService()
    results = run_all(fake, include_pricing=False)

    assert set(results) == {"cta_suggestion", "cover_page"}
    assert not fake.calls_for(PRICING)
    assert not fake.calls_for(TIMELINE)


def test_one_failure_does_not_affect_others():
    fake = FakeCompletionService(overrides={PRICING: RuntimeError("boom"), CTA: "no json here"})
    results = run_all(fake)

    assert results["pricing_table"].is_degraded
    assert results["pricing_table"].value is None
    assert results["pricing_table"].failure.generator == "pricing_table"
    assert results["cta_suggestion"].is_degraded
    assert not results["timeline"].is_degraded
    assert not results["cover_page"].is_degraded


def test_empty_tiers_degrade():
    fake = FakeCompletionService(overrides={PRICING: {"tiers": []}})
    assert run_all(fake)["pricing_table"].is_degraded


def test_cover_page_falls_back_to_request_title():
    fake = FakeCompletionService(overrides={COVER: {"summary": "Short"}})
    cover = run_all(fake)["cover_page"].value

    assert cover["title"] == "Dashboard"
    assert cover["client_name"] == "Acme"
    assert cover["date"]


def test_markdown_rendering():
    pricing = render_pricing_markdown({
        "tiers": [{"name": "Essential", "price": "$6,000", "description": "Core", "features": ["Dashboard"]}],
        "notes": "50% upfront",
    })
    timeline = render_timeline_markdown({
        "milestones": [{"phase": "Build", "duration": "4 weeks", "deliverables": ["Billing"]}],
        "total_duration": "6 weeks",
    })

    assert pricing.startswith("## Investment Options")
    assert "### Essential - $6,000" in pricing
    assert "**Build** (4 weeks)" in timeline
    assert "**Total duration:** 6 weeks" in timeline
