"""
Tests for RFP extraction: classifier-first ordering, merge rules and the
classifier-only fallback.
"""

import asyncio
import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.services.rfp_extractor_service import RFPExtractorService
from fakes import CLASSIFY, EXTRACT, FakeCompletionService

RFP = "We need a React dashboard with Stripe subscriptions and OAuth login. Timeline: 6 weeks."


def extract(fake, rfp_text=RFP):
    return asyncio.run(RFPExtractorService(completion_service=fake).extract(rfp_text))


def test_classifier_runs_before_extraction():
    fake = FakeCompletionService()
    extract(fake)

    assert [call["marker"] for call in fake.calls] == [CLASSIFY, EXTRACT]


def test_merged_result():
    result = extract(FakeCompletionService())

    assert result.industry == "saas"
    assert result.industry_label == "SaaS / Software Product"
    assert result.project_type == "SaaS Dashboard"
    assert result.client_name == "Acme Analytics"
    assert result.budget == "$8,000"
    assert result.requirements == ["Stripe subscriptions", "OAuth login", "Usage dashboard"]
    # union of extractor and classifier deliverables, de-duplicated
    assert result.deliverables == ["React dashboard", "Billing integration", "Dashboard"]
    assert not result.degraded


def test_extraction_failure_returns_classifier_only_result():
    fake = FakeCompletionService(overrides={EXTRACT: RuntimeError("rate limited")})
    result = extract(fake)

    assert result.degraded
    assert result.industry == "saas"
    assert result.requirements == []
    assert result.deliverables == []
    assert result.tone == "professional"
    assert "Stripe" in result.skills


def test_unparseable_extraction_degrades():
    fake = FakeCompletionService(overrides={EXTRACT: "Sure! Here are the requirements: ..."})
    result = extract(fake)

    assert result.degraded


def test_invalid_tone_normalized():
    fake = FakeCompletionService(overrides={EXTRACT: {"requirements": ["x"], "tone": "grumpy"}})
    result = extract(fake)

    assert result.tone == "professional"


def test_classifier_owns_industry_for_trade_rfp():
    fake = FakeCompletionService(overrides={EXTRACT: {"projectType": "Website", "tone": "friendly"}})
    result = extract(fake, "Family plumbing business needs a website with online booking and service area pages.")

    assert result.industry == "construction"
    assert result.tone == "friendly"
    # trade keyword short-circuits the classification call
    assert [call["marker"] for call in fake.calls] == [EXTRACT]


def test_rfp_is_truncated():
    fake = FakeCompletionService()
    long_rfp = RFP + " More detail." * 200
    asyncio.run(RFPExtractorService(completion_service=fake, max_rfp_chars=500).extract(long_rfp))

    assert long_rfp[:500] in fake.calls_for(EXTRACT)[0]["user_prompt"]
    assert long_rfp[:600] not in fake.calls_for(EXTRACT)[0]["user_prompt"]
