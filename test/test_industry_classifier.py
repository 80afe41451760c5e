"""
Tests for industry classification.

Covers the trade-keyword guard for construction, rejection of LLM answers
that drift into construction, and keyword fallback when the LLM fails.
"""

import asyncio
import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.utils.industry_classifier import (
    IndustryClassifier,
    classify_by_keywords,
    extract_project_type,
    has_trade_keyword,
)
from fakes import CLASSIFY, FakeCompletionService

SAAS_RFP = "We need a React dashboard with Stripe subscriptions and OAuth login"
ROOFING_RFP = "Our roofing company needs a new website with a quote request form and before/after gallery."


def test_trade_keyword_forces_construction_without_llm_call():
    fake = FakeCompletionService(overrides={CLASSIFY: {"industry": "saas", "projectType": "SaaS Product"}})
    result = asyncio.run(IndustryClassifier(fake).classify(ROOFING_RFP))

    assert result.industry == "construction"
    assert result.method == "keywords"
    assert fake.calls == []


def test_substring_of_trade_word_is_not_a_trade():
    assert not has_trade_keyword("We need a proof of concept for our analytics dashboard")
    assert has_trade_keyword("Looking for a general contractor landing page")
    result = classify_by_keywords("We need a proof of concept SaaS dashboard with subscription billing")
    assert result.industry != "construction"


def test_keyword_fallback_for_saas_dashboard():
    result = classify_by_keywords(SAAS_RFP)

    assert result.industry == "saas"
    assert result.project_type == "Dashboard Application"
    assert "User authentication" in result.core_requirements
    assert "Stripe" in result.tech_stack
    assert result.confidence == 0.7


def test_llm_construction_answer_is_rejected_without_trade_keyword():
    fake = FakeCompletionService(overrides={CLASSIFY: {
        "industry": "construction",
        "projectType": "Contractor Services Website",
        "confidence": 0.95,
    }})
    result = asyncio.run(IndustryClassifier(fake).classify(SAAS_RFP))

    assert result.industry == "saas"
    assert len(fake.calls_for(CLASSIFY)) == 1


def test_llm_unknown_industry_falls_back_to_keyword_industry():
    fake = FakeCompletionService(overrides={CLASSIFY: {"industry": "aerospace", "projectType": "Dashboard"}})
    result = asyncio.run(IndustryClassifier(fake).classify(SAAS_RFP))

    assert result.industry == "saas"
    assert result.industry_label == "SaaS / Software Product"


def test_generic_project_type_is_replaced():
    fake = FakeCompletionService(overrides={CLASSIFY: {"industry": "saas", "projectType": "Web Project"}})
    result = asyncio.run(IndustryClassifier(fake).classify(SAAS_RFP))

    assert result.project_type == "Dashboard Application"
    assert result.method == "llm"


def test_llm_failure_uses_keyword_result():
    fake = FakeCompletionService(overrides={CLASSIFY: RuntimeError("provider down")})
    result = asyncio.run(IndustryClassifier(fake).classify(SAAS_RFP))

    assert result.industry == "saas"
    assert result.method == "keywords"


def test_unparseable_llm_output_uses_keyword_result():
    fake = FakeCompletionService(overrides={CLASSIFY: "I think this is a SaaS project."})
    result = asyncio.run(IndustryClassifier(fake).classify(SAAS_RFP))

    assert result.method == "keywords"


def test_classification_call_uses_json_mode():
    fake = FakeCompletionService()
    asyncio.run(IndustryClassifier(fake).classify(SAAS_RFP))

    call = fake.calls_for(CLASSIFY)[0]
    assert call["response_format"] == "json"
    assert call["temperature"] == 0.2
    assert SAAS_RFP in call["user_prompt"]


def test_project_type_never_generic():
    assert extract_project_type("Help with some things for my business") == "Custom Web Project"
    assert extract_project_type("Build a SaaS MVP for invoicing") == "SaaS MVP"


def test_vague_tech_brief_is_web_development():
    result = classify_by_keywords("Need help with my website, it loads slowly and looks dated on phones.")
    assert result.industry == "web-development"


def test_everyday_software_words_are_not_trades():
    briefs = [
        "We need a SaaS MVP dashboard with authentication and a drag-and-drop form builder",
        "We need a SaaS MVP dashboard with authentication. Please share concrete milestones.",
        "We need a SaaS MVP dashboard with authentication; framing of onboarding flows matters",
    ]
    for brief in briefs:
        assert not has_trade_keyword(brief)
        assert classify_by_keywords(brief).industry != "construction"


def test_form_builder_brief_goes_to_llm_and_stays_software():
    fake = FakeCompletionService(overrides={CLASSIFY: {"industry": "saas", "projectType": "Form Builder SaaS"}})
    brief = "SaaS dashboard with OAuth login and a form builder. Please share concrete milestones."

    result = asyncio.run(IndustryClassifier(fake).classify(brief))

    assert result.industry == "saas"
    assert len(fake.calls_for(CLASSIFY)) == 1


def test_trade_phrases_still_force_construction():
    assert has_trade_keyword("Website for a custom home builder in Austin")
    assert classify_by_keywords("Lead funnel for our general contractor business").industry == "construction"
