"""
Tests for the multi-stage proposal engine.
"""

import asyncio
import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from app.domain.errors import GenerationStageFailure
from app.domain.industry_knowledge import INDUSTRY_INTELLIGENCE
from app.domain.templates import get_template
from app.models.proposal_schema import ExtractedRFP, GenerationRequest
from app.services.proposal_engine import ProposalEngine, build_section_plan, cleanup_proposal
from app.services.quality_evaluator import QualityEvaluator
from fakes import ANALYSIS, EVALUATE, STRUCTURE, WRITING, FakeCompletionService

RFP = "We need a React dashboard with Stripe subscriptions and OAuth login"


def make_extracted():
    return ExtractedRFP(
        requirements=["Stripe subscriptions"],
        deliverables=["React dashboard"],
        budget=None,
        timeline=None,
        red_flags=[],
        client_name=None,
        project_type="Dashboard Application",
        skills=["React"],
        tone="professional",
        industry="saas",
        industry_label="SaaS / Software Product",
    )


def run_engine(fake, evaluate=True, smart_length=None, **request_fields):
    request = GenerationRequest(user_id="user-1", rfp_text=RFP, **request_fields)
    engine = ProposalEngine(fake, evaluator=QualityEvaluator(fake))
    return asyncio.run(engine.generate(
        request, make_extracted(), INDUSTRY_INTELLIGENCE["saas"], [],
        smart_length=smart_length, evaluate_quality=evaluate,
    ))


def test_stages_run_in_order():
    fake = FakeCompletionService()
    result = run_engine(fake)

    assert [call["marker"] for call in fake.calls] == [ANALYSIS, STRUCTURE, WRITING, EVALUATE]
    assert result.analysis.key_goals == ["Launch paid plans"]
    assert result.plan.section_names == ["opening_hook", "approach", "deliverables", "cta"]
    assert result.quality_score == 84
    assert result.word_count > 100


def test_stage_c_receives_stage_a_and_b_output():
    fake = FakeCompletionService()
    run_engine(fake)

    writing_prompt = fake.calls_for(WRITING)[0]["user_prompt"]
    assert "Launch paid plans" in writing_prompt
    assert "Paying customers should see value the moment they log in." in writing_prompt


def test_template_forces_exact_sections_in_order():
    fake = FakeCompletionService(overrides={STRUCTURE: {
        "sections": [
            {"name": "cta", "guidance": "Book a call"},
            {"name": "bonus_section", "guidance": "Extra"},
            {"name": "opening", "guidance": "Hook on billing pain"},
        ],
    }})
    result = run_engine(fake, template_id="web-dev-full-stack")

    assert result.plan.section_names == ["opening", "approach", "timeline", "deliverables", "investment", "cta"]
    assert result.plan.sections[0].guidance == "Hook on billing pain"
    assert result.plan.template_id == "web-dev-full-stack"
    assert result.plan.tone_hint == "professional_technical"


def test_build_section_plan_without_model_sections_uses_defaults():
    sections = build_section_plan(None, None)
    assert [s.name for s in sections][0] == "opening_hook"

    template = get_template("web-dev-full-stack")
    assert [s.name for s in build_section_plan([], template)] == template.section_keys


def test_stage_a_failure_raises():
    fake = FakeCompletionService(overrides={ANALYSIS: RuntimeError("provider down")})
    with pytest.raises(GenerationStageFailure) as exc_info:
        run_engine(fake)

    assert exc_info.value.stage == "analysis"
    assert [call["marker"] for call in fake.calls] == [ANALYSIS]


def test_stage_b_unparseable_raises():
    fake = FakeCompletionService(overrides={STRUCTURE: "Here is my plan: open strong, close stronger."})
    with pytest.raises(GenerationStageFailure) as exc_info:
        run_engine(fake)

    assert exc_info.value.stage == "structure"
    assert not fake.calls_for(WRITING)


def test_empty_writing_output_raises():
    fake = FakeCompletionService(overrides={WRITING: "   "})
    with pytest.raises(GenerationStageFailure) as exc_info:
        run_engine(fake)

    assert exc_info.value.stage == "writing"


def test_evaluation_failure_leaves_score_empty():
    fake = FakeCompletionService(overrides={EVALUATE: "not json"})
    result = run_engine(fake)

    assert result.quality_evaluation is None
    assert result.quality_score is None
    assert result.content


def test_evaluation_can_be_disabled():
    fake = FakeCompletionService()
    run_engine(fake, evaluate=False)

    assert not fake.calls_for(EVALUATE)


def test_writing_max_tokens_follow_length():
    fake = FakeCompletionService()
    run_engine(fake, length_adjustment="longer")
    assert fake.calls_for(WRITING)[0]["max_tokens"] == 2800

    fake = FakeCompletionService()
    run_engine(fake, smart_length="shorter")
    assert fake.calls_for(WRITING)[0]["max_tokens"] == 1200
    assert "400-500 words" in fake.calls_for(WRITING)[0]["user_prompt"]


def test_cleanup_removes_ai_self_reference():
    cleaned = cleanup_proposal("As an AI language model, I can help.\n\n#### Deep heading\nBody")
    assert "As an AI" not in cleaned
    assert "### Deep heading" in cleaned
