"""
Tests for prompt construction: length bands, tone precedence, language,
style and template directives.
"""

import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.domain.constants import LANGUAGE_INSTRUCTIONS, TONE_ADJUSTMENT_DIRECTIVES
from app.domain.industry_knowledge import INDUSTRY_INTELLIGENCE
from app.domain.templates import get_template
from app.models.proposal_schema import (
    AnalysisResult,
    ExtractedRFP,
    GenerationRequest,
    PlanSection,
    StructurePlan,
)
from app.utils.prompt_engine import (
    DEFAULT_SECTIONS,
    PromptEngine,
    length_instruction,
    resolve_length,
    resolve_tone,
)

RFP = "We need a React dashboard with Stripe subscriptions and OAuth login"


def make_request(**overrides):
    fields = {"user_id": "user-1", "rfp_text": RFP}
    fields.update(overrides)
    return GenerationRequest(**fields)


def make_extracted():
    return ExtractedRFP(
        requirements=["Stripe subscriptions"],
        deliverables=["React dashboard"],
        budget=None,
        timeline=None,
        red_flags=[],
        client_name=None,
        project_type="Dashboard Application",
        skills=["React", "Stripe"],
        tone="professional",
        industry="saas",
        industry_label="SaaS / Software Product",
    )


def make_plan():
    return StructurePlan(sections=[PlanSection(name, guidance) for name, guidance in DEFAULT_SECTIONS])


def writing_prompt(request, length="same", template=None):
    return PromptEngine().build_writing_prompt(
        request,
        make_extracted(),
        INDUSTRY_INTELLIGENCE["saas"],
        [],
        AnalysisResult(key_goals=["Launch paid plans"]),
        make_plan(),
        length,
        template,
    )


def section(prompt: str, heading: str) -> str:
    return prompt.split(f"## {heading}\n")[1].split("\n\n")[0]


# ===================== LENGTH =====================

def test_length_bands():
    assert "400-500 words" in length_instruction("shorter")
    assert "600-900 words" in length_instruction("same")
    assert "900-1200 words" in length_instruction("longer")


def test_explicit_length_beats_recommendation():
    assert resolve_length("shorter", "longer") == "shorter"
    assert resolve_length("same", "longer") == "longer"
    assert resolve_length("same", None) == "same"


def test_shorter_band_reaches_writing_prompt():
    _, user_prompt = writing_prompt(make_request(length_adjustment="shorter"), length="shorter")
    assert "400-500 words" in section(user_prompt, "LENGTH")


# ===================== TONE =====================

def test_tone_adjustment_beats_preference():
    tone = resolve_tone("more_casual", "Professional & Formal")
    assert tone.source == "adjustment"
    assert tone.directive == TONE_ADJUSTMENT_DIRECTIVES["more_casual"]


def test_tone_preference_used_when_adjustment_is_same():
    tone = resolve_tone("same", "Technical & Detailed")
    assert tone.source == "preference"
    assert "Technical and detailed" in tone.directive


def test_default_tone():
    assert resolve_tone("same", None).source == "default"


def test_only_adjusted_tone_in_writing_prompt():
    request = make_request(tone_adjustment="more_formal", tone_preference="Friendly & Conversational")
    _, user_prompt = writing_prompt(request)

    tone_section = section(user_prompt, "TONE")
    assert tone_section == TONE_ADJUSTMENT_DIRECTIVES["more_formal"]
    assert "Friendly and conversational" not in user_prompt


# ===================== LANGUAGE / STYLE =====================

def test_non_english_language_replaces_english_default():
    _, user_prompt = writing_prompt(make_request(language="es"))

    language_section = section(user_prompt, "OUTPUT LANGUAGE")
    assert LANGUAGE_INSTRUCTIONS["es"] in language_section
    assert "Spanish" in language_section
    assert LANGUAGE_INSTRUCTIONS["en"] not in user_prompt


def test_english_default():
    _, user_prompt = writing_prompt(make_request())
    assert section(user_prompt, "OUTPUT LANGUAGE") == LANGUAGE_INSTRUCTIONS["en"]


def test_style_directive():
    _, user_prompt = writing_prompt(make_request(style="technical"))
    assert "FORMATTING STYLE: technical" in user_prompt


# ===================== PERSONA / CONTEXT =====================

def test_writing_prompt_persona_and_banned_phrases():
    system_prompt, _ = writing_prompt(make_request())

    assert system_prompt.startswith("You are a senior consultant with 10+ years")
    assert "BANNED PHRASES" in system_prompt
    assert "I'm excited to work with you" in system_prompt


def test_saas_writing_prompt_has_no_construction_vocabulary():
    _, user_prompt = writing_prompt(make_request())

    assert "activation rate" in user_prompt
    for term in ("permit compliance", "before/after showcases", "subcontractor coordination"):
        assert term not in user_prompt


def test_template_structure_in_prompts():
    template = get_template("web-dev-full-stack")
    request = make_request(template_id="web-dev-full-stack")

    _, user_prompt = writing_prompt(request, template=template)
    assert "STRICTLY FOLLOW THIS SECTION STRUCTURE" in user_prompt
    assert "professional technical" in user_prompt

    _, structure_prompt = PromptEngine().build_structure_prompt(
        request, AnalysisResult(), INDUSTRY_INTELLIGENCE["saas"], [], template
    )
    assert "opening, approach, timeline, deliverables, investment, cta" in structure_prompt
