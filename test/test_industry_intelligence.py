"""
Tests for industry intelligence lookup and prompt rendering.
"""

import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.domain.industry_knowledge import INDUSTRY_INTELLIGENCE
from app.utils.industry_intelligence import CONTEXT_LIMITS, format_industry_context, lookup


def test_nominal_construction_without_trade_reroutes_to_saas():
    intel = lookup("construction", "Dashboard Application", "We need a dashboard for our subscription product")
    assert intel.key == "saas"


def test_nominal_construction_without_trade_or_software_is_web_agency():
    intel = lookup("construction", None, "We need a landing page for our bakery brand")
    assert intel.key == "web-agency"


def test_trade_keyword_keeps_construction():
    intel = lookup("construction", "Contractor Services Website", "Roofing company needs a new website")
    assert intel.key == "construction"


def test_saas_keywords_win():
    assert lookup("saas", "Dashboard Application", "React dashboard with Stripe").key == "saas"


def test_logistics_keywords():
    assert lookup("logistics", None, "Freight dispatch tool for our trucking fleet").key == "logistics"


def test_web_agency_fragment_match():
    assert lookup("web-development", None, "Ongoing web development retainer").key == "web-agency"


def test_consulting_fragment_match():
    assert lookup("consulting", None, "Looking for a consultant to review our pricing").key == "consulting"


def test_marketing_keywords():
    assert lookup("marketing", None, "Run our SEO and PPC for the next quarter").key == "marketing"


def test_default_is_web_agency():
    assert lookup("general-business", None, "Help us with a few things").key == "web-agency"


def test_saas_context_contains_saas_vocabulary_only():
    context = format_industry_context(INDUSTRY_INTELLIGENCE["saas"])

    assert "activation rate" in context
    assert "permit compliance" not in context
    assert "subcontractor coordination" not in context


def test_context_is_bounded():
    intel = INDUSTRY_INTELLIGENCE["construction"]
    context = format_industry_context(intel)
    kpi_lines = context.split("### KPIs This Client Cares About\n")[1].split("\n\n")[0].splitlines()

    assert len(kpi_lines) == min(len(intel.kpis), CONTEXT_LIMITS["kpis"])


def test_nominal_construction_with_application_reroutes_to_saas():
    intel = lookup("construction", None, "We need a mobile application for our customers")
    assert intel.key == "saas"


def test_lookup_is_idempotent():
    cases = [
        ("saas", "Dashboard Application", "React dashboard with Stripe"),
        ("construction", "Contractor Services Website", "Roofing company needs a new website"),
        ("construction", None, "We need a landing page for our bakery brand"),
        ("consulting", None, "Looking for a consultant to review our pricing"),
        ("general-business", None, "Help us with a few things"),
    ]
    for industry, project_type, text in cases:
        first = lookup(industry, project_type, text)
        second = lookup(industry, project_type, text)
        assert first is second
        assert format_industry_context(first) == format_industry_context(second)
