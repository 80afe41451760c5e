"""
Tests for keyword matching, JSON recovery and complexity scoring.
"""

import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from app.utils.text_analysis import (
    analyze_rfp_complexity,
    contains_keyword,
    dedupe_preserving_order,
    get_smart_length_adjustment,
    parse_json_object,
)


def test_keyword_match_is_word_anchored():
    assert contains_keyword("Replace the roof on our garage", "roof")
    assert contains_keyword("Two roofs need repair", "roof")
    assert not contains_keyword("Please proofread my essay", "roof")


def test_parse_json_object_handles_fences_and_prose():
    assert parse_json_object('```json\n{"score": 7}\n```') == {"score": 7}
    assert parse_json_object('Sure! {"score": 7} Hope that helps.') == {"score": 7}


def test_parse_json_object_rejects_garbage():
    with pytest.raises(ValueError):
        parse_json_object("no object here")
    with pytest.raises(ValueError):
        parse_json_object("[1, 2, 3]")


def test_dedupe_is_case_insensitive():
    assert dedupe_preserving_order(["React", "stripe"], ["react", "Stripe", "OAuth"]) == ["React", "stripe", "OAuth"]


def test_short_simple_rfp_recommends_shorter():
    analysis = analyze_rfp_complexity("Fix a typo on my site", 0, 0, "Fiverr", "general-business")

    assert analysis.score == 1
    assert analysis.recommended_length == "shorter"


def test_large_saas_rfp_recommends_longer():
    rfp = " ".join(["requirement"] * 320)
    analysis = analyze_rfp_complexity(rfp, 5, 6, "Direct RFP", "saas")

    assert analysis.score == 10
    assert analysis.recommended_length == "longer"


def test_medium_rfp_recommends_same():
    rfp = " ".join(["detail"] * 150)
    analysis = analyze_rfp_complexity(rfp, 2, 3, "Upwork", "general-business")

    assert analysis.score == 5
    assert analysis.recommended_length == "same"


def test_explicit_length_preference_wins():
    analysis = analyze_rfp_complexity("Fix a typo", 0, 0, "Fiverr", "general-business")

    assert get_smart_length_adjustment("longer", analysis) == "longer"
    assert get_smart_length_adjustment("same", analysis) == "shorter"
    assert get_smart_length_adjustment(None, None) == "same"
