"""
Tests for portfolio matching.
"""

import os
import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.models.proposal_schema import PortfolioItem
from app.utils.portfolio_matcher import build_query_terms, match

RFP = "We need a React dashboard with Stripe subscriptions and OAuth login for our analytics product"

PORTFOLIO = [
    PortfolioItem(id="p1", title="Bakery landing page", description="Brochure site for a bakery", tags=("food",)),
    PortfolioItem(
        id="p2",
        title="Subscription analytics dashboard",
        description="React dashboard with Stripe billing and OAuth login",
        skills=("React", "Stripe"),
    ),
    PortfolioItem(id="p3", title="Fleet tracking app", description="Dispatch and route tracking", skills=("Flutter",)),
    PortfolioItem(id="p4", title="Analytics reporting", description="Dashboard for product analytics", skills=("Python",)),
]


def test_best_match_ranked_first():
    results = match(PORTFOLIO, RFP, ["React", "Stripe", "OAuth"])

    assert results[0].item.id == "p2"
    assert results[0].rank == 1
    assert "stripe" in results[0].matched_keywords


def test_at_most_top_n_with_non_increasing_scores():
    results = match(PORTFOLIO, RFP, ["React"], top_n=3)

    assert len(results) == 3
    scores = [r.score for r in results]
    assert scores == sorted(scores, reverse=True)
    assert [r.rank for r in results] == [1, 2, 3]
    assert all(0.0 <= s <= 1.0 for s in scores)


def test_empty_portfolio_returns_empty_list():
    assert match([], RFP, ["React"]) == []


def test_ties_keep_original_order():
    items = [
        PortfolioItem(id="a", title="Unrelated"),
        PortfolioItem(id="b", title="Unrelated"),
    ]
    results = match(items, RFP, [], top_n=2)

    assert [r.item.id for r in results] == ["a", "b"]
    assert results[0].score == results[1].score == 0.0


def test_deterministic():
    first = match(PORTFOLIO, RFP, ["React", "Stripe"])
    second = match(PORTFOLIO, RFP, ["React", "Stripe"])
    assert [(r.item.id, r.score) for r in first] == [(r.item.id, r.score) for r in second]


def test_query_terms_include_skills_once():
    terms = build_query_terms(RFP, ["React", "Docker"])
    assert terms.count("react") == 1
    assert "docker" in terms
