"""
Portfolio Matcher

Scores a user's portfolio items against an RFP and returns the top-N.

Score (0-1) = 0.7 * keyword_overlap + 0.3 * semantic_relevance
- keyword_overlap: share of query terms (top RFP keywords + extracted skills)
  found in the item's title, description, tags and skills
- semantic_relevance: cosine similarity of term-frequency vectors between
  the RFP text and the item text

Pure and deterministic: ties keep the portfolio's original order.
"""
import math
import logging
from collections import Counter
from typing import List, Sequence, Tuple

from app.models.proposal_schema import MatchedPortfolioItem, PortfolioItem
from app.utils.text_analysis import dedupe_preserving_order, extract_keywords, term_frequencies

logger = logging.getLogger(__name__)

KEYWORD_WEIGHT = 0.7
SEMANTIC_WEIGHT = 0.3
MAX_RFP_KEYWORDS = 20
DEFAULT_TOP_N = 3


def _item_text(item: PortfolioItem) -> str:
    return " ".join([item.title, item.description, *item.tags, *item.skills])


def cosine_similarity(a: Counter, b: Counter) -> float:
    if not a or not b:
        return 0.0
    dot = sum(count * b[term] for term, count in a.items() if term in b)
    if dot == 0:
        return 0.0
    norm_a = math.sqrt(sum(c * c for c in a.values()))
    norm_b = math.sqrt(sum(c * c for c in b.values()))
    return dot / (norm_a * norm_b)


def build_query_terms(rfp_text: str, extracted_skills: Sequence[str]) -> List[str]:
    keywords = extract_keywords(rfp_text, limit=MAX_RFP_KEYWORDS)
    skills = [s.lower() for s in extracted_skills if s and s.strip()]
    return [term.lower() for term in dedupe_preserving_order(keywords, skills)]


def score_item(item: PortfolioItem, query_terms: List[str], rfp_vector: Counter) -> Tuple[float, Tuple[str, ...]]:
    """Return (score, matched query terms) for one portfolio item."""
    item_text = _item_text(item).lower()
    matched = tuple(term for term in query_terms if term in item_text)
    keyword_overlap = len(matched) / len(query_terms) if query_terms else 0.0
    semantic = cosine_similarity(rfp_vector, term_frequencies(item_text))
    score = KEYWORD_WEIGHT * keyword_overlap + SEMANTIC_WEIGHT * semantic
    return round(score, 4), matched


def match(
    portfolio_items: Sequence[PortfolioItem],
    rfp_text: str,
    extracted_skills: Sequence[str],
    top_n: int = DEFAULT_TOP_N,
) -> List[MatchedPortfolioItem]:
    """
    Rank portfolio items by relevance to the RFP.

    Args:
        portfolio_items: Candidate items
        rfp_text: Raw RFP text
        extracted_skills: Skills pulled from the RFP by the extractor
        top_n: Maximum number of items to return

    Returns:
        At most top_n MatchedPortfolioItem, non-increasing score, rank from 1.
        Zero-score items still fill the list on sparse portfolios.
    """
    if not portfolio_items or top_n <= 0:
        return []

    query_terms = build_query_terms(rfp_text, extracted_skills)
    rfp_vector = term_frequencies(rfp_text)

    scored = []
    for index, item in enumerate(portfolio_items):
        score, matched = score_item(item, query_terms, rfp_vector)
        scored.append((score, index, item, matched))

    scored.sort(key=lambda entry: (-entry[0], entry[1]))

    results = [
        MatchedPortfolioItem(item=item, score=score, rank=rank, matched_keywords=matched)
        for rank, (score, _, item, matched) in enumerate(scored[:top_n], start=1)
    ]
    logger.info(
        f"[PortfolioMatcher] Ranked {len(portfolio_items)} items, "
        f"top: {[(m.title, m.score) for m in results]}"
    )
    return results
