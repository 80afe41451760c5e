"""
Consolidated Text Analysis Utilities

Single source of truth for:
- Keyword matching (word-anchored, plural tolerant)
- Keyword extraction and term frequencies
- JSON payload recovery from model output
- RFP complexity scoring and smart length recommendation
"""
import json
import re
import logging
from collections import Counter
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, Iterable, List, Optional

from app.domain.constants import (
    HIGH_COMPLEXITY_INDUSTRIES,
    HIGH_COMPLEXITY_PLATFORMS,
    LOW_COMPLEXITY_PLATFORMS,
    STOP_WORDS,
)

logger = logging.getLogger(__name__)

WORD_PATTERN = re.compile(r"[a-z][a-z0-9+#.\-]*[a-z0-9+#]|[a-z]")
CODE_FENCE_PATTERN = re.compile(r"^\s*```[a-zA-Z]*\s*\n?|\n?\s*```\s*$")


# ===================== KEYWORD MATCHING =====================

@lru_cache(maxsize=1024)
def _keyword_regex(keyword: str) -> "re.Pattern":
    return re.compile(r"(?<![a-z0-9])" + re.escape(keyword.lower()) + r"(?:s|es)?(?![a-z0-9])")


def contains_keyword(text: str, keyword: str) -> bool:
    """Case-insensitive, word-anchored match ("roof" does not match "proof")."""
    return _keyword_regex(keyword).search(text.lower()) is not None


def find_keywords(text: str, keywords: Iterable[str]) -> List[str]:
    """Return the keywords present in text, in the order given."""
    text_lower = text.lower()
    return [kw for kw in keywords if _keyword_regex(kw).search(text_lower)]


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    text_lower = text.lower()
    return any(_keyword_regex(kw).search(text_lower) for kw in keywords)


# ===================== TOKENIZATION =====================

def tokenize(text: str) -> List[str]:
    """Lowercase words with stop words removed."""
    return [w for w in WORD_PATTERN.findall(text.lower()) if w not in STOP_WORDS]


def extract_keywords(text: str, limit: int = 20, min_length: int = 3) -> List[str]:
    """
    Most frequent meaningful words in text.

    Ties keep first-occurrence order, so output is deterministic.

    Args:
        text: Source text
        limit: Maximum keywords to return
        min_length: Minimum word length

    Returns:
        Keywords ordered by descending frequency
    """
    words = [w for w in tokenize(text) if len(w) >= min_length and w.isalpha()]
    counts = Counter(words)
    first_seen: Dict[str, int] = {}
    for idx, word in enumerate(words):
        first_seen.setdefault(word, idx)
    ranked = sorted(counts, key=lambda w: (-counts[w], first_seen[w]))
    return ranked[:limit]


def term_frequencies(text: str) -> Counter:
    return Counter(tokenize(text))


def dedupe_preserving_order(*groups: Iterable[str]) -> List[str]:
    """Union of string lists, case-insensitive, first spelling wins."""
    seen = set()
    merged = []
    for group in groups:
        for value in group or []:
            if not isinstance(value, str):
                continue
            cleaned = value.strip()
            key = cleaned.lower()
            if cleaned and key not in seen:
                seen.add(key)
                merged.append(cleaned)
    return merged


def truncate(text: str, max_chars: int) -> str:
    if len(text) <= max_chars:
        return text
    return text[:max_chars]


def word_count(text: str) -> int:
    return len(text.split())


# ===================== JSON RECOVERY =====================

def strip_code_fences(text: str) -> str:
    """Remove a leading ```json / ``` marker and a trailing ``` marker."""
    return CODE_FENCE_PATTERN.sub("", text.strip()).strip()


def parse_json_object(text: Optional[str]) -> Dict[str, Any]:
    """
    Parse a JSON object from model output.

    Tolerates markdown code fences and prose around the object.

    Raises:
        ValueError: If no JSON object can be recovered
    """
    if not text or not text.strip():
        raise ValueError("Empty model output")

    cleaned = strip_code_fences(text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError:
        json_match = re.search(r'\{.*\}', cleaned, re.DOTALL)
        if not json_match:
            raise ValueError(f"No JSON object found in output: {cleaned[:80]!r}")
        data = json.loads(json_match.group())

    if not isinstance(data, dict):
        raise ValueError(f"Expected JSON object, got {type(data).__name__}")
    return data


def as_string_list(value: Any) -> List[str]:
    """Coerce a model-provided field into a list of non-empty strings."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value.strip()] if value.strip() else []
    if isinstance(value, (list, tuple)):
        return [str(v).strip() for v in value if v is not None and str(v).strip()]
    return [str(value)]


def as_optional_string(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    if not text or text.lower() in {"null", "none", "n/a", "not specified", "unknown"}:
        return None
    return text


# ===================== COMPLEXITY =====================

@dataclass
class ComplexityAnalysis:
    """RFP complexity score (1-10) and the length it suggests."""
    score: int
    recommended_length: str
    factors: Dict[str, int]
    reasoning: str


def analyze_rfp_complexity(
    rfp_text: str,
    requirements_count: int,
    deliverables_count: int,
    platform: str,
    industry: str,
) -> ComplexityAnalysis:
    """
    Score how much proposal an RFP deserves.

    Args:
        rfp_text: Raw RFP text
        requirements_count: Number of extracted requirements
        deliverables_count: Number of extracted deliverables
        platform: Target platform name
        industry: Classified industry id

    Returns:
        ComplexityAnalysis with shorter / same / longer recommendation
    """
    words = word_count(rfp_text)
    factors = {
        "length": 0 if words < 100 else 1 if words < 300 else 2,
        "requirements": 0 if requirements_count == 0 else 1 if requirements_count <= 3 else 2,
        "deliverables": 2 if deliverables_count > 5 else 1 if deliverables_count > 2 else 0,
        "platform": (
            0 if platform in LOW_COMPLEXITY_PLATFORMS
            else 2 if platform in HIGH_COMPLEXITY_PLATFORMS
            else 1
        ),
        "industry": 2 if industry in HIGH_COMPLEXITY_INDUSTRIES else 1,
    }

    score = max(1, min(10, sum(factors.values())))
    if score <= 3:
        recommended = "shorter"
    elif score >= 7:
        recommended = "longer"
    else:
        recommended = "same"

    reasoning = (
        f"{words} words, {requirements_count} requirements, {deliverables_count} deliverables, "
        f"{platform} platform, {industry} industry -> complexity {score}/10"
    )
    logger.debug(f"[Complexity] {reasoning}")
    return ComplexityAnalysis(score=score, recommended_length=recommended, factors=factors, reasoning=reasoning)


def get_smart_length_adjustment(user_preference: Optional[str], analysis: Optional[ComplexityAnalysis]) -> str:
    """An explicit (non-"same") user preference always wins over the recommendation."""
    if user_preference and user_preference != "same":
        return user_preference
    if analysis is not None:
        return analysis.recommended_length
    return "same"
