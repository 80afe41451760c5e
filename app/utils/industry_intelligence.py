"""
Industry Intelligence Lookup

Pure mapping (industry, project type, raw text) -> knowledge block.
Explicit override rules keep a drifting upstream classification from pulling
construction vocabulary into a software proposal.
"""
from typing import Optional

from app.domain.constants import (
    INTEL_CONSULTING_KEYWORDS,
    INTEL_LOGISTICS_KEYWORDS,
    INTEL_MARKETING_KEYWORDS,
    INTEL_SAAS_KEYWORDS,
    INTEL_SAAS_REROUTE_KEYWORDS,
    INTEL_WEB_AGENCY_KEYWORDS,
    TRADE_KEYWORDS,
)
from app.domain.industry_knowledge import INDUSTRY_INTELLIGENCE
from app.models.proposal_schema import IndustryIntelligence
from app.utils.text_analysis import contains_any

# Bounded slices per category when rendering into a prompt
CONTEXT_LIMITS = {
    "terminology": 10,
    "kpis": 6,
    "ux_needs": 6,
    "seo_needs": 4,
    "pain_points": 5,
    "conversion_principles": 4,
    "technical_requirements": 4,
}


def _contains_fragment(text: str, fragments) -> bool:
    """Substring match, so "consult" covers "consulting" and "web dev" covers "web development"."""
    return any(fragment in text for fragment in fragments)


def lookup(industry: str, project_type: Optional[str], rfp_text: str) -> IndustryIntelligence:
    """
    Select the knowledge block for a project.

    First match wins:
    1. nominal construction without a trade keyword -> saas or web-agency
    2. saas/software keywords
    3. logistics keywords
    4. construction (trade keyword required)
    5. web-agency keywords
    6. consulting keywords
    7. marketing keywords
    8. web-agency

    Args:
        industry: Classified industry id
        project_type: Classified project type, if any
        rfp_text: Raw RFP text

    Returns:
        IndustryIntelligence block (shared, immutable)
    """
    industry = (industry or "").lower()
    search_text = f"{industry} {project_type or ''} {rfp_text or ''}".lower()
    # The industry id itself must not count as evidence of a trade
    has_trade_keyword = contains_any(f"{project_type or ''} {rfp_text or ''}", TRADE_KEYWORDS)

    if "construction" in industry and not has_trade_keyword:
        if contains_any(search_text, INTEL_SAAS_REROUTE_KEYWORDS):
            return INDUSTRY_INTELLIGENCE["saas"]
        return INDUSTRY_INTELLIGENCE["web-agency"]

    if contains_any(search_text, INTEL_SAAS_KEYWORDS):
        return INDUSTRY_INTELLIGENCE["saas"]

    if contains_any(search_text, INTEL_LOGISTICS_KEYWORDS):
        return INDUSTRY_INTELLIGENCE["logistics"]

    if has_trade_keyword:
        return INDUSTRY_INTELLIGENCE["construction"]

    if _contains_fragment(search_text, INTEL_WEB_AGENCY_KEYWORDS):
        return INDUSTRY_INTELLIGENCE["web-agency"]

    if _contains_fragment(search_text, INTEL_CONSULTING_KEYWORDS):
        return INDUSTRY_INTELLIGENCE["consulting"]

    if contains_any(search_text, INTEL_MARKETING_KEYWORDS):
        return INDUSTRY_INTELLIGENCE["marketing"]

    return INDUSTRY_INTELLIGENCE["web-agency"]


def format_industry_context(intel: IndustryIntelligence) -> str:
    """Render a bounded slice of the knowledge block for prompt injection."""
    def bullets(values, limit):
        return "\n".join(f"- {v}" for v in values[:limit])

    return f"""## INDUSTRY INTELLIGENCE: {intel.name}

### Key Terminology (use naturally)
{", ".join(intel.terminology[:CONTEXT_LIMITS["terminology"]])}

### KPIs This Client Cares About
{bullets(intel.kpis, CONTEXT_LIMITS["kpis"])}

### UX Requirements
{bullets(intel.ux_needs, CONTEXT_LIMITS["ux_needs"])}

### SEO Priorities
{bullets(intel.seo_needs, CONTEXT_LIMITS["seo_needs"])}

### Common Pain Points
{bullets(intel.pain_points, CONTEXT_LIMITS["pain_points"])}

### Conversion Principles
{bullets(intel.conversion_principles, CONTEXT_LIMITS["conversion_principles"])}

### Technical Requirements
{bullets(intel.technical_requirements, CONTEXT_LIMITS["technical_requirements"])}"""
