"""
Prompt Engine for the Multi-Stage Proposal Pipeline

Handles:
- Classification and extraction prompts (JSON mode)
- Stage A (analysis), Stage B (structure), Stage C (writing) prompts
- Tone, length, style, language and template directives
- Quality evaluation and auxiliary generator prompts

Every builder is a pure function of its typed inputs and returns a
(system_prompt, user_prompt) tuple, so all LLM-facing text can be tested
without network calls.
"""

import json
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from app.domain.constants import (
    BANNED_PHRASES,
    DEFAULT_TONE_DIRECTIVE,
    INDUSTRY_LABELS,
    LANGUAGE_INSTRUCTIONS,
    LANGUAGE_NAMES,
    LENGTH_BANDS,
    PLATFORM_CTA_GUIDANCE,
    PLATFORM_STRATEGIES,
    SENIOR_CONSULTANT_PERSONA,
    STYLE_GUIDANCE,
    TONE_ADJUSTMENT_DIRECTIVES,
    TONE_PREFERENCE_DIRECTIVES,
)
from app.domain.templates import ProposalTemplate
from app.models.proposal_schema import (
    AnalysisResult,
    ExtractedRFP,
    GenerationRequest,
    IndustryIntelligence,
    MatchedPortfolioItem,
    StructurePlan,
)
from app.utils.industry_intelligence import format_industry_context
from app.utils.text_analysis import truncate

logger = logging.getLogger(__name__)

Prompt = Tuple[str, str]

WRITING_RFP_CHARS = 5000
DEFAULT_SECTIONS: List[Tuple[str, str]] = [
    ("opening_hook", "Two lines that prove you grasped the real problem; no self-introduction"),
    ("problem_reframe", "Restate the challenge in business terms the client has not articulated"),
    ("approach", "How you will solve it, phase by phase, naming concrete tools and methods"),
    ("deliverables", "Specific, checkable outputs"),
    ("investment", "Pricing logic and what each option buys"),
    ("cta", "One specific, low-friction next step"),
]


# ===================== DIRECTIVES =====================

@dataclass(frozen=True)
class ResolvedTone:
    source: str         # 'adjustment', 'preference' or 'default'
    directive: str


def resolve_tone(tone_adjustment: Optional[str], tone_preference: Optional[str]) -> ResolvedTone:
    """Explicit adjustment > stored user preference > default."""
    if tone_adjustment and tone_adjustment in TONE_ADJUSTMENT_DIRECTIVES:
        return ResolvedTone("adjustment", TONE_ADJUSTMENT_DIRECTIVES[tone_adjustment])
    if tone_preference:
        directive = TONE_PREFERENCE_DIRECTIVES.get(tone_preference, f"{tone_preference}.")
        return ResolvedTone("preference", directive)
    return ResolvedTone("default", DEFAULT_TONE_DIRECTIVE)


def resolve_length(length_adjustment: Optional[str], smart_recommendation: Optional[str] = None) -> str:
    """Explicit non-"same" adjustment > complexity recommendation > "same"."""
    if length_adjustment and length_adjustment != "same" and length_adjustment in LENGTH_BANDS:
        return length_adjustment
    if smart_recommendation in LENGTH_BANDS:
        return smart_recommendation
    return "same"


def length_instruction(length: str) -> str:
    low, high = LENGTH_BANDS.get(length, LENGTH_BANDS["same"])
    return f"Target length: {low}-{high} words. Stay inside this band."


def style_directive(style: str) -> str:
    guidance = STYLE_GUIDANCE.get(style, STYLE_GUIDANCE["modern_clean"])
    return f"""FORMATTING STYLE: {style}
- Headings: {guidance["headings"]}
- Paragraphs: {guidance["paragraphs"]}
- Lists: {guidance["lists"]}
- Emphasis: {guidance["emphasis"]}
- Suggested flow: {guidance["structure"]}"""


def language_directive(language: str) -> str:
    """The only output-language instruction in the writing prompt."""
    name = LANGUAGE_NAMES.get(language, LANGUAGE_NAMES["en"])
    instruction = LANGUAGE_INSTRUCTIONS.get(language, LANGUAGE_INSTRUCTIONS["en"])
    if language == "en" or language not in LANGUAGE_NAMES:
        return instruction
    return (
        f"{instruction}\n"
        f"Generate the ENTIRE proposal in {name}, including headings and the call to action. "
        f"Write natively in {name}; do not translate from another language."
    )


def template_directive(template: ProposalTemplate) -> str:
    sections = "\n".join(
        f"- {key.upper()}: {guidance}" for key, guidance in template.default_sections.items()
    )
    return f"""## REQUIRED TEMPLATE STRUCTURE
Template: "{template.name}" ({template.description})
STRICTLY FOLLOW THIS SECTION STRUCTURE, in this order:
{sections}

Template tone: {template.tone_hint.replace("_", " ")}.
- Keep the structure exactly as defined above.
- Customize every sentence to this specific RFP.
- Generic placeholder text ("[Client Name]", "lorem ipsum", "your project") is forbidden."""


def banned_phrases_block() -> str:
    return "\n".join(f'- "{phrase}"' for phrase in BANNED_PHRASES)


def format_portfolio(matches: Sequence[MatchedPortfolioItem]) -> str:
    if not matches:
        return "No portfolio items available. Do not invent past projects or client names."
    lines = []
    for match in matches:
        item = match.item
        line = f"{match.rank}. {item.title}: {item.description}".strip()
        if item.url:
            line += f" ({item.url})"
        lines.append(line)
    return "\n".join(lines)


def format_extracted(extracted: ExtractedRFP) -> str:
    return json.dumps(
        {
            "industry": extracted.industry_label,
            "projectType": extracted.project_type,
            "requirements": extracted.requirements or extracted.core_requirements,
            "deliverables": extracted.deliverables,
            "techStack": extracted.tech_stack,
            "skills": extracted.skills,
            "budget": extracted.budget,
            "timeline": extracted.timeline,
            "clientName": extracted.client_name,
            "clientTone": extracted.tone,
            "redFlags": extracted.red_flags,
        },
        indent=2,
        ensure_ascii=False,
    )


class PromptEngine:
    """
    Builds every prompt the pipeline sends.

    Stateless; one shared instance is fine.
    """

    # ===================== CLASSIFICATION / EXTRACTION =====================

    def build_classification_prompt(self, rfp_text: str) -> Prompt:
        industries = ", ".join(INDUSTRY_LABELS.keys())
        system_prompt = "You classify project briefs by industry. Output valid JSON only."
        user_prompt = f"""Classify this project description.

Base the classification on the description itself, not on any assumed provider background.
Only choose "construction" when the text explicitly mentions construction or a trade
(contractor, roofing, plumbing, electrical, HVAC, landscaping, remodeling).

Allowed industries: {industries}

PROJECT DESCRIPTION:
{rfp_text}

Return JSON:
{{
  "industry": "<one allowed industry id>",
  "industryLabel": "<human label>",
  "projectType": "<specific type, e.g. 'SaaS MVP' or 'Dashboard Application', never 'Web Project'>",
  "coreRequirements": ["..."],
  "techStack": ["..."],
  "timeline": "<timeline or null>",
  "deliverables": ["..."],
  "confidence": 0.0,
  "reasoning": "<one sentence>"
}}"""
        return system_prompt, user_prompt

    def build_extraction_prompt(self, rfp_text: str) -> Prompt:
        system_prompt = "You extract structured data from RFPs and job posts. Output valid JSON only."
        user_prompt = f"""Extract the following from this RFP. Use null or [] when something is not stated;
never guess a budget or a client name.

RFP:
{rfp_text}

Return JSON:
{{
  "requirements": ["explicit functional or business requirements"],
  "deliverables": ["concrete outputs the client expects"],
  "budget": "<budget as written, or null>",
  "timeline": "<timeline as written, or null>",
  "redFlags": ["scope, budget or communication concerns"],
  "clientName": "<company or person, or null>",
  "projectType": "<specific project type, or null>",
  "skills": ["skills and technologies requested"],
  "tone": "formal | casual | professional | friendly"
}}"""
        return system_prompt, user_prompt

    # ===================== STAGE A: ANALYSIS =====================

    def build_analysis_prompt(
        self,
        request: GenerationRequest,
        extracted: ExtractedRFP,
        intelligence: IndustryIntelligence,
        matches: Sequence[MatchedPortfolioItem],
    ) -> Prompt:
        system_prompt = (
            "You are a senior business analyst performing deep client analysis before a proposal "
            "is written. Do not write proposal prose. Output valid JSON only."
        )
        provider = request.company_name or "the provider"
        user_prompt = f"""## RFP
{request.rfp_text}

## EXTRACTED DATA
{format_extracted(extracted)}

{format_industry_context(intelligence)}

## PROVIDER
{provider} ({request.user_industry or "general services"})

## RELEVANT PORTFOLIO
{format_portfolio(matches)}

## PLATFORM
{request.platform}

Analyze what this client actually needs. Look past the literal request for the business
outcome, the problems they did not articulate, and the risks in the brief.

Return JSON:
{{
  "keyGoals": ["business outcomes the client is buying"],
  "painPoints": ["problems the proposal must address"],
  "differentiators": ["what the provider should lean on, grounded in the portfolio"],
  "hiddenOpportunities": ["value the client did not ask for but will care about"],
  "risks": ["delivery or scope risks"],
  "missingInfo": ["questions worth asking"],
  "clientProfile": "<who this buyer is and how they decide>",
  "projectComplexity": "simple | moderate | complex",
  "recommendedApproach": "<one paragraph>"
}}"""
        return system_prompt, user_prompt

    # ===================== STAGE B: STRUCTURE =====================

    def build_structure_prompt(
        self,
        request: GenerationRequest,
        analysis: AnalysisResult,
        intelligence: IndustryIntelligence,
        matches: Sequence[MatchedPortfolioItem],
        template: Optional[ProposalTemplate] = None,
    ) -> Prompt:
        system_prompt = "You are a senior proposal strategist. Output valid JSON only."
        platform_strategy = PLATFORM_STRATEGIES.get(request.platform, PLATFORM_STRATEGIES["Other"])

        if template is not None:
            section_keys = template.section_keys
            section_rules = (
                f"{template_directive(template)}\n\n"
                f"The \"sections\" array MUST contain exactly these names in this order: "
                f"{', '.join(section_keys)}. Do not add, drop, rename or reorder sections."
            )
        else:
            section_keys = [name for name, _ in DEFAULT_SECTIONS]
            section_rules = "Recommended sections (adapt guidance to this client):\n" + "\n".join(
                f"- {name}: {guidance}" for name, guidance in DEFAULT_SECTIONS
            )

        example_sections = ", ".join(
            f'{{"name": "{key}", "guidance": "..."}}' for key in section_keys[:2]
        )
        user_prompt = f"""## DEEP CLIENT ANALYSIS
{json.dumps(analysis.to_dict(), indent=2, ensure_ascii=False)}

{format_industry_context(intelligence)}

## PLATFORM STRATEGY
{platform_strategy}

## PORTFOLIO
{format_portfolio(matches)}

## SECTION PLAN
{section_rules}

Create the proposal structure that wins this client.

Return JSON:
{{
  "openingHook": "<the first two lines>",
  "sections": [{example_sections}, ...],
  "keyMessages": ["..."],
  "differentiators": ["..."],
  "objectionHandlers": ["..."],
  "pricingStrategy": "<how to frame investment>",
  "timelineApproach": "<how to present the timeline>",
  "ctaStrategy": "<the exact next step to propose>"
}}"""
        return system_prompt, user_prompt

    # ===================== STAGE C: WRITING =====================

    def build_writing_prompt(
        self,
        request: GenerationRequest,
        extracted: ExtractedRFP,
        intelligence: IndustryIntelligence,
        matches: Sequence[MatchedPortfolioItem],
        analysis: AnalysisResult,
        plan: StructurePlan,
        length: str,
        template: Optional[ProposalTemplate] = None,
    ) -> Prompt:
        tone = resolve_tone(request.tone_adjustment, request.tone_preference)
        platform_strategy = PLATFORM_STRATEGIES.get(request.platform, PLATFORM_STRATEGIES["Other"])

        system_prompt = f"""{SENIOR_CONSULTANT_PERSONA}

BANNED PHRASES - never use any of these, or close variants:
{banned_phrases_block()}"""

        sections = "\n".join(
            f"{i}. {section.name}: {section.guidance}" for i, section in enumerate(plan.sections, start=1)
        )
        value_line = f"Client budget signal: {request.project_value:,.0f}\n" if request.project_value else ""
        template_block = f"\n{template_directive(template)}\n" if template is not None else ""

        user_prompt = f"""## RFP
{truncate(request.rfp_text, WRITING_RFP_CHARS)}

## EXTRACTED DATA
{format_extracted(extracted)}

{format_industry_context(intelligence)}

## CLIENT ANALYSIS
{json.dumps(analysis.to_dict(), indent=2, ensure_ascii=False)}

## STRUCTURE PLAN
Opening hook: {plan.opening_hook}
Key messages: {"; ".join(plan.key_messages)}
Differentiators: {"; ".join(plan.differentiators or analysis.differentiators)}
Objections to pre-empt: {"; ".join(plan.objection_handlers)}
Pricing strategy: {plan.pricing_strategy}
Timeline approach: {plan.timeline_approach}
CTA strategy: {plan.cta_strategy}

Sections, in this exact order:
{sections}
{template_block}
## PORTFOLIO PROOF
{format_portfolio(matches)}

## PLATFORM
{platform_strategy}

## TONE
{tone.directive}

## LENGTH
{length_instruction(length)}

## {style_directive(request.style)}

## OUTPUT LANGUAGE
{language_directive(request.language)}

{value_line}Write the complete proposal now. Markdown headings, no preamble, no sign-off meta commentary."""
        logger.debug(f"[PromptEngine] Writing prompt: tone={tone.source}, length={length}, style={request.style}")
        return system_prompt, user_prompt

    # ===================== QUALITY EVALUATION =====================

    def build_evaluation_prompt(self, proposal_text: str, rfp_text: str, platform: str, industry: str) -> Prompt:
        system_prompt = (
            "You are a strict proposal quality evaluator. Score honestly against the rubric. "
            "Output valid JSON only."
        )
        user_prompt = f"""Evaluate this proposal for a {industry} project on {platform}.

## RFP
{truncate(rfp_text, WRITING_RFP_CHARS)}

## PROPOSAL
{proposal_text}

Score each criterion from 1 to 10:
1. clarity - easy to scan and understand
2. relevance - addresses this RFP, not a generic client
3. industryAlignment - correct industry language and priorities
4. toneAccuracy - matches the client's tone and the platform
5. differentiatorStrength - clear reasons to choose this provider
6. structure - logical flow from hook to call to action
7. platformFit - length and format suit {platform}

Return JSON:
{{
  "score": <overall 0-100>,
  "strengths": ["..."],
  "weaknesses": ["..."],
  "suggestions": ["..."],
  "criteria": {{
    "clarity": 0, "relevance": 0, "industryAlignment": 0, "toneAccuracy": 0,
    "differentiatorStrength": 0, "structure": 0, "platformFit": 0
  }}
}}"""
        return system_prompt, user_prompt

    # ===================== AUXILIARY GENERATORS =====================

    def build_pricing_prompt(self, rfp_text: str, proposal_text: str, project_value: Optional[float]) -> Prompt:
        system_prompt = "You are a pricing strategist for service proposals. Output valid JSON only."
        budget = f"Client budget signal: {project_value:,.0f}" if project_value else "No budget stated."
        user_prompt = f"""Build a three-tier pricing table for this project.

{budget}

## RFP
{truncate(rfp_text, WRITING_RFP_CHARS)}

## PROPOSAL
{truncate(proposal_text, WRITING_RFP_CHARS)}

Return JSON:
{{
  "tiers": [{{"name": "...", "price": "...", "description": "...", "features": ["..."]}}],
  "currency": "USD",
  "notes": "<payment terms or assumptions>"
}}"""
        return system_prompt, user_prompt

    def build_timeline_prompt(self, rfp_text: str, proposal_text: str) -> Prompt:
        system_prompt = "You are a project planner who builds realistic delivery timelines. Output valid JSON only."
        user_prompt = f"""Build a milestone timeline for this project.

## RFP
{truncate(rfp_text, WRITING_RFP_CHARS)}

## PROPOSAL
{truncate(proposal_text, WRITING_RFP_CHARS)}

Return JSON:
{{
  "milestones": [{{"phase": "...", "duration": "...", "deliverables": ["..."]}}],
  "totalDuration": "..."
}}"""
        return system_prompt, user_prompt

    def build_cta_prompt(self, proposal_text: str, platform: str, industry: str) -> Prompt:
        system_prompt = "You write the call-to-action that closes a proposal. Output valid JSON only."
        guidance = PLATFORM_CTA_GUIDANCE.get(platform, PLATFORM_CTA_GUIDANCE["Other"])
        user_prompt = f"""Suggest the strongest call to action for this {industry} proposal on {platform}.

Platform guidance: {guidance}

## PROPOSAL
{truncate(proposal_text, WRITING_RFP_CHARS)}

Return JSON:
{{
  "primary": "<main CTA sentence>",
  "secondary": "<softer alternative>",
  "tone": "<tone of the CTA>",
  "reasoning": "<why this CTA fits>"
}}"""
        return system_prompt, user_prompt

    def build_cover_prompt(self, proposal_text: str, proposal_title: Optional[str], client_name: Optional[str]) -> Prompt:
        system_prompt = "You design cover page copy for business proposals. Output valid JSON only."
        user_prompt = f"""Write cover page data for this proposal.

Title hint: {proposal_title or "none"}
Client: {client_name or "unknown"}

## PROPOSAL
{truncate(proposal_text, WRITING_RFP_CHARS)}

Return JSON:
{{
  "title": "...",
  "clientName": "...",
  "summary": "<two sentences>",
  "theme": "modern | corporate | minimal | bold"
}}"""
        return system_prompt, user_prompt
