"""
Auxiliary Generators

Optional enrichments composed around the core engine, each an independent
LLM call returning an AuxiliaryResult:
- pricing table
- delivery timeline
- smart CTA
- cover page

A failing generator yields AuxiliaryResult.degraded(...) and never raises.
All of them need the Stage C text, and none depends on another, so they
run concurrently.
"""

import asyncio
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from app.domain.errors import AuxiliaryResult
from app.models.proposal_schema import ExtractedRFP, GenerationRequest
from app.utils.prompt_engine import PromptEngine
from app.utils.text_analysis import as_optional_string, as_string_list, parse_json_object

logger = logging.getLogger(__name__)

PRICING = "pricing_table"
TIMELINE = "timeline"
CTA = "cta_suggestion"
COVER_PAGE = "cover_page"


class AuxiliaryGenerators:
    """Pricing, timeline, CTA and cover page generation."""

    def __init__(self, completion_service, prompt_engine: Optional[PromptEngine] = None):
        self.completion_service = completion_service
        self.prompt_engine = prompt_engine or PromptEngine()

    async def _call(self, prompt, temperature: float = 0.5, max_tokens: int = 1000) -> Dict[str, Any]:
        system_prompt, user_prompt = prompt
        raw = await self.completion_service.complete(
            system_prompt,
            user_prompt,
            temperature=temperature,
            max_tokens=max_tokens,
            response_format="json",
        )
        return parse_json_object(raw)

    async def _guarded(self, name: str, coro) -> AuxiliaryResult:
        try:
            return AuxiliaryResult.ok(name, await coro)
        except Exception as e:
            logger.warning(f"[AuxiliaryGenerators] {name} degraded: {e}")
            return AuxiliaryResult.degraded(name, e)

    # ===================== GENERATORS =====================

    async def _pricing_table(self, rfp_text: str, proposal_text: str, project_value: Optional[float]) -> Dict[str, Any]:
        data = await self._call(self.prompt_engine.build_pricing_prompt(rfp_text, proposal_text, project_value))
        tiers = []
        for tier in data.get("tiers") or []:
            if not isinstance(tier, dict) or not tier.get("name"):
                continue
            tiers.append({
                "name": str(tier["name"]),
                "price": str(tier.get("price") or ""),
                "description": str(tier.get("description") or ""),
                "features": as_string_list(tier.get("features")),
            })
        if not tiers:
            raise ValueError("pricing table has no tiers")
        return {"tiers": tiers, "currency": data.get("currency") or "USD", "notes": data.get("notes") or ""}

    async def _timeline(self, rfp_text: str, proposal_text: str) -> Dict[str, Any]:
        data = await self._call(self.prompt_engine.build_timeline_prompt(rfp_text, proposal_text))
        milestones = []
        for milestone in data.get("milestones") or []:
            if not isinstance(milestone, dict) or not milestone.get("phase"):
                continue
            milestones.append({
                "phase": str(milestone["phase"]),
                "duration": str(milestone.get("duration") or ""),
                "deliverables": as_string_list(milestone.get("deliverables")),
            })
        if not milestones:
            raise ValueError("timeline has no milestones")
        return {"milestones": milestones, "total_duration": as_optional_string(data.get("totalDuration"))}

    async def _smart_cta(self, proposal_text: str, platform: str, industry: str) -> Dict[str, Any]:
        data = await self._call(self.prompt_engine.build_cta_prompt(proposal_text, platform, industry), temperature=0.6)
        primary = as_optional_string(data.get("primary"))
        if not primary:
            raise ValueError("CTA suggestion missing primary text")
        return {
            "primary": primary,
            "secondary": as_optional_string(data.get("secondary")),
            "tone": as_optional_string(data.get("tone")),
            "reasoning": as_optional_string(data.get("reasoning")),
        }

    async def _cover_page(self, proposal_text: str, proposal_title: Optional[str], client_name: Optional[str]) -> Dict[str, Any]:
        data = await self._call(self.prompt_engine.build_cover_prompt(proposal_text, proposal_title, client_name))
        title = as_optional_string(data.get("title")) or proposal_title
        if not title:
            raise ValueError("cover page missing title")
        return {
            "title": title,
            "client_name": as_optional_string(data.get("clientName")) or client_name,
            "summary": as_optional_string(data.get("summary")) or "",
            "theme": as_optional_string(data.get("theme")) or "modern",
            "date": date.today().isoformat(),
        }

    # ===================== PUBLIC API =====================

    async def generate_pricing_table(self, rfp_text: str, proposal_text: str, project_value: Optional[float] = None) -> AuxiliaryResult:
        return await self._guarded(PRICING, self._pricing_table(rfp_text, proposal_text, project_value))

    async def generate_timeline(self, rfp_text: str, proposal_text: str) -> AuxiliaryResult:
        return await self._guarded(TIMELINE, self._timeline(rfp_text, proposal_text))

    async def generate_smart_cta(self, proposal_text: str, platform: str, industry: str) -> AuxiliaryResult:
        return await self._guarded(CTA, self._smart_cta(proposal_text, platform, industry))

    async def generate_cover_page(self, proposal_text: str, proposal_title: Optional[str], client_name: Optional[str]) -> AuxiliaryResult:
        return await self._guarded(COVER_PAGE, self._cover_page(proposal_text, proposal_title, client_name))

    async def generate_all(
        self,
        request: GenerationRequest,
        extracted: ExtractedRFP,
        proposal_text: str,
    ) -> Dict[str, AuxiliaryResult]:
        """
        Run every applicable generator concurrently.

        Pricing and timeline only run when the request asks for pricing.

        Returns:
            Mapping of generator name -> AuxiliaryResult
        """
        tasks = []
        if request.include_pricing:
            tasks.append(self.generate_pricing_table(request.rfp_text, proposal_text, request.project_value))
            tasks.append(self.generate_timeline(request.rfp_text, proposal_text))
        tasks.append(self.generate_smart_cta(proposal_text, request.platform, extracted.industry_label))
        tasks.append(self.generate_cover_page(
            proposal_text, request.proposal_title, extracted.client_name or request.company_name
        ))

        results: List[AuxiliaryResult] = await asyncio.gather(*tasks)
        return {result.name: result for result in results}


# ===================== MARKDOWN RENDERING =====================

def render_pricing_markdown(pricing: Dict[str, Any]) -> str:
    lines = ["## Investment Options", ""]
    for tier in pricing.get("tiers", []):
        lines.append(f"### {tier['name']} - {tier['price']}")
        if tier.get("description"):
            lines.append(tier["description"])
        lines.extend(f"- {feature}" for feature in tier.get("features", []))
        lines.append("")
    if pricing.get("notes"):
        lines.append(f"*{pricing['notes']}*")
    return "\n".join(lines).strip()


def render_timeline_markdown(timeline: Dict[str, Any]) -> str:
    lines = ["## Project Timeline", ""]
    for milestone in timeline.get("milestones", []):
        lines.append(f"**{milestone['phase']}** ({milestone['duration']})")
        lines.extend(f"- {item}" for item in milestone.get("deliverables", []))
        lines.append("")
    if timeline.get("total_duration"):
        lines.append(f"**Total duration:** {timeline['total_duration']}")
    return "\n".join(lines).strip()
