"""
Proposal Template Registry

Static, keyed templates. When a template is selected its section keys and
their order are mandatory for the structure stage.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass(frozen=True)
class ProposalTemplate:
    id: str
    name: str
    category: str
    description: str
    industry: str
    tone_hint: str
    platform_fit: List[str] = field(default_factory=list)
    default_sections: Dict[str, str] = field(default_factory=dict)

    @property
    def section_keys(self) -> List[str]:
        return list(self.default_sections.keys())

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "description": self.description,
            "industry": self.industry,
            "tone_hint": self.tone_hint,
            "platform_fit": list(self.platform_fit),
            "default_sections": dict(self.default_sections),
        }


PROPOSAL_TEMPLATES: List[ProposalTemplate] = [
    ProposalTemplate(
        id="web-dev-full-stack",
        name="Full-Stack Web Development",
        category="development",
        description="For building custom web applications with complex requirements",
        industry="tech",
        tone_hint="professional_technical",
        platform_fit=["upwork", "direct_rfp", "linkedin"],
        default_sections={
            "opening": "Address the client's technical challenges and business goals",
            "approach": "Outline the tech stack and development methodology",
            "timeline": "Break down into phases (Discovery, Development, QA, Launch)",
            "deliverables": "Specific features, source code, hosting setup, documentation",
            "investment": "Pricing breakdown by development phase",
            "cta": "Suggest a technical kick-off call to discuss architecture",
        },
    ),
    ProposalTemplate(
        id="brand-identity-design",
        name="Brand Identity & Logo Design",
        category="design",
        description="For branding and visual identity projects",
        industry="design",
        tone_hint="creative_enthusiastic",
        platform_fit=["fiverr", "upwork", "thumbtack"],
        default_sections={
            "opening": "Connect with their brand vision and target audience",
            "discovery": "Brand discovery process (mood boards, research)",
            "deliverables": "Logo variations, brand guidelines, palette, typography, source files",
            "portfolio": "3-4 relevant past brand transformations",
            "investment": "Three packages: Logo, Brand Kit, Full Identity",
            "cta": "Book a creative discovery call",
        },
    ),
    ProposalTemplate(
        id="seo-content-marketing",
        name="SEO & Content Marketing",
        category="marketing",
        description="For content strategy and SEO ranking projects",
        industry="marketing",
        tone_hint="confident_results_driven",
        platform_fit=["upwork", "linkedin", "direct_rfp"],
        default_sections={
            "opening": "Current traffic/ranking challenges and growth potential",
            "audit": "Initial SEO audit insights (quick wins)",
            "strategy": "Content strategy approach (keywords, clusters, distribution)",
            "deliverables": "Article count, keyword research, backlink strategy",
            "results": "Past ranking improvements and traffic growth",
            "investment": "Monthly retainer or project-based fee",
            "cta": "Start with a free mini-audit",
        },
    ),
    ProposalTemplate(
        id="mobile-app-dev",
        name="Mobile App Development",
        category="development",
        description="For iOS and Android mobile applications",
        industry="tech",
        tone_hint="technical_innovative",
        platform_fit=["upwork", "toptal", "direct_rfp"],
        default_sections={
            "opening": "Validate the app idea and market fit",
            "solution": "Native vs cross-platform approach",
            "ux_ui": "User journey mapping and interface design phase",
            "development": "Frontend, backend API and database structure",
            "testing": "QA, beta testing and store submission",
            "investment": "Milestone-based payments tied to deliverables",
            "cta": "Schedule a feasibility discussion",
        },
    ),
    ProposalTemplate(
        id="social-media-management",
        name="Social Media Management",
        category="marketing",
        description="Monthly retainer for social media growth",
        industry="marketing",
        tone_hint="energetic_relatable",
        platform_fit=["upwork", "linkedin", "fiverr"],
        default_sections={
            "opening": "Current brand voice and engagement gaps",
            "strategy": "Content pillars, posting schedule, platform selection",
            "content_creation": "Visuals, captions and hashtag strategy",
            "community": "Engagement management (comments, DMs)",
            "analytics": "Monthly reporting metrics",
            "investment": "Monthly retainer packages",
            "cta": "Offer an audit of their current profile",
        },
    ),
    ProposalTemplate(
        id="ecommerce-setup",
        name="E-commerce Store Setup",
        category="development",
        description="Shopify, WooCommerce, or custom store setup",
        industry="retail",
        tone_hint="commercial_direct",
        platform_fit=["upwork", "shopify_experts", "direct_rfp"],
        default_sections={
            "opening": "Sales goals and customer experience",
            "platform": "Platform recommendation and theme selection",
            "setup": "Product import, payment gateways, shipping zones",
            "design": "Customization for conversion optimization",
            "launch": "Testing, training and launch support",
            "investment": "Project fee plus optional maintenance retainer",
            "cta": "Discuss their store requirements",
        },
    ),
    ProposalTemplate(
        id="ui-ux-design",
        name="UI/UX Design Project",
        category="design",
        description="User interface and experience design for web/mobile",
        industry="design",
        tone_hint="empathetic_modern",
        platform_fit=["dribbble", "behance", "upwork"],
        default_sections={
            "opening": "User-centric problem statement",
            "research": "Personas, competitive analysis, user flows",
            "wireframing": "Low-fidelity sketches and information architecture",
            "visual_design": "High-fidelity mockups and interactive prototypes",
            "handoff": "Developer-ready assets and design system",
            "investment": "Phase-based pricing",
            "cta": "Offer similar design case studies",
        },
    ),
    ProposalTemplate(
        id="copywriting-sales",
        name="Sales Copywriting",
        category="marketing",
        description="High-conversion copy for landing pages or emails",
        industry="marketing",
        tone_hint="persuasive_psychological",
        platform_fit=["upwork", "direct_rfp", "linkedin"],
        default_sections={
            "opening": "The conversion/revenue gap",
            "methodology": "Research-based copywriting approach",
            "deliverables": "Landing page, email sequence or ad copy drafts",
            "revisions": "Collaboration process and revision rounds",
            "guarantee": "Satisfaction guarantee or conversion goals",
            "investment": "Flat fee per asset or project",
            "cta": "Discuss their conversion goals",
        },
    ),
    ProposalTemplate(
        id="video-production",
        name="Video Production & Editing",
        category="creative",
        description="Corporate, promotional, or social video content",
        industry="media",
        tone_hint="visual_storyteller",
        platform_fit=["upwork", "fiverr", "production_hub"],
        default_sections={
            "opening": "Visual concept and storytelling hook",
            "pre_production": "Scripting, storyboarding, logistics",
            "production": "Equipment, crew, location",
            "post_production": "Editing, color grading, sound design",
            "delivery": "Final formats and aspect ratios",
            "investment": "Day rate or per-video pricing",
            "cta": "Review a reel and discuss the concept",
        },
    ),
    ProposalTemplate(
        id="business-consulting",
        name="Business Consulting",
        category="consulting",
        description="Strategy, operations, or management consulting",
        industry="business",
        tone_hint="executive_authoritative",
        platform_fit=["linkedin", "catalant", "direct_rfp"],
        default_sections={
            "opening": "Strategic diagnosis of the business problem",
            "methodology": "Framework used for analysis",
            "roadmap": "Phased implementation plan",
            "outcomes": "Projected ROI and business impact",
            "credentials": "Relevant industry experience",
            "investment": "Retainer or project milestones",
            "cta": "Schedule an executive briefing",
        },
    ),
]

_TEMPLATES_BY_ID: Dict[str, ProposalTemplate] = {t.id: t for t in PROPOSAL_TEMPLATES}


def get_template(template_id: Optional[str]) -> Optional[ProposalTemplate]:
    if not template_id:
        return None
    return _TEMPLATES_BY_ID.get(template_id)


def list_templates(category: Optional[str] = None) -> List[ProposalTemplate]:
    if category:
        return [t for t in PROPOSAL_TEMPLATES if t.category == category]
    return list(PROPOSAL_TEMPLATES)
