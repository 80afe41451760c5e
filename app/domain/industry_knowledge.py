"""
Industry knowledge blocks

Static reference data injected into generation prompts so proposals speak
the client's language. Never mutated at runtime.
"""
from typing import Dict

from app.models.proposal_schema import IndustryIntelligence


INDUSTRY_INTELLIGENCE: Dict[str, IndustryIntelligence] = {
    "logistics": IndustryIntelligence(
        key="logistics",
        name="Logistics & Transportation",
        terminology=(
            "dispatch workflow", "freight visibility", "route optimization", "ETA accuracy",
            "cost-per-mile analysis", "shipment lifecycle", "order-to-delivery flow",
            "capacity planning", "last-mile delivery", "carrier management",
            "load optimization", "fleet tracking", "proof of delivery",
        ),
        kpis=(
            "lead-to-conversion rate", "on-time delivery %", "quote request speed",
            "contact-form abandonment rate", "mobile visitor bounce rate",
            "average response time", "cost per acquisition", "repeat customer rate",
        ),
        ux_needs=(
            "fast quote request system", "mobile-first service pages",
            "route/service-area maps", "multi-step lead forms",
            "real-time shipment tracking", "instant rate calculator", "customer portal access",
        ),
        seo_needs=(
            "local ranking for logistics services", "schema markup for transportation services",
            "service-area structured data", "geo-targeted landing pages",
        ),
        pain_points=(
            "outdated websites that hurt credibility",
            "poor mobile experience losing mobile-first customers",
            "no easy way to request quotes online",
            "manual quote processes wasting staff time",
            "competitors outranking in local search",
            "no visibility into website performance",
        ),
        conversion_principles=(
            "prominent quote request CTAs above the fold",
            "trust signals: years in business, fleet size, certifications",
            "social proof: client logos, testimonials, case studies",
            "urgency: same-day quotes, 24/7 availability",
        ),
        technical_requirements=(
            "sub-3-second page load times", "mobile-first responsive design",
            "CRM integration for lead capture", "mapping API for service areas",
        ),
    ),
    "construction": IndustryIntelligence(
        key="construction",
        name="Construction & Trades",
        terminology=(
            "project gallery", "before/after showcases", "service area mapping",
            "quote estimation", "project timeline", "permit compliance",
            "material specifications", "subcontractor coordination",
            "job site documentation", "warranty coverage",
        ),
        kpis=(
            "quote request conversion rate", "average project value", "customer acquisition cost",
            "portfolio engagement rate", "local search ranking", "review generation rate",
            "referral rate",
        ),
        ux_needs=(
            "high-quality project galleries", "before/after image sliders", "service area maps",
            "easy quote request forms", "project type filtering",
            "certification/license display", "financing options presentation",
        ),
        seo_needs=(
            "local SEO for city + service contractor searches", "project schema markup",
            "service-specific landing pages", "review aggregation schema",
        ),
        pain_points=(
            "portfolio photos not showcasing work quality",
            "hard to communicate service areas clearly",
            "competitors winning local search rankings",
            "no system for online quote requests",
            "missing trust signals and certifications",
        ),
        conversion_principles=(
            "visual proof of quality work",
            "trust signals: licenses, insurance, warranties",
            "easy contact methods: click-to-call, forms",
            "financing options prominently displayed",
        ),
        technical_requirements=(
            "image optimization for fast loading", "mobile-responsive galleries",
            "form integration with CRM", "fast hosting for image-heavy pages",
        ),
    ),
    "web-agency": IndustryIntelligence(
        key="web-agency",
        name="Web Development Agency",
        terminology=(
            "conversion optimization", "user experience design", "responsive development",
            "headless CMS", "JAMstack architecture", "Core Web Vitals", "A/B testing",
            "analytics implementation", "SEO architecture", "performance optimization",
        ),
        kpis=(
            "client acquisition cost", "project profitability", "client retention rate",
            "average project value", "portfolio conversion rate", "time to project completion",
        ),
        ux_needs=(
            "stunning portfolio showcase", "case study presentations", "service package clarity",
            "easy project inquiry forms", "process visualization", "results/metrics display",
        ),
        seo_needs=(
            "service-specific landing pages", "case study content optimization",
            "industry expertise demonstration", "thought leadership content",
        ),
        pain_points=(
            "portfolio not converting visitors to leads",
            "unclear service offerings and pricing",
            "difficulty demonstrating ROI to clients",
            "inconsistent project pipeline",
            "hard to differentiate from competitors",
        ),
        conversion_principles=(
            "results-focused case studies", "clear pricing/package options",
            "easy consultation booking", "risk reversal: guarantees, revisions",
        ),
        technical_requirements=(
            "fast performance", "perfect mobile experience",
            "accessibility compliance", "modern tech stack",
        ),
    ),
    "consulting": IndustryIntelligence(
        key="consulting",
        name="Business Consulting",
        terminology=(
            "strategic advisory", "business transformation", "operational efficiency",
            "change management", "stakeholder alignment", "ROI analysis",
            "process optimization", "market positioning", "competitive analysis", "growth strategy",
        ),
        kpis=(
            "consultation booking rate", "client engagement length", "average contract value",
            "referral rate", "retainer conversion rate", "content engagement",
        ),
        ux_needs=(
            "authority-building design", "thought leadership content", "case study presentations",
            "easy consultation booking", "credential showcase", "resource library access",
        ),
        seo_needs=(
            "thought leadership content strategy", "industry expertise keywords",
            "case study optimization", "personal brand optimization",
        ),
        pain_points=(
            "difficulty establishing thought leadership online",
            "unclear service offerings confusing prospects",
            "no system for booking consultations",
            "lack of social proof and testimonials",
            "website not reflecting premium positioning",
        ),
        conversion_principles=(
            "authority positioning through credentials", "results-focused case studies",
            "easy consultation scheduling", "clear methodology/framework presentation",
        ),
        technical_requirements=(
            "calendar integration for bookings", "content management for thought leadership",
            "email capture for lead nurturing", "CRM integration",
        ),
    ),
    "marketing": IndustryIntelligence(
        key="marketing",
        name="Marketing Agency",
        terminology=(
            "conversion funnel", "lead generation", "brand positioning",
            "customer journey mapping", "A/B testing", "attribution modeling",
            "content strategy", "paid media optimization", "organic growth", "retention marketing",
        ),
        kpis=(
            "client ROI delivery", "campaign performance", "lead quality score",
            "client retention rate", "average contract value", "proposal win rate",
        ),
        ux_needs=(
            "results-driven portfolio", "case study showcases with metrics",
            "service package clarity", "easy inquiry/audit request",
            "client logo display", "blog/content hub",
        ),
        seo_needs=(
            "service-specific landing pages", "industry vertical targeting",
            "thought leadership blog", "competitive keyword strategy",
        ),
        pain_points=(
            "difficulty proving ROI to prospects", "inconsistent brand messaging",
            "competition from in-house teams", "commoditization of services",
            "long sales cycles",
        ),
        conversion_principles=(
            "metrics-driven case studies", "clear service packages and pricing",
            "free audit/consultation offers", "thought leadership positioning",
        ),
        technical_requirements=(
            "analytics and tracking implementation", "CRM and marketing automation",
            "content management system", "form and lead capture optimization",
        ),
    ),
    "saas": IndustryIntelligence(
        key="saas",
        name="SaaS / Software Product",
        terminology=(
            "product-market fit", "user onboarding", "activation rate", "churn reduction",
            "feature adoption", "freemium conversion", "customer success", "product analytics",
            "growth loops", "MVP development", "user authentication", "dashboard interface",
            "admin panel", "subscription billing", "API integration", "role-based access",
        ),
        kpis=(
            "trial-to-paid conversion", "monthly recurring revenue", "customer acquisition cost",
            "lifetime value", "churn rate", "activation rate", "feature adoption", "time to value",
        ),
        ux_needs=(
            "clear value proposition", "easy trial signup", "intuitive dashboard design",
            "seamless onboarding flow", "data-rich visualizations", "pricing transparency",
            "security/compliance badges",
        ),
        seo_needs=(
            "product category keywords", "competitor comparison pages",
            "use case landing pages", "integration partner pages",
        ),
        pain_points=(
            "low trial-to-paid conversion", "complex onboarding losing users",
            "slow time-to-market for MVP", "poor user experience in dashboard",
            "authentication/security concerns", "scalability challenges",
        ),
        conversion_principles=(
            "clear, immediate value proposition", "frictionless trial signup",
            "transparent pricing", "security and compliance trust signals",
        ),
        technical_requirements=(
            "secure authentication (OAuth, JWT)", "payment processing",
            "responsive dashboard design", "API-first architecture",
            "real-time data sync", "analytics and tracking",
        ),
    ),
}
