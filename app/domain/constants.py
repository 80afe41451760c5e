"""
Centralized Constants for the Proposal Generation Pipeline

SINGLE SOURCE OF TRUTH for keyword lists, option sets and prompt fragments.
No duplication - all modules should import from here.
"""

from typing import Dict, List, Tuple
from enum import Enum


# =============================================================================
# SHARED ENUMS
# =============================================================================

class Platform(str, Enum):
    """Where the proposal will be submitted."""
    UPWORK = "Upwork"
    FIVERR = "Fiverr"
    THUMBTACK = "Thumbtack"
    HOUZZ = "Houzz"
    LINKEDIN = "LinkedIn"
    DIRECT_RFP = "Direct RFP"
    EMAIL_OUTREACH = "Email Outreach"
    AGENCY_PITCH = "Agency Pitch"
    OTHER = "Other"


class ProposalStyle(str, Enum):
    """Visual/structural style of the written proposal."""
    MODERN_CLEAN = "modern_clean"
    CORPORATE = "corporate"
    MINIMALIST = "minimalist"
    CREATIVE_AGENCY = "creative_agency"
    STARTUP_PITCH = "startup_pitch"
    TECHNICAL = "technical"


class Language(str, Enum):
    """Supported output locales."""
    EN = "en"
    ES = "es"
    PT = "pt"
    AR = "ar"
    ID = "id"
    HI = "hi"


class LengthAdjustment(str, Enum):
    SHORTER = "shorter"
    SAME = "same"
    LONGER = "longer"


class ToneAdjustment(str, Enum):
    MORE_FORMAL = "more_formal"
    SAME = "same"
    MORE_CASUAL = "more_casual"


class ClientTone(str, Enum):
    """Tone the client wrote their RFP in."""
    FORMAL = "formal"
    CASUAL = "casual"
    PROFESSIONAL = "professional"
    FRIENDLY = "friendly"


# =============================================================================
# INDUSTRY CLASSIFICATION
# =============================================================================
# Declaration order matters: on equal keyword scores the first industry wins.

INDUSTRY_LABELS: Dict[str, str] = {
    "saas": "SaaS / Software Product",
    "web-development": "Web Development",
    "e-commerce": "E-Commerce",
    "marketing": "Marketing & Advertising",
    "logistics": "Logistics & Transportation",
    "construction": "Construction & Trades",
    "ai-tools": "AI Tools & Automation",
    "mobile-apps": "Mobile Apps",
    "portfolio-sites": "Portfolio & Personal Sites",
    "consulting": "Consulting & Professional Services",
    "healthcare": "Healthcare",
    "finance": "Finance & Fintech",
    "education": "Education & E-Learning",
    "real-estate": "Real Estate",
    "general-business": "General Business",
}

INDUSTRY_KEYWORDS: Dict[str, List[str]] = {
    "saas": [
        "saas", "software as a service", "subscription", "mvp", "minimum viable product",
        "dashboard", "user auth", "authentication", "onboarding", "trial", "freemium",
        "recurring revenue", "mrr", "arr", "churn", "activation", "product-led",
        "b2b software", "b2c software", "web app", "user management", "admin panel",
        "tenant", "multi-tenant", "integrations", "webhooks", "billing", "stripe",
    ],
    "web-development": [
        "website", "web development", "web design", "landing page", "frontend",
        "backend", "full stack", "full-stack", "react", "next.js", "vue", "angular",
        "wordpress", "webflow", "responsive", "cms", "redesign", "html", "css",
    ],
    "e-commerce": [
        "e-commerce", "ecommerce", "online store", "shopify", "woocommerce", "cart",
        "checkout", "product catalog", "inventory", "marketplace", "dropshipping",
    ],
    "marketing": [
        "marketing", "advertising", "seo", "ppc", "social media", "branding",
        "campaign", "lead generation", "content marketing", "email marketing",
        "conversion rate", "funnel", "google ads", "facebook ads",
    ],
    "logistics": [
        "logistics", "freight", "shipping", "transport", "transportation", "trucking",
        "delivery", "fleet", "dispatch", "warehouse", "supply chain", "route optimization",
        "tracking", "carrier", "3pl",
    ],
    "construction": [
        "construction", "contractor", "builder", "remodel", "renovation", "roofing",
        "plumbing", "electrical", "hvac", "landscaping", "painting", "flooring",
        "general contractor", "home improvement", "trades", "handyman", "carpentry",
        "masonry", "concrete", "framing", "drywall",
    ],
    "ai-tools": [
        "ai", "artificial intelligence", "machine learning", "chatbot", "gpt", "openai",
        "llm", "automation", "nlp", "computer vision", "ai agent", "langchain",
    ],
    "mobile-apps": [
        "mobile app", "ios", "android", "react native", "flutter", "swift", "kotlin",
        "app store", "play store",
    ],
    "portfolio-sites": [
        "portfolio", "personal website", "personal brand", "resume site", "showcase",
        "photographer", "artist",
    ],
    "consulting": [
        "consulting", "consultant", "advisory", "strategy", "coaching", "coach",
        "business plan", "audit", "assessment",
    ],
    "healthcare": [
        "healthcare", "health", "medical", "clinic", "patient", "hipaa", "telehealth",
        "telemedicine", "hospital", "wellness",
    ],
    "finance": [
        "finance", "fintech", "banking", "payments", "accounting", "invoice",
        "investment", "trading", "crypto", "lending", "insurance",
    ],
    "education": [
        "education", "e-learning", "elearning", "course", "lms", "students",
        "teacher", "tutoring", "school", "training platform",
    ],
    "real-estate": [
        "real estate", "property", "realtor", "listing", "mls", "rental",
        "property management", "broker",
    ],
    "general-business": [],
}

# Explicit trade allow-list. Construction is only ever selected when one of
# these appears in the raw text.
TRADE_KEYWORDS: List[str] = [
    "construction", "contractor", "general contractor", "home builder", "custom builder",
    "remodel", "renovation", "roofing", "plumbing", "electrical", "hvac", "landscaping",
    "trades", "handyman", "carpentry", "masonry", "drywall", "home improvement",
]

# Low-score fallback: presence of any of these means web-development
TECH_FALLBACK_KEYWORDS: List[str] = [
    "website", "web", "app", "software", "platform", "dashboard", "mvp", "landing",
]

GENERIC_PROJECT_TYPES = {"", "web project", "project", "general", "other", "n/a", "unknown"}

# (pattern, project type) - first match wins
PROJECT_TYPE_PATTERNS: List[Tuple[str, str]] = [
    (r"\bsaas\b.*\bmvp\b|\bmvp\b.*\bsaas\b", "SaaS MVP"),
    (r"\bsaas\b|software as a service", "SaaS Product"),
    (r"\bmvp\b|minimum viable product", "MVP Development"),
    (r"\bdashboards?\b|admin panel", "Dashboard Application"),
    (r"landing page", "Landing Page"),
    (r"e-?commerce|online store|shopify", "E-Commerce Store"),
    (r"mobile app|\bios\b|\bandroid\b", "Mobile Application"),
    (r"web app|web application", "Web Application"),
    (r"chatbot|ai agent|\bllm\b", "AI Assistant"),
    (r"redesign", "Website Redesign"),
    (r"portfolio", "Portfolio Website"),
    (r"website|web site", "Business Website"),
    (r"roofing|plumbing|remodel|renovation|construction|contractor", "Contractor Services Website"),
]

REQUIREMENT_PATTERNS: List[Tuple[str, str]] = [
    (r"\bauth|\blogin\b|sign[- ]?in|sign[- ]?up|oauth|\bsso\b", "User authentication"),
    (r"subscription|recurring billing|billing", "Subscription billing"),
    (r"payment|stripe|paypal|checkout", "Payment processing"),
    (r"dashboard|analytics|reporting", "Analytics dashboard"),
    (r"admin panel|admin dashboard|back ?office", "Admin panel"),
    (r"\bapi\b|integration|webhook", "Third-party integrations"),
    (r"responsive|mobile[- ]friendly", "Responsive design"),
    (r"\bseo\b|search engine", "SEO optimization"),
    (r"\bcms\b|content management", "Content management"),
    (r"notification|email alerts?", "Notifications"),
    (r"real[- ]time|websocket|live updates?", "Real-time updates"),
    (r"multi[- ]tenant|tenant", "Multi-tenant architecture"),
]

TECH_STACK_PATTERNS: List[Tuple[str, str]] = [
    (r"\breact\b(?! native)", "React"),
    (r"next\.?js", "Next.js"),
    (r"\bvue", "Vue.js"),
    (r"\bangular", "Angular"),
    (r"node\.?js|\bnode\b", "Node.js"),
    (r"\bpython\b", "Python"),
    (r"django", "Django"),
    (r"fastapi", "FastAPI"),
    (r"typescript", "TypeScript"),
    (r"stripe", "Stripe"),
    (r"postgres", "PostgreSQL"),
    (r"mongo", "MongoDB"),
    (r"supabase", "Supabase"),
    (r"firebase", "Firebase"),
    (r"\baws\b|amazon web services", "AWS"),
    (r"tailwind", "Tailwind CSS"),
    (r"wordpress", "WordPress"),
    (r"shopify", "Shopify"),
    (r"react native", "React Native"),
    (r"flutter", "Flutter"),
    (r"oauth", "OAuth"),
]

DELIVERABLE_PATTERNS: List[Tuple[str, str]] = [
    (r"dashboard", "Dashboard interface"),
    (r"landing page", "Landing page"),
    (r"website|web site", "Website"),
    (r"web app|web application|saas|mvp", "Web application"),
    (r"mobile app", "Mobile app"),
    (r"\bapi\b", "API"),
    (r"design|mockup|wireframe|figma", "Design mockups"),
    (r"documentation|docs\b", "Documentation"),
    (r"admin panel", "Admin panel"),
    (r"subscription|billing", "Billing integration"),
]

TIMELINE_PATTERN: str = r"(\d+\s*(?:-\s*\d+\s*)?(?:weeks?|months?|days?))|\b(asap|urgent(?:ly)?|deadline[^.\n]*)"


# =============================================================================
# INDUSTRY INTELLIGENCE ROUTING
# =============================================================================

INTEL_SAAS_KEYWORDS: List[str] = [
    "saas", "mvp", "dashboard", "software", "platform", "web app", "application",
    "startup", "subscription", "user auth", "authentication", "admin panel",
]
INTEL_SAAS_REROUTE_KEYWORDS: List[str] = [
    "saas", "mvp", "dashboard", "software", "platform", "app", "application",
]
INTEL_LOGISTICS_KEYWORDS: List[str] = [
    "logistics", "freight", "shipping", "transport", "trucking", "delivery", "fleet", "dispatch",
]
INTEL_WEB_AGENCY_KEYWORDS: List[str] = [
    "web dev", "web design", "agency", "development agency", "digital agency",
    "website", "landing page", "redesign",
]
INTEL_CONSULTING_KEYWORDS: List[str] = ["consult", "advisory", "strategy", "coach"]
INTEL_MARKETING_KEYWORDS: List[str] = [
    "marketing", "advertising", "seo", "ppc", "social media", "branding",
]


# =============================================================================
# PERSONA & BANNED PHRASES
# =============================================================================

SENIOR_CONSULTANT_PERSONA: str = """You are a senior consultant with 10+ years of hands-on experience delivering projects like this one. You have won most of your work through proposals and you know how buyers read them.

WRITING PRINCIPLES:
1. Insight over information - open with something the client has not considered.
2. Persuasion over description - every sentence moves the reader toward yes.
3. Specificity over generality - concrete numbers, named technologies, measurable outcomes.
4. Authority without arrogance - recommend, do not hedge.
5. Human over robotic - natural rhythm, short paragraphs, no template voice.

NEVER restate the job post back to the client, express generic excitement, or hedge with "I think"."""

BANNED_PHRASES: List[str] = [
    # Generic understanding claims
    "I fully understand your requirements",
    "I understand your requirements",
    "I understand your needs",
    "I understand what you're looking for",
    "I understand the scope",
    # Excitement/fit claims
    "I'm excited to work with you",
    "I'm excited for this opportunity",
    "I'm excited about this opportunity",
    "I believe I'm the perfect fit",
    "I'm the right person for this",
    "I'm confident I can deliver",
    # Weak closings
    "Don't hesitate to contact me",
    "Don't hesitate to reach out",
    "Feel free to contact me",
    "Feel free to reach out",
    "Looking forward to hearing from you",
    "Looking forward to your response",
    "Please let me know if you have questions",
    "Let me know if you need anything",
    # AI giveaways
    "As an AI",
    "As a language model",
    "As a developer",
    "As a freelancer",
    "I can help you with",
    "I would love to",
    "I would be happy to",
    "I am confident that",
    "Rest assured",
    # Filler
    "At your earliest convenience",
    "In a timely manner",
    "Moving forward",
    "Going forward",
    "With that being said",
    "That being said",
    "Due to the fact that",
    "At the end of the day",
    "It goes without saying",
    # Template language
    "Dear Sir/Madam",
    "To whom it may concern",
    "I hope this message finds you well",
    "Thank you for the opportunity",
    "I am writing to express my interest",
]


# =============================================================================
# PLATFORM STRATEGIES
# =============================================================================

PLATFORM_STRATEGIES: Dict[str, str] = {
    "Upwork": """UPWORK: concise, milestone-driven, credibility-focused.
- The first two lines must hook; clients scan 20+ proposals in minutes
- Lead with a strategic insight, not "I read your job post"
- Short paragraphs and bullets, weekly milestones
- 1-2 similar projects with measurable outcomes
- End with a value-first next step (audit, wireframe, strategy call)""",
    "Fiverr": """FIVERR: benefit-forward, fast delivery, friendly-professional.
- Lead with the outcome they will get
- Bullet list of what is included, revision policy
- Quick, realistic turnaround as the differentiator
- Simple call to action""",
    "Thumbtack": """THUMBTACK: local, trustworthy, service-oriented.
- Local availability and response time
- Trust signals: reviews, years in business
- Clear quote process
- Easy next step (call, visit, quote)""",
    "Houzz": """HOUZZ: design-focused, aesthetic-aware, collaborative.
- Reference style and visual outcomes
- Describe the collaboration process
- Portfolio imagery and past projects as proof""",
    "LinkedIn": """LINKEDIN: peer-to-peer, business-outcome focused.
- Open with a business observation about their company
- Keep it conversational and brief
- Propose a short call rather than a hard sell""",
    "Direct RFP": """DIRECT RFP: formal, comprehensive, compliance-aware.
- Mirror the RFP's own section structure and terminology
- Address every stated requirement explicitly
- Methodology, team, timeline and budget sections
- Risk mitigation and references""",
    "Email Outreach": """EMAIL OUTREACH: short, personal, one clear ask.
- Subject-line worthy first sentence
- One insight, one proof point, one question
- Under 200 words of body text where possible""",
    "Agency Pitch": """AGENCY PITCH: strategic, team-oriented, ROI-driven.
- Position as a partner, not a vendor
- Process, team roles and communication cadence
- Case studies with business metrics""",
    "Other": """GENERAL: professional and outcome-focused.
- Open with the client's core problem
- Clear approach, deliverables, timeline and investment
- Specific next step""",
}

PLATFORM_CTA_GUIDANCE: Dict[str, str] = {
    "Upwork": "Offer a quick call or a free mini-audit; reference milestone-based start.",
    "Fiverr": "Point to a package or custom offer; emphasize fast turnaround.",
    "Thumbtack": "Invite them to book a visit or request a detailed quote.",
    "Houzz": "Suggest a design consultation or moodboard session.",
    "LinkedIn": "Propose a 15-minute call at a specific time.",
    "Direct RFP": "Offer a formal presentation or Q&A session with the evaluation committee.",
    "Email Outreach": "Ask one low-friction question they can answer in a line.",
    "Agency Pitch": "Propose a discovery workshop with the team.",
    "Other": "Propose a short call to confirm scope and next steps.",
}


# =============================================================================
# STYLE DIRECTIVES
# =============================================================================

STYLE_GUIDANCE: Dict[str, Dict[str, str]] = {
    "modern_clean": {
        "headings": "Clear, bold headings with ample spacing. ## for sections, ### for subsections.",
        "paragraphs": "Short paragraphs of 2-3 sentences. Minimal formatting.",
        "lists": "Bullet points with clear hierarchy.",
        "emphasis": "Bold for key points only.",
        "structure": "Introduction, Approach, Deliverables, Timeline, Why Us, Next Steps.",
    },
    "corporate": {
        "headings": "Formal numbered sections (1.0, 1.1). ## for main sections.",
        "paragraphs": "Detailed, formal paragraphs.",
        "lists": "Numbered lists for processes, bullets for benefits.",
        "emphasis": "Conservative bold, formal terminology.",
        "structure": "Executive Summary, Background, Methodology, Qualifications, Timeline, Budget, Conclusion.",
    },
    "minimalist": {
        "headings": "Simple, unadorned headings used sparingly.",
        "paragraphs": "Very short paragraphs. Whitespace does the work.",
        "lists": "Short bullets, no nesting.",
        "emphasis": "Almost none.",
        "structure": "Problem, Solution, Price, Next Step.",
    },
    "creative_agency": {
        "headings": "Bold, expressive headings that read like taglines.",
        "paragraphs": "Narrative paragraphs with strong verbs and imagery.",
        "lists": "Creative bullets that sell the vision.",
        "emphasis": "Bold for memorable lines.",
        "structure": "The Big Idea, The Vision, How We Get There, What You Get, Investment, Let's Build.",
    },
    "startup_pitch": {
        "headings": "Punchy headings framed as outcomes.",
        "paragraphs": "Fast, energetic paragraphs focused on speed and traction.",
        "lists": "Bullets with metrics.",
        "emphasis": "Bold numbers and outcomes.",
        "structure": "The Opportunity, The Plan, Milestones, Traction Metrics, Investment, Next Step.",
    },
    "technical": {
        "headings": "Descriptive technical headings.",
        "paragraphs": "Precise paragraphs naming architecture, tools and trade-offs.",
        "lists": "Numbered implementation steps and specification bullets.",
        "emphasis": "Inline code formatting for technologies.",
        "structure": "Technical Summary, Architecture, Implementation Plan, Testing, Timeline, Cost.",
    },
}


# =============================================================================
# LANGUAGE DIRECTIVES
# =============================================================================

LANGUAGE_NAMES: Dict[str, str] = {
    "en": "English",
    "es": "Spanish",
    "pt": "Portuguese",
    "ar": "Arabic",
    "id": "Indonesian",
    "hi": "Hindi",
}

LANGUAGE_INSTRUCTIONS: Dict[str, str] = {
    "en": "Write the entire proposal in English.",
    "es": "Escribe toda la propuesta en español. Usa un español profesional y neutro.",
    "pt": "Escreva toda a proposta em português. Use português profissional do Brasil.",
    "ar": "اكتب المقترح بالكامل باللغة العربية الفصحى بأسلوب مهني.",
    "id": "Tulis seluruh proposal dalam bahasa Indonesia yang profesional.",
    "hi": "पूरा प्रस्ताव पेशेवर हिंदी में लिखें।",
}


# =============================================================================
# LENGTH & TONE
# =============================================================================

LENGTH_BANDS: Dict[str, Tuple[int, int]] = {
    "shorter": (400, 500),
    "same": (600, 900),
    "longer": (900, 1200),
}

LENGTH_MAX_TOKENS: Dict[str, int] = {
    "shorter": 1200,
    "same": 2000,
    "longer": 2800,
}

TONE_ADJUSTMENT_DIRECTIVES: Dict[str, str] = {
    "more_formal": "Use a formal, polished register. No contractions, no slang, measured confidence.",
    "more_casual": "Use a relaxed, conversational register. Contractions are fine, keep it warm and direct.",
}

TONE_PREFERENCE_DIRECTIVES: Dict[str, str] = {
    "Professional & Formal": "Professional and formal: precise language, respectful distance.",
    "Friendly & Conversational": "Friendly and conversational: warm, plain language, first person.",
    "Technical & Detailed": "Technical and detailed: name tools, architecture and trade-offs explicitly.",
    "Creative & Bold": "Creative and bold: vivid framing, confident claims backed by proof.",
}

DEFAULT_TONE_DIRECTIVE: str = "Professional: confident, clear and client-focused."


# =============================================================================
# COMPLEXITY SCORING
# =============================================================================

LOW_COMPLEXITY_PLATFORMS: List[str] = ["Fiverr", "Email Outreach", "Thumbtack"]
HIGH_COMPLEXITY_PLATFORMS: List[str] = ["Agency Pitch", "Direct RFP"]
HIGH_COMPLEXITY_INDUSTRIES: List[str] = ["saas", "finance", "healthcare", "ai-tools"]


# =============================================================================
# TEXT ANALYSIS
# =============================================================================

STOP_WORDS = frozenset({
    "the", "and", "for", "are", "but", "not", "you", "all", "any", "can", "had",
    "her", "was", "one", "our", "out", "has", "have", "this", "that", "with",
    "from", "they", "will", "would", "there", "their", "what", "about", "which",
    "when", "make", "like", "time", "just", "know", "take", "into", "year",
    "your", "some", "could", "them", "than", "then", "now", "look", "only",
    "come", "its", "over", "also", "back", "after", "use", "two", "how",
    "work", "first", "well", "way", "even", "new", "want", "because", "these",
    "give", "most", "need", "needs", "needed", "looking", "who", "should",
    "must", "able", "been", "being", "were", "more", "very", "each", "other",
    "such", "may", "get", "got", "via", "per", "etc",
})
