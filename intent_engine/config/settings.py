"""
Configuration settings for the Lead Intent Scoring Engine
"""

from typing import Dict, List, Optional
import logging
import os

# =============================================================================
# LLM CONFIGURATION (Groq, OpenAI-compatible endpoint)
# =============================================================================

LLM_CONFIG = {
    "provider": os.getenv("LLM_PROVIDER", "groq"),  # groq, openai, openrouter
    "model": os.getenv("LLM_MODEL", "llama-3.1-8b-instant"),
    "api_key": os.getenv("GROQ_API_KEY", ""),
    "base_url": os.getenv("LLM_BASE_URL"),  # overrides the provider default
    "max_tokens": 150,
    "temperature": 0.7,
    "timeout_seconds": float(os.getenv("LLM_TIMEOUT_SECONDS", "30")),
    # Transport-level retries handled inside the SDK client
    "transport_retries": 0,
}

PROVIDER_BASE_URLS = {
    "groq": "https://api.groq.com/openai/v1",
    "openai": "https://api.openai.com/v1",
    "openrouter": "https://openrouter.ai/api/v1",
}

# =============================================================================
# RETRY POLICY (orchestrated retries around each LLM call)
# =============================================================================

RETRY_CONFIG = {
    "max_attempts": 3,
    "base_delay_seconds": 1.0,  # delay = base * attempt number
}

# =============================================================================
# RULE SCORING
# =============================================================================

MAX_RULE_SCORE = 50

ROLE_CATEGORY_SCORES = {
    "decision_maker": 20,
    "influencer": 10,
    "other": 0,
}

INDUSTRY_SCORES = {
    "exact_match": 20,
    "adjacent": 10,
    "no_match": 0,
}

COMPLETENESS_SCORE = 10

REQUIRED_LEAD_FIELDS: List[str] = [
    "name",
    "role",
    "company",
    "industry",
    "location",
    "linkedin_bio",
]

# =============================================================================
# AI SCORING & FINAL INTENT
# =============================================================================

AI_INTENT_SCORES = {
    "high": 50,
    "medium": 30,
    "low": 10,
}

# Combined (rule + ai) score bands, checked top-down
INTENT_THRESHOLDS = [
    (70, "High"),
    (40, "Medium"),
]
DEFAULT_INTENT = "Low"

# =============================================================================
# ROLE KEYWORDS (order matters for reasoning output)
# =============================================================================

DECISION_MAKER_KEYWORDS: List[str] = [
    "ceo",
    "cto",
    "cfo",
    "coo",
    "chief",
    "founder",
    "co-founder",
    "president",
    "vice president",
    "vp",
    "director",
    "head of",
    "owner",
    "principal",
    "partner",
]

INFLUENCER_KEYWORDS: List[str] = [
    "manager",
    "lead",
    "senior",
    "specialist",
    "architect",
    "consultant",
    "engineer",
]

# =============================================================================
# INDUSTRY SYNONYMS (keyed by normalized ideal use case)
# =============================================================================

INDUSTRY_SYNONYMS: Dict[str, List[str]] = {
    # Software and Technology
    "software": [
        "saas",
        "tech",
        "technology",
        "software development",
        "it services",
        "information technology",
    ],
    "saas": ["software", "software as a service", "cloud software", "tech"],
    "technology": ["tech", "software", "it", "information technology"],
    "fintech": [
        "financial technology",
        "finance",
        "banking",
        "payments",
        "financial services",
    ],
    # Business Services
    "consulting": ["professional services", "business consulting", "advisory"],
    "marketing": ["advertising", "digital marketing", "martech", "ad tech"],
    "sales": ["business development", "revenue", "sales automation"],
    # Industries
    "healthcare": ["health", "medical", "pharma", "pharmaceutical", "biotech"],
    "education": ["edtech", "e-learning", "learning", "training"],
    "ecommerce": ["e-commerce", "retail", "online retail", "marketplace"],
    "manufacturing": ["industrial", "production", "logistics", "supply chain"],
    "finance": ["financial", "banking", "fintech", "investment"],
    # Company Types
    "b2b": ["business to business", "enterprise", "b2b saas"],
    "enterprise": ["large enterprise", "fortune 500", "big business"],
    "startup": ["early stage", "seed", "series a", "scale-up"],
    "mid-market": ["mid market", "middle market", "smb", "small medium business"],
}

# =============================================================================
# UPLOADS
# =============================================================================

UPLOAD_CONFIG = {
    "max_file_size_bytes": 5 * 1024 * 1024,
    "allowed_mime_types": ["text/csv", "application/csv", "text/plain"],
    "allowed_extensions": [".csv"],
    "form_field": "csvFile",
}

# =============================================================================
# SERVER & LOGGING
# =============================================================================

SERVER_CONFIG = {
    "host": os.getenv("HOST", "0.0.0.0"),
    "port": int(os.getenv("PORT", "8000")),
    "env": os.getenv("APP_ENV", "development"),
}

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging once for the process"""
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)
