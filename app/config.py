"""
Application Configuration
Load settings from environment variables with validation
"""
import os


class Settings:
    """Application configuration from environment variables"""

    # MongoDB Configuration
    MONGODB_URI: str = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
    MONGODB_DB_NAME: str = os.getenv("MONGODB_DB_NAME", "proposal_generator")
    MONGODB_TLS: bool = os.getenv("MONGODB_TLS", "True").lower() == "true"

    # OpenAI Configuration
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
    PROPOSAL_MODEL: str = os.getenv("PROPOSAL_MODEL", "gpt-4o")       # Stages A/B/C
    HELPER_MODEL: str = os.getenv("HELPER_MODEL", "gpt-4o-mini")      # Classifier, extractor, evaluator, aux

    # Application Configuration
    APP_NAME: str = "AI Proposal Generator"
    APP_VERSION: str = "2.0.0"
    DEBUG: bool = os.getenv("DEBUG", "True").lower() == "true"

    # API Configuration
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.getenv("API_PORT", "8000"))

    # Pipeline Configuration
    MAX_RFP_CHARS: int = int(os.getenv("MAX_RFP_CHARS", "15000"))
    PORTFOLIO_TOP_N: int = int(os.getenv("PORTFOLIO_TOP_N", "3"))
    EVALUATE_QUALITY: bool = os.getenv("EVALUATE_QUALITY", "True").lower() == "true"

    # Rate limiting (per user, per endpoint)
    RATE_LIMIT_REQUESTS: int = int(os.getenv("RATE_LIMIT_REQUESTS", "10"))
    RATE_LIMIT_WINDOW_SECONDS: int = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "60"))

    # Monthly proposal quotas by plan
    FREE_PLAN_QUOTA: int = int(os.getenv("FREE_PLAN_QUOTA", "3"))
    STARTER_PLAN_QUOTA: int = int(os.getenv("STARTER_PLAN_QUOTA", "100"))
    PRO_PLAN_QUOTA: int = int(os.getenv("PRO_PLAN_QUOTA", "300"))

    # Logging Configuration
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


# Initialize settings
settings = Settings()


def validate_settings() -> bool:
    """
    Validate that all required settings are configured

    Returns:
        True if all required settings are present

    Raises:
        ValueError: If required settings are missing
    """
    required_keys = {
        "OPENAI_API_KEY": settings.OPENAI_API_KEY,
        "MONGODB_URI": settings.MONGODB_URI,
    }

    missing_keys = [key for key, value in required_keys.items() if not value]
    if missing_keys:
        raise ValueError(f"Missing required environment variables: {', '.join(missing_keys)}")

    return True
