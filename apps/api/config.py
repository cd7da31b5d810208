"""
Application configuration using Pydantic Settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./idea_factory.db"

    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    PUBLIC_BASE_URL: str = "http://localhost:8000"

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    # OpenAI
    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = "gpt-4o-mini"
    OPENAI_MAX_TOKENS: int = 4000

    # Scraper
    SCRAPER_USER_AGENT: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/118.0.0.0 Safari/537.36"
    )
    SCRAPER_TIMEOUT_SECONDS: int = 30
    SCRAPE_TEXT_LIMIT: int = 3000

    # Stripe
    STRIPE_SECRET_KEY: str = ""
    STRIPE_API_BASE: str = "https://api.stripe.com/v1"
    PRICE_UNIT_AMOUNT: int = 2900
    PRICE_CURRENCY: str = "usd"
    PRICE_INTERVAL: str = "month"

    # Landing page injection
    PAYMENT_SENTINEL_URL: str = "#"
    PAYMENT_PLACEHOLDER: str = "#PAYMENT_TARGET#"
    CTA_ACTION_WORDS: List[str] = ["buy", "start", "get"]

    # Periodic scan
    SCAN_TARGETS: List[str] = [
        "https://en.wikipedia.org/wiki/Notion_(app)",
        "https://en.wikipedia.org/wiki/Jira",
    ]
    SCAN_INTERVAL_MINUTES: int = 0

    AUTO_CREATE_DB_SCHEMA: bool = True

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)


settings = Settings()


def require_openai_api_key() -> str:
    """Return configured OpenAI API key or raise a configuration error."""
    api_key = (settings.OPENAI_API_KEY or "").strip()
    if not api_key or "your_" in api_key or api_key == "test-key":
        raise ValueError("OPENAI_API_KEY is not configured")
    return api_key


def price_label() -> str:
    """Human-readable price point used in landing page copy, e.g. ``$29/mo``."""
    amount = max(int(settings.PRICE_UNIT_AMOUNT), 0) / 100
    symbol = "$" if settings.PRICE_CURRENCY.lower() == "usd" else f"{settings.PRICE_CURRENCY.upper()} "
    amount_text = f"{amount:.0f}" if amount == int(amount) else f"{amount:.2f}"
    interval = {"month": "mo", "year": "yr", "week": "wk", "day": "day"}.get(
        settings.PRICE_INTERVAL.lower(), settings.PRICE_INTERVAL
    )
    return f"{symbol}{amount_text}/{interval}"
