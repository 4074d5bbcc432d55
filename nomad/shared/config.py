"""
Application settings.

Credentials and deployment values are read once from the environment
(optionally seeded from a .env file) into an immutable Settings object
that is handed to each component, so tests can pass their own.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    """
    Runtime settings for all components.

    Attributes:
        openai_api_key: Key for the hosted language model (None = mock mode)
        skyscanner_api_key: Key for the flight search API (None = mock mode)
        stripe_secret_key: Payment provider secret key
        stripe_publishable_key: Payment provider publishable key
        stripe_webhook_secret: Shared secret for webhook signatures
        base_url: Public URL of the frontend, used for checkout redirects
        log_level: Root log level name
        log_format: "text" or "json"
    """

    openai_api_key: Optional[str] = None
    skyscanner_api_key: Optional[str] = None
    stripe_secret_key: Optional[str] = None
    stripe_publishable_key: Optional[str] = None
    stripe_webhook_secret: Optional[str] = None
    base_url: str = "http://localhost:3000"
    log_level: str = "INFO"
    log_format: str = "text"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables (after loading .env)."""
        load_dotenv()
        return cls(
            openai_api_key=os.environ.get("OPENAI_API_KEY") or None,
            skyscanner_api_key=os.environ.get("SKYSCANNER_API_KEY") or None,
            stripe_secret_key=os.environ.get("STRIPE_SECRET_KEY") or None,
            stripe_publishable_key=os.environ.get("STRIPE_PUBLISHABLE_KEY") or None,
            stripe_webhook_secret=os.environ.get("STRIPE_WEBHOOK_SECRET") or None,
            base_url=os.environ.get("BASE_URL", "http://localhost:3000"),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
            log_format=os.environ.get("LOG_FORMAT", "text").lower(),
        )


# Module-level cache for settings
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Returns the cached application settings.

    Used as a FastAPI dependency; tests replace it through
    app.dependency_overrides.
    """
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings
