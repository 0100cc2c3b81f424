"""
Fitlead - Configuration and settings.

Supabase credentials are mandatory. OpenAI, Twilio and Google Sheets
credentials are optional and each one independently gates whether its
component runs for real or in simulated / disabled mode.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

# Values shipped in example env files that must never reach the provider
PLACEHOLDER_API_KEYS = frozenset({
    "",
    "dummy-key-for-build",
    "your_openai_api_key_here",
})


class Settings(BaseSettings):
    """
    Application settings loaded from the environment / .env file.

    Components never read this object directly at import time; the web app
    and CLI build each component from it explicitly.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Supabase (required)
    supabase_url: str
    supabase_anon_key: str

    # OpenAI (optional - generation fails with a configuration error without it)
    openai_api_key: str | None = None
    openai_model: str = "gpt-4"
    openai_max_tokens: int = 2000
    openai_temperature: float = 0.7

    # Twilio WhatsApp (optional - delivery is simulated without it)
    twilio_account_sid: str | None = None
    twilio_auth_token: str | None = None
    twilio_whatsapp_number: str | None = None  # e.g. "whatsapp:+14155238886"

    # Google Sheets lead sink (optional - disabled without it)
    google_service_account_email: str | None = None
    google_private_key: str | None = None
    google_sheet_id: str | None = None

    # Application
    fitlead_env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # FITLEAD_LOG_PROMPTS=1 - log generation prompts to local files (dev only)
    fitlead_log_prompts: bool = False

    @property
    def is_development(self) -> bool:
        return self.fitlead_env == "development"

    @property
    def generation_configured(self) -> bool:
        """True when an OpenAI key is present and not a known placeholder."""
        return is_real_api_key(self.openai_api_key)

    @property
    def messaging_configured(self) -> bool:
        return bool(
            self.twilio_account_sid
            and self.twilio_auth_token
            and self.twilio_whatsapp_number
        )

    @property
    def sheets_configured(self) -> bool:
        return bool(
            self.google_service_account_email
            and self.google_private_key
            and self.google_sheet_id
        )


def is_real_api_key(api_key: str | None) -> bool:
    """Check that an API key is set and isn't one of the placeholder values."""
    if api_key is None:
        return False
    return api_key.strip() not in PLACEHOLDER_API_KEYS


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
