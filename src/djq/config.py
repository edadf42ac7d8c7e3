"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

ENRICHMENT_PROVIDERS = {"spotify", "openai", "none"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    spotify_client_id: str | None = None
    spotify_client_secret: str | None = None
    spotify_accounts_url: str = "https://accounts.spotify.com"
    spotify_api_url: str = "https://api.spotify.com/v1"
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o-mini"
    openai_store: bool = False
    enrichment_provider: str = "spotify"
    http_timeout_seconds: float = 10.0
    port: int = 3000
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def spotify_configured(self) -> bool:
        """Return True when both Spotify credentials are present."""
        return bool(self.spotify_client_id and self.spotify_client_secret)


def parse_enrichment_provider(settings: Settings) -> str:
    """Resolve the enrichment provider, falling back to none without credentials."""
    provider = (settings.enrichment_provider or "").strip().lower()
    if provider not in ENRICHMENT_PROVIDERS:
        return "none"
    if provider == "spotify" and not settings.spotify_configured:
        return "none"
    if provider == "openai" and not settings.openai_api_key:
        return "none"
    return provider
