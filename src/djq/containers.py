"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from djq.adapters.openai_text_client import OpenAITextClient
from djq.adapters.spotify_client import HttpxSpotifyClient
from djq.adapters.supabase_session_repository import SupabaseSessionRepository
from djq.adapters.supabase_submission_repository import (
    SupabaseSubmissionRepository,
)
from djq.config import Settings, parse_enrichment_provider
from djq.services.enrichment import Enricher, LlmEnricher, SpotifyEnricher
from djq.services.sessions import SessionService
from djq.services.submissions import SubmissionService
from djq.services.suggestions import SuggestionService

_logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    session_service: SessionService
    submission_service: SubmissionService
    suggestion_service: SuggestionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    session_service = SessionService(SupabaseSessionRepository(supabase_client))

    spotify_client: HttpxSpotifyClient | None = None
    if resolved_settings.spotify_configured:
        spotify_client = HttpxSpotifyClient.create(
            client_id=resolved_settings.spotify_client_id or "",
            client_secret=resolved_settings.spotify_client_secret or "",
            accounts_url=resolved_settings.spotify_accounts_url,
            api_url=resolved_settings.spotify_api_url,
            timeout=resolved_settings.http_timeout_seconds,
        )

    openai_client: OpenAITextClient | None = None
    enricher: Enricher | None = None
    provider = parse_enrichment_provider(resolved_settings)
    if provider == "spotify" and spotify_client is not None:
        enricher = SpotifyEnricher(spotify_client)
    elif provider == "openai" and resolved_settings.openai_api_key:
        openai_client = OpenAITextClient.create(
            resolved_settings.openai_api_key,
            timeout=resolved_settings.http_timeout_seconds,
        )
        enricher = LlmEnricher(
            client=openai_client,
            model=resolved_settings.openai_model,
            store=resolved_settings.openai_store,
        )
    _logger.info("Enrichment provider: %s", provider)

    submission_service = SubmissionService(
        repository=SupabaseSubmissionRepository(supabase_client),
        session_service=session_service,
        enricher=enricher,
    )
    suggestion_service = SuggestionService(spotify_client)

    async def close_resources() -> None:
        if spotify_client is not None:
            await spotify_client.close()
        if openai_client is not None:
            await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        session_service=session_service,
        submission_service=submission_service,
        suggestion_service=suggestion_service,
        close_resources=close_resources,
    )
