"""Tests for container wiring."""

import asyncio

from djq.config import Settings
from djq.containers import build_container
from djq.services.enrichment import LlmEnricher, SpotifyEnricher
from tests.conftest import SERVICE_KEY


def test_build_container_creates_services(settings: Settings) -> None:
    container = build_container(settings)

    assert container.session_service is not None
    assert isinstance(container.submission_service.enricher, SpotifyEnricher)
    assert container.suggestion_service.client is not None
    asyncio.run(container.close_resources())


def test_build_container_with_openai_enrichment(settings: Settings) -> None:
    settings = settings.model_copy(
        update={"enrichment_provider": "openai", "openai_api_key": "sk-test"}
    )

    container = build_container(settings)

    assert isinstance(container.submission_service.enricher, LlmEnricher)
    asyncio.run(container.close_resources())


def test_build_container_without_providers() -> None:
    settings = Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=SERVICE_KEY,
    )

    container = build_container(settings)

    assert container.submission_service.enricher is None
    assert container.suggestion_service.client is None
    asyncio.run(container.close_resources())
