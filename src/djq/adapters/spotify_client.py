"""Spotify Web API client with client-credentials token caching."""

import base64
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Protocol

import httpx

from djq.domain.errors import UpstreamUnavailableError

_logger = logging.getLogger(__name__)

TOKEN_SAFETY_MARGIN_SECONDS = 60


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class SpotifyTokenCache:
    """Holds one bearer token and refreshes it lazily."""

    client_id: str
    client_secret: str
    http_client: httpx.AsyncClient
    accounts_url: str = "https://accounts.spotify.com"
    timeout: float = 10.0
    safety_margin_seconds: int = TOKEN_SAFETY_MARGIN_SECONDS
    clock: Callable[[], datetime] = field(default=_utcnow)
    _token: str | None = field(default=None, init=False, repr=False)
    _expires_at: datetime | None = field(default=None, init=False, repr=False)

    async def get_token(self) -> str | None:
        """Return a valid token, or None when the exchange fails."""
        now = self.clock()
        if self._token and self._expires_at and now < self._expires_at:
            return self._token
        try:
            token, expires_in = await self._exchange()
        except (httpx.HTTPError, KeyError, TypeError, ValueError) as exc:
            _logger.warning("Error getting Spotify access token: %s", exc)
            return None
        self._token = token
        self._expires_at = now + timedelta(
            seconds=expires_in - self.safety_margin_seconds
        )
        return token

    async def _exchange(self) -> tuple[str, int]:
        credentials = f"{self.client_id}:{self.client_secret}".encode()
        response = await self.http_client.post(
            f"{self.accounts_url}/api/token",
            data={"grant_type": "client_credentials"},
            headers={
                "Authorization": f"Basic {base64.b64encode(credentials).decode()}"
            },
            timeout=self.timeout,
        )
        response.raise_for_status()
        payload = response.json()
        return str(payload["access_token"]), int(payload["expires_in"])


class SpotifyClient(Protocol):
    """Interface for the Spotify endpoints used by the app."""

    async def search_tracks(self, query: str, limit: int = 10) -> dict[str, object]:
        """Search tracks and return the raw API payload."""

    async def get_audio_features(self, track_id: str) -> dict[str, object]:
        """Return raw audio features for one track."""

    async def get_audio_features_batch(
        self, track_ids: list[str]
    ) -> dict[str, object]:
        """Return raw audio features for several tracks."""


@dataclass
class HttpxSpotifyClient(SpotifyClient):
    """HTTPX-backed Spotify client."""

    token_cache: SpotifyTokenCache
    http_client: httpx.AsyncClient
    api_url: str = "https://api.spotify.com/v1"
    timeout: float = 10.0

    @classmethod
    def create(  # noqa: PLR0913
        cls,
        client_id: str,
        client_secret: str,
        accounts_url: str = "https://accounts.spotify.com",
        api_url: str = "https://api.spotify.com/v1",
        timeout: float = 10.0,
    ) -> "HttpxSpotifyClient":
        """Create a client sharing one httpx session with its token cache."""
        http_client = httpx.AsyncClient()
        token_cache = SpotifyTokenCache(
            client_id=client_id,
            client_secret=client_secret,
            http_client=http_client,
            accounts_url=accounts_url,
            timeout=timeout,
        )
        return cls(
            token_cache=token_cache,
            http_client=http_client,
            api_url=api_url,
            timeout=timeout,
        )

    async def search_tracks(self, query: str, limit: int = 10) -> dict[str, object]:
        """Search the track catalogue."""
        return await self._get("/search", {"q": query, "type": "track", "limit": limit})

    async def get_audio_features(self, track_id: str) -> dict[str, object]:
        """Fetch tempo/key/mode for one track."""
        return await self._get(f"/audio-features/{track_id}")

    async def get_audio_features_batch(
        self, track_ids: list[str]
    ) -> dict[str, object]:
        """Fetch audio features for up to 100 tracks in one call."""
        return await self._get("/audio-features", {"ids": ",".join(track_ids)})

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _get(
        self, path: str, params: dict[str, object] | None = None
    ) -> dict[str, object]:
        token = await self.token_cache.get_token()
        if not token:
            raise UpstreamUnavailableError("Failed to get Spotify access token")
        response = await self.http_client.get(
            f"{self.api_url}{path}",
            params=params,
            headers={"Authorization": f"Bearer {token}"},
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()
