"""Track autocomplete backed by Spotify search."""

import logging
from dataclasses import dataclass

from djq.adapters.spotify_client import SpotifyClient
from djq.domain.enrichment import AudioFeatures, TrackSuggestion
from djq.domain.errors import UpstreamUnavailableError
from djq.services.enrichment import features_from_payload

SEARCH_PAGE_SIZE = 10

_logger = logging.getLogger(__name__)


@dataclass
class SuggestionService:
    """Builds request suggestions with BPM and Camelot key when available."""

    client: SpotifyClient | None
    page_size: int = SEARCH_PAGE_SIZE

    async def suggest(self, query: str | None) -> list[TrackSuggestion]:
        """Return suggestions for a partial song title."""
        search_query = (query or "").strip()
        if not search_query:
            return []
        if self.client is None:
            raise UpstreamUnavailableError("Spotify is not configured")
        try:
            payload = await self.client.search_tracks(
                search_query, limit=self.page_size
            )
            tracks = [
                track
                for track in (payload.get("tracks") or {}).get("items") or []
                if track and track.get("id")
            ]
        except UpstreamUnavailableError:
            raise
        except Exception as exc:
            _logger.warning("Error fetching Spotify suggestions: %s", exc)
            raise UpstreamUnavailableError("Failed to fetch suggestions") from exc

        features = await self._batch_features([str(track["id"]) for track in tracks])
        suggestions = []
        for track in tracks:
            track_features = features.get(str(track["id"]))
            album = track.get("album") or {}
            suggestions.append(
                TrackSuggestion(
                    song_name=str(track.get("name", "")),
                    artist=", ".join(
                        str(artist.get("name", ""))
                        for artist in track.get("artists") or []
                    ),
                    album=album.get("name"),
                    spotify_id=str(track["id"]),
                    bpm=track_features.bpm if track_features else None,
                    key=track_features.key_camelot if track_features else None,
                )
            )
        return suggestions

    async def _batch_features(self, track_ids: list[str]) -> dict[str, AudioFeatures]:
        if not track_ids or self.client is None:
            return {}
        try:
            payload = await self.client.get_audio_features_batch(track_ids)
            rows = list(payload.get("audio_features") or [])
        except Exception as exc:
            _logger.warning("Error fetching audio features for suggestions: %s", exc)
            return {}
        features: dict[str, AudioFeatures] = {}
        for track_id, raw in zip(track_ids, rows, strict=False):
            if not isinstance(raw, dict) or not raw.get("tempo"):
                continue
            converted = features_from_payload(raw)
            if converted is not None:
                features[track_id] = converted
        return features
