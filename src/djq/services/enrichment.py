"""Song metadata enrichment strategies.

Two strategies share the :class:`Enricher` interface. ``SpotifyEnricher`` is a
deterministic catalogue lookup that either matches a track or returns the
input unchanged. ``LlmEnricher`` asks a language model for a JSON object and
parses its reply leniently. Neither raises: every failure degrades to a
pass-through result so a submission is never blocked by a provider.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from djq.domain.enrichment import AudioFeatures, EnrichmentResult
from djq.domain.keys import UNDETECTED, to_camelot, to_regular_key

if TYPE_CHECKING:
    from djq.adapters.spotify_client import SpotifyClient

_logger = logging.getLogger(__name__)

_CAMELOT_PATTERN = re.compile(r"^(1[0-2]|[1-9])[AB]$")


class Enricher(Protocol):
    """Interface shared by the enrichment strategies."""

    async def lookup(self, song_name: str, artist: str) -> EnrichmentResult:
        """Return corrected metadata, or a pass-through result."""

    async def features(self, track_id: str) -> AudioFeatures | None:
        """Return tempo/key for a known track id, if available."""


class TextCompletionClient(Protocol):
    """Interface for free-text LLM completions."""

    async def complete(self, *, model: str, prompt: str, store: bool) -> str:
        """Return raw model output for a prompt."""


def features_from_payload(payload: dict[str, object]) -> AudioFeatures | None:
    """Convert a Spotify audio-features object into domain values."""
    if not payload:
        return None
    tempo = payload.get("tempo")
    key = payload.get("key")
    mode = payload.get("mode")
    pitch_class = key if isinstance(key, int) else UNDETECTED
    mode_value = mode if isinstance(mode, int) else UNDETECTED
    return AudioFeatures(
        bpm=round(tempo) if isinstance(tempo, int | float) and tempo else None,
        key_camelot=to_camelot(pitch_class, mode_value),
        key_regular=to_regular_key(pitch_class, mode_value),
    )


@dataclass
class SpotifyEnricher(Enricher):
    """Catalogue lookup against the Spotify Web API."""

    client: "SpotifyClient"

    async def lookup(self, song_name: str, artist: str) -> EnrichmentResult:
        """Search for the best match and fetch its audio features."""
        try:
            payload = await self.client.search_tracks(
                f"track:{song_name} artist:{artist}", limit=1
            )
            items = payload.get("tracks", {}).get("items", [])
            if not items:
                _logger.info("No Spotify match found for %s by %s", song_name, artist)
                return EnrichmentResult.passthrough(song_name, artist)
            track = items[0]
            track_id = str(track["id"])
            corrected_name = str(track["name"])
            corrected_artist = str(track["artists"][0]["name"])
        except Exception as exc:
            _logger.warning("Error verifying with Spotify: %s", exc)
            return EnrichmentResult.passthrough(song_name, artist)

        features = await self.features(track_id)
        return EnrichmentResult(
            corrected_song_name=corrected_name,
            corrected_artist=corrected_artist,
            bpm=features.bpm if features else None,
            key_camelot=features.key_camelot if features else None,
            key_regular=features.key_regular if features else None,
            matched=True,
        )

    async def features(self, track_id: str) -> AudioFeatures | None:
        """Fetch audio features for one track."""
        try:
            payload = await self.client.get_audio_features(track_id)
            return features_from_payload(payload)
        except Exception as exc:
            _logger.warning(
                "Error getting Spotify audio features for %s: %s", track_id, exc
            )
            return None


class LlmSongMetadata(BaseModel):
    """Shape the model is asked to return."""

    model_config = ConfigDict(populate_by_name=True)

    song_name: str = Field(alias="songName", min_length=1)
    artist: str = Field(min_length=1)
    bpm: float | None = Field(default=None, gt=0, le=400)
    camelot_key: str | None = Field(default=None, alias="camelotKey")
    regular_key: str | None = Field(default=None, alias="regularKey")


_PROMPT_TEMPLATE = (
    "You correct song requests typed by party guests.\n"
    "Song: {song}\nArtist: {artist}\n"
    "Fix spelling and capitalization of the title and artist, and give the "
    "track's tempo and key if you know them. Respond with only a JSON object, "
    'no prose: {{"songName": string, "artist": string, "bpm": integer or null, '
    '"camelotKey": string like "8A" or null, "regularKey": string like '
    '"C major" or null}}'
)


@dataclass
class LlmEnricher(Enricher):
    """Generative lookup that asks a model for strict JSON."""

    client: TextCompletionClient
    model: str
    store: bool = False

    async def lookup(self, song_name: str, artist: str) -> EnrichmentResult:
        """Ask the model for corrected metadata and parse it leniently."""
        prompt = _PROMPT_TEMPLATE.format(song=song_name, artist=artist)
        try:
            text = await self.client.complete(
                model=self.model, prompt=prompt, store=self.store
            )
        except Exception as exc:
            _logger.warning("LLM enrichment request failed: %s", exc)
            return EnrichmentResult.passthrough(song_name, artist)
        metadata = parse_llm_metadata(text)
        if metadata is None:
            _logger.warning("LLM enrichment returned unparseable output")
            return EnrichmentResult.passthrough(song_name, artist)
        camelot = (metadata.camelot_key or "").strip().upper()
        return EnrichmentResult(
            corrected_song_name=metadata.song_name.strip(),
            corrected_artist=metadata.artist.strip(),
            bpm=round(metadata.bpm) if metadata.bpm is not None else None,
            key_camelot=camelot if _CAMELOT_PATTERN.match(camelot) else None,
            key_regular=(metadata.regular_key or "").strip() or None,
            matched=True,
        )

    async def features(self, track_id: str) -> AudioFeatures | None:
        """The model has no catalogue ids to resolve."""
        return None


def parse_llm_metadata(text: str) -> LlmSongMetadata | None:
    """Decode the first JSON object in ``text`` into metadata."""
    candidate = extract_json_object(text)
    if candidate is None:
        return None
    try:
        return LlmSongMetadata.model_validate(json.loads(candidate))
    except (ValueError, ValidationError):
        return None


def extract_json_object(text: str) -> str | None:
    """Return the first balanced ``{...}`` region of ``text``.

    Braces inside JSON string literals are ignored, so titles such as
    ``"{Untitled}"`` do not end the object early.
    """
    start = text.find("{")
    if start < 0:
        return None
    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start : index + 1]
    return None
