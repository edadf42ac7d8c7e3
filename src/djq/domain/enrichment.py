"""Models for third-party song metadata."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AudioFeatures:
    """Tempo and key data for a single track."""

    bpm: int | None
    key_camelot: str | None
    key_regular: str | None


@dataclass(frozen=True)
class EnrichmentResult:
    """Outcome of a metadata lookup for a submitted song."""

    corrected_song_name: str
    corrected_artist: str
    bpm: int | None = None
    key_camelot: str | None = None
    key_regular: str | None = None
    matched: bool = False

    @classmethod
    def passthrough(cls, song_name: str, artist: str) -> "EnrichmentResult":
        """Return the unmatched result that leaves the input untouched."""
        return cls(corrected_song_name=song_name, corrected_artist=artist)

    @classmethod
    def from_features(
        cls, song_name: str, artist: str, features: AudioFeatures | None
    ) -> "EnrichmentResult":
        """Build a result for a known track where only features were fetched."""
        if features is None:
            return cls.passthrough(song_name, artist)
        return cls(
            corrected_song_name=song_name,
            corrected_artist=artist,
            bpm=features.bpm,
            key_camelot=features.key_camelot,
            key_regular=features.key_regular,
            matched=True,
        )


@dataclass(frozen=True)
class TrackSuggestion:
    """Autocomplete entry offered while typing a request."""

    song_name: str
    artist: str
    album: str | None
    spotify_id: str
    bpm: int | None
    key: str | None
