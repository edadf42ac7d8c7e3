"""Domain models for song submissions."""

from dataclasses import dataclass
from datetime import UTC, datetime


@dataclass(frozen=True)
class SubmissionRecord:
    """Represents a persisted song request."""

    id: int
    session_id: str
    song_name: str
    artist: str
    user_name: str | None
    original_song_name: str | None
    original_artist: str | None
    bpm: int | None
    key_camelot: str | None
    key_regular: str | None
    enrichment_attempted: bool
    created_at: datetime | None

    def to_row(self) -> dict[str, object]:
        """Return the public row shape with a UTC ISO-8601 timestamp."""
        return {
            "id": self.id,
            "session_id": self.session_id,
            "song_name": self.song_name,
            "artist": self.artist,
            "user_name": self.user_name,
            "original_song_name": self.original_song_name,
            "original_artist": self.original_artist,
            "bpm": self.bpm,
            "key_camelot": self.key_camelot,
            "key_regular": self.key_regular,
            "enrichment_attempted": self.enrichment_attempted,
            "created_at": format_timestamp(self.created_at),
        }


def parse_timestamp(value: object) -> datetime | None:
    """Parse a storage timestamp; naive values are taken to be UTC."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        parsed = datetime.fromisoformat(value.strip())
    else:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def format_timestamp(value: datetime | None) -> str | None:
    """Format as ``YYYY-MM-DDTHH:MM:SS.sssZ``."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    utc_value = value.astimezone(UTC)
    return utc_value.isoformat(timespec="milliseconds").replace("+00:00", "Z")
