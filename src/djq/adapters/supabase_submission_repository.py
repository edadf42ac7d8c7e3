"""Supabase-backed submission repository."""

from dataclasses import dataclass

from supabase import Client

from djq.domain.enrichment import EnrichmentResult
from djq.domain.errors import PersistenceError
from djq.domain.submissions import SubmissionRecord, parse_timestamp
from djq.services.submissions import SubmissionRepository

_COLUMNS = (
    "id, session_id, song_name, artist, user_name, original_song_name, "
    "original_artist, bpm, key_camelot, key_regular, enrichment_attempted, "
    "created_at"
)


@dataclass
class SupabaseSubmissionRepository(SubmissionRepository):
    """Supabase implementation for song submissions."""

    client: Client

    def create_submission(  # noqa: PLR0913
        self,
        session_id: str,
        song_name: str,
        artist: str,
        user_name: str | None,
        enrichment: EnrichmentResult | None,
        enrichment_attempted: bool,
    ) -> SubmissionRecord:
        """Insert a submission with its original snapshot."""
        payload: dict[str, object] = {
            "session_id": session_id,
            "song_name": song_name,
            "artist": artist,
            "user_name": user_name,
            "original_song_name": song_name,
            "original_artist": artist,
            "bpm": None,
            "key_camelot": None,
            "key_regular": None,
            "enrichment_attempted": enrichment_attempted,
        }
        if enrichment is not None and enrichment.matched:
            payload.update(_enrichment_columns(enrichment))
        response = self.client.table("submissions").insert(payload).execute()
        if not response.data:
            raise PersistenceError("Failed to save submission")
        return _parse_submission(response.data[0])

    def list_by_session(self, session_id: str) -> list[SubmissionRecord]:
        """Return a session's submissions ordered newest first."""
        response = (
            self.client.table("submissions")
            .select(_COLUMNS)
            .eq("session_id", session_id)
            .order("created_at", desc=True)
            .order("id", desc=True)
            .execute()
        )
        return [_parse_submission(row) for row in response.data or []]

    def delete_by_session(self, session_id: str) -> int:
        """Delete all submissions for a session."""
        response = (
            self.client.table("submissions")
            .delete()
            .eq("session_id", session_id)
            .execute()
        )
        return len(response.data or [])

    def apply_enrichment(self, submission_id: int, result: EnrichmentResult) -> None:
        """Write looked-up metadata over the current columns of a row."""
        self.client.table("submissions").update(_enrichment_columns(result)).eq(
            "id", submission_id
        ).execute()


def _enrichment_columns(result: EnrichmentResult) -> dict[str, object]:
    return {
        "song_name": result.corrected_song_name,
        "artist": result.corrected_artist,
        "bpm": result.bpm,
        "key_camelot": result.key_camelot,
        "key_regular": result.key_regular,
    }


def _parse_submission(row: dict[str, object]) -> SubmissionRecord:
    bpm = row.get("bpm")
    return SubmissionRecord(
        id=int(row["id"]),
        session_id=str(row["session_id"]),
        song_name=str(row["song_name"]),
        artist=str(row["artist"]),
        user_name=row.get("user_name"),
        original_song_name=row.get("original_song_name"),
        original_artist=row.get("original_artist"),
        bpm=int(bpm) if bpm is not None else None,
        key_camelot=row.get("key_camelot"),
        key_regular=row.get("key_regular"),
        enrichment_attempted=bool(row.get("enrichment_attempted", False)),
        created_at=parse_timestamp(row.get("created_at")),
    )
