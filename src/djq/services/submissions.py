"""Song submission storage and post-write enrichment."""

import logging
from dataclasses import dataclass
from typing import Protocol

from djq.domain.enrichment import EnrichmentResult
from djq.domain.errors import ValidationError
from djq.domain.submissions import SubmissionRecord
from djq.services.enrichment import Enricher
from djq.services.sessions import SessionService

_logger = logging.getLogger(__name__)


class SubmissionRepository(Protocol):
    """Persistence interface for submissions."""

    def create_submission(  # noqa: PLR0913
        self,
        session_id: str,
        song_name: str,
        artist: str,
        user_name: str | None,
        enrichment: EnrichmentResult | None,
        enrichment_attempted: bool,
    ) -> SubmissionRecord:
        """Insert a submission keeping the original song/artist snapshot."""

    def list_by_session(self, session_id: str) -> list[SubmissionRecord]:
        """Return a session's submissions, newest first."""

    def delete_by_session(self, session_id: str) -> int:
        """Delete a session's submissions and return how many were removed."""

    def apply_enrichment(self, submission_id: int, result: EnrichmentResult) -> None:
        """Overwrite the current song/artist and key columns of one row."""


@dataclass
class SubmissionService:
    """Session-scoped submission operations.

    Submissions are written with the values the attendee typed. When an
    enricher is configured the caller schedules :meth:`enrich_in_background`
    after responding, so BPM and key show up on a later fetch.
    """

    repository: SubmissionRepository
    session_service: SessionService
    enricher: Enricher | None = None

    def submit(  # noqa: PLR0913
        self,
        session_id: str | None,
        song_name: str | None,
        artist: str | None,
        user_name: str | None = None,
        enrichment: EnrichmentResult | None = None,
    ) -> SubmissionRecord:
        """Validate and persist a song request."""
        song = (song_name or "").strip()
        performer = (artist or "").strip()
        if not song or not performer:
            raise ValidationError("Song name and artist are required")
        session = self.session_service.get(session_id)
        record = self.repository.create_submission(
            session_id=session.id,
            song_name=song,
            artist=performer,
            user_name=(user_name or "").strip() or None,
            enrichment=enrichment,
            enrichment_attempted=enrichment is not None or self.enricher is not None,
        )
        _logger.info(
            "Submission saved: id=%s session=%s bpm=%s key=%s",
            record.id,
            session.id,
            record.bpm,
            record.key_camelot,
        )
        return record

    def list_by_session(self, session_id: str | None) -> list[SubmissionRecord]:
        """Return the submissions of an existing session."""
        session = self.session_service.get(session_id)
        return self.repository.list_by_session(session.id)

    def clear_by_session(self, session_id: str | None) -> int:
        """Delete every submission of an existing session."""
        session = self.session_service.get(session_id)
        deleted = self.repository.delete_by_session(session.id)
        _logger.info("Cleared %s submissions from session %s", deleted, session.id)
        return deleted

    async def enrich(
        self,
        submission_id: int,
        song_name: str,
        artist: str,
        spotify_id: str | None = None,
    ) -> EnrichmentResult | None:
        """Look up metadata for a stored submission and update it on a match."""
        if self.enricher is None:
            return None
        features = await self.enricher.features(spotify_id) if spotify_id else None
        if features is not None:
            result = EnrichmentResult.from_features(song_name, artist, features)
        else:
            result = await self.enricher.lookup(song_name, artist)
        if not result.matched:
            _logger.info("No enrichment match for submission %s", submission_id)
            return result
        self.repository.apply_enrichment(submission_id, result)
        return result

    async def enrich_in_background(
        self,
        submission_id: int,
        song_name: str,
        artist: str,
        spotify_id: str | None = None,
    ) -> None:
        """Run :meth:`enrich` with failures logged instead of raised."""
        try:
            await self.enrich(submission_id, song_name, artist, spotify_id)
        except Exception:
            _logger.exception(
                "Background enrichment failed", extra={"submission_id": submission_id}
            )
