"""Supabase-backed session repository."""

from dataclasses import dataclass

from supabase import Client

from djq.domain.errors import PersistenceError
from djq.domain.sessions import SessionRecord
from djq.domain.submissions import parse_timestamp
from djq.services.sessions import SessionRepository

_COLUMNS = (
    "id, name, created_at, is_active, welcome_message, subtitle_message, background"
)


@dataclass
class SupabaseSessionRepository(SessionRepository):
    """Supabase implementation for request sessions."""

    client: Client

    def create_session(  # noqa: PLR0913
        self,
        session_id: str,
        name: str,
        welcome_message: str | None,
        subtitle_message: str | None,
        background: str | None,
    ) -> SessionRecord:
        """Insert a session row and return it."""
        response = (
            self.client.table("sessions")
            .insert(
                {
                    "id": session_id,
                    "name": name,
                    "welcome_message": welcome_message,
                    "subtitle_message": subtitle_message,
                    "background": background,
                }
            )
            .execute()
        )
        if not response.data:
            raise PersistenceError("Failed to create session")
        return _parse_session(response.data[0])

    def get_session(self, session_id: str) -> SessionRecord | None:
        """Return a session by id, if present."""
        response = (
            self.client.table("sessions")
            .select(_COLUMNS)
            .eq("id", session_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_session(response.data[0])

    def list_active_sessions(self) -> list[SessionRecord]:
        """Return active sessions ordered newest first."""
        response = (
            self.client.table("sessions")
            .select(_COLUMNS)
            .eq("is_active", True)
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_session(row) for row in response.data or []]

    def update_settings(
        self,
        session_id: str,
        welcome_message: str | None,
        subtitle_message: str | None,
        background: str | None,
    ) -> None:
        """Overwrite the display settings of a session."""
        self.client.table("sessions").update(
            {
                "welcome_message": welcome_message,
                "subtitle_message": subtitle_message,
                "background": background,
            }
        ).eq("id", session_id).execute()


def _parse_session(row: dict[str, object]) -> SessionRecord:
    return SessionRecord(
        id=str(row["id"]),
        name=str(row["name"]),
        created_at=parse_timestamp(row.get("created_at")),
        is_active=bool(row.get("is_active", True)),
        welcome_message=row.get("welcome_message"),
        subtitle_message=row.get("subtitle_message"),
        background=row.get("background"),
    )
