"""Session (tenant) management."""

import logging
import secrets
import string
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from djq.domain.errors import NotFoundError, SessionIdExhaustedError, ValidationError
from djq.domain.sessions import (
    DEFAULT_BACKGROUND,
    DEFAULT_SUBTITLE,
    DisplaySettings,
    SessionRecord,
)

SESSION_ID_ALPHABET = string.ascii_uppercase + string.digits
SESSION_ID_LENGTH = 4
MAX_ID_ATTEMPTS = 100

_logger = logging.getLogger(__name__)


class SessionRepository(Protocol):
    """Persistence interface for sessions."""

    def create_session(  # noqa: PLR0913
        self,
        session_id: str,
        name: str,
        welcome_message: str | None,
        subtitle_message: str | None,
        background: str | None,
    ) -> SessionRecord:
        """Insert a session row and return it."""

    def get_session(self, session_id: str) -> SessionRecord | None:
        """Return a session by id, if present."""

    def list_active_sessions(self) -> list[SessionRecord]:
        """Return active sessions, newest first."""

    def update_settings(
        self,
        session_id: str,
        welcome_message: str | None,
        subtitle_message: str | None,
        background: str | None,
    ) -> None:
        """Overwrite the display settings columns of a session."""


def generate_session_code() -> str:
    """Return a random 4-character code drawn from A-Z and 0-9."""
    return "".join(
        secrets.choice(SESSION_ID_ALPHABET) for _ in range(SESSION_ID_LENGTH)
    )


@dataclass
class SessionService:
    """Creates sessions and resolves their display settings."""

    repository: SessionRepository
    code_generator: Callable[[], str] = field(default=generate_session_code)
    max_id_attempts: int = MAX_ID_ATTEMPTS

    def create(self, name: str | None) -> SessionRecord:
        """Create a session with a fresh code and default settings."""
        session_name = (name or "").strip()
        if not session_name:
            raise ValidationError("Session name is required")
        session_id = self._generate_unique_id()
        session = self.repository.create_session(
            session_id=session_id,
            name=session_name,
            welcome_message=session_name,
            subtitle_message=DEFAULT_SUBTITLE,
            background=DEFAULT_BACKGROUND,
        )
        _logger.info("Created session %s (%s)", session.id, session.name)
        return session

    def get(self, session_id: str | None) -> SessionRecord:
        """Return a session or raise NotFoundError."""
        if not session_id:
            raise ValidationError("Session ID is required")
        session = self.repository.get_session(session_id)
        if session is None:
            raise NotFoundError("Session not found")
        return session

    def list_active(self) -> list[SessionRecord]:
        """Return active sessions ordered newest first."""
        return self.repository.list_active_sessions()

    def update_settings(
        self,
        session_id: str | None,
        welcome_message: str | None = None,
        subtitle_message: str | None = None,
        background: str | None = None,
    ) -> None:
        """Store display settings; empty values are stored as null."""
        session = self.get(session_id)
        self.repository.update_settings(
            session.id,
            welcome_message=welcome_message or None,
            subtitle_message=subtitle_message or None,
            background=background or None,
        )
        _logger.info("Settings updated for session %s", session.id)

    def get_settings(self, session_id: str | None) -> DisplaySettings:
        """Return resolved settings, or global defaults when no id is given."""
        if not session_id:
            return DisplaySettings.defaults()
        return DisplaySettings.resolve(self.get(session_id))

    def _generate_unique_id(self) -> str:
        for _ in range(self.max_id_attempts):
            candidate = self.code_generator()
            if self.repository.get_session(candidate) is None:
                return candidate
        _logger.error(
            "Failed to generate unique session ID after %s attempts",
            self.max_id_attempts,
        )
        raise SessionIdExhaustedError("Failed to generate unique session ID")
