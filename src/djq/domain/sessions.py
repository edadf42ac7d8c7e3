"""Domain models for request sessions."""

from dataclasses import dataclass
from datetime import datetime

DEFAULT_SUBTITLE = "Submit your song below"
DEFAULT_BACKGROUND = "#000"


@dataclass(frozen=True)
class SessionRecord:
    """Represents a persisted session (tenant)."""

    id: str
    name: str
    created_at: datetime | None
    is_active: bool
    welcome_message: str | None
    subtitle_message: str | None
    background: str | None


@dataclass(frozen=True)
class DisplaySettings:
    """Display settings with defaults already resolved."""

    welcome_message: str | None
    subtitle_message: str
    background: str

    @classmethod
    def defaults(cls) -> "DisplaySettings":
        """Settings shown when no session is selected."""
        return cls(
            welcome_message=None,
            subtitle_message=DEFAULT_SUBTITLE,
            background=DEFAULT_BACKGROUND,
        )

    @classmethod
    def resolve(cls, session: SessionRecord) -> "DisplaySettings":
        """Fill blank stored values with the session name and fixed defaults."""
        return cls(
            welcome_message=_non_blank(session.welcome_message) or session.name,
            subtitle_message=_non_blank(session.subtitle_message) or DEFAULT_SUBTITLE,
            background=_non_blank(session.background) or DEFAULT_BACKGROUND,
        )


def _non_blank(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value
