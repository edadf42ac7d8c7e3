"""Request bodies for the JSON API.

Every field is optional so that missing values reach the services and come
back as the service's own 400 response instead of a schema error.
"""

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class CreateSessionRequest(_CamelModel):
    """Body for creating a session."""

    name: str | None = None


class SubmitRequest(_CamelModel):
    """Body for submitting a song request."""

    song_name: str | None = Field(default=None, alias="songName")
    artist: str | None = None
    user_name: str | None = Field(default=None, alias="userName")
    session_id: str | None = Field(default=None, alias="sessionId")
    spotify_id: str | None = Field(default=None, alias="spotifyId")


class ClearRequest(_CamelModel):
    """Body for clearing a session's queue."""

    session_id: str | None = Field(default=None, alias="sessionId")


class UpdateSettingsRequest(_CamelModel):
    """Body for updating a session's display settings."""

    session_id: str | None = Field(default=None, alias="sessionId")
    welcome_message: str | None = Field(default=None, alias="welcomeMessage")
    subtitle_message: str | None = Field(default=None, alias="subtitleMessage")
    background: str | None = None
