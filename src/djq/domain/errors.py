"""Error taxonomy shared by services and the HTTP layer."""


class DjqError(Exception):
    """Base class for errors with a user-facing message."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(DjqError):
    """A required field is missing or empty."""

    status_code = 400


class NotFoundError(DjqError):
    """The referenced session does not exist."""

    status_code = 404


class SessionIdExhaustedError(DjqError):
    """No free session code was found within the retry bound."""

    status_code = 500


class UpstreamUnavailableError(DjqError):
    """A third-party provider could not be reached or refused the request."""

    status_code = 503


class PersistenceError(DjqError):
    """The storage engine failed to complete a write."""

    status_code = 500
