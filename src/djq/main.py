"""Command-line entrypoint that serves the API with uvicorn."""

import uvicorn

from djq.config import Settings


def main(settings: Settings | None = None) -> None:
    """Run the ASGI app on the configured port."""
    resolved_settings = settings or Settings()
    uvicorn.run(
        "djq.api.asgi:app",
        host="0.0.0.0",  # noqa: S104
        port=resolved_settings.port,
        log_level=resolved_settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
