"""ASGI entrypoint for the song request API."""

from djq.api.app import create_app
from djq.containers import build_container

app = create_app(build_container())
