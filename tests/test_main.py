"""Tests for the uvicorn entrypoint."""

import pytest

from djq import main as main_module
from djq.config import Settings


def test_main_runs_uvicorn_on_configured_port(
    monkeypatch: pytest.MonkeyPatch, settings: Settings
) -> None:
    calls: list[tuple[str, dict[str, object]]] = []
    monkeypatch.setattr(
        main_module.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs))
    )

    main_module.main(settings.model_copy(update={"port": 8080}))

    assert calls == [
        ("djq.api.asgi:app", {"host": "0.0.0.0", "port": 8080, "log_level": "info"})
    ]
