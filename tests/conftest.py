"""Pytest configuration for choria_external tests."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Callable

import pytest


def pytest_configure() -> None:
    """Ensure the src directory is importable during tests."""
    root = Path(__file__).resolve().parents[1]
    src_path = root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


ENV_KEYS = (
    "CHORIA_EXTERNAL_PROTOCOL",
    "CHORIA_EXTERNAL_REQUEST",
    "CHORIA_EXTERNAL_REPLY",
    "CHORIA_EXTERNAL_CONFIG",
    "CHORIA_EXTERNAL_FACTS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def invocation(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Callable[..., Path]:
    """Prepare an orchestrator invocation and return the reply file path.

    ``request`` may be a dict (written as JSON), a raw string, or None to
    leave the request file out entirely.
    """

    def prepare(protocol: str, request: Any = None, *, create_reply: bool = True) -> Path:
        request_path = tmp_path / "request.json"
        reply_path = tmp_path / "reply.json"

        if isinstance(request, str):
            request_path.write_text(request, encoding="utf-8")
        elif request is not None:
            request_path.write_text(json.dumps(request), encoding="utf-8")

        if create_reply:
            reply_path.write_text("", encoding="utf-8")

        monkeypatch.setenv("CHORIA_EXTERNAL_PROTOCOL", protocol)
        monkeypatch.setenv("CHORIA_EXTERNAL_REQUEST", str(request_path))
        monkeypatch.setenv("CHORIA_EXTERNAL_REPLY", str(reply_path))
        return reply_path

    return prepare
