"""File based request/reply transport between the orchestrator and an agent.

The orchestrator names a request file and a pre-created reply file in the
environment. This module is the only place that touches either of them.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Type, TypeVar

from pydantic import BaseModel, ValidationError

from common.config import REPLY_ENV, REQUEST_ENV, Settings

from .errors import DecodeError, MissingFile, ProtocolMismatch, WriteError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def file_exists(path: str) -> bool:
    return bool(path) and os.path.exists(path)


def encode(value: Any) -> str:
    """Serialize a reply document as compact JSON."""
    if isinstance(value, BaseModel):
        return value.model_dump_json(by_alias=True)
    return json.dumps(value, separators=(",", ":"))


@dataclass(frozen=True)
class Transport:
    """Reads the request file and writes the reply file named in ``settings``."""

    settings: Settings

    def read_request(self) -> bytes:
        """Return the raw, undecoded request file content."""
        path = self.settings.request_path or ""
        if not file_exists(path):
            raise MissingFile(f"request file '{path}' from {REQUEST_ENV} does not exist")

        try:
            with open(path, "rb") as stream:
                return stream.read()
        except OSError as exc:
            raise MissingFile(f"could not load request: {exc}") from exc

    def load_request(self, expected_protocol: str, model: Type[M]) -> M:
        """Load and validate the request file into ``model``."""
        if self.settings.protocol != expected_protocol:
            raise ProtocolMismatch(f"unexpected protocol '{self.settings.protocol}'")

        raw = self.read_request()
        try:
            request = model.model_validate_json(raw)
        except ValidationError as exc:
            raise DecodeError(f"could not parse request: {exc}") from exc

        logger.debug("Loaded %s request from %s", model.__name__, self.settings.request_path)
        return request

    def publish_reply(self, value: Any) -> None:
        """Overwrite the pre-existing reply file with ``value`` encoded as JSON.

        The file is truncated and rewritten in place so the mode and ownership
        set up by the orchestrator are kept.
        """
        path = self.settings.reply_path or ""
        if not file_exists(path):
            raise MissingFile(f"reply file '{path}' from {REPLY_ENV} does not exist")

        try:
            payload = encode(value)
        except (TypeError, ValueError) as exc:
            raise WriteError(f"could not JSON encode reply data: {exc}") from exc

        try:
            with open(path, "w", encoding="utf-8") as stream:
                stream.write(payload)
        except OSError as exc:
            raise WriteError(f"failed writing to reply file {path}: {exc}") from exc

        logger.debug("Published reply to %s", path)
