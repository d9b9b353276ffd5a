"""External discovery sources.

A discovery source receives a filter and answers with the names of the
matching nodes. It uses the same file based transport as agents but a
protocol of its own. Failures to read or decode the request, and errors
raised by the discovery function, are reported in the ``error`` field of the
response rather than terminating the process.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from pydantic import BaseModel, Field, ValidationError

from common.config import REPLY_ENV, REQUEST_ENV, Settings

from .errors import ExternalAgentError, FatalError, InvalidProtocol
from .transport import Transport

logger = logging.getLogger(__name__)

DISCOVERY_REQUEST_PROTOCOL = "io.choria.choria.discovery.v1.external_request"
DISCOVERY_REPLY_PROTOCOL = "io.choria.choria.discovery.v1.external_reply"


class FactFilter(BaseModel):
    """A single fact comparison, such as ``country == mt``."""

    fact: str = ""
    operator: str = ""
    value: str = ""


class Filter(BaseModel):
    fact: list[FactFilter] = Field(default_factory=list)
    cf_class: list[str] = Field(default_factory=list)
    agent: list[str] = Field(default_factory=list)
    identity: list[str] = Field(default_factory=list)
    compound: list[list[dict[str, str]]] = Field(default_factory=list)


class DiscoveryRequest(BaseModel):
    protocol: str = ""
    timeout: float = 0
    collective: str = ""
    filter: Filter = Field(default_factory=Filter)


class DiscoveryResponse(BaseModel):
    protocol: str = DISCOVERY_REPLY_PROTOCOL
    nodes: Optional[list[str]] = None
    error: str = ""


@dataclass(frozen=True)
class Deadline:
    """Point in time, on the monotonic clock, by which discovery must finish."""

    expires_at: float

    @classmethod
    def after(cls, seconds: float) -> "Deadline":
        return cls(time.monotonic() + seconds)

    def remaining(self) -> float:
        return max(0.0, self.expires_at - time.monotonic())

    @property
    def expired(self) -> bool:
        return time.monotonic() >= self.expires_at


DiscoverFunc = Callable[[Deadline, float, str, Filter], list[str]]


@dataclass
class Discovery:
    """Dispatches one discovery request to ``func``."""

    func: Optional[DiscoverFunc]
    settings: Settings = field(default_factory=Settings.from_env)

    def _discover(self, transport: Transport) -> DiscoveryResponse:
        if self.func is None:
            raise ExternalAgentError("no discovery implementation function specified")

        try:
            raw = transport.read_request()
        except ExternalAgentError as exc:
            raise ExternalAgentError(f"could not read request from {REQUEST_ENV} file") from exc

        try:
            request = DiscoveryRequest.model_validate_json(raw)
        except ValidationError as exc:
            raise ExternalAgentError(f"could not parse JSON request from {REQUEST_ENV} file") from exc

        deadline = Deadline.after(request.timeout)
        logger.debug("Discovering in %s with a %.1fs timeout", request.collective, request.timeout)
        nodes = self.func(deadline, request.timeout, request.collective, request.filter)
        return DiscoveryResponse(nodes=list(nodes))

    def process_request(self) -> DiscoveryResponse:
        settings = self.settings
        if settings.protocol == DISCOVERY_REQUEST_PROTOCOL:
            transport = Transport(settings)
            try:
                response = self._discover(transport)
            except Exception as exc:
                logger.warning("Discovery failed: %s", exc)
                response = DiscoveryResponse(error=str(exc))

            try:
                transport.publish_reply(response)
            except ExternalAgentError as exc:
                raise FatalError(f"could not write reply file from {REPLY_ENV}: {exc}") from exc
            return response

        if not settings.protocol or not settings.reply_path or not settings.request_path:
            raise InvalidProtocol("Invalid environment")

        raise InvalidProtocol(f"Invalid protocol '{settings.protocol}'")
