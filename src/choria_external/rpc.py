"""RPC action dispatch.

Failures that have a wire representation are published as ``Aborted``
replies and the invocation ends normally. Only a reply that cannot be written
is fatal.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping

from pydantic import ValidationError

from common.config import REQUEST_ENV

from .errors import ExternalAgentError, FatalError
from .protocol import Reply, Request, StatusCode
from .registry import ActionRegistry
from .transport import Transport

logger = logging.getLogger(__name__)


@dataclass
class RPCHandler:
    """Runs one RPC request against the registered actions."""

    transport: Transport
    actions: ActionRegistry
    config: Mapping[str, str] = field(default_factory=dict)

    def fail(self, message: str) -> Reply:
        """Publish an aborted reply carrying ``message``."""
        logger.warning("Aborting request: %s", message)
        reply = Reply(statuscode=StatusCode.ABORTED, statusmsg=message, data={})
        self.publish(reply, "could not write reply")
        return reply

    def publish(self, reply: Reply, context: str) -> None:
        try:
            self.transport.publish_reply(reply)
        except ExternalAgentError as exc:
            raise FatalError(f"{context}: {exc}") from exc

    def handle_request(self) -> Reply:
        try:
            raw = self.transport.read_request()
        except ExternalAgentError:
            return self.fail(f"could not read request from {REQUEST_ENV} file")

        try:
            request = Request.model_validate_json(raw)
        except ValidationError:
            return self.fail("could not parse request")

        if not request.action:
            return self.fail("invalid action")

        try:
            action = self.actions.get(request.action)
        except KeyError:
            return self.fail(f"unknown action {request.action}")

        logger.debug("Dispatching %s#%s (%s)", request.agent, request.action, request.request_id)

        reply = Reply()
        try:
            action.handle(request, reply, self.config)
        except Exception as exc:
            logger.exception("Action %s raised", request.action)
            return self.fail(f"action {request.action} failed: {exc}")

        self.publish(reply, "request failed")
        return reply
