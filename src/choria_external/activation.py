"""Activation checks: should this agent be active on the current node."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Mapping

from .errors import ExternalAgentError, FatalError
from .protocol import ACTIVATION_REQUEST_PROTOCOL, ActivationCheck, ActivationReply
from .transport import Transport

logger = logging.getLogger(__name__)

ActivationPredicate = Callable[[str, Mapping[str, str]], bool]


def always_activate(agent: str, config: Mapping[str, str]) -> bool:
    """Activator used when the agent did not register one."""
    return True


@dataclass
class ActivationHandler:
    """Answers a single activation check.

    Every failure here is fatal: without a decodable request there is no
    reply the orchestrator would understand.
    """

    transport: Transport
    predicate: ActivationPredicate = always_activate
    config: Mapping[str, str] = field(default_factory=dict)

    def handle_request(self) -> ActivationReply:
        try:
            check = self.transport.load_request(ACTIVATION_REQUEST_PROTOCOL, ActivationCheck)
        except ExternalAgentError as exc:
            raise FatalError(f"loading request failed: {exc}") from exc

        try:
            should_activate = self.predicate(check.agent, self.config)
        except Exception as exc:
            raise FatalError(f"activation handler failed: {exc}") from exc

        reply = ActivationReply(activate=bool(should_activate))
        logger.debug("Activation check for %s: %s", check.agent, reply.activate)

        try:
            self.transport.publish_reply(reply)
        except ExternalAgentError as exc:
            raise FatalError(f"publishing activation reply failed: {exc}") from exc

        return reply
