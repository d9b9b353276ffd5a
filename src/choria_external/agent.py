"""The agent facade user code builds on.

A typical agent module looks like::

    agent = Agent("weather")

    @agent.action("forecast")
    def forecast(request, reply, config):
        reply.data = {"sky": "clear"}

    if __name__ == "__main__":
        run(agent)
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from common.config import Settings, load_agent_config

from .activation import ActivationHandler, ActivationPredicate, always_activate
from .errors import InvalidProtocol
from .facts import load_facts
from .protocol import (
    ACTIVATION_REQUEST_PROTOCOL,
    RPC_REQUEST_PROTOCOL,
    ActivationReply,
    Reply,
)
from .registry import ActionFunc, ActionHandler, ActionRegistry
from .rpc import RPCHandler
from .transport import Transport

logger = logging.getLogger(__name__)


class Agent:
    """A named set of actions answering orchestrator invocations."""

    def __init__(
        self,
        name: str,
        settings: Settings | None = None,
        config: Mapping[str, str] | None = None,
    ) -> None:
        self.name = name
        self.settings = settings if settings is not None else Settings.from_env()
        self.config: dict[str, str] = (
            dict(config) if config is not None else load_agent_config(self.settings.config_path)
        )
        self.actions = ActionRegistry()
        self.activator: Optional[ActivationPredicate] = None

    def register_activator(self, predicate: ActivationPredicate) -> None:
        """Register the check deciding activation; without one the agent always activates."""
        self.activator = predicate

    def register_action(self, name: str, handler: ActionHandler | ActionFunc) -> ActionHandler:
        """Register a new action, raising ``DuplicateActionError`` if it exists."""
        return self.actions.register(name, handler)

    must_register_action = register_action

    def action(self, name: str) -> Callable[[ActionFunc], ActionFunc]:
        """Decorator registering a function as the handler for ``name``."""

        def decorator(func: ActionFunc) -> ActionFunc:
            self.register_action(name, func)
            return func

        return decorator

    @property
    def facts_path(self) -> str:
        return self.settings.facts_path or ""

    def facts(self) -> Any:
        """Return the node facts supplied with the invocation."""
        return load_facts(self.settings)

    def process_request(self) -> Reply | ActivationReply:
        """Route the invocation to activation or RPC handling.

        Raises ``InvalidProtocol`` for anything else and ``FatalError`` when
        the orchestrator contract itself is broken.
        """
        protocol = self.settings.protocol
        transport = Transport(self.settings)
        logger.debug("Agent %s handling protocol %r", self.name, protocol)

        if protocol == ACTIVATION_REQUEST_PROTOCOL:
            handler = ActivationHandler(
                transport=transport,
                predicate=self.activator or always_activate,
                config=self.config,
            )
            return handler.handle_request()

        if protocol == RPC_REQUEST_PROTOCOL:
            self.actions.freeze()
            return RPCHandler(transport=transport, actions=self.actions, config=self.config).handle_request()

        raise InvalidProtocol(f"Invalid protocol '{protocol}'")
