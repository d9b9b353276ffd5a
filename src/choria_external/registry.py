"""Registry for managing the actions an agent exposes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Mapping, Protocol, runtime_checkable

from .errors import DuplicateActionError, RegistryFrozenError
from .protocol import Reply, Request


@runtime_checkable
class ActionHandler(Protocol):
    """Capability implementing a single RPC action."""

    def handle(self, request: Request, reply: Reply, config: Mapping[str, str]) -> None:
        """Process ``request``, recording the outcome on ``reply``."""


ActionFunc = Callable[[Request, Reply, Mapping[str, str]], None]


@dataclass(frozen=True, slots=True)
class FunctionAction:
    """Adapter exposing a plain function as an ``ActionHandler``."""

    func: ActionFunc

    def handle(self, request: Request, reply: Reply, config: Mapping[str, str]) -> None:
        self.func(request, reply, config)


class ActionRegistry:
    """In-memory store of registered actions.

    Actions are registered during start up; once dispatch begins the
    registry is frozen and only read.
    """

    def __init__(self) -> None:
        self._actions: Dict[str, ActionHandler] = {}
        self._frozen = False

    def register(self, name: str, handler: ActionHandler | ActionFunc) -> ActionHandler:
        """Register ``handler`` under ``name``, refusing duplicates."""
        if self._frozen:
            raise RegistryFrozenError(f"cannot register action {name} after dispatch started")
        if not isinstance(name, str) or not name:
            raise ValueError("action name must be a non-empty string")
        if name in self._actions:
            raise DuplicateActionError(f"duplicate action {name}")

        if isinstance(handler, ActionHandler):
            action = handler
        elif callable(handler):
            action = FunctionAction(handler)
        else:
            raise TypeError(f"handler for action {name} is not callable")

        self._actions[name] = action
        return action

    def get(self, name: str) -> ActionHandler:
        """Retrieve an action by name, raising ``KeyError`` when missing."""
        if name not in self._actions:
            raise KeyError(f"Action '{name}' is not registered.")
        return self._actions[name]

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def keys(self) -> Iterable[str]:
        """Return a view of registered action names."""
        return self._actions.keys()

    def __contains__(self, name: object) -> bool:
        return name in self._actions

    def __len__(self) -> int:
        return len(self._actions)
