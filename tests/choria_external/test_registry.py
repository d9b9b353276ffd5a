"""Unit tests for the action registry."""

import pytest

from choria_external.errors import DuplicateActionError, RegistryFrozenError
from choria_external.protocol import Reply, Request
from choria_external.registry import ActionHandler, ActionRegistry, FunctionAction


def noop(request, reply, config) -> None:
    reply.data = "noop"


class StatusAction:
    def handle(self, request, reply, config) -> None:
        reply.data = {"config": dict(config)}


def test_register_function_wraps_it() -> None:
    registry = ActionRegistry()

    action = registry.register("ping", noop)

    assert isinstance(action, FunctionAction)
    assert isinstance(action, ActionHandler)
    assert "ping" in registry
    assert list(registry.keys()) == ["ping"]

    reply = Reply()
    registry.get("ping").handle(Request(action="ping"), reply, {})
    assert reply.data == "noop"


def test_register_handler_object_is_kept() -> None:
    registry = ActionRegistry()
    handler = StatusAction()

    assert registry.register("status", handler) is handler

    reply = Reply()
    registry.get("status").handle(Request(), reply, {"a": "b"})
    assert reply.data == {"config": {"a": "b"}}


def test_duplicate_registration_fails() -> None:
    registry = ActionRegistry()
    registry.register("ping", noop)

    with pytest.raises(DuplicateActionError, match="duplicate action ping"):
        registry.register("ping", StatusAction())

    assert len(registry) == 1


@pytest.mark.parametrize("name", ["", None])
def test_invalid_names_are_rejected(name) -> None:
    with pytest.raises(ValueError):
        ActionRegistry().register(name, noop)


def test_non_callable_handler_is_rejected() -> None:
    with pytest.raises(TypeError):
        ActionRegistry().register("ping", "not a handler")


def test_get_missing_action() -> None:
    with pytest.raises(KeyError):
        ActionRegistry().get("missing")


def test_frozen_registry_refuses_registration() -> None:
    registry = ActionRegistry()
    registry.register("ping", noop)
    registry.freeze()

    assert registry.frozen
    with pytest.raises(RegistryFrozenError):
        registry.register("pong", noop)
    assert registry.get("ping") is not None
