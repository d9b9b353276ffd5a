"""Helpers to load agents and discovery sources from importable modules."""

from __future__ import annotations

import importlib
from typing import Any

from common.config import Settings

from .agent import Agent
from .discovery import Discovery

DEFAULT_AGENT_MODULE = "choria_external.agents.echo"


def load_agent(module_path: str, settings: Settings) -> Agent:
    """Import a module and build its agent via a ``build_agent`` factory."""
    agent = _build(module_path, "build_agent", settings)
    if not hasattr(agent, "name") or not hasattr(agent, "process_request"):
        raise ValueError(f"Module '{module_path}' build_agent() returned an invalid agent instance.")
    return agent


def load_discovery(module_path: str, settings: Settings) -> Discovery:
    """Import a module and build its source via a ``build_discovery`` factory."""
    discovery = _build(module_path, "build_discovery", settings)
    if not hasattr(discovery, "process_request"):
        raise ValueError(f"Module '{module_path}' build_discovery() returned an invalid discovery instance.")
    return discovery


def _build(module_path: str, factory_name: str, settings: Settings) -> Any:
    module = importlib.import_module(module_path)
    builder = getattr(module, factory_name, None)
    if builder is None or not callable(builder):
        raise ValueError(f"Module '{module_path}' does not expose a callable {factory_name}().")
    return builder(settings)
