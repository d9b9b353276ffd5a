"""Shared utilities for external agent packages."""

from .config import ConfigError, Settings, load_agent_config
from .logging import configure_logging

__all__ = ["Settings", "ConfigError", "configure_logging", "load_agent_config"]
