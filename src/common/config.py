"""Configuration helpers for external agent invocations."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from dotenv import dotenv_values


PROTOCOL_ENV = "CHORIA_EXTERNAL_PROTOCOL"
REQUEST_ENV = "CHORIA_EXTERNAL_REQUEST"
REPLY_ENV = "CHORIA_EXTERNAL_REPLY"
CONFIG_ENV = "CHORIA_EXTERNAL_CONFIG"
FACTS_ENV = "CHORIA_EXTERNAL_FACTS"

_SKIP_LINE = re.compile(r"^#|^$")
_ITEM_LINE = re.compile(r"([^=]+?)\s*=\s*(.+)")


class ConfigError(RuntimeError):
    """Raised when the agent configuration file cannot be read."""


@dataclass(frozen=True)
class Settings:
    """Container for the environment of a single orchestrator invocation."""

    protocol: str = ""
    request_path: Optional[str] = None
    reply_path: Optional[str] = None
    config_path: Optional[str] = None
    facts_path: Optional[str] = None

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        env_files: Iterable[str] | None = None,
    ) -> "Settings":
        """Build settings from environment variables, optionally loading dotenv files."""

        source = os.environ if environ is None else environ

        env_overrides: dict[str, str] = {}
        if env_files:
            for candidate in env_files:
                candidate_path = os.path.abspath(candidate)
                if os.path.isfile(candidate_path):
                    values = {
                        key: value
                        for key, value in dotenv_values(candidate_path).items()
                        if value is not None
                    }
                    env_overrides.update(values)

        def get_override(key: str) -> str | None:
            if key in source:
                return source[key]
            return env_overrides.get(key)

        def lookup_optional(key: str) -> Optional[str]:
            value = get_override(key)
            if value is None:
                return None
            stripped = value.strip()
            return stripped or None

        return cls(
            protocol=get_override(PROTOCOL_ENV) or "",
            request_path=lookup_optional(REQUEST_ENV),
            reply_path=lookup_optional(REPLY_ENV),
            config_path=lookup_optional(CONFIG_ENV),
            facts_path=lookup_optional(FACTS_ENV),
        )


def load_agent_config(path: str | None) -> dict[str, str]:
    """Parse a ``key = value`` agent configuration file into a flat mapping.

    Everything after the first ``=`` is the value, trimmed of surrounding
    whitespace and otherwise kept verbatim. A missing path, or one that does
    not exist, yields an empty mapping. Lines that are blank, start with ``#``
    or carry no key or value never produce entries.
    """
    if not path or not os.path.isfile(path):
        return {}

    try:
        with open(path, encoding="utf-8") as stream:
            lines = stream.read().splitlines()
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"could not parse configuration {path}: {exc}") from exc

    config: dict[str, str] = {}
    for raw_line in lines:
        line = raw_line.strip()
        if _SKIP_LINE.match(line):
            continue
        match = _ITEM_LINE.fullmatch(line)
        if match is None:
            continue
        key, value = match.group(1).strip(), match.group(2).strip()
        if key and value:
            config[key] = value
    return config
