"""Access to the node facts supplied with an invocation."""

from __future__ import annotations

import json
from typing import Any

from common.config import Settings

from .errors import FactsError


def load_facts(settings: Settings) -> Any:
    """Return the decoded facts document, or an empty object when none was given."""
    if not settings.facts_path:
        return {}

    try:
        with open(settings.facts_path, encoding="utf-8") as stream:
            return json.load(stream)
    except OSError as exc:
        raise FactsError(f"could not read facts from {settings.facts_path}: {exc}") from exc
    except ValueError as exc:
        raise FactsError(f"could not parse facts from {settings.facts_path}: {exc}") from exc
