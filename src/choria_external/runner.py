"""Top-level driver turning dispatch outcomes into process exit codes."""

from __future__ import annotations

import logging
import sys
from typing import Any, Protocol, TextIO

from .errors import FatalError, InvalidProtocol
from .protocol import USAGE_BANNER

logger = logging.getLogger(__name__)


class Processor(Protocol):
    """Anything that handles exactly one orchestrator invocation."""

    def process_request(self) -> Any:
        ...


def execute(
    processor: Processor,
    *,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    """Process one request and return the exit code for the invocation."""
    out = stdout if stdout is not None else sys.stdout
    err = stderr if stderr is not None else sys.stderr

    try:
        processor.process_request()
    except InvalidProtocol as exc:
        print(USAGE_BANNER, file=out)
        print(file=out)
        print(exc, file=err)
        return exc.exit_code
    except FatalError as exc:
        logger.error("Fatal: %s", exc)
        print(exc, file=err)
        return exc.exit_code
    return 0


def run(processor: Processor) -> None:
    """Process one request and exit the process with the resulting code."""
    raise SystemExit(execute(processor))
