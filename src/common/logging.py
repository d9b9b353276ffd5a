"""Central logging configuration for external agents."""

from __future__ import annotations

import logging
import sys
from logging import Logger


def configure_logging(level: int = logging.WARNING) -> Logger:
    """Configure the root logger on stderr and return the package logger.

    Standard output is left alone since the orchestrator may read it.
    """
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    return logging.getLogger("choria_external")
