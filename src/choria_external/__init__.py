"""Helper library for building Choria external agents in Python."""

from importlib import metadata

from .agent import Agent
from .discovery import Deadline, Discovery, Filter
from .protocol import ActivationReply, Reply, Request, StatusCode
from .runner import execute, run


try:
    __version__ = metadata.version("choria-external")
except metadata.PackageNotFoundError:  # pragma: no cover - not installed
    __version__ = "0.1.0"

__all__ = [
    "__version__",
    "Agent",
    "ActivationReply",
    "Deadline",
    "Discovery",
    "Filter",
    "Reply",
    "Request",
    "StatusCode",
    "execute",
    "run",
]
