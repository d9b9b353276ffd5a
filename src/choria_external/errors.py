"""Exception types raised by the external agent dispatcher."""

from __future__ import annotations

from common.config import ConfigError


class ExternalAgentError(RuntimeError):
    """Base class for failures inside the dispatcher."""


class ProtocolMismatch(ExternalAgentError):
    """The invocation protocol does not match what the handler expects."""


class MissingFile(ExternalAgentError):
    """A file named by the environment is absent or does not exist."""


class DecodeError(ExternalAgentError):
    """A request file does not hold JSON of the expected shape."""


class WriteError(ExternalAgentError):
    """The reply could not be encoded or written."""


class FactsError(ExternalAgentError):
    """The facts file could not be read or decoded."""


class DuplicateActionError(ValueError):
    """An action name was registered more than once."""


class RegistryFrozenError(RuntimeError):
    """An action was registered after dispatch started."""


class FatalError(ExternalAgentError):
    """Infrastructure failure that must terminate the invocation.

    Only the top-level driver turns this into a process exit.
    """

    def __init__(self, message: str, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code


class InvalidProtocol(FatalError):
    """The invocation did not name a protocol this process understands."""


__all__ = [
    "ConfigError",
    "DecodeError",
    "DuplicateActionError",
    "ExternalAgentError",
    "FactsError",
    "FatalError",
    "InvalidProtocol",
    "MissingFile",
    "ProtocolMismatch",
    "RegistryFrozenError",
    "WriteError",
]
