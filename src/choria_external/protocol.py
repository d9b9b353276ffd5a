"""Wire models for the external agent request/reply protocol.

All documents are exchanged as compact JSON. Field names on the wire follow
the orchestrator's spelling, so the models use aliases where those names are
not valid Python identifiers.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

ACTIVATION_REQUEST_PROTOCOL = "io.choria.mcorpc.external.v1.activation_request"
RPC_REQUEST_PROTOCOL = "io.choria.mcorpc.external.v1.rpc_request"

USAGE_BANNER = (
    "This binary is a Plugin for the Choria Orchestrator and should only be "
    "called from within Choria"
)

T = TypeVar("T")


class StatusCode(IntEnum):
    """Reply status as defined by SimpleRPC, integers 0 to 5."""

    OK = 0
    ABORTED = 1
    UNKNOWN_ACTION = 2
    MISSING_DATA = 3
    INVALID_DATA = 4
    UNKNOWN_ERROR = 5


class Reply(BaseModel):
    """Result of an RPC action.

    Handlers mutate the reply they are given; ``data`` may hold anything that
    serializes to JSON, including other pydantic models.
    """

    model_config = ConfigDict(validate_assignment=True)

    statuscode: StatusCode = StatusCode.OK
    statusmsg: str = ""
    data: Any = None

    def abort(self, code: StatusCode, msg: str) -> None:
        """Set the status code and message of the reply."""
        self.statuscode = StatusCode(code)
        self.statusmsg = msg

    def aborted(self, msg: str) -> None:
        self.abort(StatusCode.ABORTED, msg)

    def unknown_action(self, msg: str) -> None:
        self.abort(StatusCode.UNKNOWN_ACTION, msg)

    def missing_data(self, msg: str) -> None:
        self.abort(StatusCode.MISSING_DATA, msg)

    def invalid_data(self, msg: str) -> None:
        self.abort(StatusCode.INVALID_DATA, msg)

    def unknown_error(self, msg: str) -> None:
        self.abort(StatusCode.UNKNOWN_ERROR, msg)

    @property
    def ok(self) -> bool:
        return self.statuscode == StatusCode.OK


class Request(BaseModel):
    """RPC request handed to the agent by the orchestrator."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    schema_: str = Field(default="", alias="$schema")
    protocol: str = ""
    agent: str = ""
    action: str = ""
    request_id: str = Field(default="", alias="requestid")
    sender_id: str = Field(default="", alias="senderid")
    caller_id: str = Field(default="", alias="callerid")
    collective: str = ""
    ttl: int = 0
    time: int = Field(default=0, alias="msgtime")
    data: Any = None

    def parse_data(self, target: Type[T], reply: Reply) -> Optional[T]:
        """Validate the opaque request payload into ``target``.

        On failure the reply is marked as invalid data and ``None`` is
        returned, so handlers can simply bail out.
        """
        try:
            return TypeAdapter(target).validate_python(self.data)
        except ValidationError as exc:
            reply.invalid_data(
                f"Could not parse request data for {self.agent}#{self.action}: {exc}"
            )
            return None


class ActivationCheck(BaseModel):
    """Request asking whether the agent should activate on this node."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    schema_: str = Field(default="", alias="$schema")
    protocol: str = ""
    agent: str = ""


class ActivationReply(BaseModel):
    """Answer to an activation check."""

    activate: bool = Field(default=False)
