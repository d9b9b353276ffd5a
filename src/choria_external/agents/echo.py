"""Simple echo agent for local testing."""

from __future__ import annotations

from typing import Mapping

from pydantic import BaseModel

from common.config import Settings

from ..agent import Agent
from ..protocol import Reply, Request


class PingRequest(BaseModel):
    message: str


def ping(request: Request, reply: Reply, config: Mapping[str, str]) -> None:
    """Reflect the inbound message back to the caller."""
    data = request.parse_data(PingRequest, reply)
    if data is None:
        return

    reply.data = {"message": data.message}


def build_agent(settings: Settings | None = None) -> Agent:
    """Factory helper for the CLI to instantiate the echo agent."""
    agent = Agent("echo", settings=settings)
    agent.register_action("ping", ping)
    return agent
