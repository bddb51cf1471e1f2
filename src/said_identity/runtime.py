"""Host runtime boundary.

The identity service only needs an agent id, the agent's character metadata
and a place to register services. Any host object with that shape works.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from said_identity.client import AgentMetadata
from said_identity.schemas import DEFAULT_CAPABILITIES

DEFAULT_DESCRIPTION = "ElizaOS agent"


@dataclass
class Character:
    name: str | None = None
    bio: str | list[str] | None = None
    knowledge: list[str] = field(default_factory=list)


@runtime_checkable
class AgentRuntime(Protocol):
    agent_id: str
    character: Character | None

    def get_service(self, service_type: str) -> Any | None: ...


@dataclass
class LocalRuntime:
    """Minimal runtime for standalone use outside a host framework."""

    agent_id: str
    character: Character | None = None
    services: dict[str, Any] = field(default_factory=dict)

    def get_service(self, service_type: str) -> Any | None:
        return self.services.get(service_type)

    def register_service(self, service: Any) -> None:
        self.services[service.service_type] = service


def _first_bio_line(bio: str | list[str] | None) -> str | None:
    if isinstance(bio, list):
        bio = bio[0] if bio else None
    if isinstance(bio, str) and bio.strip():
        return bio
    return None


def agent_metadata(runtime: AgentRuntime) -> AgentMetadata:
    character = getattr(runtime, "character", None)
    name = getattr(character, "name", None) or runtime.agent_id
    description = _first_bio_line(getattr(character, "bio", None)) or DEFAULT_DESCRIPTION
    return AgentMetadata(
        name=str(name), description=str(description), capabilities=DEFAULT_CAPABILITIES
    )
