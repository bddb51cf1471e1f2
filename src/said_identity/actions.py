"""Conversational action surfacing the agent's SAID identity."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from said_identity.runtime import AgentRuntime
from said_identity.service import SERVICE_TYPE, Identity

NOT_AVAILABLE_TEXT = "SAID identity not available."


@dataclass(frozen=True)
class Action:
    name: str
    description: str
    validate: Callable[[AgentRuntime], bool]
    handler: Callable[..., Any]
    similes: tuple[str, ...] = ()
    examples: list[list[dict]] = field(default_factory=list)


def _identity_for(runtime: AgentRuntime) -> Identity | None:
    service = runtime.get_service(SERVICE_TYPE)
    if service is None:
        return None
    return service.get_identity()


def format_identity(identity: Identity) -> str:
    verified = "✅" if identity.verified else "❌ (pending)"
    return (
        "My on-chain identity:\n\n"
        f"Wallet: `{identity.wallet}`\n"
        f"Profile: {identity.profile_url}\n"
        f"Verified: {verified}\n\n"
        f"View my public profile at {identity.profile_url}"
    )


def validate_said_identity(runtime: AgentRuntime) -> bool:
    return _identity_for(runtime) is not None


def handle_said_identity(runtime, message, state, options, callback) -> None:  # noqa: ANN001
    identity = _identity_for(runtime)
    if identity is None:
        callback({"text": NOT_AVAILABLE_TEXT})
        return
    callback({"text": format_identity(identity)})


get_said_identity_action = Action(
    name="GET_SAID_IDENTITY",
    description="Returns this agent's on-chain SAID Protocol identity and profile URL",
    validate=validate_said_identity,
    handler=handle_said_identity,
    similes=("SHOW_SAID_IDENTITY", "MY_SOLANA_IDENTITY", "SAID_PROFILE", "WHO_AM_I_ONCHAIN"),
    examples=[
        [
            {"name": "user", "content": {"text": "What is your Solana wallet?"}},
            {
                "name": "agent",
                "content": {
                    "text": "My on-chain identity is registered on SAID Protocol. Here are my details..."
                },
            },
        ],
        [
            {"name": "user", "content": {"text": "Show me your SAID profile"}},
            {
                "name": "agent",
                "content": {"text": "My SAID Protocol profile: https://saidprotocol.com/agents/..."},
            },
        ],
    ],
)
