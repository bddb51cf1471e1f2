"""Plugin descriptor bundling the SAID service and action for a host runtime."""

from __future__ import annotations

from dataclasses import dataclass, field

from said_identity.actions import Action, get_said_identity_action
from said_identity.service import IdentityService


@dataclass(frozen=True)
class Plugin:
    name: str
    description: str
    services: list[type] = field(default_factory=list)
    actions: list[Action] = field(default_factory=list)


said_plugin = Plugin(
    name="said",
    description=(
        "SAID Protocol on-chain Solana identity for ElizaOS agents. Auto-registers every "
        "agent with a free verifiable identity on first run."
    ),
    services=[IdentityService],
    actions=[get_said_identity_action],
)
