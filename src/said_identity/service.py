"""Identity lifecycle orchestration.

``IdentityService`` loads or creates the agent wallet, registers it with the
directory, and always ends in ``READY`` with some usable identity. A failed
registration degrades to a local-only identity with ``verified=False``.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable

from said_identity.client import RegistrationClient, RegistrationOutcome, RegistrationStatus
from said_identity.config import SAIDConfig
from said_identity.runtime import AgentRuntime, agent_metadata
from said_identity.wallet import WalletStore

logger = logging.getLogger(__name__)

SERVICE_TYPE = "said_identity"


class ServiceState(str, enum.Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    REGISTERING = "registering"
    READY = "ready"


@dataclass(frozen=True)
class Identity:
    wallet: str
    secret_key: str = field(repr=False)
    profile_url: str
    registered_at: str
    verified: bool
    outcome: RegistrationStatus = RegistrationStatus.FAILED

    def to_public_dict(self) -> dict:
        return {
            "wallet": self.wallet,
            "profile_url": self.profile_url,
            "registered_at": self.registered_at,
            "verified": self.verified,
            "outcome": self.outcome.value,
        }


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def identity_fact(identity: Identity) -> str:
    return (
        "My on-chain Solana identity is registered on SAID Protocol. "
        f"Wallet: {identity.wallet}. Profile: {identity.profile_url}"
    )


class IdentityService:
    service_type = SERVICE_TYPE
    capability_description = "On-chain Solana identity for this agent via SAID Protocol"

    def __init__(
        self,
        runtime: AgentRuntime,
        *,
        config: SAIDConfig | None = None,
        wallet_store: WalletStore | None = None,
        client: RegistrationClient | None = None,
        clock: Callable[[], str] = _utc_now_iso,
    ) -> None:
        self.runtime = runtime
        self.config = config or SAIDConfig()
        self.wallet_store = wallet_store or WalletStore(self.config.wallet_dir)
        self.client = client or RegistrationClient(
            base_url=self.config.api_base,
            timeout=self.config.timeout,
            max_attempts=self.config.max_attempts,
            backoff_ms=self.config.backoff_ms,
        )
        self._clock = clock
        self.state = ServiceState.UNINITIALIZED
        self._identity: Identity | None = None

    @classmethod
    def start(cls, runtime: AgentRuntime, **kwargs) -> "IdentityService":
        service = cls(runtime, **kwargs)
        service.initialize()
        return service

    def initialize(self) -> Identity:
        if self._identity is not None:
            return self._identity
        if self.state is not ServiceState.UNINITIALIZED:
            raise RuntimeError(f"identity initialization already in progress: {self.state.value}")

        self.state = ServiceState.LOADING
        try:
            record = self.wallet_store.load_or_create(self.runtime.agent_id)
        except Exception:
            self.state = ServiceState.UNINITIALIZED
            raise

        self.state = ServiceState.REGISTERING
        try:
            outcome = self.client.register(record.public_key, agent_metadata(self.runtime))
        except Exception:
            self.state = ServiceState.UNINITIALIZED
            raise

        identity = self._build_identity(record.public_key, record.secret_key, outcome)
        if outcome.status is RegistrationStatus.FAILED:
            logger.warning(
                "[SAID] Registration failed after %d attempt(s), using local identity: %s",
                outcome.attempts,
                outcome.error,
            )
        else:
            logger.info("[SAID] Identity registered: %s", identity.profile_url)

        self._identity = identity
        self.state = ServiceState.READY
        if self.config.inject_knowledge:
            self._inject_knowledge(identity)
        return identity

    def _build_identity(
        self, wallet: str, secret_key: str, outcome: RegistrationOutcome
    ) -> Identity:
        return Identity(
            wallet=wallet,
            secret_key=secret_key,
            profile_url=self.config.profile_url(wallet),
            registered_at=self._clock(),
            verified=outcome.verified,
            outcome=outcome.status,
        )

    def _inject_knowledge(self, identity: Identity) -> None:
        character = getattr(self.runtime, "character", None)
        if character is None:
            return
        knowledge = list(getattr(character, "knowledge", None) or [])
        knowledge.append(identity_fact(identity))
        character.knowledge = knowledge

    def get_identity(self) -> Identity | None:
        return self._identity

    def stop(self) -> None:
        """No background work survives READY; nothing to release."""
