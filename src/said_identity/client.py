"""Registration client for the SAID directory service."""

from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass, field
from typing import Callable

import requests
from pydantic import ValidationError

from said_identity.config import DEFAULT_API_BASE
from said_identity.errors import RegistrationError
from said_identity.schemas import DEFAULT_CAPABILITIES, RegistrationRequest, RegistrationResponse

logger = logging.getLogger(__name__)

REGISTER_PENDING_PATH = "/api/register/pending"


class RegistrationStatus(str, enum.Enum):
    VERIFIED = "verified"
    REGISTERED_UNVERIFIED = "registered_unverified"
    FAILED = "failed"


@dataclass(frozen=True)
class AgentMetadata:
    name: str
    description: str
    capabilities: tuple[str, ...] = DEFAULT_CAPABILITIES


@dataclass(frozen=True)
class RegistrationOutcome:
    status: RegistrationStatus
    attempts: int
    response: RegistrationResponse | None = None
    error: str | None = None

    @property
    def verified(self) -> bool:
        return self.status is RegistrationStatus.VERIFIED

    @property
    def registered(self) -> bool:
        return self.status is not RegistrationStatus.FAILED


@dataclass
class RegistrationClient:
    """Registers a wallet with the directory, retrying with linear backoff.

    Attempt ``n`` that fails is followed by a ``n * backoff_ms`` pause before
    attempt ``n + 1``. ``register`` never raises; failures are reported as a
    ``RegistrationStatus.FAILED`` outcome.
    """

    base_url: str = DEFAULT_API_BASE
    timeout: float = 10.0
    max_attempts: int = 3
    backoff_ms: int = 1000
    sleep: Callable[[float], None] = time.sleep
    _session: requests.Session = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        # No transport-level retries: the attempt budget belongs to register().
        self._session = requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    def backoff_delay(self, attempt: int) -> float:
        return attempt * self.backoff_ms / 1000.0

    def _post_pending(self, payload: dict) -> RegistrationResponse:
        try:
            response = self._session.request(
                "POST",
                self._url(REGISTER_PENDING_PATH),
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise RegistrationError(f"directory unreachable: {exc}") from exc

        if not 200 <= response.status_code < 300:
            raise RegistrationError(
                f"directory returned HTTP {response.status_code}",
                status_code=response.status_code,
                body=getattr(response, "text", None),
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise RegistrationError(
                "directory returned a non-JSON body", status_code=response.status_code
            ) from exc
        if not isinstance(body, dict):
            raise RegistrationError(
                "directory returned a non-object body",
                status_code=response.status_code,
                body=body,
            )

        try:
            return RegistrationResponse.model_validate(body)
        except ValidationError as exc:
            raise RegistrationError(
                f"malformed registration response: {exc}",
                status_code=response.status_code,
                body=body,
            ) from exc

    def register(self, wallet: str, metadata: AgentMetadata) -> RegistrationOutcome:
        try:
            payload = RegistrationRequest(
                wallet=wallet,
                name=metadata.name,
                description=metadata.description,
                capabilities=list(metadata.capabilities),
            ).model_dump()
        except ValidationError as exc:
            logger.warning("[SAID] Registration payload rejected, not contacting directory: %s", exc)
            return RegistrationOutcome(
                status=RegistrationStatus.FAILED,
                attempts=0,
                error=f"invalid registration payload: {exc}",
            )

        last_error: RegistrationError | None = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                response = self._post_pending(payload)
            except RegistrationError as exc:
                last_error = exc
                logger.warning(
                    "[SAID] Registration attempt %d/%d failed: %s",
                    attempt,
                    self.max_attempts,
                    exc,
                )
                if attempt < self.max_attempts:
                    self.sleep(self.backoff_delay(attempt))
                continue

            status = (
                RegistrationStatus.VERIFIED
                if response.is_verified
                else RegistrationStatus.REGISTERED_UNVERIFIED
            )
            logger.debug("[SAID] Registration accepted after %d attempt(s): %s", attempt, status.value)
            return RegistrationOutcome(status=status, attempts=attempt, response=response)

        return RegistrationOutcome(
            status=RegistrationStatus.FAILED,
            attempts=self.max_attempts,
            error=str(last_error) if last_error else None,
        )

    def close(self) -> None:
        self._session.close()


__all__ = [
    "AgentMetadata",
    "RegistrationClient",
    "RegistrationOutcome",
    "RegistrationStatus",
]
