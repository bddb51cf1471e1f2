from __future__ import annotations

from said_identity.actions import get_said_identity_action
from said_identity.client import RegistrationOutcome, RegistrationStatus
from said_identity.config import SAIDConfig
from said_identity.plugin import said_plugin
from said_identity.runtime import LocalRuntime
from said_identity.service import IdentityService


class StaticClient:
    def __init__(self, status: RegistrationStatus) -> None:
        self.status = status

    def register(self, wallet, metadata):  # noqa: ANN001
        return RegistrationOutcome(status=self.status, attempts=1)


def _runtime_with_service(tmp_path, status: RegistrationStatus, *, initialize: bool = True):
    runtime = LocalRuntime(agent_id="agent-1")
    service = IdentityService(
        runtime,
        config=SAIDConfig(wallet_dir=str(tmp_path)),
        client=StaticClient(status),
    )
    runtime.register_service(service)
    if initialize:
        service.initialize()
    return runtime, service


def _run_handler(runtime) -> list[dict]:
    messages: list[dict] = []
    get_said_identity_action.handler(runtime, None, None, None, messages.append)
    return messages


def test_validate_false_without_service() -> None:
    assert get_said_identity_action.validate(LocalRuntime(agent_id="agent-1")) is False


def test_validate_false_before_ready(tmp_path) -> None:
    runtime, _ = _runtime_with_service(tmp_path, RegistrationStatus.VERIFIED, initialize=False)
    assert get_said_identity_action.validate(runtime) is False


def test_handler_reports_unavailable_before_ready(tmp_path) -> None:
    runtime, _ = _runtime_with_service(tmp_path, RegistrationStatus.VERIFIED, initialize=False)
    assert _run_handler(runtime) == [{"text": "SAID identity not available."}]


def test_handler_renders_verified_identity(tmp_path) -> None:
    runtime, service = _runtime_with_service(tmp_path, RegistrationStatus.VERIFIED)
    identity = service.get_identity()

    assert get_said_identity_action.validate(runtime) is True
    [message] = _run_handler(runtime)

    assert f"Wallet: `{identity.wallet}`" in message["text"]
    assert f"Profile: {identity.profile_url}" in message["text"]
    assert "Verified: ✅" in message["text"]
    assert identity.secret_key not in message["text"]


def test_handler_renders_pending_when_unverified(tmp_path) -> None:
    runtime, _ = _runtime_with_service(tmp_path, RegistrationStatus.FAILED)
    [message] = _run_handler(runtime)
    assert "Verified: ❌ (pending)" in message["text"]


def test_plugin_bundles_service_and_action() -> None:
    assert said_plugin.name == "said"
    assert said_plugin.services == [IdentityService]
    assert said_plugin.actions == [get_said_identity_action]
    assert "SHOW_SAID_IDENTITY" in get_said_identity_action.similes
