from __future__ import annotations

import time
import types

import pytest
import requests

from said_identity.client import (
    AgentMetadata,
    RegistrationClient,
    RegistrationStatus,
)

WALLET = "9xQeWvG816bUx9EPjHmaT23yvVM2ZWbrrpZb9PusVFin"
METADATA = AgentMetadata(name="Test Agent", description="Testing agent")


def _response(status_code: int, body=None, *, raises: bool = False):
    def _json():
        if raises:
            raise ValueError("no json")
        return body

    return types.SimpleNamespace(status_code=status_code, json=_json, text=str(body))


def _client(sleeps: list[float], **kwargs) -> RegistrationClient:
    return RegistrationClient(base_url="http://localhost:8080", timeout=0.1, sleep=sleeps.append, **kwargs)


def _scripted(monkeypatch, client: RegistrationClient, results: list) -> list[dict]:
    calls: list[dict] = []
    script = iter(results)

    def fake_request(method, url, *, json=None, headers=None, timeout=None):  # noqa: ANN001
        calls.append({"method": method, "url": url, "json": json, "headers": headers, "timeout": timeout})
        result = next(script)
        if isinstance(result, Exception):
            raise result
        return result

    monkeypatch.setattr(client._session, "request", fake_request)
    return calls


def test_verified_on_first_attempt(monkeypatch) -> None:
    sleeps: list[float] = []
    client = _client(sleeps)
    calls = _scripted(monkeypatch, client, [_response(200, {"wallet": WALLET, "isVerified": True})])

    outcome = client.register(WALLET, METADATA)

    assert outcome.status is RegistrationStatus.VERIFIED
    assert outcome.verified is True
    assert outcome.attempts == 1
    assert len(calls) == 1
    assert sleeps == []


def test_request_shape(monkeypatch) -> None:
    client = _client([])
    calls = _scripted(monkeypatch, client, [_response(201, {})])

    client.register(WALLET, METADATA)

    assert calls[0]["method"] == "POST"
    assert calls[0]["url"] == "http://localhost:8080/api/register/pending"
    assert calls[0]["headers"] == {"Content-Type": "application/json"}
    assert calls[0]["timeout"] == 0.1
    assert calls[0]["json"] == {
        "wallet": WALLET,
        "name": "Test Agent",
        "description": "Testing agent",
        "capabilities": ["conversation", "autonomous-tasks", "elizaos"],
        "source": "elizaos-plugin",
    }


@pytest.mark.parametrize("body", [{}, {"wallet": WALLET}, {"isVerified": False}, {"extra": 1}])
def test_success_without_verified_flag_is_unverified(monkeypatch, body) -> None:
    client = _client([])
    _scripted(monkeypatch, client, [_response(200, body)])

    outcome = client.register(WALLET, METADATA)

    assert outcome.status is RegistrationStatus.REGISTERED_UNVERIFIED
    assert outcome.registered is True
    assert outcome.verified is False


def test_always_failing_endpoint_gets_exactly_three_attempts(monkeypatch) -> None:
    sleeps: list[float] = []
    client = _client(sleeps)
    calls = _scripted(monkeypatch, client, [_response(500, {"error": "boom"})] * 3)

    outcome = client.register(WALLET, METADATA)

    assert outcome.status is RegistrationStatus.FAILED
    assert outcome.attempts == 3
    assert len(calls) == 3
    assert sleeps == [1.0, 2.0]
    assert "HTTP 500" in (outcome.error or "")


def test_recovers_after_transport_error(monkeypatch) -> None:
    sleeps: list[float] = []
    client = _client(sleeps)
    _scripted(
        monkeypatch,
        client,
        [requests.ConnectionError("refused"), _response(200, {"isVerified": True})],
    )

    outcome = client.register(WALLET, METADATA)

    assert outcome.status is RegistrationStatus.VERIFIED
    assert outcome.attempts == 2
    assert sleeps == [1.0]


@pytest.mark.parametrize(
    "failure",
    [
        requests.Timeout("timed out"),
        _response(503, None),
        _response(200, None, raises=True),
        _response(200, ["not", "an", "object"]),
        _response(200, {"isVerified": "yes"}),
    ],
)
def test_failed_attempts_count_toward_budget(monkeypatch, failure) -> None:
    sleeps: list[float] = []
    client = _client(sleeps)
    calls = _scripted(monkeypatch, client, [failure] * 3)

    outcome = client.register(WALLET, METADATA)

    assert outcome.status is RegistrationStatus.FAILED
    assert len(calls) == 3
    assert sleeps == [1.0, 2.0]


def test_backoff_is_linear_in_attempt_number() -> None:
    client = RegistrationClient(backoff_ms=1000)
    assert [client.backoff_delay(n) for n in (1, 2, 3)] == [1.0, 2.0, 3.0]


def test_inter_attempt_delay_is_observed_with_real_sleep(monkeypatch) -> None:
    client = RegistrationClient(base_url="http://localhost:8080", timeout=0.1, backoff_ms=20)
    stamps: list[float] = []

    def fake_request(method, url, *, json=None, headers=None, timeout=None):  # noqa: ANN001
        stamps.append(time.monotonic())
        return _response(500, None)

    monkeypatch.setattr(client._session, "request", fake_request)

    outcome = client.register(WALLET, METADATA)

    assert outcome.status is RegistrationStatus.FAILED
    assert len(stamps) == 3
    assert stamps[1] - stamps[0] >= 0.02
    assert stamps[2] - stamps[1] >= 0.04


def test_rejects_non_positive_attempt_budget() -> None:
    with pytest.raises(ValueError):
        RegistrationClient(max_attempts=0)


def test_invalid_payload_fails_without_contacting_directory(monkeypatch) -> None:
    sleeps: list[float] = []
    client = _client(sleeps)
    calls = _scripted(monkeypatch, client, [])

    outcome = client.register(WALLET, AgentMetadata(name=None, description=["not", "text"]))

    assert outcome.status is RegistrationStatus.FAILED
    assert outcome.attempts == 0
    assert "invalid registration payload" in (outcome.error or "")
    assert calls == []
    assert sleeps == []
