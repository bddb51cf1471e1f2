"""Configuration helpers for SAID identity provisioning."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from said_identity.errors import ConfigError

try:  # Python 3.11+
    import tomllib as _toml
except ModuleNotFoundError:  # pragma: no cover
    import tomli as _toml

DEFAULT_CONFIG_PATH = Path.home() / ".said" / "config.toml"
DEFAULT_API_BASE = "https://api.saidprotocol.com"
DEFAULT_PROFILE_BASE = "https://saidprotocol.com"
DEFAULT_WALLET_DIR = str(Path.home() / ".elizaos")

API_BASE_ENV_VAR = "SAID_API_BASE"
PROFILE_BASE_ENV_VAR = "SAID_PROFILE_BASE"
WALLET_DIR_ENV_VAR = "SAID_WALLET_DIR"


@dataclass(frozen=True)
class SAIDConfig:
    api_base: str = DEFAULT_API_BASE
    profile_base: str = DEFAULT_PROFILE_BASE
    wallet_dir: str = DEFAULT_WALLET_DIR
    timeout: float = 10.0
    max_attempts: int = 3
    backoff_ms: int = 1000
    inject_knowledge: bool = True

    def profile_url(self, wallet: str) -> str:
        return f"{self.profile_base.rstrip('/')}/agents/{wallet}"


def _read_config_file(path: Path) -> dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot read SAID config {path}: {exc}") from exc
    try:
        return _toml.loads(raw)
    except _toml.TOMLDecodeError as exc:
        raise ConfigError(f"invalid TOML in SAID config {path}: {exc}") from exc


_TRUE_WORDS = frozenset({"true", "1", "yes", "on"})
_FALSE_WORDS = frozenset({"false", "0", "no", "off"})


def _to_flag(value: Any, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    word = str(value).strip().lower() if isinstance(value, (str, int)) else None
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ConfigError(f"[said] {field_name} must be true or false, got {value!r}")


def _to_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"[said] {field_name} must be an integer")
    try:
        parsed = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"[said] {field_name} must be an integer") from exc
    if parsed < 1:
        raise ConfigError(f"[said] {field_name} must be >= 1")
    return parsed


def _to_non_negative_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"[said] {field_name} must be an integer")
    try:
        parsed = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"[said] {field_name} must be an integer") from exc
    if parsed < 0:
        raise ConfigError(f"[said] {field_name} must be >= 0")
    return parsed


def _to_timeout(value: Any) -> float:
    if isinstance(value, bool):
        raise ConfigError("[said] timeout must be a number")
    try:
        parsed = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError("[said] timeout must be a number") from exc
    if parsed <= 0:
        raise ConfigError("[said] timeout must be > 0")
    return parsed


def _resolve_url(source: dict[str, Any], key: str, env_var: str, default: str) -> str:
    env_value = os.getenv(env_var)
    configured = str(source.get(key, default)).strip()
    resolved = env_value.strip() if env_value and env_value.strip() else configured
    if not resolved:
        raise ConfigError(f"[said] {key} must not be empty")
    if not resolved.startswith(("http://", "https://")):
        raise ConfigError(f"[said] {key} must be an http(s) URL, got {resolved!r}")
    return resolved.rstrip("/")


def load_config(path: str | Path | None = None) -> SAIDConfig:
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH
    parsed: dict[str, Any] = _read_config_file(config_path) if config_path.exists() else {}

    section = parsed.get("said")
    if isinstance(section, dict):
        source = section
    elif section is None:
        source = parsed
    else:
        raise ConfigError("[said] must be a table")

    api_base = _resolve_url(source, "api_base", API_BASE_ENV_VAR, DEFAULT_API_BASE)
    profile_base = _resolve_url(source, "profile_base", PROFILE_BASE_ENV_VAR, DEFAULT_PROFILE_BASE)

    env_wallet_dir = os.getenv(WALLET_DIR_ENV_VAR)
    configured_wallet_dir = str(source.get("wallet_dir", DEFAULT_WALLET_DIR)).strip()
    wallet_dir = env_wallet_dir.strip() if env_wallet_dir else configured_wallet_dir
    if not wallet_dir:
        raise ConfigError("[said] wallet_dir must not be empty")

    return SAIDConfig(
        api_base=api_base,
        profile_base=profile_base,
        wallet_dir=str(Path(wallet_dir).expanduser()),
        timeout=_to_timeout(source.get("timeout", 10.0)),
        max_attempts=_to_positive_int(source.get("max_attempts", 3), "max_attempts"),
        backoff_ms=_to_non_negative_int(source.get("backoff_ms", 1000), "backoff_ms"),
        inject_knowledge=_to_flag(source.get("inject_knowledge", True), "inject_knowledge"),
    )
