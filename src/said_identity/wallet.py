"""Per-agent wallet persistence.

The wallet file is the durable root of an agent's identity: once written for
an agent id it is never rewritten, and losing it means losing the identity.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from said_identity.config import DEFAULT_WALLET_DIR
from said_identity.crypto.keypair import generate_keypair
from said_identity.errors import WalletStorageError, WalletValidationError
from said_identity.schemas import WalletRecord

logger = logging.getLogger(__name__)

WALLET_SUBDIR = "said"


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _chmod_owner_only(path: Path) -> None:
    if os.name != "posix":
        return
    path.chmod(0o600)


class WalletStore:
    def __init__(self, base_dir: str | Path | None = None) -> None:
        self.base_dir = Path(base_dir) if base_dir else Path(DEFAULT_WALLET_DIR)

    def wallet_path(self, agent_id: str) -> Path:
        if not agent_id or "/" in agent_id or "\\" in agent_id or agent_id in {".", ".."}:
            raise ValueError(f"invalid agent id for wallet path: {agent_id!r}")
        return self.base_dir / WALLET_SUBDIR / f"{agent_id}-wallet.json"

    def exists(self, agent_id: str) -> bool:
        return self.wallet_path(agent_id).exists()

    def load(self, agent_id: str) -> WalletRecord:
        return self._load(self.wallet_path(agent_id))

    def load_or_create(self, agent_id: str) -> WalletRecord:
        path = self.wallet_path(agent_id)
        if path.exists():
            record = self._load(path)
            logger.info("[SAID] Loaded existing identity: %s", record.public_key)
            return record
        return self._create(path)

    def _load(self, path: Path) -> WalletRecord:
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise WalletStorageError(f"cannot read wallet file {path}: {exc}", path=path) from exc

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise WalletValidationError(f"invalid wallet file {path}: {exc}", path=path) from exc
        if not isinstance(payload, dict):
            raise WalletValidationError(f"wallet file {path} must hold a JSON object", path=path)

        try:
            return WalletRecord.model_validate(payload)
        except ValidationError as exc:
            raise WalletValidationError(f"invalid wallet file {path}: {exc}", path=path) from exc

    def _create(self, path: Path) -> WalletRecord:
        keypair = generate_keypair()
        record = WalletRecord(
            public_key=keypair.public_key_b58,
            secret_key=keypair.secret_key_b58,
            created_at=_utc_now_iso(),
        )
        serialized = json.dumps(record.to_json_dict(), indent=2) + "\n"

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise WalletStorageError(
                f"cannot create wallet directory {path.parent}: {exc}", path=path
            ) from exc

        # The file is published complete via link(); link() refuses to replace an
        # existing wallet, so a concurrent first run keeps the winner's keys.
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
            )
        except OSError as exc:
            raise WalletStorageError(f"cannot write wallet file {path}: {exc}", path=path) from exc

        tmp_path = Path(tmp_name)
        try:
            try:
                os.write(fd, serialized.encode("utf-8"))
                os.fsync(fd)
            finally:
                os.close(fd)
            _chmod_owner_only(tmp_path)
            try:
                os.link(tmp_path, path)
            except FileExistsError:
                logger.info("[SAID] Wallet created concurrently, loading %s", path)
                return self._load(path)
        except OSError as exc:
            raise WalletStorageError(f"cannot write wallet file {path}: {exc}", path=path) from exc
        finally:
            tmp_path.unlink(missing_ok=True)

        logger.info("[SAID] Created new identity: %s", record.public_key)
        return record
