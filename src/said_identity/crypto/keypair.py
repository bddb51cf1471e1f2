"""Ed25519 keypair generation in the Solana secret-key layout.

The exported secret is 64 bytes: the 32-byte private seed followed by the
32-byte public key.
"""

from __future__ import annotations

from dataclasses import dataclass

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
    PublicFormat,
)

from said_identity.crypto.base58 import b58encode
from said_identity.errors import KeyGenerationError

PUBLIC_KEY_LEN = 32
SEED_LEN = 32
SECRET_KEY_LEN = SEED_LEN + PUBLIC_KEY_LEN


@dataclass(frozen=True)
class Keypair:
    public_key: bytes
    secret_key: bytes

    @property
    def seed(self) -> bytes:
        return self.secret_key[:SEED_LEN]

    @property
    def public_key_b58(self) -> str:
        return b58encode(self.public_key)

    @property
    def secret_key_b58(self) -> str:
        return b58encode(self.secret_key)

    def __repr__(self) -> str:
        return f"Keypair(public_key={self.public_key_b58!r})"


def _from_private(private: Ed25519PrivateKey) -> Keypair:
    seed = private.private_bytes(Encoding.Raw, PrivateFormat.Raw, NoEncryption())
    public_key = private.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)
    return Keypair(public_key=public_key, secret_key=seed + public_key)


def generate_keypair() -> Keypair:
    try:
        private = Ed25519PrivateKey.generate()
    except Exception as exc:
        raise KeyGenerationError(f"ed25519 key generation failed: {exc}") from exc
    return _from_private(private)


def keypair_from_secret(secret_key: bytes) -> Keypair:
    """Rebuild a keypair from a 64-byte secret, checking the embedded public key."""
    if len(secret_key) != SECRET_KEY_LEN:
        raise ValueError(f"secret key must be {SECRET_KEY_LEN} bytes")
    keypair = _from_private(Ed25519PrivateKey.from_private_bytes(secret_key[:SEED_LEN]))
    if keypair.public_key != secret_key[SEED_LEN:]:
        raise ValueError("secret key public half does not match its seed")
    return keypair
