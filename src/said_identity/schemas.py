"""Wire and on-disk schemas for SAID identity records."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator, model_validator

from said_identity.crypto.base58 import b58decode
from said_identity.crypto.keypair import PUBLIC_KEY_LEN, SECRET_KEY_LEN, keypair_from_secret

REGISTRATION_SOURCE = "elizaos-plugin"
DEFAULT_CAPABILITIES = ("conversation", "autonomous-tasks", "elizaos")


def _decode_b58(value: str, *, expected_len: int, field_name: str) -> bytes:
    try:
        decoded = b58decode(value)
    except ValueError as exc:
        raise ValueError(f"{field_name} must be valid base58") from exc
    if len(decoded) != expected_len:
        raise ValueError(f"{field_name} must decode to {expected_len} bytes")
    return decoded


class WalletRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    public_key: str = Field(..., alias="publicKey", min_length=1)
    secret_key: str = Field(..., alias="secretKey", min_length=1, repr=False)
    created_at: str = Field(..., alias="createdAt", min_length=1)

    @field_validator("public_key")
    @classmethod
    def _check_public_key(cls, value: str) -> str:
        _decode_b58(value, expected_len=PUBLIC_KEY_LEN, field_name="publicKey")
        return value

    @field_validator("secret_key")
    @classmethod
    def _check_secret_key(cls, value: str) -> str:
        _decode_b58(value, expected_len=SECRET_KEY_LEN, field_name="secretKey")
        return value

    @model_validator(mode="after")
    def _check_keypair(self) -> "WalletRecord":
        keypair = keypair_from_secret(b58decode(self.secret_key))
        if keypair.public_key_b58 != self.public_key:
            raise ValueError("publicKey does not match secretKey")
        return self

    def to_json_dict(self) -> dict:
        return self.model_dump(by_alias=True)


class RegistrationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    wallet: str
    name: str
    description: str
    capabilities: List[str] = Field(default_factory=lambda: list(DEFAULT_CAPABILITIES))
    source: Literal["elizaos-plugin"] = REGISTRATION_SOURCE


class RegistrationResponse(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    wallet: Optional[str] = None
    is_verified: Optional[StrictBool] = Field(default=None, alias="isVerified")
