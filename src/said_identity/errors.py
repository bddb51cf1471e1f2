"""SAID identity error types."""

from __future__ import annotations


class SAIDError(RuntimeError):
    """Base SAID identity error."""


class KeyGenerationError(SAIDError):
    """Ed25519 key material could not be generated."""


class WalletError(SAIDError):
    """Wallet file could not be used."""

    def __init__(self, message: str, *, path: object | None = None) -> None:
        super().__init__(message)
        self.path = path


class WalletStorageError(WalletError):
    """Wallet file or directory could not be read or written."""


class WalletValidationError(WalletError):
    """Wallet file exists but does not hold a valid keypair record."""


class RegistrationError(SAIDError):
    """A single registration attempt against the directory failed."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: object | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ConfigError(ValueError):
    """Raised when SAID config is invalid."""
