"""SAID identity public surface."""

from said_identity.actions import get_said_identity_action
from said_identity.client import (
    AgentMetadata,
    RegistrationClient,
    RegistrationOutcome,
    RegistrationStatus,
)
from said_identity.config import SAIDConfig, load_config
from said_identity.crypto import b58decode, b58encode, generate_keypair
from said_identity.errors import (
    ConfigError,
    KeyGenerationError,
    RegistrationError,
    SAIDError,
    WalletError,
    WalletStorageError,
    WalletValidationError,
)
from said_identity.plugin import said_plugin
from said_identity.runtime import AgentRuntime, Character, LocalRuntime
from said_identity.schemas import WalletRecord
from said_identity.service import Identity, IdentityService, ServiceState
from said_identity.wallet import WalletStore

__all__ = [
    "SAIDError",
    "KeyGenerationError",
    "WalletError",
    "WalletStorageError",
    "WalletValidationError",
    "RegistrationError",
    "ConfigError",
    "b58encode",
    "b58decode",
    "generate_keypair",
    "WalletRecord",
    "WalletStore",
    "AgentMetadata",
    "RegistrationClient",
    "RegistrationOutcome",
    "RegistrationStatus",
    "SAIDConfig",
    "load_config",
    "AgentRuntime",
    "Character",
    "LocalRuntime",
    "Identity",
    "IdentityService",
    "ServiceState",
    "get_said_identity_action",
    "said_plugin",
]
