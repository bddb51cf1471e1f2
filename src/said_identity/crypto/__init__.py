from said_identity.crypto.base58 import BASE58_ALPHABET, b58decode, b58encode
from said_identity.crypto.keypair import Keypair, generate_keypair, keypair_from_secret

__all__ = [
    "BASE58_ALPHABET",
    "b58encode",
    "b58decode",
    "Keypair",
    "generate_keypair",
    "keypair_from_secret",
]
