"""Base58 codec using the Bitcoin/Solana alphabet."""

from __future__ import annotations

BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"

_INDEX = {char: index for index, char in enumerate(BASE58_ALPHABET)}


def b58encode(data: bytes) -> str:
    leading_zeros = 0
    for byte in data:
        if byte != 0:
            break
        leading_zeros += 1

    num = int.from_bytes(data, "big")
    encoded = ""
    while num > 0:
        num, rem = divmod(num, 58)
        encoded = BASE58_ALPHABET[rem] + encoded
    return "1" * leading_zeros + encoded


def b58decode(text: str) -> bytes:
    leading_ones = len(text) - len(text.lstrip("1"))

    num = 0
    for char in text:
        try:
            num = num * 58 + _INDEX[char]
        except KeyError as exc:
            raise ValueError(f"invalid base58 character: {char!r}") from exc

    body = num.to_bytes((num.bit_length() + 7) // 8, "big") if num else b""
    return b"\x00" * leading_ones + body
