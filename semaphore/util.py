"""Hashing and hex helpers shared by the hash and proof containers."""

from __future__ import annotations

import re

from Crypto.Hash import keccak

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]*")


class HexError(ValueError):
    """Raised when a hex string or byte value cannot be decoded."""


def keccak256(data: bytes) -> bytes:
    """Return the 32-byte Keccak-256 digest of ``data``."""
    return keccak.new(digest_bits=256, data=bytes(data)).digest()


def bytes_to_hex(data: bytes) -> str:
    """Render bytes as a ``0x``-prefixed lower-case hex string."""
    return "0x" + bytes(data).hex()


def _trim_hex_prefix(text: str) -> str:
    if text[:2] in ("0x", "0X"):
        return text[2:]
    return text


def bytes_from_hex(text: str, size: int) -> bytes:
    """Decode a hex string of exactly ``size`` bytes.

    The string may be upper, lower or mixed case and may carry a ``0x``
    or ``0X`` prefix.
    """
    digits = _trim_hex_prefix(text)
    if len(digits) % 2 != 0:
        raise HexError("odd number of digits")
    if len(digits) // 2 != size:
        raise HexError("invalid string length")
    if not _HEX_DIGITS.fullmatch(digits):
        bad = next(ch for ch in digits if ch not in "0123456789abcdefABCDEF")
        raise HexError(f"invalid character {bad!r}")
    return bytes.fromhex(digits)


def serialize_bytes(data: bytes, human_readable: bool = True) -> str | bytes:
    """Serialize bytes as a hex string for text formats, or as raw bytes."""
    if human_readable:
        return bytes_to_hex(data)
    return bytes(data)


def deserialize_bytes(value: str | bytes | bytearray | memoryview, size: int) -> bytes:
    """Turn a hex string or raw bytes back into exactly ``size`` bytes."""
    if isinstance(value, str):
        try:
            return bytes_from_hex(value, size)
        except HexError as exc:
            raise HexError(f"Error in hex: {exc}") from exc
    if isinstance(value, (bytes, bytearray, memoryview)):
        raw = bytes(value)
        if len(raw) != size:
            raise HexError(f"invalid length {len(raw)}, expected {size} bytes of binary data")
        return raw
    raise TypeError(f"expected a {size} byte hex string or bytes, got {type(value).__name__}")