"""A 256-bit hash value container with hex and JSON conversions."""

from __future__ import annotations

import json
from dataclasses import dataclass, field

from semaphore.util import bytes_from_hex, bytes_to_hex, deserialize_bytes

_SIZE = 32


@dataclass(frozen=True)
class Hash:
    """Container for 256-bit hash values, stored big-endian."""

    data: bytes = field(default=bytes(_SIZE))

    def __post_init__(self) -> None:
        raw = bytes(self.data)
        if len(raw) != _SIZE:
            raise ValueError(f"a hash holds exactly {_SIZE} bytes, got {len(raw)}")
        object.__setattr__(self, "data", raw)

    @classmethod
    def from_bytes_be(cls, data: bytes) -> Hash:
        """Build a hash from the first 32 bytes of ``data``."""
        raw = bytes(data)
        if len(raw) < _SIZE:
            raise ValueError(f"need at least {_SIZE} bytes, got {len(raw)}")
        return cls(raw[:_SIZE])

    @classmethod
    def from_int(cls, value: int) -> Hash:
        """Build a hash from an unsigned 256-bit integer."""
        if not 0 <= value < 1 << 256:
            raise ValueError("value does not fit in 256 unsigned bits")
        return cls(value.to_bytes(_SIZE, "big"))

    @classmethod
    def from_str(cls, text: str) -> Hash:
        """Parse a 32-byte hex string, with or without a ``0x`` prefix."""
        return cls(bytes_from_hex(text, _SIZE))

    def as_bytes_be(self) -> bytes:
        return self.data

    def to_int(self) -> int:
        return int.from_bytes(self.data, "big")

    def __int__(self) -> int:
        return self.to_int()

    def to_json(self) -> str:
        """Serialize as a JSON string of 0x-prefixed lower-case hex."""
        return json.dumps(str(self))

    @classmethod
    def from_json(cls, text: str) -> Hash:
        """Deserialize from a JSON hex string."""
        return cls(deserialize_bytes(json.loads(text), _SIZE))

    def __str__(self) -> str:
        return bytes_to_hex(self.data)

    def __repr__(self) -> str:
        return f"Field({self})"