"""A Groth16 proof packed into a single 256-byte ABI-encoded value."""

from __future__ import annotations

import json
from dataclasses import dataclass

from semaphore.protocol import Proof
from semaphore.util import bytes_from_hex, bytes_to_hex, deserialize_bytes, serialize_bytes

_SIZE = 256
_WORD = 32


@dataclass(frozen=True)
class PackedProof:
    """A proof as eight ABI-encoded 256-bit words, easier to transport than
    nested arrays."""

    data: bytes

    def __post_init__(self) -> None:
        raw = bytes(self.data)
        if len(raw) != _SIZE:
            raise ValueError(f"a packed proof holds exactly {_SIZE} bytes, got {len(raw)}")
        object.__setattr__(self, "data", raw)

    @classmethod
    def from_proof(cls, proof: Proof) -> PackedProof:
        """Pack a proof as the ABI encoding of a fixed array of eight uint256."""
        (a0, a1), ((b00, b01), (b10, b11)), (c0, c1) = proof.a, proof.b, proof.c
        words = (a0, a1, b00, b01, b10, b11, c0, c1)
        return cls(b"".join(word.to_bytes(_WORD, "big") for word in words))

    def to_proof(self) -> Proof:
        """Unpack the eight words back into a proof."""
        words = [
            int.from_bytes(self.data[offset : offset + _WORD], "big")
            for offset in range(0, _SIZE, _WORD)
        ]
        a0, a1, b00, b01, b10, b11, c0, c1 = words
        return Proof((a0, a1), ((b00, b01), (b10, b11)), (c0, c1))

    @classmethod
    def from_str(cls, text: str) -> PackedProof:
        """Parse a 256-byte hex string, with or without a ``0x`` prefix."""
        return cls(bytes_from_hex(text, _SIZE))

    def to_json(self) -> str:
        """Serialize as a JSON string of 0x-prefixed lower-case hex."""
        return json.dumps(serialize_bytes(self.data, human_readable=True))

    @classmethod
    def from_json(cls, text: str) -> PackedProof:
        """Deserialize from a JSON hex string."""
        return cls(deserialize_bytes(json.loads(text), _SIZE))

    def __bytes__(self) -> bytes:
        return self.data

    def __str__(self) -> str:
        return bytes_to_hex(self.data)