import pytest

from semaphore.util import (
    HexError,
    bytes_from_hex,
    bytes_to_hex,
    deserialize_bytes,
    keccak256,
    serialize_bytes,
)

SIXTEEN = bytes(range(1, 17))


def test_serialize_bytes_hex():
    assert serialize_bytes(SIXTEEN, True) == "0x0102030405060708090a0b0c0d0e0f10"


def test_serialize_bytes_bin():
    assert serialize_bytes(SIXTEEN, False) == bytes(
        [1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15, 16]
    )


def test_keccak_of_empty_input():
    assert keccak256(b"").hex() == (
        "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
    )


def test_keccak_digest_length_and_determinism():
    assert len(keccak256(b"abc")) == 32
    assert keccak256(b"abc") == keccak256(bytearray(b"abc"))
    assert keccak256(b"abc") != keccak256(b"abd")


def test_bytes_to_hex_prefix():
    assert bytes_to_hex(SIXTEEN) == "0x0102030405060708090a0b0c0d0e0f10"


@pytest.mark.parametrize(
    "text",
    [
        "0x0102030405060708090a0b0c0d0e0f10",
        "0X0102030405060708090A0B0C0D0E0F10",
        "0102030405060708090a0B0c0D0e0F10",
    ],
)
def test_bytes_from_hex_accepts_prefixes_and_case(text):
    assert bytes_from_hex(text, 16) == SIXTEEN


def test_hex_round_trip():
    assert bytes_from_hex(bytes_to_hex(SIXTEEN), 16) == SIXTEEN


def test_bytes_from_hex_odd_length():
    with pytest.raises(HexError):
        bytes_from_hex("0x123", 2)


def test_bytes_from_hex_wrong_length():
    with pytest.raises(HexError):
        bytes_from_hex("0x0102", 16)


def test_bytes_from_hex_invalid_character():
    with pytest.raises(HexError):
        bytes_from_hex("0x01zz", 2)


def test_bytes_from_hex_rejects_whitespace():
    with pytest.raises(HexError):
        bytes_from_hex("01 2", 2)


def test_deserialize_bytes_from_string():
    assert deserialize_bytes("0x0102030405060708090a0b0c0d0e0f10", 16) == SIXTEEN


def test_deserialize_bytes_from_raw():
    assert deserialize_bytes(bytearray(SIXTEEN), 16) == SIXTEEN


def test_deserialize_bytes_wrong_raw_length():
    with pytest.raises(HexError):
        deserialize_bytes(SIXTEEN[:15], 16)


def test_deserialize_bytes_bad_hex_message():
    with pytest.raises(HexError, match="Error in hex"):
        deserialize_bytes("0x01", 16)


def test_deserialize_bytes_wrong_type():
    with pytest.raises(TypeError):
        deserialize_bytes(12, 16)


def test_serialize_deserialize_round_trip_both_forms():
    for human in (True, False):
        assert deserialize_bytes(serialize_bytes(SIXTEEN, human), 16) == SIXTEEN