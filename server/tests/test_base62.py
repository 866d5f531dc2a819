import pytest

from nopassword import base62
from nopassword.errors import FormatError


@pytest.mark.parametrize(
    "data",
    [
        b"",
        b"\x00",
        b"\x00" * 8,
        b"\x00\x00\x01",
        b"\x01",
        b"\xff" * 8,
        bytes(range(32)),
        bytes(range(255, 223, -1)),
    ],
)
def test_decode_inverts_encode(data: bytes) -> None:
    assert base62.decode(base62.encode(data)) == data


def test_all_zero_input_keeps_its_length() -> None:
    assert base62.encode(b"\x00" * 8) == "00000000"
    assert base62.decode("00000000") == b"\x00" * 8


def test_encode_uses_big_endian_integer_value() -> None:
    assert base62.encode(b"\x3d") == "z"
    assert base62.encode(b"\x3e") == "10"
    assert base62.encode(b"\x01\x00") == "48"


def test_eight_byte_payload_fits_in_eleven_digits() -> None:
    assert len(base62.encode(b"\xff" * 8)) == 11
    assert len(base62.encode(b"\x01" + b"\x00" * 7)) == 10


def test_alphabet_is_digits_then_upper_then_lower() -> None:
    assert base62.ALPHABET[:10] == "0123456789"
    assert base62.ALPHABET[10:36] == "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    assert base62.ALPHABET[36:] == "abcdefghijklmnopqrstuvwxyz"


@pytest.mark.parametrize("text", ["not-a-valid-base62-string!!", "abc def", "é", "00+"])
def test_decode_rejects_characters_outside_alphabet(text: str) -> None:
    with pytest.raises(FormatError):
        base62.decode(text)


def test_decode_rejects_non_strings() -> None:
    with pytest.raises(FormatError):
        base62.decode(b"abc")  # type: ignore[arg-type]
