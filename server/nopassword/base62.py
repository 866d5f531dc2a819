"""Base-62 text encoding of arbitrary byte strings.

Bytes are read as one big-endian unsigned integer. Leading zero bytes carry
no magnitude, so each one is written as a leading ``"0"`` digit instead; the
rest of the input always starts with a non-zero byte and never produces a
leading zero digit, which keeps ``decode`` an exact inverse.
"""

from __future__ import annotations

from nopassword.errors import FormatError

ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
BASE = len(ALPHABET)

_INDEX = {ch: i for i, ch in enumerate(ALPHABET)}
_ZERO = ALPHABET[0]


def encode(data: bytes) -> str:
    data = bytes(data)
    rest = data.lstrip(b"\x00")
    zeros = len(data) - len(rest)

    num = int.from_bytes(rest, "big")
    out = []
    while num:
        num, rem = divmod(num, BASE)
        out.append(ALPHABET[rem])
    return _ZERO * zeros + "".join(reversed(out))


def decode(text: str) -> bytes:
    if not isinstance(text, str):
        raise FormatError(f"Expected a base62 string, got {type(text).__name__}")

    rest = text.lstrip(_ZERO)
    zeros = len(text) - len(rest)

    num = 0
    for ch in rest:
        try:
            num = num * BASE + _INDEX[ch]
        except KeyError:
            raise FormatError(f"Invalid base62 character: {ch!r}") from None

    if not rest:
        return b"\x00" * zeros
    return b"\x00" * zeros + num.to_bytes((num.bit_length() + 7) // 8, "big")
