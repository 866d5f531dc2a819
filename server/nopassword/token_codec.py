"""Stateless, time-limited login tokens bound to a user identifier.

A token is the base-62 form of an encrypted issuance timestamp. The key is
derived from the shared secret and the username, so a token only decrypts to
a sensible timestamp for the user it was issued to.
"""

from __future__ import annotations

import asyncio
import logging
import struct
import time
from dataclasses import dataclass, field

from nopassword import base62
from nopassword.crypto import (
    BLOCK_SIZE,
    DEFAULT_ITERATIONS,
    ZERO_IV,
    decrypt_block,
    derive_key,
    encode_text,
    encrypt_block,
)
from nopassword.errors import ArgumentError, ConfigError, FormatError

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOKEN_AGE_MS = 15 * 60 * 1000
UINT32_CAPACITY = 2**32
MAX_TIMESTAMP = 2**64
# base62 of 2**64 - 1; eight zero bytes encode to only eight digits.
MAX_TOKEN_LENGTH = 11


@dataclass(frozen=True)
class CodecConfig:
    secret: bytes = field(repr=False)
    max_token_age_ms: int = DEFAULT_MAX_TOKEN_AGE_MS
    iterations: int = DEFAULT_ITERATIONS


def configure(
    secret: bytes | str | None,
    max_token_age_ms: int = DEFAULT_MAX_TOKEN_AGE_MS,
    *,
    iterations: int = DEFAULT_ITERATIONS,
) -> CodecConfig:
    """Validate the shared secret and window and freeze them into a ``CodecConfig``.

    Anyone holding ``secret`` can mint a valid token for any user, so it
    should be long enough to resist brute force.
    """
    if secret is None:
        raise ConfigError("A secret is required")
    if not isinstance(secret, (str, bytes, bytearray)):
        raise ArgumentError(f"Secret must be bytes or str, got {type(secret).__name__}")
    if not secret:
        raise ConfigError("A secret is required")
    if isinstance(secret, str):
        secret = encode_text(secret)

    if not _is_int(max_token_age_ms) or max_token_age_ms <= 0:
        raise ConfigError("max_token_age_ms must be a positive integer")
    if not _is_int(iterations) or iterations <= 0:
        raise ConfigError("iterations must be a positive integer")

    return CodecConfig(secret=bytes(secret), max_token_age_ms=max_token_age_ms, iterations=iterations)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def current_time_ms() -> int:
    return time.time_ns() // 1_000_000


def _check_username(username: object) -> None:
    if not isinstance(username, str):
        raise ArgumentError("username must be a string")
    if not username:
        raise ConfigError("An identifier for the user is required")


def _check_now(now_ms: int | None) -> int:
    if now_ms is None:
        return current_time_ms()
    if not _is_int(now_ms):
        raise ArgumentError("now_ms must be an integer number of milliseconds")
    return now_ms


def create_token(config: CodecConfig, username: str, now_ms: int | None = None) -> str:
    _check_username(username)
    now_ms = _check_now(now_ms)
    if not 0 <= now_ms < MAX_TIMESTAMP:
        raise ArgumentError("now_ms must fit in an unsigned 64-bit integer")

    key = derive_key(config.secret, username, config.iterations)
    buffer = struct.pack(">II", now_ms // UINT32_CAPACITY, now_ms % UINT32_CAPACITY)
    token = base62.encode(encrypt_block(key, ZERO_IV, buffer))

    logger.debug("Issued token with timestamp %d", now_ms)
    return token


def read_timestamp(config: CodecConfig, token: str, username: str) -> int:
    """Recover the issuance timestamp from ``token``.

    Garbled tokens yield ``0`` instead of raising. A forged or tampered token
    decrypts to an arbitrary timestamp which will almost surely fall outside
    the validity window.
    """
    if not isinstance(token, str):
        raise ArgumentError("token must be a string")
    _check_username(username)

    if len(token) > MAX_TOKEN_LENGTH:
        logger.debug("Rejecting token longer than %d characters", MAX_TOKEN_LENGTH)
        return 0

    key = derive_key(config.secret, username, config.iterations)
    try:
        encrypted = base62.decode(token)
    except FormatError:
        logger.debug("Rejecting token that is not base62")
        return 0
    if len(encrypted) != BLOCK_SIZE:
        logger.debug("Rejecting token with a %d-byte payload", len(encrypted))
        return 0

    high, low = struct.unpack(">II", decrypt_block(key, ZERO_IV, encrypted))
    return high * UINT32_CAPACITY + low


def is_valid(config: CodecConfig, token: str, username: str, now_ms: int | None = None) -> bool:
    """Return True when ``token`` was issued for ``username`` within the window.

    The window is open on both ends: a token timestamped at or after
    ``now_ms``, or exactly ``max_token_age_ms`` ago, is rejected.
    """
    now_ms = _check_now(now_ms)
    timestamp = read_timestamp(config, token, username)

    age = now_ms - timestamp
    valid = 0 < age < config.max_token_age_ms
    if not valid:
        logger.debug("Rejecting token outside the validity window")
    return valid


async def acreate_token(config: CodecConfig, username: str, now_ms: int | None = None) -> str:
    return await asyncio.to_thread(create_token, config, username, now_ms)


async def ais_valid(config: CodecConfig, token: str, username: str, now_ms: int | None = None) -> bool:
    return await asyncio.to_thread(is_valid, config, token, username, now_ms)
