"""Stateless, expiring no-password login tokens."""

from nopassword.errors import ArgumentError, ConfigError, FormatError, TokenError
from nopassword.token_codec import (
    CodecConfig,
    acreate_token,
    ais_valid,
    configure,
    create_token,
    is_valid,
    read_timestamp,
)

__all__ = [
    "ArgumentError",
    "CodecConfig",
    "ConfigError",
    "FormatError",
    "TokenError",
    "acreate_token",
    "ais_valid",
    "configure",
    "create_token",
    "is_valid",
    "read_timestamp",
]
