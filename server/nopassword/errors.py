from __future__ import annotations


class TokenError(Exception):
    pass


class ConfigError(TokenError, ValueError):
    """Missing secret or username, or an unusable max age / iteration count."""


class ArgumentError(TokenError, TypeError):
    """An argument of the wrong type (or a timestamp outside the 64-bit range)."""


class FormatError(TokenError, ValueError):
    """Text that is not valid base-62."""
