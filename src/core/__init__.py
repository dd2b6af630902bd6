"""Core balance services."""

from .errors import (
    AuthenticationError,
    BalanceError,
    FetchError,
    ParseError,
    TransportError,
    UsageError,
)

__all__ = [
    "AuthenticationError",
    "BalanceError",
    "FetchError",
    "ParseError",
    "TransportError",
    "UsageError",
]
