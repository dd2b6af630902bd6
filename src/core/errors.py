"""Custom error types for balance tooling."""

import copy


class BalanceError(Exception):
    """Base error for balance tooling."""

    def with_prefix(self, prefix: str) -> "BalanceError":
        """Return a copy of this error with a stage prefix on its message.

        The copy keeps the concrete error type and its attributes, so an
        authentication failure stays distinguishable from a transport failure.
        """
        wrapped = copy.copy(self)
        wrapped.args = (f"{prefix}: {self}",)
        return wrapped


class UsageError(BalanceError):
    """Missing or invalid command-line input."""


class AuthenticationError(BalanceError):
    """Sign-in rejected or malformed."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        error_code: str | None = None,
        field_name: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code
        self.field_name = field_name


class FetchError(BalanceError):
    """Benefits request failed."""

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ParseError(BalanceError):
    """Balance field could not be parsed."""

    def __init__(self, message: str, *, wallet_type: str | None = None):
        super().__init__(message)
        self.wallet_type = wallet_type


class TransportError(BalanceError):
    """Network failure or deadline expiry."""
