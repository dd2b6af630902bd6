"""CLI command modules."""

from .balance import cmd_balance

__all__ = ["cmd_balance"]
