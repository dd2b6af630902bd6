"""
Output formatting utilities for CLI.

Provides:
- Text and JSON balance renderers
- Centralized error handling with exit codes
"""

import json
import sys

from rich.console import Console
from rich.text import Text

from src.core.errors import (
    AuthenticationError,
    BalanceError,
    FetchError,
    ParseError,
    TransportError,
    UsageError,
)
from src.core.models import Balances

# Console.file follows sys.stderr at print time
error_console = Console(stderr=True, highlight=False)

EXIT_USAGE = 1
EXIT_API = 2


def format_balances_text(balances: Balances) -> str:
    """Format balances as two fixed lines."""
    return f"Lunch: {balances.lunch:.2f}\nVirike: {balances.virike:.2f}"


def format_balances_json(balances: Balances) -> str:
    """Format balances as a single-line JSON object."""
    return json.dumps(balances.to_dict())


def render_balances(balances: Balances, output_format: str) -> str:
    if output_format == "json":
        return format_balances_json(balances)
    if output_format == "text":
        return format_balances_text(balances)
    raise UsageError(f"unsupported format {output_format!r}")


def print_error(label: str, message: str) -> None:
    """Print an error line to stderr."""
    error_console.print(Text.assemble((f"{label}: ", "bold red"), message), soft_wrap=True)


def handle_cli_error(error: Exception, *, command: str) -> None:
    """Centralized error handling for CLI commands.

    Maps exceptions to exit codes:
    - 1: Usage and parse errors, unexpected errors
    - 2: Authentication, fetch and transport errors
    """
    if isinstance(error, UsageError):
        print_error("Usage error", str(error))
        sys.exit(EXIT_USAGE)

    elif isinstance(error, AuthenticationError):
        message = str(error)
        if error.status_code == 401:
            message += " (check username and password)"
        print_error("Authentication error", message)
        sys.exit(EXIT_API)

    elif isinstance(error, (FetchError, TransportError)):
        print_error("API error", str(error))
        sys.exit(EXIT_API)

    elif isinstance(error, ParseError):
        print_error("Parse error", str(error))
        sys.exit(EXIT_USAGE)

    elif isinstance(error, BalanceError):
        print_error("Error", str(error))
        sys.exit(EXIT_USAGE)

    else:
        print_error("Unexpected error", f"{command}: {error}")
        sys.exit(EXIT_USAGE)
