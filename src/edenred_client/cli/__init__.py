"""
Edenred CLI - print lunch and Virike benefit balances.

Usage:
    edenred --username USER --password PASS [--format text|json]

Options fall back to EDENRED_* environment variables (or a .env file).
"""

import argparse
import logging
import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

import argcomplete

from config.settings import OUTPUT_FORMATS, is_verbose

from .commands import cmd_balance

try:
    __version__ = get_version("edenred-cli")
except PackageNotFoundError:
    __version__ = "0.0.0"


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="edenred",
        description="Show Edenred lunch and Virike balances",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment:
  EDENRED_USERNAME, EDENRED_PASSWORD, EDENRED_OUTPUT,
  EDENRED_BASE_URL, EDENRED_TIMEOUT, EDENRED_VERBOSE

Examples:
  edenred --username me@example.com --password secret
  edenred --format json
  edenred --timeout 30s --base-url http://127.0.0.1:8080
""",
    )
    parser.add_argument(
        "--version", "-V", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument("--username", help="Edenred username")
    parser.add_argument("--password", help="Edenred password")
    parser.add_argument(
        "--format",
        dest="output_format",
        metavar="{" + ",".join(OUTPUT_FORMATS) + "}",
        help="Output format (default: text)",
    )
    parser.add_argument("--base-url", help="Override API base URL (for testing)")
    parser.add_argument(
        "--timeout", help="Timeout for the whole operation, e.g. 15, 15s, 500ms (default: 15s)"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Log requests to stderr"
    )
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # httpx logs full request lines at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def main(args: list | None = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    argcomplete.autocomplete(parser)

    parsed = parser.parse_args(args)
    configure_logging(is_verbose(parsed.verbose))

    cmd_balance(
        username=parsed.username,
        password=parsed.password,
        output_format=parsed.output_format,
        base_url=parsed.base_url,
        timeout=parsed.timeout,
    )


if __name__ == "__main__":
    main()
