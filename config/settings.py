"""
Runtime settings - CLI flags with environment fallbacks.

Each option resolves as: explicit flag, then environment variable (a local
.env file is loaded first), then the built-in default.
"""

import logging
import os
import re
from dataclasses import dataclass

from dotenv import load_dotenv

from src.core.errors import UsageError

logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()

DEFAULT_BASE_URL = "https://api.myedenred.fi"
DEFAULT_TIMEOUT = 15.0
DEFAULT_OUTPUT = "text"
OUTPUT_FORMATS = ("text", "json")

USERNAME_ENV = "EDENRED_USERNAME"
PASSWORD_ENV = "EDENRED_PASSWORD"
OUTPUT_ENV = "EDENRED_OUTPUT"
BASE_URL_ENV = "EDENRED_BASE_URL"
TIMEOUT_ENV = "EDENRED_TIMEOUT"
VERBOSE_ENV = "EDENRED_VERBOSE"

_DURATION_RE = re.compile(r"^\s*(\d+(?:\.\d+)?|\.\d+)\s*(ms|s|m|h)?\s*$")
_UNIT_SECONDS = {"ms": 0.001, "s": 1.0, "m": 60.0, "h": 3600.0}


@dataclass
class Settings:
    """Resolved options for one invocation"""

    username: str
    password: str
    output_format: str = DEFAULT_OUTPUT
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT

    def __repr__(self):
        return (
            f"Settings(username='{self.username}', output_format='{self.output_format}', "
            f"base_url='{self.base_url}', timeout={self.timeout})"
        )


def parse_timeout(value: str | float | int) -> float:
    """
    Parse a timeout into seconds.

    Accepts plain seconds ("15", "2.5") or a number with a unit suffix
    ("500ms", "15s", "1m", "1h").

    Raises:
        UsageError: If the value is unparseable or not positive
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        seconds = float(value)
    else:
        match = _DURATION_RE.match(str(value))
        if not match:
            raise UsageError(f"invalid timeout {value!r}")
        number, unit = match.groups()
        seconds = float(number) * _UNIT_SECONDS[unit or "s"]

    if seconds <= 0:
        raise UsageError(f"timeout must be positive, got {value!r}")
    return seconds


def resolve_output_format(value: str | None) -> str:
    """Resolve and validate the output format (case-insensitive)."""
    output_format = (value or os.getenv(OUTPUT_ENV) or DEFAULT_OUTPUT).strip().lower()
    if output_format not in OUTPUT_FORMATS:
        raise UsageError(f"unsupported format {value or output_format!r}")
    return output_format


def is_verbose(flag: bool = False) -> bool:
    if flag:
        return True
    return os.getenv(VERBOSE_ENV, "").lower() in ("1", "true", "yes")


def load_settings(
    *,
    username: str | None = None,
    password: str | None = None,
    output_format: str | None = None,
    base_url: str | None = None,
    timeout: str | float | None = None,
) -> Settings:
    """
    Resolve settings for a run.

    Validation happens here so that usage errors surface before any
    network work.

    Raises:
        UsageError: On missing credentials, unknown format or bad timeout
    """
    output_format = resolve_output_format(output_format)

    username = username or os.getenv(USERNAME_ENV, "")
    password = password or os.getenv(PASSWORD_ENV, "")
    if not username or not password:
        raise UsageError("username and password are required")

    if timeout is None:
        timeout = os.getenv(TIMEOUT_ENV) or DEFAULT_TIMEOUT
    timeout_seconds = parse_timeout(timeout)

    base_url = base_url or os.getenv(BASE_URL_ENV) or DEFAULT_BASE_URL

    settings = Settings(
        username=username,
        password=password,
        output_format=output_format,
        base_url=base_url,
        timeout=timeout_seconds,
    )
    logger.debug(f"Resolved {settings!r}")
    return settings
