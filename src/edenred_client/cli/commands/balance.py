"""
Balance command: sign in and print lunch and Virike balances.
"""

import logging

import httpx

from config.settings import load_settings

from ...client import EdenredClient
from ..output import handle_cli_error, render_balances

logger = logging.getLogger(__name__)


def cmd_balance(
    *,
    username: str | None = None,
    password: str | None = None,
    output_format: str | None = None,
    base_url: str | None = None,
    timeout: str | float | None = None,
    http_client: httpx.Client | None = None,
) -> None:
    """Fetch balances and print them in the requested format.

    All input is validated before any request is sent. Output is printed
    only once both balances are known.
    """
    command = "balance"
    try:
        settings = load_settings(
            username=username,
            password=password,
            output_format=output_format,
            base_url=base_url,
            timeout=timeout,
        )
        with EdenredClient(http_client=http_client, base_url=settings.base_url) as client:
            balances = client.fetch_balances(
                settings.username, settings.password, timeout=settings.timeout
            )

        print(render_balances(balances, settings.output_format))

    except Exception as exc:
        logger.debug(f"{command} failed", exc_info=True)
        handle_cli_error(exc, command=command)
