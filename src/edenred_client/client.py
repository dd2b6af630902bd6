"""
Edenred Finland API client.

Performs the two calls needed to read benefit balances:
- Sign-in with username and password
- User-benefits lookup with the issued session tokens

Each call to fetch_balances() is a cold, one-shot session: tokens are never
cached, refreshed or retried.
"""

import logging
import time
from decimal import Decimal
from typing import Any

import httpx

from config.settings import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from src.core.balance_service import build_balances
from src.core.errors import (
    AuthenticationError,
    BalanceError,
    FetchError,
    TransportError,
    UsageError,
)
from src.core.models import Balances, BenefitWallet, Credentials, Session

logger = logging.getLogger(__name__)

SIGNIN_PATH = "/signin"
USER_BENEFITS_PATH = "/users/me/user-benefits"

# Bytes of an error response body quoted in error messages
BODY_EXCERPT_LIMIT = 512


class EdenredClient:
    """
    Client for the Edenred Finland benefits API.

    Usage:
        from src.edenred_client import EdenredClient

        with EdenredClient() as client:
            balances = client.fetch_balances("user@example.com", "secret", timeout=15)
            print(f"Lunch: {balances.lunch:.2f}")
    """

    def __init__(self, http_client: httpx.Client | None = None, base_url: str | None = None):
        """
        Initialize client.

        Args:
            http_client: Optional httpx.Client; one with a default timeout is
                created (and owned) when omitted
            base_url: API root, defaults to the production endpoint
        """
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.Client(timeout=DEFAULT_TIMEOUT)
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")

    def close(self) -> None:
        if self._owns_http_client:
            self._http.close()

    def __enter__(self) -> "EdenredClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def fetch_balances(
        self, username: str, password: str, timeout: float | None = None
    ) -> Balances:
        """
        Sign in and return lunch and Virike balances.

        Args:
            username: Edenred username
            password: Edenred password
            timeout: Seconds allowed for the whole operation (both requests)

        Returns:
            Balances with both amounts in euros

        Raises:
            UsageError: Missing credentials (no request is sent)
            AuthenticationError: Sign-in rejected ("signin failed: ...")
            FetchError: Benefits request failed ("fetching balances failed: ...")
            ParseError: A balance could not be parsed ("parse <type> balance: ...")
            TransportError: Network failure or deadline expiry
        """
        credentials = Credentials(username, password)
        if not credentials.is_complete():
            raise UsageError("username and password are required")

        deadline = time.monotonic() + timeout if timeout is not None else None

        try:
            session = self.sign_in(credentials, deadline=deadline)
        except BalanceError as exc:
            raise exc.with_prefix("signin failed") from exc

        try:
            wallets = self.get_user_benefits(session, deadline=deadline)
        except BalanceError as exc:
            raise exc.with_prefix("fetching balances failed") from exc

        return build_balances(wallets)

    def sign_in(self, credentials: Credentials, deadline: float | None = None) -> Session:
        """
        Exchange credentials for session tokens.

        The provider rejects payloads without a reCaptchaToken field, so an
        empty one is always sent.

        Raises:
            AuthenticationError: Non-200 status, error payload or empty token
            TransportError: Network failure or deadline expiry
        """
        payload = {
            "username": credentials.username,
            "password": credentials.password,
            "reCaptchaToken": "",
        }

        logger.debug(f"Signing in at {self.base_url}{SIGNIN_PATH}")
        response = self._send(
            "POST",
            SIGNIN_PATH,
            deadline=deadline,
            json=payload,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
        )

        if response.status_code != 200:
            raise AuthenticationError(
                f"unexpected status {response.status_code}: {_body_excerpt(response)}",
                status_code=response.status_code,
            )

        try:
            result = response.json()
        except ValueError as exc:
            raise AuthenticationError(
                f"decode response: {exc}", status_code=response.status_code
            ) from exc

        if not isinstance(result, dict):
            raise AuthenticationError("decode response: expected a JSON object")

        session = Session.from_api(result)
        if not session.session_token:
            if result.get("error"):
                raise AuthenticationError(
                    str(result["error"]),
                    status_code=response.status_code,
                    error_code=result.get("errorCode") or None,
                    field_name=result.get("fieldName") or None,
                )
            raise AuthenticationError("empty session token in response")

        logger.info("Signed in to Edenred")
        return session

    def get_user_benefits(
        self, session: Session, deadline: float | None = None
    ) -> list[BenefitWallet]:
        """
        Get the user's benefit wallets.

        Tokens travel as X-Access-Token / X-Access-Refresh-Token cookies, not
        as an Authorization header; that is what the API accepts.

        Raises:
            FetchError: Non-200 status or undecodable body
            TransportError: Network failure or deadline expiry
        """
        headers = {"Accept": "application/json"}
        cookies = session.cookies()
        if cookies:
            headers["Cookie"] = "; ".join(f"{name}={value}" for name, value in cookies.items())

        logger.debug(f"Fetching benefits from {self.base_url}{USER_BENEFITS_PATH}")
        response = self._send("GET", USER_BENEFITS_PATH, deadline=deadline, headers=headers)

        if response.status_code != 200:
            raise FetchError(
                f"unexpected status {response.status_code}: {_body_excerpt(response)}",
                status_code=response.status_code,
            )

        try:
            # Decimals keep "12.34" apart from "1234" for balance normalization
            result = response.json(parse_float=Decimal)
        except ValueError as exc:
            raise FetchError(f"decode response: {exc}") from exc

        benefits = _extract_benefits(result)
        logger.info(f"Fetched {len(benefits)} benefit wallets")
        return [BenefitWallet.from_api(item) for item in benefits]

    def _send(
        self, method: str, path: str, *, deadline: float | None, **kwargs: Any
    ) -> httpx.Response:
        """
        Send a request bounded by the remaining time before the deadline.

        httpx timeouts apply per connect/read/write step, so the body is
        streamed and the deadline is checked after every chunk. A response
        that is still arriving when the deadline passes is a TransportError.
        """
        if deadline is not None:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise TransportError("deadline exceeded")
            kwargs["timeout"] = remaining

        try:
            with self._http.stream(method, f"{self.base_url}{path}", **kwargs) as response:
                chunks = []
                for chunk in response.iter_raw():
                    chunks.append(chunk)
                    _check_deadline(deadline)
                _check_deadline(deadline)
                # Raw bytes: the rebuilt response applies Content-Encoding once
                return httpx.Response(
                    response.status_code,
                    headers=response.headers,
                    content=b"".join(chunks),
                    request=response.request,
                )
        except httpx.TimeoutException as exc:
            raise TransportError(f"request timed out: {exc}") from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"execute request: {exc}") from exc


def _check_deadline(deadline: float | None) -> None:
    if deadline is not None and time.monotonic() >= deadline:
        raise TransportError("deadline exceeded")


def _extract_benefits(result: Any) -> list[dict[str, Any]]:
    if isinstance(result, dict):
        benefits = result.get("benefits") or []
    else:
        benefits = result

    if not isinstance(benefits, list) or not all(isinstance(item, dict) for item in benefits):
        raise FetchError("decode response: expected a list of benefit objects")
    return benefits


def _body_excerpt(response: httpx.Response) -> str:
    return response.content[:BODY_EXCERPT_LIMIT].decode("utf-8", errors="replace").strip()
