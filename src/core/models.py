"""
Data shapes exchanged with the Edenred API.

Credentials and sessions live only for a single invocation; nothing here is
written to disk.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any

BalanceValue = int | Decimal | float | str | None


class WalletType(Enum):
    """Wallet types the balance report knows about."""

    MAIN = "main"
    WELLNESS = "wellness"


@dataclass(frozen=True)
class Credentials:
    """Sign-in credentials"""

    username: str
    password: str = field(repr=False)

    def is_complete(self) -> bool:
        return bool(self.username) and bool(self.password)


@dataclass(frozen=True)
class Session:
    """Tokens issued by a successful sign-in.

    ``expires_in`` is the server's expiry hint in seconds. It is kept for
    reference only; a session is used for exactly one follow-up request.
    """

    session_token: str = field(repr=False)
    refresh_token: str = field(default="", repr=False)
    expires_in: int | None = None

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "Session":
        return cls(
            session_token=payload.get("sessionToken") or "",
            refresh_token=payload.get("refreshToken") or "",
            expires_in=_optional_int(payload.get("expiresIn")),
        )

    def cookies(self) -> dict[str, str]:
        """Token cookies for authenticated requests, skipping empty tokens."""
        cookies = {}
        if self.session_token:
            cookies["X-Access-Token"] = self.session_token
        if self.refresh_token:
            cookies["X-Access-Refresh-Token"] = self.refresh_token
        return cookies


@dataclass(frozen=True)
class BenefitWallet:
    """A single benefit wallet from the user-benefits endpoint."""

    wallet_type: str
    balance: BalanceValue = None
    card_type: str = ""
    card_status: str = ""
    mobile_available: bool = False
    mobile_payment_enabled: bool = False
    expects_renewed_card: str | None = None
    account_active: bool = False

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "BenefitWallet":
        return cls(
            wallet_type=payload.get("walletType") or "",
            balance=payload.get("balance"),
            card_type=payload.get("cardType") or "",
            card_status=payload.get("cardStatus") or "",
            mobile_available=bool(payload.get("mobileAvailable", False)),
            mobile_payment_enabled=bool(payload.get("mobilePaymentEnabled", False)),
            expects_renewed_card=payload.get("expectsRenewedCard"),
            account_active=bool(payload.get("accountActive", False)),
        )


@dataclass
class Balances:
    """Lunch and wellness (Virike) balances in euros."""

    lunch: float = 0.0
    virike: float = 0.0

    def to_dict(self) -> dict[str, float]:
        return {"lunch": self.lunch, "virike": self.virike}


def _optional_int(value: Any) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
