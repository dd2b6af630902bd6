"""Balance normalization and wallet aggregation."""

import logging
import math
import re
from collections.abc import Iterable
from decimal import Decimal

from src.core.errors import ParseError
from src.core.models import Balances, BenefitWallet, WalletType

logger = logging.getLogger(__name__)

MINOR_UNITS_PER_MAJOR = 100

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def normalize_balance(wallet: BenefitWallet) -> float:
    """
    Convert a wallet's raw balance to euros.

    The API is inconsistent about units: a whole number is a count of cents,
    while a number with a fractional part is already in euros. Integers are
    tried first, so ``6850`` is 68.50 but ``12.34`` stays 12.34. An empty
    balance is zero. Numeric strings must use plain ASCII JSON number syntax.

    Raises:
        ParseError: If the balance is neither an integer nor a decimal number
    """
    raw = wallet.balance

    if raw is None or raw == "":
        return 0.0

    if isinstance(raw, bool):
        raise _invalid(wallet, f"invalid number {raw!r}")

    if isinstance(raw, str):
        text = raw.strip()
        if _INTEGER_RE.fullmatch(text):
            try:
                raw = int(text)
            except ValueError as exc:
                raise _invalid(wallet, f"invalid number {wallet.balance!r}") from exc
        elif _DECIMAL_RE.fullmatch(text):
            raw = Decimal(text)
        else:
            raise _invalid(wallet, f"invalid number {wallet.balance!r}")

    if isinstance(raw, int):
        try:
            return raw / MINOR_UNITS_PER_MAJOR
        except OverflowError as exc:
            raise _invalid(wallet, f"value out of range: {exc}") from exc

    if isinstance(raw, (Decimal, float)):
        value = float(raw)
        if not math.isfinite(value):
            raise _invalid(wallet, f"invalid number {wallet.balance!r}")
        return value

    raise _invalid(wallet, f"unsupported value {raw!r}")


def _invalid(wallet: BenefitWallet, detail: str) -> ParseError:
    return ParseError(
        f"parse {wallet.wallet_type} balance: {detail}", wallet_type=wallet.wallet_type
    )



def build_balances(wallets: Iterable[BenefitWallet]) -> Balances:
    """
    Fold a wallet list into lunch and Virike balances.

    Every wallet's balance is parsed, including wallets of unknown type, so a
    malformed response fails as a whole instead of yielding partial numbers.
    Unknown wallet types are otherwise ignored.
    """
    balances = Balances()

    for wallet in wallets:
        amount = normalize_balance(wallet)

        if wallet.wallet_type == WalletType.MAIN.value:
            balances.lunch = amount
        elif wallet.wallet_type == WalletType.WELLNESS.value:
            balances.virike = amount
        else:
            logger.debug(f"Ignoring wallet type {wallet.wallet_type!r}")

    return balances
