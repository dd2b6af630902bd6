"""
Edenred Client

Reads Edenred Finland benefit balances:
- Sign-in with username and password
- Lunch ("main") and Virike ("wellness") wallet lookup
- Cents/euros balance normalization
- CLI with text and JSON output
"""

from src.core.models import Balances, BenefitWallet, Credentials, Session, WalletType

from .client import EdenredClient

__all__ = [
    "EdenredClient",
    "Balances",
    "BenefitWallet",
    "Credentials",
    "Session",
    "WalletType",
]
