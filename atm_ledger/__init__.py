"""
ATM Ledger

In-memory automated-teller account engine with exact Decimal money,
per-account transaction logs and a fixed-format ledger export.
"""

from .accounts import Account, AccountSnapshot, CardIdentity
from .atm import Atm
from .errors import AtmError, InsufficientFunds, InvalidArgument

__version__ = "1.0.0"

__all__ = [
    "Account",
    "AccountSnapshot",
    "Atm",
    "AtmError",
    "CardIdentity",
    "InsufficientFunds",
    "InvalidArgument",
]
