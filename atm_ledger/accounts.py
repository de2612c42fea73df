"""
Account Management Module

Defines the (card number, PIN) identity key and the combined per-identity
account record. The record owns both the running balance and the ordered
transaction log, so the two can never drift apart.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Tuple

from .currency import Money
from .errors import InvalidArgument


CARD_NUMBER_MAX = 2 ** 64 - 1
PIN_MAX = 2 ** 32 - 1


def _validate_unsigned(name: str, value: int, upper: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0 or value > upper:
        raise InvalidArgument(f"{name} must be between 0 and {upper}")
    return value


@dataclass(frozen=True, order=True)
class CardIdentity:
    """
    Value-type composite key identifying an account.

    Two identities are equal iff both the card number and the PIN match.
    """
    card_number: int
    pin: int

    def __post_init__(self):
        _validate_unsigned("Card number", self.card_number, CARD_NUMBER_MAX)
        _validate_unsigned("PIN", self.pin, PIN_MAX)


@dataclass(frozen=True)
class AccountSnapshot:
    """Read-only view of an account handed to external callers"""
    owner_name: str
    balance: Decimal


@dataclass
class Account:
    """
    Account owned by the teller engine: holder name, balance and
    its append-only transaction log
    """
    owner_name: str
    balance: Money
    transactions: List[str] = field(default_factory=list)

    def __post_init__(self):
        if not isinstance(self.owner_name, str):
            raise InvalidArgument("Owner name must be a string")
        # A line break would forge extra header lines in the ledger export
        if "\n" in self.owner_name or "\r" in self.owner_name:
            raise InvalidArgument("Owner name must not contain line breaks")

    def apply(self, new_balance: Money, entry: str) -> None:
        """Set the new balance and append its log entry as one step"""
        self.balance = new_balance
        self.transactions.append(entry)

    def history(self) -> Tuple[str, ...]:
        """Transaction log in insertion order"""
        return tuple(self.transactions)

    def snapshot(self) -> AccountSnapshot:
        return AccountSnapshot(owner_name=self.owner_name, balance=self.balance.amount)
