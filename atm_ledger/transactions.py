"""
Transaction Module

Cash transaction kinds and the human-readable log line each one records.
The line text is consumed verbatim by the ledger export.
"""

from enum import Enum

from .currency import Money


class TransactionType(Enum):
    """Types of teller transactions"""
    WITHDRAWAL = "withdrawal"  # Cash out, balance decreases
    DEPOSIT = "deposit"        # Cash in, balance increases

    @property
    def label(self) -> str:
        return self.value.capitalize()


def format_transaction(transaction_type: TransactionType, amount: Money,
                       updated_balance: Money) -> str:
    """
    Build the log line for a completed transaction

    Args:
        transaction_type: Withdrawal or deposit
        amount: Amount moved
        updated_balance: Balance after the transaction

    Returns:
        e.g. ``Withdrawal - Amount: $40.50, Updated Balance: $259.80``
    """
    return (
        f"{transaction_type.label} - Amount: {amount.to_string()}, "
        f"Updated Balance: {updated_balance.to_string()}"
    )
