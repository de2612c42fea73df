"""
Teller Error Taxonomy

Two distinct business error kinds so callers can tell user error
(bad identity, bad amount) apart from a business-rule violation
(not enough money). I/O errors from ledger destinations are not wrapped.
"""

from decimal import Decimal
from typing import Optional


class AtmError(Exception):
    """Base class for errors raised by the teller engine"""


class InvalidArgument(AtmError, ValueError):
    """
    Raised for unknown or duplicate identities, malformed identities and
    names, and amounts that are not strictly positive.
    """


class InsufficientFunds(AtmError, RuntimeError):
    """Raised when a withdrawal exceeds the current balance"""

    def __init__(self, message: str, requested: Optional[Decimal] = None,
                 available: Optional[Decimal] = None):
        super().__init__(message)
        self.requested = requested
        self.available = available
