"""
Currency Module

Handles ISO 4217 currency codes and Decimal precision for every amount the
teller engine touches. NEVER uses float for monetary values: floats coming
from callers are converted through their string form first.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, getcontext
from dataclasses import dataclass
from enum import Enum
from typing import Union
import re

from .errors import InvalidArgument

# Set global decimal context for financial precision
getcontext().prec = 28

AmountLike = Union[Decimal, int, float, str]


class Currency(Enum):
    """ISO 4217 Currency Codes with precision and display symbol"""
    USD = ("USD", 2, "$")  # US Dollar, 2 decimal places
    CAD = ("CAD", 2, "$")  # Canadian Dollar, 2 decimal places
    AUD = ("AUD", 2, "$")  # Australian Dollar, 2 decimal places

    def __init__(self, code: str, precision: int, symbol: str):
        self.code = code
        self.precision = precision
        self.symbol = symbol

    @classmethod
    def from_code(cls, code: str) -> 'Currency':
        """Look up a currency by its ISO code"""
        for currency in cls:
            if currency.code == code.upper():
                return currency
        raise InvalidArgument(f"Unsupported currency code: {code}")


@dataclass(frozen=True)
class Money:
    """
    Immutable money representation with currency and proper precision.
    """
    amount: Decimal
    currency: Currency = Currency.USD

    def __post_init__(self):
        # Round to currency precision
        rounded = validate_decimal_precision(to_decimal(self.amount), self.currency)
        object.__setattr__(self, 'amount', rounded)

    def __add__(self, other: 'Money') -> 'Money':
        if self.currency != other.currency:
            raise ValueError(f"Cannot add {self.currency.code} and {other.currency.code}")
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: 'Money') -> 'Money':
        if self.currency != other.currency:
            raise ValueError(f"Cannot subtract {other.currency.code} from {self.currency.code}")
        return Money(self.amount - other.amount, self.currency)

    def __gt__(self, other: 'Money') -> bool:
        if self.currency != other.currency:
            raise ValueError(f"Cannot compare {self.currency.code} and {other.currency.code}")
        return self.amount > other.amount

    def is_zero(self) -> bool:
        """Check if amount is exactly zero"""
        return self.amount == Decimal('0')

    def is_positive(self) -> bool:
        """Check if amount is positive"""
        return self.amount > Decimal('0')

    def is_negative(self) -> bool:
        """Check if amount is negative"""
        return self.amount < Decimal('0')

    def to_string(self) -> str:
        """Format for ledger lines, e.g. ``$1234.50`` (no grouping)"""
        return f"{self.currency.symbol}{self.amount:.{self.currency.precision}f}"

    def __str__(self) -> str:
        return self.to_string()


def decimal_from_string(value: str) -> Decimal:
    """
    Safely convert string to Decimal, handling common formats

    Args:
        value: String representation of number, e.g. "$1,234.50"

    Returns:
        Decimal value

    Raises:
        InvalidArgument: If string cannot be converted to a valid Decimal
    """
    if not value or not isinstance(value, str):
        raise InvalidArgument("Amount must be a non-empty string")

    # Remove currency symbols and whitespace
    clean_value = re.sub(r'[^\d.,\-+]', '', value.strip())

    if ',' in clean_value and '.' in clean_value:
        # Both comma and dot - assume comma is thousands separator
        clean_value = clean_value.replace(',', '')
    elif ',' in clean_value and clean_value.count(',') == 1:
        parts = clean_value.split(',')
        if len(parts[1]) <= 2:  # Decimal separator
            clean_value = clean_value.replace(',', '.')
        else:  # Thousands separator
            clean_value = clean_value.replace(',', '')

    try:
        return Decimal(clean_value)
    except InvalidOperation:
        raise InvalidArgument(f"Cannot convert '{value}' to an amount") from None


def to_decimal(value: AmountLike) -> Decimal:
    """
    Coerce a caller-supplied amount into a finite Decimal

    Floats are converted through ``str`` so that ``300.30`` becomes
    ``Decimal('300.30')`` rather than its binary expansion.

    Raises:
        InvalidArgument: for bools, None, unsupported types, NaN or infinity
    """
    if isinstance(value, bool) or value is None:
        raise InvalidArgument(f"Amount must be numeric, got {value!r}")

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(str(value))
    elif isinstance(value, str):
        result = decimal_from_string(value)
    else:
        raise InvalidArgument(f"Amount must be numeric, got {type(value).__name__}")

    if not result.is_finite():
        raise InvalidArgument(f"Amount must be finite, got {value!r}")
    return result


def validate_decimal_precision(value: Decimal, currency: Currency) -> Decimal:
    """
    Round decimal to currency precision

    Args:
        value: Decimal to validate
        currency: Currency defining precision

    Returns:
        Properly rounded Decimal

    Raises:
        InvalidArgument: If the value has too many digits to hold at
            currency precision within the decimal context
    """
    try:
        return value.quantize(
            Decimal('0.1') ** currency.precision,
            rounding=ROUND_HALF_UP
        )
    except InvalidOperation:
        raise InvalidArgument(f"Amount out of range: {value}") from None
