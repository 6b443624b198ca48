"""
Common Value Objects

Value objects used across multiple apps:
- Money: Represents monetary amounts with currency
- TimeWindow: Represents a half-open range of instants [start, end)
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from shared.domain.base import ValueObject

SUPPORTED_CURRENCIES = ('usd', 'eur', 'gbp')


@dataclass(frozen=True)
class Money(ValueObject):
    """
    Money value object

    Represents a monetary amount with currency.
    Immutable and supports arithmetic operations.
    """
    amount: Decimal
    currency: str = 'usd'

    def __post_init__(self):
        # Validation
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, 'amount', Decimal(str(self.amount)))
        if self.amount < 0:
            raise ValueError("Amount cannot be negative")
        if not self.currency:
            raise ValueError("Currency is required")
        object.__setattr__(self, 'currency', self.currency.lower())
        if self.currency not in SUPPORTED_CURRENCIES:
            raise ValueError(f"Unsupported currency: {self.currency}")

    @classmethod
    def from_minor_units(cls, cents: int, currency: str = 'usd') -> 'Money':
        """Build from the integer amount a payment provider reports"""
        return cls(Decimal(cents) / Decimal(100), currency)

    def to_minor_units(self) -> int:
        """Amount in cents, rounded half up"""
        return int((self.amount * 100).quantize(Decimal('1'), rounding=ROUND_HALF_UP))

    def __add__(self, other: 'Money') -> 'Money':
        """Add two money objects"""
        if not isinstance(other, Money):
            raise TypeError("Can only add Money to Money")
        if self.currency != other.currency:
            raise ValueError(f"Cannot add different currencies: {self.currency} and {other.currency}")
        return Money(self.amount + other.amount, self.currency)

    def __str__(self):
        return f"{self.amount:,.2f} {self.currency.upper()}"

    def __repr__(self):
        return f"Money({self.amount}, '{self.currency}')"


@dataclass(frozen=True)
class TimeWindow(ValueObject):
    """
    Time window value object

    Represents a range from start (inclusive) to end (exclusive).
    Used for resolved booking periods.
    """
    start: datetime
    end: datetime

    def __post_init__(self):
        # Validation
        if self.start >= self.end:
            raise ValueError(f"Start ({self.start}) must be before end ({self.end})")

    def __str__(self):
        return f"{self.start.isoformat()} - {self.end.isoformat()}"

    def __repr__(self):
        return f"TimeWindow({self.start!r}, {self.end!r})"
