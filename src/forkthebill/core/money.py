#!/usr/bin/env python3
"""
Money Primitive Type

Immutable currency value wrapper that uses integer cents internally.
Prevents floating-point errors and provides type-safe currency operations.
"""

from dataclasses import dataclass
from decimal import Decimal

from .currency import MAX_CENTS, cents_to_dollars_str, parse_dollars_to_cents


@dataclass(frozen=True)
class Money:
    """
    Immutable money value in cents (USD).

    Item prices, tax and tip are all held as Money. Uses integer arithmetic
    throughout; fractional cents only appear transiently during allocation
    (see core.allocation) and never inside a Money.

    Examples:
        >>> price = Money.from_dollars("$12.34")
        >>> str(price)
        '$12.34'
        >>> price.to_cents()
        1234

        >>> total = price + Money.from_cents(66)
        >>> str(total)
        '$13.00'
    """

    cents: int

    @classmethod
    def zero(cls) -> "Money":
        """Create a zero amount."""
        return cls(cents=0)

    @classmethod
    def from_cents(cls, cents: int) -> "Money":
        """Create Money from cents."""
        return cls(cents=int(cents))

    @classmethod
    def from_dollars(cls, dollars: str | int | float | Decimal) -> "Money":
        """
        Parse from a dollar amount like '$123.45', 12, 12.5 or Decimal('12.50').

        Args:
            dollars: Dollar amount in any of the supported forms

        Returns:
            Money object

        Raises:
            ValueError: If the amount is not numeric, is out of range, or is
                finer than a cent
        """
        if isinstance(dollars, bool):
            raise ValueError(f"Not a monetary amount: {dollars!r}")
        if isinstance(dollars, int):
            if abs(dollars) * 100 > MAX_CENTS:
                raise ValueError(f"Monetary amount out of range: {dollars!r}")
            return cls(cents=dollars * 100)
        if isinstance(dollars, float):
            # repr() gives the shortest decimal that round-trips, so 0.1 stays 0.1
            return cls(cents=parse_dollars_to_cents(repr(dollars)))
        return cls(cents=parse_dollars_to_cents(str(dollars)))

    def to_cents(self) -> int:
        """Get value in cents."""
        return self.cents

    def to_dollars(self) -> str:
        """Get plain dollar string without the currency sign, e.g. '12.34'."""
        return cents_to_dollars_str(self.cents)

    def is_negative(self) -> bool:
        return self.cents < 0

    def __add__(self, other: "Money") -> "Money":
        """Add two Money objects."""
        return Money(cents=self.cents + other.cents)

    def __sub__(self, other: "Money") -> "Money":
        """Subtract two Money objects."""
        return Money(cents=self.cents - other.cents)

    def __mul__(self, scalar: int) -> "Money":
        """Multiply Money by integer scalar."""
        return Money(cents=self.cents * scalar)

    def __lt__(self, other: "Money") -> bool:
        return self.cents < other.cents

    def __le__(self, other: "Money") -> bool:
        return self.cents <= other.cents

    def __gt__(self, other: "Money") -> bool:
        return self.cents > other.cents

    def __ge__(self, other: "Money") -> bool:
        return self.cents >= other.cents

    def __str__(self) -> str:
        """Format as dollar string."""
        if self.cents < 0:
            return f"-${cents_to_dollars_str(-self.cents)}"
        return f"${cents_to_dollars_str(self.cents)}"

    def __repr__(self) -> str:
        return f"Money(cents={self.cents})"
