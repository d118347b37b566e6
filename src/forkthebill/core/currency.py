#!/usr/bin/env python3
"""
Currency Parsing and Formatting Utilities

All monetary values are handled as integer cents: 100 cents = $1.00.
Display uses dollar strings: "$12.34".

Key Principles:
- Never use floating-point arithmetic for currency calculations
- Parse with Decimal, store as integer cents
- Reject amounts finer than a cent instead of silently truncating them
"""

from decimal import Decimal, DecimalException, Inexact, localcontext

CENTS_PER_DOLLAR = 100

# Largest magnitude accepted for a single amount: $10 trillion, in cents.
# Keeps parsed values well inside exact Decimal precision and int conversion limits.
MAX_CENTS = 10**15
MAX_DOLLARS = Decimal(MAX_CENTS).scaleb(-2)


def cents_to_dollars_str(cents: int) -> str:
    """
    Convert cents to dollar string using pure integer arithmetic.

    Args:
        cents: Amount in cents

    Returns:
        Formatted dollar string

    Example:
        cents_to_dollars_str(4599) -> "45.99"
        cents_to_dollars_str(-5) -> "-0.05"
    """
    is_negative = cents < 0
    abs_cents = abs(int(cents))

    dollars = abs_cents // CENTS_PER_DOLLAR
    remainder = abs_cents % CENTS_PER_DOLLAR

    if is_negative:
        return f"-{dollars}.{remainder:02d}"
    return f"{dollars}.{remainder:02d}"


def parse_dollars_to_cents(dollars_str: str) -> int:
    """
    Parse a dollar string to integer cents.

    Args:
        dollars_str: String representation of dollar amount

    Returns:
        Amount in cents

    Raises:
        ValueError: If the string is empty, not numeric, not finite, larger
            than MAX_CENTS in magnitude, or has more than two decimal places

    Examples:
        parse_dollars_to_cents("12.34") -> 1234
        parse_dollars_to_cents("$12.34") -> 1234
        parse_dollars_to_cents("1,234.56") -> 123456
        parse_dollars_to_cents("12") -> 1200
        parse_dollars_to_cents("12.5") -> 1250
    """
    clean = dollars_str.replace("$", "").replace(",", "").strip()
    if not clean:
        raise ValueError("Empty monetary amount")

    try:
        amount = Decimal(clean)
    except DecimalException as e:
        raise ValueError(f"Not a monetary amount: {dollars_str!r}") from e

    if not amount.is_finite():
        raise ValueError(f"Not a finite monetary amount: {dollars_str!r}")

    if amount.copy_abs() > MAX_DOLLARS:
        raise ValueError(f"Monetary amount out of range: {dollars_str!r}")

    # Scaling must be exact; any rounding here means digits below a cent.
    with localcontext() as ctx:
        ctx.traps[Inexact] = True
        try:
            cents = amount.scaleb(2)
            is_whole = cents == cents.to_integral_value()
        except DecimalException as e:
            raise ValueError(f"Amount has sub-cent precision: {dollars_str!r}") from e
    if not is_whole:
        raise ValueError(f"Amount has sub-cent precision: {dollars_str!r}")

    return int(cents)


def format_cents(cents: int) -> str:
    """Format cents as dollar string with $ prefix."""
    if cents < 0:
        return f"-${cents_to_dollars_str(-cents)}"
    return f"${cents_to_dollars_str(cents)}"
