#!/usr/bin/env python3
"""
Proportional Allocation Arithmetic

Exact rational arithmetic for splitting amounts by share fractions and for
distributing tax and tip in proportion to claimed value.

Amounts are integer cents going in. Intermediate results are Fractions of a
cent and are only rounded (half-to-even) when a caller asks for output.
"""

from collections.abc import Mapping
from decimal import Decimal
from fractions import Fraction
from typing import TypeVar

K = TypeVar("K")

# Tolerance for comparing summed share fractions against 1
SHARE_EPSILON = Fraction(1, 10**9)

ONE = Fraction(1)
ZERO = Fraction(0)


def to_share(value: Fraction | int | float | Decimal | str) -> Fraction:
    """
    Convert a caller-supplied share into an exact Fraction.

    Floats are converted through their shortest repr so that 0.1 becomes
    1/10 rather than the nearest binary double.

    Args:
        value: Share as Fraction, int, float, Decimal or a string such as
            "0.5" or "2/3"

    Returns:
        Exact Fraction

    Raises:
        ValueError: If the value cannot be interpreted as a finite number
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a share fraction: {value!r}")
    if isinstance(value, Fraction):
        return value
    try:
        if isinstance(value, float):
            return Fraction(repr(value))
        if isinstance(value, str):
            return Fraction(value.strip())
        return Fraction(value)
    except (ValueError, ZeroDivisionError, TypeError, OverflowError) as e:
        raise ValueError(f"Not a share fraction: {value!r}") from e


def is_valid_share(share: Fraction) -> bool:
    """Check that a share lies in the half-open interval (0, 1]."""
    return ZERO < share <= ONE


def exceeds_whole(total_share: Fraction) -> bool:
    """Check whether summed shares go past 1 by more than the tolerance."""
    return total_share > ONE + SHARE_EPSILON


def share_of(amount_cents: int, share: Fraction) -> Fraction:
    """
    Portion of an amount owned by a share.

    Example:
        share_of(3000, Fraction(2, 3)) -> Fraction(2000, 1)
    """
    return amount_cents * share


def prorate(amount_cents: int | Fraction, weight: Fraction, total_weight: Fraction) -> Fraction:
    """
    Exact proportional part of an amount.

    Args:
        amount_cents: Amount being distributed (e.g. tax in cents)
        weight: This recipient's weight (e.g. their claimed subtotal)
        total_weight: Sum of all recipients' weights

    Returns:
        amount * weight / total_weight, or zero when total_weight is zero
    """
    if total_weight == 0:
        return ZERO
    return Fraction(amount_cents) * weight / total_weight


def allocate_proportionally(amount_cents: int, weights: Mapping[K, Fraction]) -> dict[K, Fraction]:
    """
    Distribute an amount across recipients in proportion to their weights.

    Every recipient gets an exact Fraction; the parts always sum to the full
    amount unless all weights are zero, in which case every part is zero and
    the amount is left unallocated.

    Args:
        amount_cents: Amount to distribute in cents
        weights: Mapping of recipient to weight

    Returns:
        Mapping of recipient to exact allocated cents, in the input order
    """
    total_weight = sum(weights.values(), ZERO)
    return {key: prorate(amount_cents, weight, total_weight) for key, weight in weights.items()}


def round_cents(amount: Fraction | int) -> int:
    """
    Round an exact amount of cents to a whole cent, half to even.

    Examples:
        round_cents(Fraction(5, 2)) -> 2
        round_cents(Fraction(7, 2)) -> 4
        round_cents(Fraction(2000, 3)) -> 667
    """
    return round(Fraction(amount))


def format_share(share: Fraction) -> str:
    """Render a share as "n/d" (or "n" for whole numbers) for storage."""
    return str(share)
