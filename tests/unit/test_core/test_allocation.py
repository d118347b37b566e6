#!/usr/bin/env python3
"""Tests for exact proportional allocation."""

from decimal import Decimal
from fractions import Fraction

import pytest

from forkthebill.core.allocation import (
    SHARE_EPSILON,
    allocate_proportionally,
    exceeds_whole,
    is_valid_share,
    prorate,
    round_cents,
    share_of,
    to_share,
)


class TestToShare:
    """Test share parsing."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (Fraction(1, 3), Fraction(1, 3)),
            (1, Fraction(1)),
            (0.5, Fraction(1, 2)),
            (0.1, Fraction(1, 10)),
            ("2/3", Fraction(2, 3)),
            (" 0.25 ", Fraction(1, 4)),
            (Decimal("0.75"), Fraction(3, 4)),
        ],
    )
    def test_accepted_forms(self, value, expected):
        assert to_share(value) == expected

    @pytest.mark.parametrize("value", ["half", "1/0", float("nan"), True, None])
    def test_rejected_forms(self, value):
        with pytest.raises(ValueError):
            to_share(value)


class TestShareBounds:
    """Test share range and tolerance checks."""

    def test_is_valid_share(self):
        assert is_valid_share(Fraction(1))
        assert is_valid_share(Fraction(1, 100))
        assert not is_valid_share(Fraction(0))
        assert not is_valid_share(Fraction(11, 10))

    def test_exceeds_whole_uses_tolerance(self):
        assert not exceeds_whole(Fraction(1))
        assert not exceeds_whole(1 + SHARE_EPSILON)
        assert exceeds_whole(1 + 2 * SHARE_EPSILON)
        assert exceeds_whole(Fraction(11, 10))


class TestProration:
    """Test exact proportional arithmetic."""

    def test_share_of(self):
        assert share_of(3000, Fraction(2, 3)) == 2000

    def test_prorate(self):
        assert prorate(300, Fraction(2000), Fraction(3000)) == 200
        assert prorate(100, Fraction(1), Fraction(3)) == Fraction(100, 3)

    def test_prorate_zero_total_weight(self):
        assert prorate(300, Fraction(0), Fraction(0)) == 0

    def test_allocate_proportionally_sums_exactly(self):
        parts = allocate_proportionally(100, {"a": Fraction(1), "b": Fraction(1), "c": Fraction(1)})
        assert list(parts) == ["a", "b", "c"]
        assert all(part == Fraction(100, 3) for part in parts.values())
        assert sum(parts.values()) == 100

    def test_allocate_proportionally_all_zero_weights(self):
        parts = allocate_proportionally(500, {"a": Fraction(0), "b": Fraction(0)})
        assert parts == {"a": 0, "b": 0}

    def test_allocate_proportionally_empty(self):
        assert allocate_proportionally(500, {}) == {}


class TestRoundCents:
    """Test round-half-to-even at the output boundary."""

    @pytest.mark.parametrize(
        "amount,expected",
        [
            (Fraction(5, 2), 2),
            (Fraction(7, 2), 4),
            (Fraction(2000, 3), 667),
            (Fraction(1000, 3), 333),
            (Fraction(-5, 2), -2),
            (12, 12),
        ],
    )
    def test_round_half_even(self, amount, expected):
        assert round_cents(amount) == expected
        assert isinstance(round_cents(amount), int)
