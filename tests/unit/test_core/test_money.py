#!/usr/bin/env python3
"""Tests for Money primitive type."""

from decimal import Decimal

import pytest

from forkthebill.core.money import Money


class TestMoneyConstruction:
    """Test Money class construction."""

    @pytest.mark.currency
    def test_from_cents(self):
        """Test creating Money from cents."""
        m = Money.from_cents(1234)
        assert m.to_cents() == 1234

    @pytest.mark.currency
    def test_from_dollars_string(self):
        """Test parsing from dollar strings."""
        assert Money.from_dollars("$12.34").to_cents() == 1234
        assert Money.from_dollars("12.34").to_cents() == 1234
        assert Money.from_dollars("1,234.5").to_cents() == 123450

    @pytest.mark.currency
    def test_from_dollars_int(self):
        """Test creating from integer dollars."""
        assert Money.from_dollars(12).to_cents() == 1200

    @pytest.mark.currency
    def test_from_dollars_float_uses_shortest_repr(self):
        """Test floats like 0.1 and 19.99 convert without binary drift."""
        assert Money.from_dollars(0.1).to_cents() == 10
        assert Money.from_dollars(19.99).to_cents() == 1999

    @pytest.mark.currency
    def test_from_dollars_decimal(self):
        assert Money.from_dollars(Decimal("7.05")).to_cents() == 705

    @pytest.mark.currency
    @pytest.mark.parametrize("value", ["12.345", "abc", "", True])
    def test_from_dollars_rejects_bad_input(self, value):
        """Test sub-cent, non-numeric, empty and boolean input raise ValueError."""
        with pytest.raises(ValueError):
            Money.from_dollars(value)

    @pytest.mark.currency
    @pytest.mark.parametrize("value", [10**13 + 1, -(10**13) - 1, 1e300, "1e999999", Decimal("1e5000")])
    def test_from_dollars_rejects_out_of_range(self, value):
        """Test amounts above ten trillion dollars raise ValueError."""
        with pytest.raises(ValueError, match="out of range"):
            Money.from_dollars(value)

    @pytest.mark.currency
    def test_from_dollars_accepts_bound(self):
        assert Money.from_dollars(10**13).to_cents() == 10**15


class TestMoneyArithmetic:
    """Test Money arithmetic operations."""

    @pytest.mark.currency
    def test_addition_and_subtraction(self):
        a = Money.from_cents(100)
        b = Money.from_cents(30)
        assert (a + b).to_cents() == 130
        assert (a - b).to_cents() == 70

    @pytest.mark.currency
    def test_multiplication(self):
        assert (Money.from_cents(50) * 3).to_cents() == 150

    @pytest.mark.currency
    def test_sum_with_zero_start(self):
        total = sum([Money.from_cents(1), Money.from_cents(2)], Money.zero())
        assert total == Money.from_cents(3)


class TestMoneyComparisonAndDisplay:
    """Test Money ordering and formatting."""

    @pytest.mark.currency
    def test_comparison(self):
        small = Money.from_cents(50)
        large = Money.from_cents(100)

        assert small < large
        assert large > small
        assert small <= Money.from_cents(50)
        assert large >= Money.from_cents(100)
        assert small != large

    @pytest.mark.currency
    def test_str_and_dollars(self):
        assert str(Money.from_cents(4599)) == "$45.99"
        assert str(Money.from_cents(-5)) == "-$0.05"
        assert Money.from_cents(4599).to_dollars() == "45.99"

    @pytest.mark.currency
    def test_frozen_dataclass(self):
        """Test Money is immutable."""
        m = Money.from_cents(100)
        with pytest.raises(AttributeError):
            m.cents = 200  # type: ignore
