#!/usr/bin/env python3
"""
Settlement Calculator

Derives what each person owes from the current claims on an expense.

Key Rules:
- A person's subtotal is the sum of price * share over their claims
- Tax and tip are split in proportion to claimed subtotals, not item counts
- Unclaimed portions of items are reported, never charged to anyone
- With nothing claimed (claimed subtotal of zero) tax and tip stay unallocated
- All arithmetic is exact; each reported figure is rounded half-to-even once
"""

from dataclasses import dataclass
from fractions import Fraction
from typing import Any

from ..core.allocation import ZERO, allocate_proportionally, round_cents, share_of
from ..core.money import Money
from .models import Expense, person_key


@dataclass(frozen=True)
class PersonSettlement:
    """Amount owed by one person."""

    name: str
    subtotal: Money
    tax_share: Money
    tip_share: Money
    total: Money

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "subtotal": self.subtotal.to_dollars(),
            "tax_share": self.tax_share.to_dollars(),
            "tip_share": self.tip_share.to_dollars(),
            "total": self.total.to_dollars(),
        }


@dataclass(frozen=True)
class Settlement:
    """Per-person amounts owed plus whatever is not yet assigned to anyone."""

    people: tuple[PersonSettlement, ...]
    claimed_subtotal: Money
    unclaimed_subtotal: Money
    unallocated_tax: Money
    unallocated_tip: Money

    def for_person(self, name: str) -> PersonSettlement | None:
        """Find a person's settlement, comparing names case-insensitively."""
        key = person_key(name)
        for person in self.people:
            if person_key(person.name) == key:
                return person
        return None

    def as_mapping(self) -> dict[str, PersonSettlement]:
        """Person name to settlement, in first-claim order."""
        return {person.name: person for person in self.people}

    @property
    def allocated_total(self) -> Money:
        """Sum of every person's total."""
        return sum((person.total for person in self.people), Money.zero())

    @property
    def unassigned_total(self) -> Money:
        """Unclaimed item value plus unallocated tax and tip."""
        return self.unclaimed_subtotal + self.unallocated_tax + self.unallocated_tip

    def to_dict(self) -> dict[str, Any]:
        return {
            "people": [person.to_dict() for person in self.people],
            "claimed_subtotal": self.claimed_subtotal.to_dollars(),
            "unclaimed_subtotal": self.unclaimed_subtotal.to_dollars(),
            "unallocated_tax": self.unallocated_tax.to_dollars(),
            "unallocated_tip": self.unallocated_tip.to_dollars(),
        }


def _money(amount: Fraction) -> Money:
    return Money.from_cents(round_cents(amount))


def compute_settlement(expense: Expense) -> Settlement:
    """
    Compute the settlement for an expense.

    Pure function of the expense: the same expense always yields the same
    settlement, with people ordered by their first claim.

    Args:
        expense: Expense to settle

    Returns:
        Settlement with exact-then-rounded amounts
    """
    subtotals: dict[str, Fraction] = {}
    first_claim: dict[str, tuple[int, str]] = {}
    unclaimed = ZERO

    for item in expense.items:
        price_cents = item.price.to_cents()
        for claim in item.claims:
            key = claim.person_key
            subtotals[key] = subtotals.get(key, ZERO) + share_of(price_cents, claim.share)
            if key not in first_claim or claim.sequence < first_claim[key][0]:
                first_claim[key] = (claim.sequence, claim.person_name)
        unclaimed += share_of(price_cents, item.unclaimed_share())

    order = sorted(first_claim, key=lambda k: first_claim[k][0])
    weights = {key: subtotals[key] for key in order}
    claimed_total = sum(weights.values(), ZERO)

    tax_parts = allocate_proportionally(expense.tax.to_cents(), weights)
    tip_parts = allocate_proportionally(expense.tip.to_cents(), weights)

    people = tuple(
        PersonSettlement(
            name=first_claim[key][1],
            subtotal=_money(weights[key]),
            tax_share=_money(tax_parts[key]),
            tip_share=_money(tip_parts[key]),
            total=_money(weights[key] + tax_parts[key] + tip_parts[key]),
        )
        for key in order
    )

    if claimed_total == 0:
        unallocated_tax = expense.tax
        unallocated_tip = expense.tip
    else:
        unallocated_tax = Money.zero()
        unallocated_tip = Money.zero()

    return Settlement(
        people=people,
        claimed_subtotal=_money(claimed_total),
        unclaimed_subtotal=_money(unclaimed),
        unallocated_tax=unallocated_tax,
        unallocated_tip=unallocated_tip,
    )
