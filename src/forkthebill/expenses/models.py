#!/usr/bin/env python3
"""
Expense Domain Models

Expense, Item and Claim entities plus the input parsing used to build them.
Prices, tax and tip are Money (integer cents); claim shares are exact Fractions.

A person is not stored anywhere: people are the distinct names found across
an expense's claims, compared case-insensitively after trimming.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from fractions import Fraction
from typing import Any

from ..core.allocation import ONE, ZERO, format_share, is_valid_share, to_share
from ..core.money import Money
from .errors import NotFoundError, ValidationError


def new_id() -> str:
    """Generate an opaque unique identifier."""
    return uuid.uuid4().hex


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def normalize_person_name(name: Any) -> str:
    """
    Validate a free-text person name and return it trimmed for display.

    Raises:
        ValidationError: If the name is not a string or is blank
    """
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Person name must be a non-empty string", person_name=name)
    return name.strip()


def person_key(name: str) -> str:
    """Comparison key for a person name: trimmed and case-folded."""
    return name.strip().casefold()


def parse_money(value: Any, field_name: str) -> Money:
    """
    Parse a non-negative monetary input.

    Args:
        value: Dollar amount as str, int, float or Decimal
        field_name: Field being parsed, reported back in errors

    Returns:
        Money value

    Raises:
        ValidationError: If the value is missing, malformed or negative
    """
    if value is None or isinstance(value, bool) or not isinstance(value, (str, int, float, Decimal)):
        raise ValidationError(f"{field_name} must be a monetary amount", field=field_name, value=value)
    try:
        amount = Money.from_dollars(value)
    except ValueError as e:
        raise ValidationError(f"Invalid {field_name}: {e}", field=field_name, value=str(value)) from e
    if amount.is_negative():
        raise ValidationError(f"{field_name} must not be negative", field=field_name, value=str(value))
    return amount


@dataclass
class Claim:
    """A person's fractional ownership of one item."""

    person_name: str
    share: Fraction
    sequence: int  # Expense-wide order in which this person first claimed this item

    @property
    def person_key(self) -> str:
        return person_key(self.person_name)

    def to_dict(self) -> dict[str, Any]:
        return {
            "person_name": self.person_name,
            "share": format_share(self.share),
            "sequence": self.sequence,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Claim":
        return cls(
            person_name=data["person_name"],
            share=Fraction(data["share"]),
            sequence=data["sequence"],
        )


@dataclass
class Item:
    """One priced line on the bill and the claims made against it."""

    id: str
    description: str
    price: Money
    claims: list[Claim] = field(default_factory=list)

    def claimed_share(self) -> Fraction:
        """Sum of all claim shares on this item."""
        return sum((claim.share for claim in self.claims), ZERO)

    def unclaimed_share(self) -> Fraction:
        """Portion of the item nobody has claimed yet (never negative)."""
        return max(ONE - self.claimed_share(), ZERO)

    def find_claim(self, person_name: str) -> Claim | None:
        key = person_key(person_name)
        for claim in self.claims:
            if claim.person_key == key:
                return claim
        return None

    def share_claimed_by_others(self, person_name: str) -> Fraction:
        """Sum of shares held by everyone except the given person."""
        key = person_key(person_name)
        return sum((claim.share for claim in self.claims if claim.person_key != key), ZERO)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "price": self.price.to_cents(),
            "claims": [claim.to_dict() for claim in self.claims],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Item":
        return cls(
            id=data["id"],
            description=data["description"],
            price=Money.from_cents(data["price"]),
            claims=[Claim.from_dict(c) for c in data.get("claims", [])],
        )


@dataclass
class Expense:
    """
    One shared bill.

    Owns its items and, through them, every claim. `version` is maintained
    by the store and increases by one on every successful write.
    """

    id: str
    items: list[Item]
    tax: Money
    tip: Money
    created_at: datetime
    updated_at: datetime | None = None
    version: int = 0
    next_claim_sequence: int = 0

    def find_item(self, item_id: str) -> Item:
        """
        Look up an item by id.

        Raises:
            NotFoundError: If no item has that id
        """
        for item in self.items:
            if item.id == item_id:
                return item
        raise NotFoundError(f"Item {item_id} not found in expense {self.id}", expense_id=self.id, item_id=item_id)

    def take_claim_sequence(self) -> int:
        """Reserve the next claim sequence number."""
        sequence = self.next_claim_sequence
        self.next_claim_sequence += 1
        return sequence

    def people(self) -> list[str]:
        """
        Distinct claimant names in first-claim order.

        The display spelling is the one used on that person's earliest claim.
        """
        first_claims: dict[str, Claim] = {}
        for item in self.items:
            for claim in item.claims:
                current = first_claims.get(claim.person_key)
                if current is None or claim.sequence < current.sequence:
                    first_claims[claim.person_key] = claim
        ordered = sorted(first_claims.values(), key=lambda c: c.sequence)
        return [claim.person_name for claim in ordered]

    @property
    def subtotal(self) -> Money:
        """Sum of all item prices."""
        return sum((item.price for item in self.items), Money.zero())

    @property
    def total(self) -> Money:
        """Bill total: items plus tax plus tip."""
        return self.subtotal + self.tax + self.tip

    def copy(self) -> "Expense":
        """Independent deep copy."""
        return Expense.from_dict(self.to_dict())

    def to_dict(self) -> dict[str, Any]:
        """Storage form: integer cents, shares as "n/d" strings."""
        return {
            "id": self.id,
            "items": [item.to_dict() for item in self.items],
            "tax": self.tax.to_cents(),
            "tip": self.tip.to_cents(),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "version": self.version,
            "next_claim_sequence": self.next_claim_sequence,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Expense":
        return cls(
            id=data["id"],
            items=[Item.from_dict(i) for i in data.get("items", [])],
            tax=Money.from_cents(data.get("tax", 0)),
            tip=Money.from_cents(data.get("tip", 0)),
            created_at=datetime.fromisoformat(data["created_at"]),
            updated_at=datetime.fromisoformat(data["updated_at"]) if data.get("updated_at") else None,
            version=data.get("version", 0),
            next_claim_sequence=data.get("next_claim_sequence", 0),
        )


@dataclass(frozen=True)
class ItemInput:
    """Validated caller input for one item."""

    description: str
    price: Money
    id: str | None = None


def parse_item_input(data: Any, index: int = 0) -> ItemInput:
    """
    Validate one `{description, price, id?}` payload.

    Raises:
        ValidationError: On a missing or malformed field or a negative price
    """
    if isinstance(data, ItemInput):
        return data
    if not isinstance(data, dict):
        raise ValidationError(f"Item {index} must be an object", index=index)

    description = data.get("description", "")
    if not isinstance(description, str):
        raise ValidationError(f"Item {index} description must be text", index=index)

    if "price" not in data:
        raise ValidationError(f"Item {index} is missing a price", index=index)
    price = parse_money(data["price"], f"items[{index}].price")

    item_id = data.get("id")
    if item_id is not None and (not isinstance(item_id, str) or not item_id.strip()):
        raise ValidationError(f"Item {index} id must be a non-empty string", index=index)

    return ItemInput(description=description.strip(), price=price, id=item_id)


def parse_item_inputs(items: Any) -> list[ItemInput]:
    """
    Validate a full item list.

    Raises:
        ValidationError: If items is not a list, any item is invalid, or two
            items supply the same id
    """
    if not isinstance(items, (list, tuple)):
        raise ValidationError("items must be a list")

    parsed = [parse_item_input(data, index) for index, data in enumerate(items)]

    seen: set[str] = set()
    for entry in parsed:
        if entry.id is None:
            continue
        if entry.id in seen:
            raise ValidationError(f"Duplicate item id {entry.id}", item_id=entry.id)
        seen.add(entry.id)

    return parsed


def build_expense(items: Any, tax: Any = None, tip: Any = None, now: datetime | None = None) -> Expense:
    """
    Construct a new Expense with a fresh id and no claims.

    Tax and tip default to zero. An empty item list is valid.

    Raises:
        ValidationError: On malformed items or negative price, tax or tip
    """
    parsed = parse_item_inputs(items)
    tax_amount = parse_money(tax, "tax") if tax is not None else Money.zero()
    tip_amount = parse_money(tip, "tip") if tip is not None else Money.zero()

    return Expense(
        id=new_id(),
        items=[Item(id=entry.id or new_id(), description=entry.description, price=entry.price) for entry in parsed],
        tax=tax_amount,
        tip=tip_amount,
        created_at=now or utc_now(),
    )


def coerce_share(value: Any) -> Fraction:
    """
    Parse a requested claim share and check it lies in (0, 1].

    Raises:
        ValidationError: If the share is malformed or out of range
    """
    try:
        share = to_share(value)
    except ValueError as e:
        raise ValidationError(str(e), share=str(value)) from e
    if not is_valid_share(share):
        raise ValidationError("Share must be greater than 0 and at most 1", share=str(value))
    return share
