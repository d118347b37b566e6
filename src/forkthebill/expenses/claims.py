#!/usr/bin/env python3
"""
Claim Engine

In-place mutations of an Expense: claiming and unclaiming items, replacing
the item list, and setting tax and tip.

Every function validates its input completely before touching the expense,
so a raised error always leaves the expense as it was. Callers are expected
to run these against a private copy inside a per-expense lock (see
service.ExpenseService).
"""

import logging
from typing import Any

from ..core.allocation import SHARE_EPSILON, exceeds_whole
from .errors import OverclaimError
from .models import (
    Claim,
    Expense,
    Item,
    coerce_share,
    new_id,
    normalize_person_name,
    parse_item_inputs,
    parse_money,
)

logger = logging.getLogger(__name__)


def claim_item(expense: Expense, item_id: str, person_name: Any, share: Any = None) -> Claim:
    """
    Claim all or part of an item for a person.

    A person holds at most one claim per item: claiming again replaces the
    earlier share instead of adding to it. With no share, the person takes
    whatever is left once everyone else's shares are accounted for.

    Args:
        expense: Expense to mutate
        item_id: Item being claimed
        person_name: Free-text name of the claimant
        share: Fraction of the item in (0, 1], or None for the whole remainder

    Returns:
        The claim now held by the person

    Raises:
        NotFoundError: If the item does not exist
        ValidationError: If the name is blank or the share is out of range
        OverclaimError: If the item's claimed shares would exceed 1
    """
    name = normalize_person_name(person_name)
    requested = coerce_share(share) if share is not None else None
    item = expense.find_item(item_id)

    others = item.share_claimed_by_others(name)
    available = 1 - others

    if requested is None:
        if available <= SHARE_EPSILON:
            logger.warning("Item %s of expense %s is already fully claimed", item.id, expense.id)
            raise OverclaimError(
                f"{item.description or item.id} is already fully claimed",
                item_id=item.id,
                requested_share=None,
                available_share=float(max(available, 0)),
            )
        requested = available
    elif exceeds_whole(others + requested):
        logger.warning(
            "Overclaim on item %s of expense %s: %s requested %s, %s available",
            item.id,
            expense.id,
            name,
            requested,
            available,
        )
        raise OverclaimError(
            f"Only {float(max(available, 0)):.0%} of {item.description or item.id} is left to claim",
            item_id=item.id,
            requested_share=float(requested),
            available_share=float(max(available, 0)),
        )

    existing = item.find_claim(name)
    if existing is not None:
        existing.share = requested
        return existing

    claim = Claim(person_name=name, share=requested, sequence=expense.take_claim_sequence())
    item.claims.append(claim)
    return claim


def unclaim_item(expense: Expense, item_id: str, person_name: Any) -> bool:
    """
    Remove a person's claim on an item.

    Returns:
        True if a claim was removed, False if the person held none

    Raises:
        NotFoundError: If the item does not exist
        ValidationError: If the name is blank
    """
    name = normalize_person_name(person_name)
    item = expense.find_item(item_id)

    existing = item.find_claim(name)
    if existing is None:
        return False

    item.claims.remove(existing)
    return True


def replace_items(expense: Expense, new_items: Any) -> list[str]:
    """
    Replace the entire item list.

    Items supplying the id of an existing item keep that item's claims with
    the new description and price. Existing items not mentioned are dropped
    along with their claims. Items without an id get a fresh one and start
    unclaimed.

    Returns:
        Ids of the items that were dropped

    Raises:
        ValidationError: On malformed items, negative prices or duplicate ids
    """
    parsed = parse_item_inputs(new_items)
    previous = {item.id: item for item in expense.items}

    replacement: list[Item] = []
    for entry in parsed:
        old = previous.get(entry.id) if entry.id is not None else None
        claims = old.claims if old is not None else []
        replacement.append(
            Item(
                id=entry.id or new_id(),
                description=entry.description,
                price=entry.price,
                claims=claims,
            )
        )

    kept = {item.id for item in replacement}
    dropped = [item_id for item_id in previous if item_id not in kept]

    expense.items = replacement
    return dropped


def set_tax_tip(expense: Expense, tax: Any, tip: Any) -> None:
    """
    Replace tax and tip together.

    Raises:
        ValidationError: If either value is malformed or negative
    """
    tax_amount = parse_money(tax, "tax")
    tip_amount = parse_money(tip, "tip")

    expense.tax = tax_amount
    expense.tip = tip_amount
