#!/usr/bin/env python3
"""
Expense Service

The operations a UI or CLI calls: create, get, update items, update tax and
tip, claim and unclaim. Every mutation runs as a read-modify-write under the
store's lock for that expense id and returns the full current expense with
its settlement, so callers never need a separate read after a write.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from . import claims
from .datastore import ExpenseStore
from .models import Expense, build_expense, utc_now
from .settlement import Settlement, compute_settlement

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExpenseView:
    """An expense snapshot together with its derived settlement."""

    expense: Expense
    settlement: Settlement

    @classmethod
    def of(cls, expense: Expense) -> "ExpenseView":
        return cls(expense=expense, settlement=compute_settlement(expense))

    def to_dict(self) -> dict[str, Any]:
        """Render for API responses: dollars as strings, shares as floats and exact strings."""
        expense = self.expense
        return {
            "id": expense.id,
            "created_at": expense.created_at.isoformat(),
            "updated_at": expense.updated_at.isoformat() if expense.updated_at else None,
            "version": expense.version,
            "items": [
                {
                    "id": item.id,
                    "description": item.description,
                    "price": item.price.to_dollars(),
                    "claimed_share": float(item.claimed_share()),
                    "claims": [
                        {
                            "person_name": claim.person_name,
                            "share": float(claim.share),
                            "share_exact": str(claim.share),
                        }
                        for claim in item.claims
                    ],
                }
                for item in expense.items
            ],
            "subtotal": expense.subtotal.to_dollars(),
            "tax": expense.tax.to_dollars(),
            "tip": expense.tip.to_dollars(),
            "total": expense.total.to_dollars(),
            "people": expense.people(),
            "settlement": self.settlement.to_dict(),
        }


class ExpenseService:
    """
    Operation contracts over an ExpenseStore.

    Mutations are serialized per expense id; operations on different
    expenses never wait on each other. Reads take no lock.
    """

    def __init__(self, store: ExpenseStore, clock: Callable[[], datetime] = utc_now):
        self.store = store
        self.clock = clock

    def create_expense(self, items: Any, tax: Any = None, tip: Any = None) -> ExpenseView:
        """
        Create an expense from `[{description, price}]` with optional tax and tip.

        Raises:
            ValidationError: On malformed items or negative amounts
        """
        expense = build_expense(items, tax=tax, tip=tip, now=self.clock())
        self.store.create(expense)
        logger.info(
            "Created expense %s with %d items, total %s", expense.id, len(expense.items), expense.total
        )
        return ExpenseView.of(expense)

    def get_expense(self, expense_id: str) -> ExpenseView:
        """
        Load an expense and compute its settlement.

        Raises:
            NotFoundError: If the expense does not exist
        """
        return ExpenseView.of(self.store.get(expense_id))

    def update_expense_items(self, expense_id: str, items: Any) -> ExpenseView:
        """
        Replace the item list, keeping claims on items whose id is resupplied.

        Raises:
            NotFoundError: If the expense does not exist
            ValidationError: On malformed items or negative prices
        """

        def apply(expense: Expense) -> bool:
            dropped = claims.replace_items(expense, items)
            logger.info(
                "Replaced items of expense %s: %d items, %d dropped", expense.id, len(expense.items), len(dropped)
            )
            return True

        return self._mutate(expense_id, apply)

    def update_expense_tax_tip(self, expense_id: str, tax: Any, tip: Any) -> ExpenseView:
        """
        Set tax and tip together.

        Raises:
            NotFoundError: If the expense does not exist
            ValidationError: If either amount is malformed or negative
        """

        def apply(expense: Expense) -> bool:
            claims.set_tax_tip(expense, tax, tip)
            logger.info("Set tax %s and tip %s on expense %s", expense.tax, expense.tip, expense.id)
            return True

        return self._mutate(expense_id, apply)

    def claim_item(self, expense_id: str, item_id: str, person_name: Any, share: Any = None) -> ExpenseView:
        """
        Claim an item (or part of one) for a person; re-claiming replaces the share.

        Raises:
            NotFoundError: If the expense or item does not exist
            ValidationError: If the name is blank or the share out of range
            OverclaimError: If the item would be more than fully claimed
        """

        def apply(expense: Expense) -> bool:
            claim = claims.claim_item(expense, item_id, person_name, share)
            logger.info("%s claimed %s of item %s on expense %s", claim.person_name, claim.share, item_id, expense.id)
            return True

        return self._mutate(expense_id, apply)

    def unclaim_item(self, expense_id: str, item_id: str, person_name: Any) -> ExpenseView:
        """
        Drop a person's claim on an item; a no-op when there is none.

        Raises:
            NotFoundError: If the expense or item does not exist
            ValidationError: If the name is blank
        """

        def apply(expense: Expense) -> bool:
            removed = claims.unclaim_item(expense, item_id, person_name)
            if removed:
                logger.info("%s unclaimed item %s on expense %s", person_name, item_id, expense.id)
            return removed

        return self._mutate(expense_id, apply)

    def _mutate(self, expense_id: str, apply: Callable[[Expense], bool]) -> ExpenseView:
        """
        Run one read-modify-write transaction under the expense's lock.

        `apply` mutates a private copy and reports whether anything changed;
        unchanged expenses are not written back. Errors propagate before
        `put`, leaving stored state untouched.
        """
        with self.store.locked(expense_id):
            expense = self.store.get(expense_id)
            if apply(expense):
                expense.updated_at = self.clock()
                self.store.put(expense)
        return ExpenseView.of(expense)
