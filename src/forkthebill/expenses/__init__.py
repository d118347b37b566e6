"""
Expense Splitting Package

Shared-bill domain: one expense, many priced items, and people claiming
items in whole or in part. Tax and tip follow each person's claimed value.

Key Components:
- models: Expense, Item, Claim and input validation
- claims: claim/unclaim, item-list replacement, tax and tip updates
- settlement: per-person subtotal, tax share, tip share and total
- datastore: ExpenseStore protocol with in-memory and JSON-file stores
- service: the public operations, serialized per expense id
"""

from .claims import claim_item, replace_items, set_tax_tip, unclaim_item
from .datastore import ExpenseStore, InMemoryExpenseStore, JsonExpenseStore, create_store
from .errors import (
    ConcurrentModificationError,
    ExpenseError,
    NotFoundError,
    OverclaimError,
    ValidationError,
)
from .models import Claim, Expense, Item, ItemInput, build_expense, person_key
from .service import ExpenseService, ExpenseView
from .settlement import PersonSettlement, Settlement, compute_settlement

__all__ = [
    # Domain models
    "Claim",
    "Expense",
    "Item",
    "ItemInput",
    "build_expense",
    "person_key",
    # Claim engine
    "claim_item",
    "replace_items",
    "set_tax_tip",
    "unclaim_item",
    # Settlement
    "PersonSettlement",
    "Settlement",
    "compute_settlement",
    # Persistence
    "ExpenseStore",
    "InMemoryExpenseStore",
    "JsonExpenseStore",
    "create_store",
    # Service
    "ExpenseService",
    "ExpenseView",
    # Errors
    "ConcurrentModificationError",
    "ExpenseError",
    "NotFoundError",
    "OverclaimError",
    "ValidationError",
]
