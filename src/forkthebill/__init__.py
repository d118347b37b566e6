"""
Fork the Bill - Shared Bill Splitting Engine

Split a receipt between friends: create an expense from its line items,
let everyone claim what they had (whole items or fractions), and get back
what each person owes with tax and tip shared in proportion.

Domain Packages:
- core: Money, allocation arithmetic, configuration
- expenses: expense model, claim engine, settlement, stores, service
- cli: command-line interface over the JSON-file store

Example Usage:
    from forkthebill.expenses import ExpenseService, InMemoryExpenseStore

    service = ExpenseService(InMemoryExpenseStore())
    view = service.create_expense([{"description": "Pizza", "price": "30.00"}], tax="3.00", tip="6.00")
    service.claim_item(view.expense.id, view.expense.items[0].id, "Alice", "2/3")
"""

__version__ = "0.1.0"
__author__ = "Fork the Bill contributors"

from .core.config import Environment, get_config
from .core.money import Money
from .expenses import ExpenseService, Settlement, compute_settlement

__all__ = [
    "Environment",
    "ExpenseService",
    "Money",
    "Settlement",
    "compute_settlement",
    "get_config",
]
