#!/usr/bin/env python3
"""
Expense Domain Errors

Structured failures returned to the calling layer. Each error carries a
stable code and a details dict so a UI or CLI can render its own message.
"""

from typing import Any


class ExpenseError(Exception):
    """Base class for all expense domain failures."""

    code = "expense_error"

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        """Render as a JSON-friendly dictionary."""
        return {"code": self.code, "message": self.message, "details": self.details}


class ValidationError(ExpenseError):
    """Raised for malformed or negative input, before any mutation."""

    code = "validation_error"


class NotFoundError(ExpenseError):
    """Raised when an expense or item id is unknown."""

    code = "not_found"


class OverclaimError(ExpenseError):
    """Raised when a claim would push an item past 100% claimed."""

    code = "overclaim"


class ConcurrentModificationError(ExpenseError):
    """Raised by a store when a write is based on a stale expense version."""

    code = "conflict"
