"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

from typing import Any

import pytest

from forkthebill.core import config as config_module
from forkthebill.expenses import ExpenseService, InMemoryExpenseStore


@pytest.fixture
def memory_store() -> InMemoryExpenseStore:
    """Fresh in-memory expense store."""
    return InMemoryExpenseStore()


@pytest.fixture
def service(memory_store) -> ExpenseService:
    """Expense service backed by the in-memory store."""
    return ExpenseService(memory_store)


@pytest.fixture
def dinner_items() -> list[dict[str, Any]]:
    """Sample receipt items for a shared dinner."""
    return [
        {"description": "Margherita Pizza", "price": "30.00"},
        {"description": "Caesar Salad", "price": "12.50"},
        {"description": "Sparkling Water", "price": 4},
    ]


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Set up test environment variables."""
    # Ensure tests don't write to a real data directory
    monkeypatch.setenv("FORKTHEBILL_ENV", "test")
    monkeypatch.setenv("FORKTHEBILL_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("FORKTHEBILL_STORE", "json")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    monkeypatch.delenv("DEBUG", raising=False)
    monkeypatch.setattr(config_module, "_config", None)


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "currency: Tests for currency handling and precision")
    config.addinivalue_line("markers", "claims: Tests for claiming and unclaiming items")
    config.addinivalue_line("markers", "settlement: Tests for settlement calculation")
    config.addinivalue_line("markers", "store: Tests for expense persistence")
