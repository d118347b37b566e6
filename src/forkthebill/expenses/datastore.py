#!/usr/bin/env python3
"""
Expense Store Implementations

The ExpenseStore protocol the service depends on, plus two implementations:
an in-memory store and a JSON-file store (one file per expense).

Both stores serialize writes per expense id between threads of one process
and version every write: `put` only succeeds when the expense's version
matches the stored one, so within a process no two successful writes can
derive from the same prior version. Neither store coordinates separate
processes; two processes sharing a JSON data directory can still race
between the version check and the file replace.
"""

import logging
import re
import threading
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Protocol

from ..core.config import Config, StoreBackend
from ..core.json_utils import read_json, write_json
from .errors import ConcurrentModificationError, NotFoundError
from .models import Expense

logger = logging.getLogger(__name__)

_SAFE_ID = re.compile(r"^[A-Za-z0-9_-]+$")


class ExpenseStore(Protocol):
    """
    Protocol for expense persistence.

    Implementations must return independent copies from `get`, so that
    mutating a loaded expense never changes stored state until `put`.
    """

    def get(self, expense_id: str) -> Expense:
        """
        Load an expense.

        Raises:
            NotFoundError: If the expense does not exist
        """
        ...

    def put(self, expense: Expense) -> None:
        """
        Store a new version of an existing expense.

        On success the expense's version is advanced to the stored version.

        Raises:
            NotFoundError: If the expense was never created
            ConcurrentModificationError: If the stored version has moved on
        """
        ...

    def create(self, expense: Expense) -> str:
        """Store a brand new expense and return its id."""
        ...

    def exists(self, expense_id: str) -> bool:
        """Check whether an expense is stored."""
        ...

    def list_ids(self) -> list[str]:
        """Ids of every stored expense."""
        ...

    def locked(self, expense_id: str) -> AbstractContextManager[None]:
        """Hold the write lock for one expense id."""
        ...


class _LockEntry:
    __slots__ = ("lock", "holders")

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.holders = 0


class KeyedLocks:
    """
    Re-entrant lock per key, kept only while some thread holds or awaits it.

    Each `hold` registers itself on the key's entry before blocking and
    unregisters after release; the entry is dropped once nobody is left, so
    ids that are looked up once (including unknown ones) leave nothing behind.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, _LockEntry] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    def _acquire_entry(self, key: str) -> _LockEntry:
        with self._guard:
            entry = self._locks.get(key)
            if entry is None:
                entry = _LockEntry()
                self._locks[key] = entry
            entry.holders += 1
            return entry

    def _release_entry(self, key: str, entry: _LockEntry) -> None:
        with self._guard:
            entry.holders -= 1
            if entry.holders == 0:
                del self._locks[key]

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        entry = self._acquire_entry(key)
        try:
            with entry.lock:
                yield
        finally:
            self._release_entry(key, entry)


def _check_version(expense: Expense, stored_version: int) -> None:
    if expense.version != stored_version:
        logger.warning(
            "Rejected stale write to expense %s: based on version %d, stored version is %d",
            expense.id,
            expense.version,
            stored_version,
        )
        raise ConcurrentModificationError(
            f"Expense {expense.id} was modified concurrently",
            expense_id=expense.id,
            expected_version=stored_version,
            actual_version=expense.version,
        )


class InMemoryExpenseStore:
    """
    ExpenseStore that keeps serialized expenses in a dict.

    Useful for tests and for embedding the engine in a single process.
    """

    def __init__(self) -> None:
        self._records: dict[str, dict[str, Any]] = {}
        self._locks = KeyedLocks()

    def get(self, expense_id: str) -> Expense:
        record = self._records.get(expense_id)
        if record is None:
            raise NotFoundError(f"Expense {expense_id} not found", expense_id=expense_id)
        return Expense.from_dict(record)

    def put(self, expense: Expense) -> None:
        with self._locks.hold(expense.id):
            record = self._records.get(expense.id)
            if record is None:
                raise NotFoundError(f"Expense {expense.id} not found", expense_id=expense.id)
            _check_version(expense, record["version"])

            expense.version += 1
            self._records[expense.id] = expense.to_dict()

    def create(self, expense: Expense) -> str:
        with self._locks.hold(expense.id):
            if expense.id in self._records:
                raise ConcurrentModificationError(f"Expense {expense.id} already exists", expense_id=expense.id)
            expense.version = 1
            self._records[expense.id] = expense.to_dict()
        return expense.id

    def exists(self, expense_id: str) -> bool:
        return expense_id in self._records

    def list_ids(self) -> list[str]:
        return list(self._records)

    def locked(self, expense_id: str) -> AbstractContextManager[None]:
        return self._locks.hold(expense_id)


class JsonExpenseStore:
    """
    ExpenseStore keeping one pretty-printed JSON file per expense.

    Files live at `<expenses_dir>/<id>.json` and are replaced atomically, so
    concurrent readers always see a complete snapshot. Locking and the version
    check cover threads within one process only; there is no file lock, so
    separate processes writing the same expense are not serialized.
    """

    def __init__(self, expenses_dir: Path):
        """
        Initialize JSON expense store.

        Args:
            expenses_dir: Directory holding expense files (data/expenses)
        """
        self.expenses_dir = expenses_dir
        self._locks = KeyedLocks()

    def _path(self, expense_id: str) -> Path:
        if not isinstance(expense_id, str) or not _SAFE_ID.match(expense_id):
            raise NotFoundError(f"Expense {expense_id} not found", expense_id=expense_id)
        return self.expenses_dir / f"{expense_id}.json"

    def get(self, expense_id: str) -> Expense:
        path = self._path(expense_id)
        if not path.exists():
            raise NotFoundError(f"Expense {expense_id} not found", expense_id=expense_id)
        return Expense.from_dict(read_json(path))

    def put(self, expense: Expense) -> None:
        path = self._path(expense.id)
        with self._locks.hold(expense.id):
            if not path.exists():
                raise NotFoundError(f"Expense {expense.id} not found", expense_id=expense.id)
            _check_version(expense, read_json(path)["version"])

            expense.version += 1
            write_json(path, expense.to_dict())
            logger.debug("Wrote expense %s version %d to %s", expense.id, expense.version, path)

    def create(self, expense: Expense) -> str:
        path = self._path(expense.id)
        with self._locks.hold(expense.id):
            if path.exists():
                raise ConcurrentModificationError(f"Expense {expense.id} already exists", expense_id=expense.id)
            expense.version = 1
            write_json(path, expense.to_dict())
        logger.info("Created expense file %s", path)
        return expense.id

    def exists(self, expense_id: str) -> bool:
        try:
            return self._path(expense_id).exists()
        except NotFoundError:
            return False

    def list_ids(self) -> list[str]:
        if not self.expenses_dir.exists():
            return []
        return sorted(p.stem for p in self.expenses_dir.glob("*.json"))

    def locked(self, expense_id: str) -> AbstractContextManager[None]:
        return self._locks.hold(expense_id)

    def item_count(self) -> int:
        """Number of stored expenses."""
        return len(self.list_ids())

    def last_modified(self, expense_id: str) -> datetime | None:
        """Timestamp of an expense file's last write, or None if absent."""
        if not self.exists(expense_id):
            return None
        return datetime.fromtimestamp(self._path(expense_id).stat().st_mtime)

    def summary_text(self) -> str:
        """Get human-readable summary."""
        count = self.item_count()
        if count == 0:
            return f"No expenses in {self.expenses_dir}"
        return f"{count} expenses in {self.expenses_dir}"


def create_store(config: Config) -> ExpenseStore:
    """Build the store selected by configuration."""
    if config.store.backend == StoreBackend.MEMORY:
        return InMemoryExpenseStore()
    return JsonExpenseStore(config.store.expenses_dir)
