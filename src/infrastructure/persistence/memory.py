"""In-memory record store with per-call atomic writes and scoped transactions.

InMemoryStore keeps one ordered table per collection (dict preserves
insertion order) plus a monotonic id counter.  It backs the in-memory
repositories used by tests, demos and anywhere a database is not wanted.

Concurrency model:
  - Every write takes the store's asyncio.Lock, so each save/delete is atomic.
  - Reads never take the lock: they may observe writes that land while a
    caller iterates, and there is no snapshot isolation.
  - transaction() holds the lock for the whole block, snapshots every table,
    and restores the snapshot if the block raises.  Writes issued from inside
    the block (same task context) skip re-acquiring the lock.
"""

from __future__ import annotations

import asyncio
import copy
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class Table:
    rows: dict[int, Any] = field(default_factory=dict)
    next_id: int = 1

    def allocate_id(self) -> int:
        id = self.next_id
        self.next_id += 1
        return id

    def reserve(self, id: int) -> None:
        """Keep the counter ahead of an explicitly supplied id."""
        if id >= self.next_id:
            self.next_id = id + 1


class InMemoryStore:
    """A set of named tables guarded by a single write lock."""

    def __init__(self) -> None:
        self._tables: dict[str, Table] = {}
        self._lock = asyncio.Lock()
        self._in_transaction: ContextVar[bool] = ContextVar(
            f"in_memory_tx_{id(self)}", default=False
        )

    def table(self, name: str) -> Table:
        return self._tables.setdefault(name, Table())

    @asynccontextmanager
    async def write(self) -> AsyncIterator[None]:
        """Hold the write lock for one atomic operation."""
        if self._in_transaction.get():
            yield
            return
        async with self._lock:
            yield

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[InMemoryStore]:
        """Run a block of writes as one unit: commit on exit, roll back on error."""
        if self._in_transaction.get():
            # Nested blocks join the outer transaction.
            yield self
            return
        async with self._lock:
            snapshot = copy.deepcopy(self._tables)
            token = self._in_transaction.set(True)
            try:
                yield self
            except BaseException:
                self._tables = snapshot
                logger.warning("In-memory transaction rolled back")
                raise
            finally:
                self._in_transaction.reset(token)
