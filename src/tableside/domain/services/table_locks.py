"""
Per-table mutual exclusion for read-modify-write of table aggregates.

Each mutation holds the lock of its table number for the whole
load/apply/save cycle. Mutations on different tables never wait on each
other. A lock entry lives only while somebody holds or waits for it, so the
registry stays as small as the number of tables being written right now.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field


@dataclass
class _LockEntry:
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    users: int = 0


class TableLockManager:
    """Hands out one asyncio lock per table number."""

    def __init__(self) -> None:
        # Only touched between awaits, so bookkeeping cannot be interrupted
        # by a cancellation
        self._entries: dict[int, _LockEntry] = {}

    @property
    def lock_count(self) -> int:
        """Number of table locks currently held or awaited."""
        return len(self._entries)

    def is_locked(self, table_number: int) -> bool:
        entry = self._entries.get(table_number)
        return entry is not None and entry.lock.locked()

    def _checkout(self, table_number: int) -> _LockEntry:
        entry = self._entries.get(table_number)
        if entry is None:
            entry = _LockEntry()
            self._entries[table_number] = entry
        entry.users += 1
        return entry

    def _checkin(self, table_number: int, entry: _LockEntry) -> None:
        entry.users -= 1
        if entry.users == 0 and self._entries.get(table_number) is entry:
            del self._entries[table_number]

    @asynccontextmanager
    async def hold(self, table_number: int) -> AsyncIterator[None]:
        """
        Serialize the enclosed block with other writers of the same table.

        Usage:
            async with locks.hold(5):
                table = await repo.get_table(5)
                ...
                await repo.save_table(table, expected_revision=table.revision)
        """
        entry = self._checkout(table_number)
        try:
            async with entry.lock:
                yield
        finally:
            self._checkin(table_number, entry)
