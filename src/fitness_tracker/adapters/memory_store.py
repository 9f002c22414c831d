"""In-memory record store."""

import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from fitness_tracker.services.store import (
    Record,
    RecordStore,
    RecordStores,
    parse_datetime,
)


@dataclass
class InMemoryRecordStore(RecordStore):
    """Dictionary-backed store; writes are serialized by a lock."""

    records: dict[int, Record] = field(default_factory=dict)
    _next_id: int = 1
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def get(self, record_id: int) -> Record | None:
        """Return a copy of a record by id."""
        record = self.records.get(record_id)
        return dict(record) if record is not None else None

    def find(self, filters: Record | None = None) -> list[Record]:
        """Return copies of matching records in insertion order."""
        with self._lock:
            return [
                dict(record)
                for record in self.records.values()
                if _matches(record, filters)
            ]

    def find_between(
        self,
        column: str,
        start: datetime,
        end: datetime,
        filters: Record | None = None,
    ) -> list[Record]:
        """Return matching records whose column falls in [start, end]."""
        results = []
        for record in self.find(filters):
            value = record.get(column)
            if value is None:
                continue
            if start <= parse_datetime(value) <= end:
                results.append(record)
        return results

    def create(self, record: Record) -> Record:
        """Insert a record under the next integer id."""
        with self._lock:
            record_id = self._next_id
            self._next_id += 1
            stored = {**record, "id": record_id}
            self.records[record_id] = stored
            return dict(stored)

    def update(self, record_id: int, patch: Record) -> Record | None:
        """Apply a partial update."""
        with self._lock:
            current = self.records.get(record_id)
            if current is None:
                return None
            updated = {**current, **patch, "id": record_id}
            self.records[record_id] = updated
            return dict(updated)

    def delete(self, record_id: int) -> bool:
        """Delete a record by id."""
        with self._lock:
            return self.records.pop(record_id, None) is not None

    def delete_where(self, filters: Record) -> int:
        """Delete all matching records."""
        with self._lock:
            doomed = [
                record_id
                for record_id, record in self.records.items()
                if _matches(record, filters)
            ]
            for record_id in doomed:
                del self.records[record_id]
            return len(doomed)

    def increment(self, record_id: int, column: str, amount: int) -> Record | None:
        """Atomically add amount to a numeric column."""
        with self._lock:
            current = self.records.get(record_id)
            if current is None:
                return None
            value = current.get(column) or 0
            return self.update(record_id, {column: value + amount})

    def decrement_if_at_least(
        self, record_id: int, column: str, amount: int
    ) -> Record | None:
        """Subtract amount under the lock unless the column would go below zero."""
        with self._lock:
            current = self.records.get(record_id)
            if current is None:
                return None
            value = current.get(column) or 0
            if value < amount:
                return None
            return self.update(record_id, {column: value - amount})

    def merge_or_create(
        self,
        filters: Record,
        record: Record,
        merge: Callable[[Record], Record],
    ) -> Record:
        """Atomically merge into the first matching record or insert."""
        with self._lock:
            for record_id, existing in self.records.items():
                if _matches(existing, filters):
                    updated = self.update(record_id, merge(dict(existing)))
                    if updated is None:
                        raise RuntimeError("Record vanished during merge")
                    return updated
            return self.create(record)


def build_memory_stores() -> RecordStores:
    """Create an empty in-memory store per entity type."""
    return RecordStores(
        users=InMemoryRecordStore(),
        foods=InMemoryRecordStore(),
        food_logs=InMemoryRecordStore(),
        exercises=InMemoryRecordStore(),
        exercise_logs=InMemoryRecordStore(),
        water_logs=InMemoryRecordStore(),
        recipes=InMemoryRecordStore(),
        products=InMemoryRecordStore(),
        cart_lines=InMemoryRecordStore(),
    )


def _matches(record: Record, filters: Record | None) -> bool:
    if not filters:
        return True
    return all(record.get(key) == value for key, value in filters.items())
