"""Supabase-backed record store."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

from postgrest.exceptions import APIError
from supabase import Client

from fitness_tracker.services.store import Record, RecordStore, RecordStores

TABLE_NAMES = {
    "users": "users",
    "foods": "foods",
    "food_logs": "food_logs",
    "exercises": "exercises",
    "exercise_logs": "exercise_logs",
    "water_logs": "water_intake",
    "recipes": "recipes",
    "products": "products",
    "cart_lines": "cart_lines",
}

MAX_WRITE_ATTEMPTS = 5
UNIQUE_VIOLATION = "23505"

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseRecordStore(RecordStore):
    """Supabase implementation of a single-table record store.

    Counter updates and merges are compare-and-set writes filtered on the
    value that was read, retried up to ``MAX_WRITE_ATTEMPTS`` times.
    """

    client: Client
    table: str

    def get(self, record_id: int) -> Record | None:
        """Return a row by id, if present."""
        response = (
            self.client.table(self.table)
            .select("*")
            .eq("id", record_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return dict(response.data[0])

    def find(self, filters: Record | None = None) -> list[Record]:
        """Return rows matching equality filters, ordered by id."""
        query = self.client.table(self.table).select("*")
        for column, value in (filters or {}).items():
            query = query.eq(column, _serialize_value(value))
        response = query.order("id", desc=False).execute()
        return [dict(row) for row in response.data or []]

    def find_between(
        self,
        column: str,
        start: datetime,
        end: datetime,
        filters: Record | None = None,
    ) -> list[Record]:
        """Return rows with start <= column <= end."""
        query = (
            self.client.table(self.table)
            .select("*")
            .gte(column, start.isoformat())
            .lte(column, end.isoformat())
        )
        for key, value in (filters or {}).items():
            query = query.eq(key, _serialize_value(value))
        response = query.order(column, desc=False).execute()
        return [dict(row) for row in response.data or []]

    def create(self, record: Record) -> Record:
        """Insert a row and return it."""
        response = self.client.table(self.table).insert(_serialize(record)).execute()
        if not response.data:
            raise RuntimeError(f"Failed to create row in {self.table}")
        return dict(response.data[0])

    def update(self, record_id: int, patch: Record) -> Record | None:
        """Update a row and return it."""
        response = (
            self.client.table(self.table)
            .update(_serialize(patch))
            .eq("id", record_id)
            .execute()
        )
        if not response.data:
            return None
        return dict(response.data[0])

    def delete(self, record_id: int) -> bool:
        """Delete a row by id."""
        response = self.client.table(self.table).delete().eq("id", record_id).execute()
        return bool(response.data)

    def delete_where(self, filters: Record) -> int:
        """Delete all matching rows."""
        query = self.client.table(self.table).delete()
        for column, value in filters.items():
            query = query.eq(column, _serialize_value(value))
        response = query.execute()
        return len(response.data or [])

    def increment(self, record_id: int, column: str, amount: int) -> Record | None:
        """Add amount to a numeric column with a compare-and-set update."""
        return self._swap(record_id, column, lambda value: value + amount)

    def decrement_if_at_least(
        self, record_id: int, column: str, amount: int
    ) -> Record | None:
        """Subtract amount when the stored value covers it."""
        return self._swap(
            record_id,
            column,
            lambda value: value - amount if value >= amount else None,
        )

    def merge_or_create(
        self,
        filters: Record,
        record: Record,
        merge: Callable[[Record], Record],
    ) -> Record:
        """Merge into the first matching row or insert a new one.

        The merge is guarded on the columns it rewrites. A concurrent insert
        of the same row surfaces as a unique violation and is retried as a
        merge, so the table needs a unique index on the filter columns.
        """
        for _ in range(MAX_WRITE_ATTEMPTS):
            existing = self.find(filters)
            if existing:
                row = existing[0]
                patch = merge(dict(row))
                query = (
                    self.client.table(self.table)
                    .update(_serialize(patch))
                    .eq("id", row["id"])
                )
                for column in patch:
                    query = _guard(query, column, row.get(column))
                response = query.execute()
                if response.data:
                    return dict(response.data[0])
                _logger.debug("Merge conflict on %s row %s", self.table, row["id"])
                continue
            try:
                return self.create(record)
            except APIError as exc:
                if exc.code != UNIQUE_VIOLATION:
                    raise
                _logger.debug("Concurrent insert into %s, merging", self.table)
        raise RuntimeError(f"Failed to merge row in {self.table}")

    def _swap(
        self,
        record_id: int,
        column: str,
        compute: Callable[[int], int | None],
    ) -> Record | None:
        """Write compute(old) only while the column still holds old."""
        for _ in range(MAX_WRITE_ATTEMPTS):
            current = self.get(record_id)
            if current is None:
                return None
            old = current.get(column)
            new = compute(int(old or 0))
            if new is None:
                return None
            query = (
                self.client.table(self.table)
                .update({column: new})
                .eq("id", record_id)
            )
            response = _guard(query, column, old).execute()
            if response.data:
                return dict(response.data[0])
            _logger.debug("Update conflict on %s row %s", self.table, record_id)
        raise RuntimeError(f"Too many concurrent updates to {self.table} {record_id}")


def build_supabase_stores(client: Client) -> RecordStores:
    """Create a Supabase store per entity table."""
    return RecordStores(
        **{
            name: SupabaseRecordStore(client=client, table=table)
            for name, table in TABLE_NAMES.items()
        }
    )


def _serialize(record: Record) -> Record:
    return {key: _serialize_value(value) for key, value in record.items()}


def _serialize_value(value: object) -> object:
    if isinstance(value, datetime | date):
        return value.isoformat()
    if isinstance(value, dict):
        return _serialize(value)
    if isinstance(value, Enum):
        return value.value
    return value


def _guard(query: Any, column: str, value: object) -> Any:
    if value is None:
        return query.is_(column, "null")
    return query.eq(column, _serialize_value(value))
