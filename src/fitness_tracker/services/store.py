"""Record store interface shared by all services."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

Record = dict[str, object]


class RecordStore(Protocol):
    """CRUD persistence for one entity type, keyed by integer id."""

    def get(self, record_id: int) -> Record | None:
        """Return a record by id, if present."""

    def find(self, filters: Record | None = None) -> list[Record]:
        """Return records whose columns equal every filter value."""

    def find_between(
        self,
        column: str,
        start: datetime,
        end: datetime,
        filters: Record | None = None,
    ) -> list[Record]:
        """Return records with start <= column <= end that match the filters."""

    def create(self, record: Record) -> Record:
        """Insert a record and return it with its assigned id."""

    def update(self, record_id: int, patch: Record) -> Record | None:
        """Apply a partial update and return the new record."""

    def delete(self, record_id: int) -> bool:
        """Delete a record; return False when it did not exist."""

    def delete_where(self, filters: Record) -> int:
        """Delete every matching record and return how many were removed."""

    def increment(self, record_id: int, column: str, amount: int) -> Record | None:
        """Add amount to a numeric column without losing concurrent updates."""

    def decrement_if_at_least(
        self, record_id: int, column: str, amount: int
    ) -> Record | None:
        """Subtract amount only while the column holds at least amount.

        Returns None when the record is missing or the value is too small;
        the check and the write happen as one step.
        """

    def merge_or_create(
        self,
        filters: Record,
        record: Record,
        merge: Callable[[Record], Record],
    ) -> Record:
        """Patch the record matching filters via merge, or insert record."""


@dataclass
class RecordStores:
    """One store per entity type."""

    users: RecordStore
    foods: RecordStore
    food_logs: RecordStore
    exercises: RecordStore
    exercise_logs: RecordStore
    water_logs: RecordStore
    recipes: RecordStore
    products: RecordStore
    cart_lines: RecordStore


def parse_datetime(value: object) -> datetime:
    """Parse a stored timestamp."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value)
    raise ValueError(f"Unsupported timestamp value: {value!r}")
