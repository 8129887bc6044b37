"""In-memory table store used by the API scaffold and tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any, Callable, Sequence
from uuid import uuid4

TABLES = ("projects", "experiences", "skills", "blog_posts", "messages")

Row = dict[str, Any]
RowPredicate = Callable[[Row], bool]


class StoreFailure(Exception):
    """Raised when the store rejects or cannot complete an operation."""


class NoRowsError(StoreFailure):
    """Raised when a single-row operation matched zero rows."""


class UniqueViolationError(StoreFailure):
    """Raised when a write would duplicate a value in a unique column."""


@dataclass(slots=True)
class SelectResult:
    rows: list[Row]
    count: int


def _default_tables() -> dict[str, dict[str, Row]]:
    return {name: {} for name in TABLES}


def _default_unique_columns() -> dict[str, tuple[str, ...]]:
    return {"blog_posts": ("slug",)}


@dataclass(slots=True)
class InMemoryStore:
    """Simple, deterministic persistence layer for scaffolding and tests.

    Rows are plain dicts keyed by a server-issued ``id``. Reads return copies so
    callers can never mutate stored state without going through ``update``.
    """

    tables: dict[str, dict[str, Row]] = field(default_factory=_default_tables)
    unique_columns: dict[str, tuple[str, ...]] = field(default_factory=_default_unique_columns)
    read_count: int = 0
    write_count: int = 0
    failpoints: dict[str, str] = field(default_factory=dict)
    _last_timestamp: datetime | None = None

    def select(
        self,
        table: str,
        *,
        filters: dict[str, Any] | None = None,
        predicate: RowPredicate | None = None,
        order_by: Sequence[tuple[str, bool]] = (),
        offset: int = 0,
        limit: int | None = None,
    ) -> SelectResult:
        """Return a page of matching rows plus the exact count of all matches.

        ``order_by`` items are ``(column, descending)`` pairs applied in priority order.
        """
        rows = self._matching_rows(table, filters=filters, predicate=predicate)
        for column, descending in reversed(order_by):
            rows.sort(key=lambda row: row[column], reverse=descending)

        count = len(rows)
        end = None if limit is None else offset + limit
        return SelectResult(rows=[dict(row) for row in rows[offset:end]], count=count)

    def count(
        self,
        table: str,
        *,
        filters: dict[str, Any] | None = None,
        predicate: RowPredicate | None = None,
    ) -> int:
        return len(self._matching_rows(table, filters=filters, predicate=predicate))

    def get_one(self, table: str, *, column: str, value: Any) -> Row:
        rows = self._matching_rows(table, filters={column: value})
        if not rows:
            raise NoRowsError(f"No {table} row where {column} matches")
        return dict(rows[0])

    def exists(self, table: str, *, column: str, value: Any) -> bool:
        return bool(self._matching_rows(table, filters={column: value}))

    def insert(self, table: str, values: Row) -> Row:
        self._maybe_raise_failpoint(table)
        rows = self._table(table)
        row = dict(values)
        row["id"] = str(uuid4())
        row["created_at"] = self._next_timestamp()
        self._ensure_unique(table, row)

        rows[row["id"]] = row
        self.write_count += 1
        return dict(row)

    def update(self, table: str, *, column: str, value: Any, changes: Row) -> Row:
        self._maybe_raise_failpoint(table)
        matches = [row for row in self._table(table).values() if row.get(column) == value]
        if not matches:
            raise NoRowsError(f"No {table} row where {column} matches")

        current = matches[0]
        candidate = {**current, **changes, "id": current["id"], "created_at": current["created_at"]}
        self._ensure_unique(table, candidate)

        current.update(candidate)
        self.write_count += 1
        return dict(current)

    def delete(self, table: str, *, column: str, value: Any) -> int:
        """Delete matching rows and return how many were removed."""
        self._maybe_raise_failpoint(table)
        rows = self._table(table)
        doomed = [row_id for row_id, row in rows.items() if row.get(column) == value]
        for row_id in doomed:
            del rows[row_id]
        if doomed:
            self.write_count += 1
        return len(doomed)

    def fail_next(self, table: str, message: str = "Injected store failure") -> None:
        """Make the next operation touching ``table`` raise ``StoreFailure``."""
        self.failpoints[table] = message

    def _matching_rows(
        self,
        table: str,
        *,
        filters: dict[str, Any] | None = None,
        predicate: RowPredicate | None = None,
    ) -> list[Row]:
        self._maybe_raise_failpoint(table)
        self.read_count += 1
        rows = list(self._table(table).values())
        for column, expected in (filters or {}).items():
            rows = [row for row in rows if row.get(column) == expected]
        if predicate is not None:
            rows = [row for row in rows if predicate(row)]
        return rows

    def _table(self, table: str) -> dict[str, Row]:
        try:
            return self.tables[table]
        except KeyError as exc:
            raise StoreFailure(f"Unknown table: {table}") from exc

    def _ensure_unique(self, table: str, candidate: Row) -> None:
        for column in self.unique_columns.get(table, ()):
            for row in self._table(table).values():
                if row["id"] != candidate["id"] and row.get(column) == candidate.get(column):
                    raise UniqueViolationError(
                        f"Duplicate value for {table}.{column}: {candidate.get(column)!r}"
                    )

    def _next_timestamp(self) -> datetime:
        # Strictly increasing so created_at ordering matches insertion order.
        now = datetime.now(UTC)
        if self._last_timestamp is not None and now <= self._last_timestamp:
            now = self._last_timestamp + timedelta(microseconds=1)
        self._last_timestamp = now
        return now

    def _maybe_raise_failpoint(self, table: str) -> None:
        message = self.failpoints.pop(table, None)
        if message is not None:
            raise StoreFailure(message)
