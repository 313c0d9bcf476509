"""Column sorting.

Cells compare numerically when both parse as decimal numbers and as
case-insensitive strings otherwise. Asking for the same column twice in a row
flips its direction; switching to another column starts it ascending.
"""

from __future__ import annotations

import re
from enum import Enum
from functools import cmp_to_key
from typing import Callable, Sequence

from outlinegrid.logging import get_logger
from outlinegrid.models.record import Record
from outlinegrid.table import RecordTable, render_cells

logger = get_logger(__name__)

_DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


class SortDirection(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"

    def flipped(self) -> "SortDirection":
        return SortDirection.DESCENDING if self is SortDirection.ASCENDING else SortDirection.ASCENDING


def parse_number(text: str) -> float | None:
    """Parse `text` as a plain decimal number, or return ``None``."""

    if not _DECIMAL_RE.fullmatch(text):
        return None
    return float(text)


def compare_cells(a: str, b: str) -> int:
    """Three-way comparison of two cell texts."""

    left = a.strip().lower()
    right = b.strip().lower()

    left_num = parse_number(left)
    right_num = parse_number(right)
    if left_num is not None and right_num is not None:
        return (left_num > right_num) - (left_num < right_num)
    return (left > right) - (left < right)


class SortEngine:
    """Sort records of one table, tracking direction per column."""

    def __init__(self, table: RecordTable) -> None:
        self._table = table
        self._directions: dict[int, SortDirection] = {}
        self._last_column: int | None = None

    @property
    def last_column(self) -> int | None:
        return self._last_column

    def direction(self, column: str | int) -> SortDirection | None:
        """Direction the column was last sorted in, if ever."""

        return self._directions.get(self._table.schema.index_of(column))

    def sort_key(self, column: str | int) -> Callable[[Record, Record], int]:
        """Ascending comparator over records for `column`.

        Raises:
            UnknownColumnError: If the column does not exist.
        """

        schema = self._table.schema
        col = schema.index_of(column)

        def comparator(a: Record, b: Record) -> int:
            return compare_cells(render_cells(a, schema)[col], render_cells(b, schema)[col])

        return comparator

    def request(self, column: str | int) -> SortDirection:
        """Register a sort request on `column` and return its new direction."""

        col = self._table.schema.index_of(column)
        if col == self._last_column:
            direction = self._directions[col].flipped()
        else:
            direction = SortDirection.ASCENDING
        self._directions[col] = direction
        self._last_column = col
        return direction

    def sorted_order(self, column: str | int, order: Sequence[int] | None = None) -> list[int]:
        """Handle a sort request and return the new row permutation.

        Args:
            column: Column name or position to sort by.
            order: Current arrangement of row indices; ties keep this order.
                Defaults to extraction order.

        Returns:
            Row indices in display order.
        """

        direction = self.request(column)
        col = self._table.schema.index_of(column)
        current = list(order) if order is not None else list(range(len(self._table)))
        values = self._table.column_values(col)

        key = cmp_to_key(lambda i, j: compare_cells(values[i], values[j]))
        # reverse=True keeps ties in their current relative order
        result = sorted(current, key=key, reverse=direction is SortDirection.DESCENDING)
        logger.debug("Sorted %d row(s) by %r %s", len(result), self._table.columns[col], direction.value)
        return result
