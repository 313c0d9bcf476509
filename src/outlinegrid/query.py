"""Row filtering.

Filter strings use one small grammar for both the global filter and each
per-column filter::

    foo, bar, !baz

Terms are split on commas and trimmed. A leading ``!`` makes an exclude term.
Matching is case-insensitive substring containment. Within one scope a row must
contain at least one include term (when any exist) and no exclude term.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

from outlinegrid.models.record import Record

TERM_SEPARATOR = ","
NEGATION_PREFIX = "!"


@dataclass(frozen=True)
class FilterExpression:
    """Parsed filter: lowercase include and exclude terms, in input order."""

    include_terms: tuple[str, ...] = ()
    exclude_terms: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.include_terms and not self.exclude_terms

    def matches(self, cells: Sequence[str]) -> bool:
        """Evaluate the expression against one scope.

        Args:
            cells: Cell texts in scope; a term matches if any cell contains it.
        """

        if self.is_empty:
            return True
        haystack = [c.lower() for c in cells]

        def contains(term: str) -> bool:
            return any(term in cell for cell in haystack)

        if self.include_terms and not any(contains(t) for t in self.include_terms):
            return False
        if any(contains(t) for t in self.exclude_terms):
            return False
        return True


EMPTY_FILTER = FilterExpression()


def parse_filter(text: str) -> FilterExpression:
    """Parse a raw filter string.

    Empty terms (``"a,,b"``, a bare ``"!"``) are ignored; repeated terms are
    kept once.
    """

    if not text or not text.strip():
        return EMPTY_FILTER

    include: list[str] = []
    exclude: list[str] = []
    for raw in text.split(TERM_SEPARATOR):
        term = raw.strip()
        bucket = include
        if term.startswith(NEGATION_PREFIX):
            term = term[len(NEGATION_PREFIX):].strip()
            bucket = exclude
        term = term.lower()
        if term and term not in bucket:
            bucket.append(term)
    return FilterExpression(include_terms=tuple(include), exclude_terms=tuple(exclude))


def normalize_column_filters(
    column_filters: Sequence[str] | Mapping[int, str] | None,
    column_count: int,
) -> list[str]:
    """Turn per-column filters into a list aligned with the columns.

    A sequence shorter than the column list leaves the remaining columns
    unfiltered; a mapping is keyed by column position.
    """

    aligned = [""] * column_count
    if not column_filters:
        return aligned
    if isinstance(column_filters, Mapping):
        for index, text in column_filters.items():
            if 0 <= index < column_count:
                aligned[index] = text
        return aligned
    for index, text in enumerate(column_filters[:column_count]):
        aligned[index] = text
    return aligned


class QueryEngine:
    """Visibility decisions for rendered rows."""

    def visible(
        self,
        record: Record,
        rendered_cells: Sequence[str],
        global_filter_text: str,
        per_column_filter_text: Sequence[str],
    ) -> bool:
        """Decide whether a row is visible.

        Args:
            record: The record behind the row.
            rendered_cells: The row's cell texts, in column order.
            global_filter_text: Filter applied across all cells.
            per_column_filter_text: One filter per column; missing or empty
                entries impose no constraint.

        Returns:
            True if the row passes the global filter and every column filter.
        """

        global_expr = parse_filter(global_filter_text)
        column_exprs = [parse_filter(t) for t in per_column_filter_text]
        return self.evaluate(rendered_cells, global_expr, column_exprs)

    @staticmethod
    def evaluate(
        rendered_cells: Sequence[str],
        global_expr: FilterExpression,
        column_exprs: Sequence[FilterExpression],
    ) -> bool:
        if not global_expr.matches(rendered_cells):
            return False
        for index, expr in enumerate(column_exprs):
            if expr.is_empty:
                continue
            cell = rendered_cells[index] if index < len(rendered_cells) else ""
            if not expr.matches([cell]):
                return False
        return True

    def mask(
        self,
        rows: Sequence[tuple[Record, Sequence[str]]],
        global_filter_text: str,
        per_column_filter_text: Sequence[str],
    ) -> list[bool]:
        """Visibility of every row, parsing each filter string once."""

        global_expr = parse_filter(global_filter_text)
        column_exprs = [parse_filter(t) for t in per_column_filter_text]
        return [self.evaluate(cells, global_expr, column_exprs) for _, cells in rows]
