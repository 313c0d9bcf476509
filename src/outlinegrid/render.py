"""Terminal rendering of a table session."""

from __future__ import annotations

from rich.table import Table

from outlinegrid.session import TableSession
from outlinegrid.sorting import SortDirection

_ARROWS = {SortDirection.ASCENDING: " ▲", SortDirection.DESCENDING: " ▼"}


def build_rich_table(
    session: TableSession,
    visible: list[bool] | None = None,
    *,
    title: str | None = None,
) -> Table:
    """Paint the session's current table as a `rich.table.Table`.

    Rows follow the session's current sort order; rows whose entry in `visible`
    is False are left out. Only the column sorted last carries a direction arrow.
    """

    table = session.table
    out = Table(title=title, show_lines=False, header_style="bold")
    if table is None:
        return out

    sorted_col = session.sorted_column()
    for index, name in enumerate(table.columns):
        header = name
        if index == sorted_col:
            direction = session.sort_direction(index)
            if direction is not None:
                header += _ARROWS[direction]
        out.add_column(header, overflow="fold")

    mask = visible if visible is not None else [True] * len(table)
    for row in session.current_order():
        if mask[row]:
            out.add_row(*table.cells(row))
    return out
