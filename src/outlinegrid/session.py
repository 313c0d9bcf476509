"""Table session: one live record table and the queries run against it.

A session owns at most one `RecordTable`. `refresh()` tears the current table
down, waits for the source to settle, and builds a fresh table; filtering and
sorting then run against that table until the next refresh.
"""

from __future__ import annotations

import time
from typing import Callable, Mapping, Sequence

from outlinegrid.config import Settings
from outlinegrid.errors import UnknownColumnError
from outlinegrid.events import PassReport, PassStatus
from outlinegrid.extractor import RecordExtractor
from outlinegrid.ingest.poller import StabilityPoller
from outlinegrid.ingest.protocol import OutlineSource
from outlinegrid.logging import get_logger, pass_context, set_step
from outlinegrid.models.item import RawItem
from outlinegrid.models.record import Record, Schema
from outlinegrid.query import QueryEngine, normalize_column_filters
from outlinegrid.sorting import SortDirection, SortEngine
from outlinegrid.table import RecordTable
from outlinegrid.utils.ids import format_pass_id, pass_counter

logger = get_logger(__name__)

PassListener = Callable[[PassReport], None]
ColumnFilters = Sequence[str] | Mapping[str | int, str]


class TableSession:
    """Extraction passes plus the rendering contract over their result."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.settings = settings or Settings()
        self._sleep = sleep
        self._extractor = RecordExtractor(
            no_text_placeholder=self.settings.no_text_placeholder,
            no_parent_placeholder=self.settings.no_parent_placeholder,
        )
        self._query = QueryEngine()
        self._pass_ids = pass_counter()
        self._listeners: list[PassListener] = []

        self._poller: StabilityPoller | None = None
        self._table: RecordTable | None = None
        self._sorter: SortEngine | None = None
        self._order: list[int] = []
        self.last_report: PassReport | None = None

    def add_listener(self, listener: PassListener) -> None:
        """Call `listener` with the report of every finished pass."""

        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Extraction passes
    # ------------------------------------------------------------------

    def teardown(self) -> None:
        """Drop the current table and cancel any in-flight poll. Idempotent."""

        if self._poller is not None:
            self._poller.cancel()
            self._poller = None
        self._table = None
        self._sorter = None
        self._order = []

    def refresh(self, source: OutlineSource) -> PassReport | None:
        """Run a full extraction pass against `source`.

        Returns:
            The pass report, or ``None`` if the pass was superseded by another
            refresh before the source settled.
        """

        self.teardown()
        pass_id = format_pass_id(next(self._pass_ids))
        poller = StabilityPoller(
            source,
            interval_s=self.settings.poll_interval_s,
            stable_checks=self.settings.poll_stable_checks,
            max_checks=self.settings.poll_max_checks,
            sleep=self._sleep,
        )
        self._poller = poller
        reports: list[PassReport] = []

        with pass_context(pass_id=pass_id, step="poll"):
            logger.info("Starting extraction pass")
            poller.run(lambda items: reports.append(self._build(pass_id, items)))

        if self._poller is poller:
            self._poller = None
        if not reports:
            return None

        report = reports[0]
        self.last_report = report
        for listener in self._listeners:
            listener(report)
        return report

    def _build(self, pass_id: str, items: list[RawItem]) -> PassReport:
        set_step("extract")
        if not items:
            logger.info("Source has no items")
            return PassReport(pass_id=pass_id, status=PassStatus.EMPTY_SOURCE)

        table = RecordTable.build(items, self._extractor)
        stats = self._extractor.stats
        report = PassReport(
            pass_id=pass_id,
            status=PassStatus.OK if len(table) else PassStatus.NO_QUALIFYING_RECORDS,
            item_count=len(items),
            record_count=len(table),
            missing_anchor=stats.missing_anchor,
            unannotated=stats.unannotated,
            columns=table.columns if len(table) else [],
        )
        if report.ok:
            self._table = table
            self._sorter = SortEngine(table)
            self._order = list(range(len(table)))
        logger.info(report.message())
        return report

    # ------------------------------------------------------------------
    # Rendering contract
    # ------------------------------------------------------------------

    @property
    def table(self) -> RecordTable | None:
        return self._table

    def current_schema(self) -> Schema | None:
        return self._table.schema if self._table is not None else None

    def current_records(self) -> list[Record]:
        return list(self._table.records) if self._table is not None else []

    def current_order(self) -> list[int]:
        """Row indices in the arrangement left by the latest sort."""

        return list(self._order)

    def visible_mask(self, global_filter: str = "", column_filters: ColumnFilters | None = None) -> list[bool]:
        """Visibility of every record, indexed like `current_records()`.

        Args:
            global_filter: Filter applied across all cells of a row.
            column_filters: Either one filter string per column, in column
                order, or a mapping from column name/position to filter string.

        Raises:
            UnknownColumnError: If a mapping names a column that does not exist.
        """

        if self._table is None:
            return []
        table = self._table
        aligned = normalize_column_filters(_resolve_filters(table.schema, column_filters), len(table.columns))
        rows = [(record, table.cells(i)) for i, record in enumerate(table.records)]
        return self._query.mask(rows, global_filter, aligned)

    def sorted_order(self, column: str | int) -> list[int]:
        """Sort by `column` (toggling direction on repeats) and return the permutation.

        Raises:
            UnknownColumnError: If there is no table or no such column.
        """

        if self._sorter is None:
            raise UnknownColumnError(column, [])
        self._order = self._sorter.sorted_order(column, self._order)
        return list(self._order)

    def sorted_column(self) -> int | None:
        """Position of the column sorted most recently, if any."""

        return self._sorter.last_column if self._sorter is not None else None

    def sort_direction(self, column: str | int) -> SortDirection | None:
        if self._sorter is None:
            return None
        return self._sorter.direction(column)


def _resolve_filters(schema: Schema, column_filters: ColumnFilters | None) -> Sequence[str] | Mapping[int, str] | None:
    if not column_filters or not isinstance(column_filters, Mapping):
        return column_filters
    return {schema.index_of(column): text for column, text in column_filters.items()}
