"""In-memory record table for one extraction pass."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from outlinegrid.extractor import RecordExtractor
from outlinegrid.logging import get_logger
from outlinegrid.models.item import RawItem
from outlinegrid.models.record import Record, Schema

logger = get_logger(__name__)

TAG_SEPARATOR = " "


def render_cells(record: Record, schema: Schema) -> list[str]:
    """Render the display text of each column for `record`.

    Fixed columns come first, then one cell per discovered property key (empty
    when the record does not carry that key).
    """

    fixed = {
        "Parent": record.parent_label,
        "Item": record.item_label,
        "Tags": TAG_SEPARATOR.join(record.literal_tags),
        "Date": record.date,
        "Mentions": record.mentions,
        "Backlinks": ", ".join(record.backlink_labels()),
    }
    cells = [fixed.get(name, "") for name in schema.fixed_columns]
    cells.extend(record.properties.get(key, "") for key in schema.property_keys)
    return cells


@dataclass(frozen=True)
class RecordTable:
    """Records plus the schema discovered while extracting them.

    Built once per pass and never mutated; a refresh replaces the whole table.
    """

    records: tuple[Record, ...]
    schema: Schema
    _cells: tuple[tuple[str, ...], ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "_cells",
            tuple(tuple(render_cells(r, self.schema)) for r in self.records),
        )

    @classmethod
    def build(cls, items: Iterable[RawItem], extractor: RecordExtractor) -> "RecordTable":
        """Run an extraction pass over `items`.

        The extractor's schema and counters are reset first, so the resulting
        schema reflects only this pass.
        """

        extractor.begin_pass()
        records: list[Record] = []
        for item in items:
            record = extractor.extract(item)
            if record is not None:
                records.append(record)

        logger.info(
            "Extracted %d record(s); skipped %d unannotated, %d without anchor",
            len(records),
            extractor.stats.unannotated,
            extractor.stats.missing_anchor,
        )
        return cls(records=tuple(records), schema=extractor.schema.snapshot())

    def __len__(self) -> int:
        return len(self.records)

    @property
    def columns(self) -> list[str]:
        return self.schema.columns

    def cells(self, index: int) -> list[str]:
        """Rendered cells of the record at `index`."""

        return list(self._cells[index])

    def column_values(self, column: str | int) -> list[str]:
        col = self.schema.index_of(column)
        return [row[col] for row in self._cells]
