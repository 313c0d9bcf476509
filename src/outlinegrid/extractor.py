"""Record extraction.

Turns one raw outline item into zero or one `Record`. Only items carrying at
least one property marker qualify; everything else is skipped without error.
"""

from __future__ import annotations

from dataclasses import dataclass

from outlinegrid.grammar import classify, find_markers, strip_markers
from outlinegrid.logging import get_logger
from outlinegrid.models.item import RawItem
from outlinegrid.models.marker import PropertyMarker
from outlinegrid.models.record import LIST_SEPARATOR, Record
from outlinegrid.schema import SchemaAccumulator

logger = get_logger(__name__)

NO_TEXT = "(no text)"
NO_PARENT = "(no parent)"


@dataclass
class ExtractionStats:
    """Per-pass counters of skipped items."""

    missing_anchor: int = 0
    unannotated: int = 0

    def reset(self) -> None:
        self.missing_anchor = 0
        self.unannotated = 0


class RecordExtractor:
    """Extract records from raw items, registering property keys as it goes."""

    def __init__(
        self,
        schema: SchemaAccumulator | None = None,
        *,
        no_text_placeholder: str = NO_TEXT,
        no_parent_placeholder: str = NO_PARENT,
    ) -> None:
        self.schema = schema if schema is not None else SchemaAccumulator()
        self.stats = ExtractionStats()
        self._no_text = no_text_placeholder
        self._no_parent = no_parent_placeholder

    def begin_pass(self) -> None:
        """Reset the schema and counters for a new extraction pass."""

        self.schema.reset()
        self.stats.reset()

    def extract(self, item: RawItem) -> Record | None:
        """Extract a record from `item`.

        Args:
            item: Raw outline item.

        Returns:
            The record, or ``None`` if the item has no property marker or cannot
            be anchored.
        """

        if not self._has_anchor(item):
            self.stats.missing_anchor += 1
            logger.debug("Dropping item without anchor: %r", item.text[:60])
            return None

        spans = find_markers(item.text)
        properties: dict[str, str] = {}
        literal_tags: list[str] = []
        for span in spans:
            parsed = classify(span.text)
            if isinstance(parsed, PropertyMarker):
                # Later duplicates on the same item win
                properties[parsed.key] = parsed.value
            else:
                literal_tags.append(parsed.text)

        if not properties:
            self.stats.unannotated += 1
            return None

        for key in properties:
            self.schema.register(key)

        label = strip_markers(item.text, spans) or self._no_text
        if item.parent is not None:
            parent_label = item.parent.label.strip() or self._no_text
            parent_ref = item.parent.ref or ""
        else:
            parent_label = self._no_parent
            parent_ref = ""

        return Record(
            parent_label=parent_label,
            parent_ref=parent_ref,
            item_label=label,
            item_ref=item.item_ref or "",
            literal_tags=tuple(literal_tags),
            properties=properties,
            date=item.date,
            mentions=LIST_SEPARATOR.join(item.mentions),
            backlink_pairs=tuple((b.label, b.ref) for b in item.backlinks),
        )

    @staticmethod
    def _has_anchor(item: RawItem) -> bool:
        if not item.item_ref:
            return False
        if item.parent is not None and not item.parent.ref:
            return False
        return True
