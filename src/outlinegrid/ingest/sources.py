"""Concrete ingestion sources."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from pydantic import TypeAdapter, ValidationError

from outlinegrid.errors import OutlineLoadError
from outlinegrid.ingest.protocol import OutlineSource
from outlinegrid.logging import get_logger
from outlinegrid.models.item import ParentLink, RawItem
from outlinegrid.models.outline import OutlineDocument, OutlineNode

logger = get_logger(__name__)


@dataclass
class StaticSource(OutlineSource):
    """A fully materialized, in-memory list of items."""

    items: list[RawItem] = field(default_factory=list)

    def list_items(self) -> list[RawItem]:
        return list(self.items)

    def is_stable(self) -> bool:
        return True

    def item_count(self) -> int:
        return len(self.items)


def flatten_outline(nodes: list[OutlineNode], parent: OutlineNode | None = None) -> Iterator[RawItem]:
    """Walk an outline tree depth first, yielding one `RawItem` per node.

    Each node's parent link points at its enclosing node; top-level nodes have
    no parent.
    """

    link = ParentLink(label=parent.text.strip(), ref=parent.id) if parent is not None else None
    for node in nodes:
        yield RawItem(
            text=node.text,
            item_ref=node.id,
            parent=link,
            date=node.date,
            mentions=list(node.mentions),
            backlinks=list(node.backlinks),
        )
        yield from flatten_outline(node.children, node)


class OutlineFileSource(OutlineSource):
    """Outline tree read from a JSON export.

    The file holds either a list of nodes or an object with a ``nodes`` list;
    each node has ``id``, ``text`` and optional ``date``, ``mentions``,
    ``backlinks`` and ``children``.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._items: list[RawItem] | None = None
        self._title: str | None = None

    def _load(self) -> list[RawItem]:
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except OSError as e:
            raise OutlineLoadError(f"Cannot read outline file {self.path}: {e}") from e
        except json.JSONDecodeError as e:
            raise OutlineLoadError(f"Outline file {self.path} is not valid JSON: {e}") from e

        if isinstance(raw, list):
            raw = {"nodes": raw}
        try:
            doc = TypeAdapter(OutlineDocument).validate_python(raw)
        except ValidationError as e:
            raise OutlineLoadError(f"Outline file {self.path} is not an outline tree: {e}") from e

        self._title = doc.title or self.path.stem
        items = list(flatten_outline(doc.nodes))
        logger.info("Loaded %d item(s) from %s", len(items), self.path)
        return items

    def list_items(self) -> list[RawItem]:
        if self._items is None:
            self._items = self._load()
        return list(self._items)

    @property
    def title(self) -> str:
        """Outline title from the file, or the file name when it has none."""

        if self._title is None:
            self.list_items()
        return self._title or self.path.stem

    def is_stable(self) -> bool:
        return True

