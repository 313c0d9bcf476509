"""Protocol for outline ingestion sources."""

from __future__ import annotations

from abc import ABC, abstractmethod

from outlinegrid.models.item import RawItem


class OutlineSource(ABC):
    """Supplies snapshots of the currently materialized outline items.

    Hosts that load their outline lazily report `is_stable()` as False until
    every item has been materialized.
    """

    @abstractmethod
    def list_items(self) -> list[RawItem]:
        """Return the items materialized so far, in outline order."""

    @abstractmethod
    def is_stable(self) -> bool:
        """Return True if no further lazy loading is expected."""

    def item_count(self) -> int:
        return len(self.list_items())
