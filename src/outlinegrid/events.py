"""Extraction pass outcome model.

Every refresh produces exactly one `PassReport`. Listeners registered on a
`TableSession` receive it once the new table (if any) is in place.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


class PassStatus(str, Enum):
    """Whole-batch outcome of an extraction pass."""

    OK = "ok"
    EMPTY_SOURCE = "empty_source"
    NO_QUALIFYING_RECORDS = "no_qualifying_records"


_STATUS_MESSAGES = {
    PassStatus.OK: "Found {records} record(s) in {items} item(s).",
    PassStatus.EMPTY_SOURCE: "The outline has no items to scan.",
    PassStatus.NO_QUALIFYING_RECORDS: (
        "Scanned {items} item(s) but none carry a property tag such as #p1 or #key-value."
    ),
}


class PassReport(BaseModel):
    """Summary of a single extraction pass."""

    pass_id: str
    status: PassStatus
    ts: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    item_count: int = Field(default=0, ge=0)
    record_count: int = Field(default=0, ge=0)
    missing_anchor: int = Field(default=0, ge=0)
    unannotated: int = Field(default=0, ge=0)
    columns: list[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status is PassStatus.OK

    def message(self) -> str:
        """Human-readable status line for the user."""

        if self.status is PassStatus.NO_QUALIFYING_RECORDS and self.missing_anchor:
            reasons = [f"{self.missing_anchor} lacked a link reference"]
            if self.unannotated:
                reasons.insert(0, f"{self.unannotated} carry no property tag")
            return f"Scanned {self.item_count} item(s) but none qualified: {' and '.join(reasons)}."
        return _STATUS_MESSAGES[self.status].format(items=self.item_count, records=self.record_count)
