"""Raw outline item models handed over by an ingestion source."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ParentLink(BaseModel):
    """Label and reference of the item's enclosing outline node."""

    label: str
    ref: str | None = None


class Backlink(BaseModel):
    """An item elsewhere in the outline that links to this one."""

    label: str
    ref: str


class RawItem(BaseModel):
    """One materialized outline item, as plain data.

    `item_ref` is the link/identifier of the item itself. An item without one
    (or whose parent has no ref) cannot be anchored and is dropped during
    extraction.
    """

    text: str
    item_ref: str | None = None
    parent: ParentLink | None = None

    date: str = ""
    mentions: list[str] = Field(default_factory=list)
    backlinks: list[Backlink] = Field(default_factory=list)
