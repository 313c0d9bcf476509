"""Outline tree models used by file-backed ingestion."""

from __future__ import annotations

from pydantic import BaseModel, Field

from outlinegrid.models.item import Backlink


class OutlineNode(BaseModel):
    """A node of an exported outline tree.

    `id` doubles as the node's link reference; nodes exported without one
    cannot be anchored.
    """

    id: str | None = None
    text: str = ""
    date: str = ""
    mentions: list[str] = Field(default_factory=list)
    backlinks: list[Backlink] = Field(default_factory=list)

    children: list["OutlineNode"] = Field(default_factory=list)


class OutlineDocument(BaseModel):
    title: str | None = None
    nodes: list[OutlineNode] = Field(default_factory=list)
