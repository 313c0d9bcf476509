"""Pydantic models used across the project."""

from __future__ import annotations

from outlinegrid.models.item import Backlink, ParentLink, RawItem
from outlinegrid.models.marker import LiteralMarker, MarkerSpan, ParsedMarker, PropertyMarker
from outlinegrid.models.outline import OutlineDocument, OutlineNode
from outlinegrid.models.record import FIXED_COLUMNS, Record, Schema

__all__ = [
    "Backlink",
    "FIXED_COLUMNS",
    "LiteralMarker",
    "MarkerSpan",
    "OutlineDocument",
    "OutlineNode",
    "ParentLink",
    "ParsedMarker",
    "PropertyMarker",
    "RawItem",
    "Record",
    "Schema",
]
