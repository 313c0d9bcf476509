"""Marker models.

A marker is a `#`-prefixed run of non-whitespace characters inside item text.
Classification turns it into exactly one of `PropertyMarker` or `LiteralMarker`.
"""

from __future__ import annotations

from typing import Union

from pydantic import BaseModel, ConfigDict, Field


class MarkerSpan(BaseModel):
    """A marker token found in raw text, with its position."""

    model_config = ConfigDict(frozen=True)

    text: str
    start: int = Field(ge=0)
    end: int = Field(ge=0)


class PropertyMarker(BaseModel):
    """A structured key/value pair decoded from a marker."""

    model_config = ConfigDict(frozen=True)

    key: str
    value: str


class LiteralMarker(BaseModel):
    """A marker matching no structured pattern, kept verbatim as a display tag."""

    model_config = ConfigDict(frozen=True)

    text: str


ParsedMarker = Union[PropertyMarker, LiteralMarker]
