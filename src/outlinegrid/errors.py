"""Exceptions raised for caller mistakes.

Data anomalies inside an outline never raise; they are reported through
`PassReport` or by dropping the offending item.
"""

from __future__ import annotations


class OutlineGridError(Exception):
    """Base class for outlinegrid errors."""


class UnknownColumnError(OutlineGridError, KeyError):
    """A sort or filter request named a column the current schema does not have."""

    def __init__(self, column: str | int, available: list[str]) -> None:
        self.column = column
        self.available = available
        super().__init__(f"Unknown column {column!r}; available: {', '.join(available) or '(none)'}")

    def __str__(self) -> str:
        return self.args[0]


class OutlineLoadError(OutlineGridError):
    """An outline file could not be read or does not describe an outline tree."""
