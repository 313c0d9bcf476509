"""Record and schema models."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_serializer, field_validator

from outlinegrid.errors import UnknownColumnError


FIXED_COLUMNS: tuple[str, ...] = ("Parent", "Item", "Tags", "Date", "Mentions", "Backlinks")

LIST_SEPARATOR = ", "


class Record(BaseModel):
    """One structured row extracted from a qualifying outline item.

    Records never change once built: `properties` is a read-only mapping and
    backlinks are kept as `(label, ref)` pairs.
    """

    model_config = ConfigDict(frozen=True)

    parent_label: str
    parent_ref: str = ""
    item_label: str
    item_ref: str = ""

    literal_tags: tuple[str, ...] = ()
    properties: Mapping[str, str] = Field(default_factory=dict)

    date: str = ""
    mentions: str = ""
    backlink_pairs: tuple[tuple[str, str], ...] = ()

    @field_validator("properties", mode="after")
    @classmethod
    def _freeze_properties(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(value))

    @field_serializer("properties")
    def _dump_properties(self, value: Mapping[str, str]) -> dict[str, str]:
        return dict(value)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def backlinks(self) -> str:
        """Backlinks as comma-joined `label|ref` pairs."""

        return LIST_SEPARATOR.join(f"{label}|{ref}" for label, ref in self.backlink_pairs)

    def backlink_labels(self) -> list[str]:
        return [label for label, _ in self.backlink_pairs]


class Schema(BaseModel):
    """Fixed columns followed by the property keys discovered in one pass."""

    model_config = ConfigDict(frozen=True)

    fixed_columns: tuple[str, ...] = FIXED_COLUMNS
    property_keys: tuple[str, ...] = ()

    @property
    def columns(self) -> list[str]:
        return [*self.fixed_columns, *self.property_keys]

    def index_of(self, column: str | int) -> int:
        """Resolve a column name or position to a position.

        Names resolve to their first occurrence, so a property key that repeats a
        fixed column name is only reachable by position.

        Raises:
            UnknownColumnError: If the column does not exist.
        """

        columns = self.columns
        if isinstance(column, int):
            if 0 <= column < len(columns):
                return column
            raise UnknownColumnError(column, columns)
        try:
            return columns.index(column)
        except ValueError:
            raise UnknownColumnError(column, columns) from None
