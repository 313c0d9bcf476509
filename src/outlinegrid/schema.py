"""Dynamic column discovery."""

from __future__ import annotations

from outlinegrid.models.record import FIXED_COLUMNS, Schema


class SchemaAccumulator:
    """Ordered set of property keys seen during one extraction pass.

    Keys keep first-seen order and are never duplicated. Call `reset()` at the
    start of every pass.
    """

    def __init__(self, fixed_columns: tuple[str, ...] = FIXED_COLUMNS) -> None:
        self._fixed = tuple(fixed_columns)
        self._keys: dict[str, None] = {}

    def register(self, key: str) -> None:
        self._keys.setdefault(key, None)

    def reset(self) -> None:
        self._keys.clear()

    @property
    def keys(self) -> list[str]:
        return list(self._keys)

    def columns(self) -> list[str]:
        """Fixed columns followed by accumulated keys."""

        return [*self._fixed, *self._keys]

    def snapshot(self) -> Schema:
        """Freeze the current state into a `Schema`."""

        return Schema(fixed_columns=self._fixed, property_keys=tuple(self._keys))
