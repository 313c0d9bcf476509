"""ID utilities."""

from __future__ import annotations

import itertools


def pass_counter() -> itertools.count:
    """Return a counter for extraction pass ids, starting from 1."""

    return itertools.count(1)


def format_pass_id(n: int, prefix: str = "pass_") -> str:
    """Format a numeric counter as a pass id.

    Uses zero-padded numbers (e.g. pass_0001) so ids sort in creation order.
    """

    return f"{prefix}{n:04d}"
