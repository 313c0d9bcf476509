"""Marker grammar.

Markers are `#`-prefixed runs of non-whitespace characters embedded in item text.
Two shapes carry structure:

* ``#p12`` / ``#P12``: a ``P`` property with a numeric value.
* ``#key-value``: a property split on the first hyphen, so ``#a-b-c`` is
  ``a`` = ``b-c``.

Everything else is a literal tag kept verbatim.
"""

from __future__ import annotations

import re

from outlinegrid.models.marker import LiteralMarker, MarkerSpan, ParsedMarker, PropertyMarker

MARKER_DELIMITER = "#"
P_KEY = "P"

_MARKER_RE = re.compile(re.escape(MARKER_DELIMITER) + r"\S+")
_P_RE = re.compile(r"[pP](?P<digits>\d+)")
_KEY_VALUE_RE = re.compile(r"(?P<key>[^\s-]+)-(?P<value>\S+)")


def find_markers(text: str) -> list[MarkerSpan]:
    """Find every marker token in `text`, in order of appearance.

    Args:
        text: Raw item text.

    Returns:
        Marker spans with their start/end offsets into `text`.
    """

    return [MarkerSpan(text=m.group(0), start=m.start(), end=m.end()) for m in _MARKER_RE.finditer(text)]


def classify(marker: str) -> ParsedMarker:
    """Classify a single marker token.

    Total: every marker becomes either a `PropertyMarker` or a `LiteralMarker`.

    Args:
        marker: Marker text including the leading delimiter, e.g. ``#p12``.

    Returns:
        The parsed marker.
    """

    body = marker[len(MARKER_DELIMITER):] if marker.startswith(MARKER_DELIMITER) else marker

    m = _P_RE.fullmatch(body)
    if m:
        return PropertyMarker(key=P_KEY, value=m.group("digits"))

    m = _KEY_VALUE_RE.fullmatch(body)
    if m:
        return PropertyMarker(key=m.group("key"), value=m.group("value"))

    return LiteralMarker(text=marker)


def strip_markers(text: str, spans: list[MarkerSpan]) -> str:
    """Remove the given marker spans from `text` and trim the result.

    Whitespace between the remaining words is left untouched, so removing a
    marker from the middle of a sentence leaves two adjacent spaces.
    """

    parts: list[str] = []
    cursor = 0
    for span in spans:
        parts.append(text[cursor:span.start])
        cursor = span.end
    parts.append(text[cursor:])
    return "".join(parts).strip()
