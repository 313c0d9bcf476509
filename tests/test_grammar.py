"""Tests for marker grammar."""

from __future__ import annotations

import pytest

from outlinegrid.grammar import classify, find_markers, strip_markers
from outlinegrid.models.marker import LiteralMarker, PropertyMarker


@pytest.mark.parametrize(
    ("marker", "value"),
    [("#p123", "123"), ("#P7", "7"), ("#p0", "0")],
)
def test_classify_p_markers_normalize_key(marker: str, value: str) -> None:
    """It should read #p<digits> in either case as the uppercase P property."""

    assert classify(marker) == PropertyMarker(key="P", value=value)


def test_classify_key_value() -> None:
    """It should split #key-value markers into a property."""

    assert classify("#abc-def") == PropertyMarker(key="abc", value="def")
    assert classify("#Status-In_Progress") == PropertyMarker(key="Status", value="In_Progress")


def test_classify_splits_on_first_hyphen() -> None:
    """It should keep every hyphen after the first inside the value."""

    assert classify("#a-b-c") == PropertyMarker(key="a", value="b-c")
    assert classify("#due-2024-05-01") == PropertyMarker(key="due", value="2024-05-01")


def test_classify_p_prefix_with_hyphen_is_key_value() -> None:
    """It should fall through to the hyphen rule when #p is not followed by digits only."""

    assert classify("#p-5") == PropertyMarker(key="p", value="5")


@pytest.mark.parametrize("marker", ["#urgent", "#p12x", "#-b", "#a-", "#p", "#", "#P1.5"])
def test_classify_unrecognized_is_literal(marker: str) -> None:
    """It should keep anything else verbatim as a literal tag."""

    assert classify(marker) == LiteralMarker(text=marker)


def test_find_markers_positions() -> None:
    """It should find every #-prefixed token with its offsets."""

    text = "see #p1 and #x-y. later#z"
    spans = find_markers(text)

    assert [s.text for s in spans] == ["#p1", "#x-y.", "#z"]
    assert [(s.start, s.end) for s in spans] == [(4, 7), (12, 17), (23, 25)]
    assert find_markers("no markers here") == []


def test_strip_markers_keeps_inner_whitespace_and_trims() -> None:
    """It should remove marker spans and trim only the outer whitespace."""

    text = "  #p1 review #tag this #x-y  "
    assert strip_markers(text, find_markers(text)) == "review  this"


def test_strip_markers_round_trip() -> None:
    """Re-inserting removed markers at their original offsets should rebuild the text."""

    text = "a #p1 b #todo c #k-v d"
    spans = find_markers(text)
    stripped = strip_markers(text, spans)
    assert stripped == "a  b  c  d"

    rebuilt = stripped
    for span in spans:
        rebuilt = rebuilt[: span.start] + span.text + rebuilt[span.start :]
    assert rebuilt == text
