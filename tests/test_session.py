"""Tests for the table session."""

from __future__ import annotations

import pytest

from outlinegrid.config import Settings
from outlinegrid.errors import UnknownColumnError
from outlinegrid.events import PassReport, PassStatus
from outlinegrid.ingest.protocol import OutlineSource
from outlinegrid.ingest.sources import StaticSource
from outlinegrid.models.item import ParentLink, RawItem
from outlinegrid.models.record import FIXED_COLUMNS
from outlinegrid.session import TableSession


def _items(*texts: str) -> list[RawItem]:
    parent = ParentLink(label="Project", ref="proj")
    return [RawItem(text=t, item_ref=f"i{n}", parent=parent) for n, t in enumerate(texts)]


def _session() -> TableSession:
    return TableSession(Settings(poll_interval_s=0.0), sleep=lambda _: None)


def test_end_to_end_single_record() -> None:
    """It should keep only the annotated item and decode both its properties."""

    session = _session()
    report = session.refresh(StaticSource(_items("#p1 #urgent-high review this", "plain note")))

    assert report is not None
    assert report.status is PassStatus.OK
    assert (report.item_count, report.record_count, report.unannotated) == (2, 1, 1)

    records = session.current_records()
    assert len(records) == 1
    assert records[0].properties == {"P": "1", "urgent": "high"}
    assert records[0].literal_tags == ()
    assert records[0].parent_label == "Project"
    assert session.current_schema().columns == [*FIXED_COLUMNS, "P", "urgent"]


def test_empty_source_is_reported() -> None:
    """It should report an empty source without building a table."""

    session = _session()
    report = session.refresh(StaticSource([]))

    assert report is not None
    assert report.status is PassStatus.EMPTY_SOURCE
    assert session.current_schema() is None
    assert session.current_records() == []
    assert session.visible_mask("x") == []
    assert session.visible_mask("", {"P": "x"}) == []


def test_no_qualifying_records_is_distinct() -> None:
    """It should tell 'nothing to scan' apart from 'scanned, found nothing'."""

    session = _session()
    report = session.refresh(StaticSource(_items("#todo later", "nothing")))

    assert report is not None
    assert report.status is PassStatus.NO_QUALIFYING_RECORDS
    assert report.message() != PassReport(pass_id="x", status=PassStatus.EMPTY_SOURCE).message()
    assert session.table is None


def test_missing_anchor_items_are_skipped() -> None:
    """It should drop unanchored items and still build the rest of the table."""

    items = _items("#p1 kept") + [RawItem(text="#p2 orphan")]
    report = _session().refresh(StaticSource(items))

    assert report is not None
    assert report.record_count == 1
    assert report.missing_anchor == 1


def test_refresh_replaces_previous_table() -> None:
    """It should discard the old records and columns on refresh."""

    session = _session()
    session.refresh(StaticSource(_items("#old-1 a")))
    session.sorted_order("old")
    session.refresh(StaticSource(_items("#new-1 b", "#new-2 c")))

    assert session.current_schema().property_keys == ("new",)
    assert [r.item_label for r in session.current_records()] == ["b", "c"]
    assert session.current_order() == [0, 1]
    assert session.sorted_column() is None


def test_pass_ids_increase() -> None:
    """It should give each pass its own id."""

    session = _session()
    first = session.refresh(StaticSource(_items("#p1 a")))
    second = session.refresh(StaticSource(_items("#p1 a")))

    assert first is not None and second is not None
    assert (first.pass_id, second.pass_id) == ("pass_0001", "pass_0002")


def test_listeners_receive_reports() -> None:
    """It should notify listeners with every pass report."""

    seen: list[PassReport] = []
    session = _session()
    session.add_listener(seen.append)

    session.refresh(StaticSource([]))
    session.refresh(StaticSource(_items("#p1 a")))

    assert [r.status for r in seen] == [PassStatus.EMPTY_SOURCE, PassStatus.OK]
    assert session.last_report is seen[-1]


def test_visible_mask_with_named_column_filters() -> None:
    """It should accept per-column filters keyed by column name."""

    session = _session()
    session.refresh(StaticSource(_items("#p1 #owner-ann a", "#p2 #owner-bob b", "#p3 c")))

    assert session.visible_mask() == [True, True, True]
    assert session.visible_mask("", {"owner": "ann,bob"}) == [True, True, False]
    assert session.visible_mask("b", {"P": "!3"}) == [False, True, False]
    assert session.visible_mask("", ["", "", "", "", "", "", "2"]) == [False, True, False]
    with pytest.raises(UnknownColumnError):
        session.visible_mask("", {"nope": "x"})


def test_sorted_order_toggles_and_persists() -> None:
    """It should sort against the current arrangement and flip on repeats."""

    session = _session()
    session.refresh(StaticSource(_items("#p10 a", "#p2 b", "#p9 c")))

    assert session.sorted_order("P") == [1, 2, 0]
    assert session.sorted_order("P") == [0, 2, 1]
    assert session.current_order() == [0, 2, 1]
    assert session.sort_direction("P").value == "desc"


def test_sorted_order_without_table() -> None:
    """It should reject sorting when no table exists."""

    with pytest.raises(UnknownColumnError):
        _session().sorted_order("P")


class SlowSource(OutlineSource):
    """Source that never settles on its own."""

    def list_items(self) -> list[RawItem]:
        return _items("#slow-1 never")

    def is_stable(self) -> bool:
        return False


def test_new_refresh_supersedes_in_flight_poll() -> None:
    """It should abandon a pending poll when another refresh starts."""

    state = {"started": False}
    inner: list[PassReport | None] = []

    def sleep(_: float) -> None:
        if not state["started"]:
            state["started"] = True
            inner.append(session.refresh(StaticSource(_items("#fast-1 done"))))

    session = TableSession(Settings(poll_interval_s=0.0), sleep=sleep)
    outer = session.refresh(SlowSource())

    assert outer is None
    assert inner[0] is not None and inner[0].ok
    assert session.current_schema().property_keys == ("fast",)


def test_unanchored_items_are_explained() -> None:
    """It should say tagged items were dropped for lacking a link, not for lacking tags."""

    session = _session()
    report = session.refresh(StaticSource([RawItem(text="#p1 a"), RawItem(text="#k-v b")]))

    assert report is not None
    assert report.status is PassStatus.NO_QUALIFYING_RECORDS
    assert report.missing_anchor == 2
    assert report.message() == "Scanned 2 item(s) but none qualified: 2 lacked a link reference."
    assert "property tag" not in report.message()


def test_mixed_skip_reasons_are_both_reported() -> None:
    """It should name both untagged and unanchored items when nothing qualifies."""

    items = _items("plain note") + [RawItem(text="#p1 orphan")]
    report = _session().refresh(StaticSource(items))

    assert report is not None
    assert report.message() == (
        "Scanned 2 item(s) but none qualified: 1 carry no property tag and 1 lacked a link reference."
    )
