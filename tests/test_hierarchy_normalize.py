from __future__ import annotations

from datetime import date

import pytest

from core.domain import ROOT_ID, Activity, ActivityKind
from core.exceptions import ValidationError
from core.services.hierarchy import RootMeta, normalize
from core.services.hierarchy.flatten import flatten_activities
from core.services.hierarchy.normalize import _Draft


def _assert_tree(snapshot):
    by_id = snapshot.by_id()
    assert by_id[snapshot.root_id].parent_id is None
    for activity in snapshot.activities:
        if activity.id == snapshot.root_id:
            continue
        seen = set()
        current = activity
        while current.parent_id is not None:
            assert current.parent_id in by_id
            assert current.id not in seen
            seen.add(current.id)
            current = by_id[current.parent_id]
        assert current.id == snapshot.root_id


def test_missing_root_is_synthesized_from_input_bounds(sample_rows):
    snapshot = normalize(sample_rows)

    root = snapshot.activities[0]
    assert root.id == ROOT_ID
    assert root.kind == ActivityKind.GROUP
    assert root.name == "Project Summary: Overall Project"
    assert root.resource == "Project Management"
    assert root.start == date(2024, 1, 1)
    assert root.end == date(2024, 1, 13)
    assert root.depth == 0
    _assert_tree(snapshot)


def test_root_title_comes_from_root_meta(make_row):
    snapshot = normalize([make_row("A", "2024-01-01", "2024-01-02")], RootMeta(title="Bridge"))
    assert snapshot.root.name == "Project Summary: Bridge"


def test_orphans_and_placeholder_parents_go_under_root(make_row):
    snapshot = normalize(
        [
            make_row("A", "2024-01-01", "2024-01-02", project="NOPE"),
            make_row("B", "2024-01-01", "2024-01-02", project="Unassigned"),
            make_row("C", "2024-01-01", "2024-01-02", parent="C"),
        ]
    )
    by_id = snapshot.by_id()
    assert {by_id[i].parent_id for i in ("A", "B", "C")} == {ROOT_ID}


def test_parent_loop_is_cut_and_tree_invariant_holds(make_row):
    snapshot = normalize(
        [
            {"id": "P1", "type": "phase", "parent": "P2"},
            {"id": "P2", "type": "phase", "parent": "P1"},
            make_row("T", "2024-02-01", "2024-02-03", parent="P1"),
        ]
    )
    _assert_tree(snapshot)
    assert len(snapshot) == 4


def test_ids_are_stringified_deduplicated_and_filled(make_row):
    snapshot = normalize(
        [
            make_row(7, "2024-01-01", "2024-01-02"),
            make_row("A", "2024-01-01", "2024-01-02"),
            make_row("A", "2024-01-03", "2024-01-04"),
            {"name": "No id", "start": "2024-01-05", "end": "2024-01-06"},
        ]
    )
    ids = {a.id for a in snapshot.activities}
    assert {"7", "A", "A~2", "ACT-4"} <= ids


def test_renamed_duplicate_skips_ids_already_in_the_input(make_row):
    snapshot = normalize(
        [
            make_row("A~2", "2024-01-01", "2024-01-02"),
            make_row("A", "2024-01-01", "2024-01-02"),
            make_row("A", "2024-01-03", "2024-01-04"),
            make_row("A", "2024-01-05", "2024-01-06"),
        ]
    )
    ids = [a.id for a in snapshot.activities if a.id != ROOT_ID]
    assert sorted(ids) == ["A", "A~2", "A~3", "A~4"]
    assert snapshot.get("A~3").start == date(2024, 1, 3)


def test_flatten_reports_duplicate_ids():
    day = date(2024, 1, 1)
    activities = [
        Activity(id=ROOT_ID, kind=ActivityKind.GROUP, name="Root", start=day, end=day),
        Activity(id="A", kind=ActivityKind.TASK, name="A", start=day, end=day, parent_id=ROOT_ID),
        Activity(id="A", kind=ActivityKind.TASK, name="A again", start=day, end=day, parent_id=ROOT_ID),
    ]
    with pytest.raises(ValidationError) as exc:
        flatten_activities(activities, ROOT_ID)
    assert exc.value.code == "DUPLICATE_ID"
    assert exc.value.activity_id == "A"


def test_task_owning_children_is_promoted_to_group(make_row):
    snapshot = normalize(
        [
            make_row("P", "2024-01-01", "2024-01-02"),
            make_row("C", "2024-01-01", "2024-01-05", parent="P"),
        ]
    )
    assert snapshot.get("P").kind == ActivityKind.GROUP


def test_field_values_are_coerced(make_row):
    snapshot = normalize(
        [
            make_row("A", "2024-01-05T09:00:00Z", "2024-01-01", progress="55.5", cost="-5"),
            make_row("B", None, "2024-01-09", progress=150, cost="12.5"),
        ]
    )
    a = snapshot.get("A")
    b = snapshot.get("B")
    assert a.start == date(2024, 1, 5)
    assert a.end == a.start
    assert a.progress == 56
    assert a.cost == 0.0
    assert b.start == b.end == date(2024, 1, 9)
    assert b.progress == 100
    assert b.cost == 12.5


def test_dangling_dependency_is_reported_with_ids(make_row):
    rows = [
        make_row("A", "2024-01-01", "2024-01-02"),
        make_row("B", "2024-01-02", "2024-01-03", dependencies=["A", "GHOST"]),
    ]

    with pytest.raises(ValidationError) as exc:
        normalize(rows)

    assert exc.value.code == "DANGLING_DEPENDENCY"
    assert exc.value.activity_id == "B"
    assert exc.value.reference == "GHOST"


def test_dangling_dependency_can_be_dropped(make_row):
    rows = [
        make_row("A", "2024-01-01", "2024-01-02"),
        make_row("B", "2024-01-02", "2024-01-03", dependencies="A, GHOST, B"),
    ]
    snapshot = normalize(rows, drop_dangling_dependencies=True)
    assert snapshot.get("B").dependencies == ("A",)


def test_siblings_ordered_by_numeric_prefix_then_kind_then_start(make_row):
    snapshot = normalize(
        [
            make_row("B", "2024-01-01", "2024-01-02"),
            {"id": "M", "type": "milestone", "start": "2024-01-01", "end": "2024-01-01"},
            make_row("10", "2024-01-01", "2024-01-02"),
            make_row("2", "2024-01-01", "2024-01-02"),
            make_row("1.10", "2024-01-01", "2024-01-02", project="1"),
            make_row("1.2", "2024-01-01", "2024-01-02", project="1"),
            {"id": "1", "type": "phase"},
            {"id": "G", "type": "group"},
            make_row("A", "2024-01-03", "2024-01-04"),
            make_row("G.1", "2024-01-01", "2024-01-02", project="G"),
        ]
    )

    order = [a.id for a in snapshot.activities]
    assert order == [ROOT_ID, "1", "1.2", "1.10", "2", "10", "G", "G.1", "B", "A", "M"]
    assert snapshot.get("1.10").depth == 2
    assert snapshot.get("G").depth == 1


def test_empty_input_yields_root_only():
    snapshot = normalize([])
    assert [a.id for a in snapshot.activities] == [ROOT_ID]


def test_undated_draft_is_rejected_when_frozen():
    draft = _Draft(id="X", kind=ActivityKind.TASK, name="X", start=None, end=date(2024, 1, 1),
                   progress=0, cost=0.0, resource="", parent_id=None)
    with pytest.raises(ValidationError) as exc:
        draft.freeze()
    assert exc.value.code == "INVALID_DATE"
    assert exc.value.activity_id == "X"
