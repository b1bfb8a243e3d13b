from __future__ import annotations

from datetime import date

import pytest

from core.domain import ScheduleConstraints
from core.exceptions import ValidationError
from core.services.hierarchy import normalize, update_activity
from core.services.rollup import rollup


def test_group_cost_is_summed_and_progress_cost_weighted(make_row):
    snapshot = rollup(
        normalize(
            [
                {"id": "G", "type": "group"},
                make_row("A", "2024-01-01", "2024-01-03", project="G", cost=100, progress=50),
                make_row("B", "2024-01-02", "2024-01-06", project="G", cost=300, progress=10),
            ]
        )
    )
    group = snapshot.get("G")
    assert group.cost == 400
    assert group.progress == 20
    assert group.start == date(2024, 1, 1)
    assert group.end == date(2024, 1, 6)


def test_uncosted_children_use_simple_mean(make_row):
    snapshot = rollup(
        normalize(
            [
                {"id": "G", "type": "group"},
                make_row("A", "2024-01-01", "2024-01-03", project="G", progress=30),
                make_row("B", "2024-01-01", "2024-01-03", project="G", progress=61),
            ]
        )
    )
    # 45.5 rounds half up
    assert snapshot.get("G").progress == 46
    assert snapshot.get("G").cost == 0


def test_nested_groups_roll_up_to_root(sample_rows):
    snapshot = rollup(normalize(sample_rows))

    design = snapshot.get("1")
    build = snapshot.get("2")
    root = snapshot.root
    assert (design.cost, design.progress) == (400, 20)
    assert (build.cost, build.progress) == (600, 0)
    assert (root.cost, root.progress) == (1000, 8)
    assert root.start == date(2024, 1, 1)
    assert root.end == date(2024, 1, 13)


def test_rollup_is_idempotent(sample_rows):
    once = rollup(normalize(sample_rows))
    assert rollup(once) == once


def test_rollup_does_not_touch_its_argument(sample_rows):
    original = normalize(sample_rows)
    before = original.get("1")
    rollup(original)
    assert original.get("1") == before


def test_forced_bounds_override_root_dates(sample_rows):
    snapshot = rollup(
        normalize(
            sample_rows,
            constraints=ScheduleConstraints(start=date(2023, 12, 28), finish=date(2024, 1, 20)),
        )
    )
    assert snapshot.root.start == date(2023, 12, 28)
    assert snapshot.root.end == date(2024, 1, 20)
    # groups below the root keep their derived bounds
    assert snapshot.get("1").start == date(2024, 1, 1)


def test_forced_finish_before_start_is_rejected(sample_rows):
    snapshot = normalize(sample_rows, constraints=ScheduleConstraints(finish=date(2023, 6, 1)))
    with pytest.raises(ValidationError) as exc:
        rollup(snapshot)
    assert exc.value.code == "CONSTRAINT_CONFLICT"


def test_group_emptied_by_reparent_drops_its_cost(make_row):
    snapshot = rollup(
        normalize(
            [
                {"id": "G1", "type": "group"},
                make_row("T1", "2024-01-01", "2024-01-03", project="G1", cost=100, progress=40),
                {"id": "G2", "type": "group"},
                make_row("T2", "2024-01-01", "2024-01-05", project="G2", cost=50),
            ]
        )
    )
    moved = rollup(update_activity(snapshot, "T1", parent_id="G2"))

    assert (moved.get("G1").cost, moved.get("G1").progress) == (0.0, 0)
    assert moved.get("G2").cost == 150
    assert moved.root.cost == 150


def test_childless_group_ignores_authored_values(make_row):
    snapshot = rollup(
        normalize(
            [
                {"id": "G", "type": "group", "cost": 999, "progress": 80,
                 "start": "2024-01-01", "end": "2024-01-02"},
                make_row("T", "2024-01-01", "2024-01-04", cost=10),
            ]
        )
    )
    assert snapshot.get("G").cost == 0.0
    assert snapshot.get("G").end == date(2024, 1, 2)
    assert snapshot.root.cost == 10
    assert snapshot.root.progress == 0
