from __future__ import annotations

from copy import deepcopy

from timegrid.engine.orchestrator import calculate_layout_outcome
from timegrid.metrics import count_unresolved_collisions
from timegrid.reporting.move_trace import MoveTraceCollector

CELL = 50


def _item(item_id: object, col: int, row: int, width_units: int = 2) -> dict:
    return {
        "id": item_id,
        "x": col * CELL,
        "y": row * CELL,
        "width_units": width_units,
        "name": f"Item {item_id}",
    }


def _options(**overrides: object) -> dict:
    options = {"is_backfill_mode": False, "is_bump_mode": False, "grid_width": 1000, "grid_height": 1000}
    options.update(overrides)
    return options


def _xy(result: dict) -> dict:
    return {item["id"]: (item["x"], item["y"]) for item in result["items"]}


def _three_in_a_row() -> list[dict]:
    return [_item("A", 0, 0), _item("B", 2, 0), _item("C", 4, 0)]


def test_backfill_then_move_into_vacated_spot_without_bump() -> None:
    result = calculate_layout_outcome(
        [{"id": "B", "target_x": 200, "target_y": 0}],
        _three_in_a_row(),
        CELL,
        _options(is_backfill_mode=True),
    )

    assert _xy(result) == {"A": (0, 0), "B": (200, 0), "C": (100, 0)}
    assert result["is_valid"] is True
    assert result["dragged_items"] == [{**_item("B", 4, 0)}]


def test_backfill_with_bump_restores_the_chain() -> None:
    result = calculate_layout_outcome(
        [{"id": "B", "target_x": 0, "target_y": 0}],
        _three_in_a_row(),
        CELL,
        _options(is_backfill_mode=True, is_bump_mode=True),
    )

    assert _xy(result) == {"A": (100, 0), "B": (0, 0), "C": (200, 0)}
    assert result["is_valid"] is True


def test_no_backfill_when_item_returns_to_its_own_slot() -> None:
    items = [_item(1, 0, 0), _item(2, 2, 0)]
    result = calculate_layout_outcome(
        [{"id": 1, "target_x": 0, "target_y": 0}],
        items,
        CELL,
        _options(is_backfill_mode=True),
    )
    assert _xy(result) == {1: (0, 0), 2: (100, 0)}


def test_backfill_when_item_clears_its_slot() -> None:
    items = [_item(1, 0, 0), _item(2, 2, 0)]
    result = calculate_layout_outcome(
        [{"id": 1, "target_x": 200, "target_y": 0}],
        items,
        CELL,
        _options(is_backfill_mode=True),
    )
    assert _xy(result) == {1: (200, 0), 2: (0, 0)}


def test_nudge_overlapping_own_footprint_skips_backfill_and_relocates() -> None:
    items = [_item(1, 0, 0), _item(2, 2, 0)]
    trace = MoveTraceCollector()

    result = calculate_layout_outcome(
        [{"id": 1, "target_x": 50, "target_y": 0}],
        items,
        CELL,
        _options(is_backfill_mode=True),
        trace=trace,
    )

    assert _xy(result) == {1: (0, 0), 2: (100, 0)}
    assert trace.rules_for(2) == []
    assert trace.rules_for(1) == ["RULE_DRAG_TARGET", "RULE_GROUP_RELOCATE"]


def test_multiple_vacancies_are_compacted_rightmost_first() -> None:
    items = [_item("A", 0, 0), _item("B", 2, 0), _item("C", 4, 0), _item("D", 6, 0)]

    result = calculate_layout_outcome(
        [
            {"id": "A", "target_x": 0, "target_y": 50},
            {"id": "C", "target_x": 200, "target_y": 50},
        ],
        items,
        CELL,
        _options(is_backfill_mode=True),
    )

    assert _xy(result) == {"A": (0, 50), "B": (0, 0), "C": (200, 50), "D": (100, 0)}


def test_bump_mode_reports_required_grid_width() -> None:
    result = calculate_layout_outcome(
        [{"id": "A", "target_x": 50, "target_y": 0}],
        _three_in_a_row(),
        CELL,
        _options(is_bump_mode=True, grid_width=250),
    )

    assert _xy(result) == {"A": (50, 0), "B": (150, 0), "C": (250, 0)}
    assert result["required_grid_width"] == 350


def test_plain_mode_accepts_free_target() -> None:
    result = calculate_layout_outcome(
        [{"id": "C", "target_x": 400, "target_y": 100}],
        _three_in_a_row(),
        CELL,
        _options(),
    )
    assert _xy(result)["C"] == (400, 100)
    assert result["required_grid_width"] == 1000


def test_plain_mode_relocates_the_group_rigidly() -> None:
    items = [_item("X", 6, 0), _item("A", 0, 1, 1), _item("B", 1, 1, 1)]
    trace = MoveTraceCollector()

    result = calculate_layout_outcome(
        [
            {"id": "A", "target_x": 300, "target_y": 0},
            {"id": "B", "target_x": 350, "target_y": 0},
        ],
        items,
        CELL,
        _options(),
        trace=trace,
    )

    assert _xy(result) == {"X": (300, 0), "A": (250, 50), "B": (300, 50)}
    assert [(item["x"], item["y"]) for item in result["dragged_items"]] == [(250, 50), (300, 50)]
    assert trace.rules_for("B") == ["RULE_DRAG_TARGET", "RULE_GROUP_RELOCATE"]


def test_group_relocation_skips_offsets_that_push_a_trailing_member_off_the_grid() -> None:
    # One-lane grid, 8 cells wide. A lands on X; the wider B trails it past the edge.
    items = [_item("X", 2, 0, 1), _item("A", 5, 0, 1), _item("B", 6, 0, 2)]
    trace = MoveTraceCollector()

    result = calculate_layout_outcome(
        [
            {"id": "A", "target_x": 100, "target_y": 0},
            {"id": "B", "target_x": 400, "target_y": 0},
        ],
        items,
        CELL,
        _options(grid_width=400, grid_height=50),
        trace=trace,
    )

    # One cell left clears X for A but leaves B ending at 450; two cells left fits both.
    assert _xy(result) == {"X": (100, 0), "A": (0, 0), "B": (300, 0)}
    assert all(item["x"] + item["width_units"] * CELL <= 400 for item in result["items"])
    assert count_unresolved_collisions(result["items"], CELL) == 0
    assert trace.rules_for("B") == ["RULE_DRAG_TARGET", "RULE_GROUP_RELOCATE"]


def test_plain_mode_keeps_colliding_targets_when_no_slot_exists() -> None:
    items = [_item("X", 0, 0), _item("A", 0, 1, 1)]
    trace = MoveTraceCollector()

    result = calculate_layout_outcome(
        [{"id": "A", "target_x": 0, "target_y": 0}],
        items,
        CELL,
        _options(grid_width=100, grid_height=50),
        trace=trace,
    )

    assert result["is_valid"] is True
    assert _xy(result)["A"] == (0, 0)
    assert count_unresolved_collisions(result["items"], CELL) == 1
    assert "RULE_GROUP_RELOCATE_EXHAUSTED" in trace.rules_for("A")


def test_unknown_dragged_ids_yield_invalid_noop() -> None:
    items = _three_in_a_row()
    result = calculate_layout_outcome(
        [{"id": "missing", "target_x": 0, "target_y": 0}],
        items,
        CELL,
        _options(),
    )

    assert result["is_valid"] is False
    assert result["dragged_items"] == []
    assert result["items"] == items
    assert all(out is not src for out, src in zip(result["items"], items))


def test_unknown_ids_are_skipped_when_others_resolve() -> None:
    result = calculate_layout_outcome(
        [
            {"id": "missing", "target_x": 0, "target_y": 0},
            {"id": "C", "target_x": 0, "target_y": 100},
        ],
        _three_in_a_row(),
        CELL,
        _options(),
    )
    assert result["is_valid"] is True
    assert [item["id"] for item in result["dragged_items"]] == ["C"]


def test_outcome_preserves_order_payload_and_inputs() -> None:
    items = _three_in_a_row()
    specs = [{"id": "B", "target_x": 0, "target_y": 0}]
    before_items = deepcopy(items)
    before_specs = deepcopy(specs)

    result = calculate_layout_outcome(specs, items, CELL, _options(is_backfill_mode=True, is_bump_mode=True))

    assert items == before_items
    assert specs == before_specs
    assert [item["id"] for item in result["items"]] == ["A", "B", "C"]
    assert [item["name"] for item in result["items"]] == ["Item A", "Item B", "Item C"]
