from __future__ import annotations

from copy import deepcopy

from timegrid.engine.backfill import resolve_backfill
from timegrid.reporting.move_trace import MoveTraceCollector

CELL = 50


def _item(item_id: int, col: int, row: int, width_units: int) -> dict:
    return {
        "id": item_id,
        "x": col * CELL,
        "y": row * CELL,
        "width_units": width_units,
        "name": f"Item {item_id}",
    }


def _x_by_id(items: list[dict]) -> dict:
    return {item["id"]: item["x"] for item in items}


def test_single_adjacent_item_shifts_into_gap() -> None:
    result = resolve_backfill(0, 0, 2, [_item(1, 2, 0, 2)], CELL)
    assert _x_by_id(result) == {1: 0}


def test_chain_of_connected_items_shifts_together() -> None:
    items = [_item(1, 2, 0, 2), _item(2, 4, 0, 2)]
    result = resolve_backfill(0, 0, 2, items, CELL)
    assert _x_by_id(result) == {1: 0, 2: 100}


def test_chain_stops_at_secondary_gap() -> None:
    items = [_item(1, 2, 0, 2), _item(2, 5, 0, 2)]
    result = resolve_backfill(0, 0, 2, items, CELL)
    assert _x_by_id(result) == {1: 0, 2: 250}


def test_chain_is_found_regardless_of_input_order() -> None:
    items = [_item(3, 6, 0, 1), _item(2, 4, 0, 2), _item(1, 2, 0, 2)]
    result = resolve_backfill(0, 0, 2, items, CELL)
    assert [item["id"] for item in result] == [3, 2, 1]
    assert _x_by_id(result) == {3: 200, 2: 100, 1: 0}


def test_other_rows_are_untouched() -> None:
    item = _item(1, 2, 1, 2)
    result = resolve_backfill(0, 0, 2, [item], CELL)
    assert result[0]["x"] == item["x"]


def test_non_adjacent_block_stays_put() -> None:
    item = _item(1, 3, 0, 2)
    result = resolve_backfill(0, 0, 2, [item], CELL)
    assert result[0]["x"] == item["x"]


def test_items_left_of_the_gap_are_untouched() -> None:
    items = [_item(1, 0, 0, 2), _item(2, 4, 0, 2)]
    result = resolve_backfill(100, 0, 2, items, CELL)
    assert _x_by_id(result) == {1: 0, 2: 100}


def test_small_pixel_drift_still_counts_as_adjacent() -> None:
    drifted = {"id": 1, "x": 101, "y": 0, "width_units": 2}
    result = resolve_backfill(0, 0, 2, [drifted], CELL)
    assert result[0]["x"] == 1


def test_backfill_returns_copies_and_preserves_payload() -> None:
    items = [_item(1, 2, 0, 2)]
    before = deepcopy(items)

    result = resolve_backfill(0, 0, 2, items, CELL)

    assert items == before
    assert result[0] is not items[0]
    assert result[0]["name"] == "Item 1"


def test_backfill_shift_is_recorded() -> None:
    trace = MoveTraceCollector()
    resolve_backfill(0, 0, 2, [_item(1, 2, 0, 2), _item(2, 4, 0, 2)], CELL, trace=trace)
    assert trace.rules_for(1) == ["RULE_BACKFILL_SHIFT"]
    assert trace.rules_for(2) == ["RULE_BACKFILL_SHIFT"]
