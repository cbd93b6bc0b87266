"""Backfill compaction of a vacated slot.

Only the run of items that starts exactly at the gap's right edge and
continues without holes is pulled left. A block separated from the gap by a
hole of its own stays where it is.
"""

from __future__ import annotations

import logging
from typing import Any

from timegrid.reporting.move_trace import MoveTraceCollector

logger = logging.getLogger(__name__)

ROW_EPSILON = 0.1
CHAIN_TOLERANCE_PX = 2


def _adjacent_chain(gap_y: float, gap_right: float, items: list[dict[str, Any]], cell_size: int) -> set[Any]:
    row_items = sorted(
        (item for item in items if abs(item["y"] - gap_y) < ROW_EPSILON and item["x"] >= gap_right),
        key=lambda item: item["x"],
    )

    chain: set[Any] = set()
    expected_start = gap_right
    for item in row_items:
        if abs(item["x"] - expected_start) > CHAIN_TOLERANCE_PX:
            break
        chain.add(item["id"])
        expected_start += item["width_units"] * cell_size
    return chain


def resolve_backfill(
    gap_x: int,
    gap_y: int,
    gap_width_units: int,
    items: list[dict[str, Any]],
    cell_size: int,
    *,
    trace: MoveTraceCollector | None = None,
) -> list[dict[str, Any]]:
    """Shift the contiguous chain right of the gap left by the gap width."""
    shift = gap_width_units * cell_size
    chain = _adjacent_chain(gap_y, gap_x + shift, items, cell_size)
    if chain:
        logger.debug("Backfilling gap at (%s, %s) with %d item(s)", gap_x, gap_y, len(chain))

    result: list[dict[str, Any]] = []
    for item in items:
        copy = dict(item)
        if copy["id"] in chain:
            copy["x"] = item["x"] - shift
            if trace is not None:
                trace.record(
                    item_id=copy["id"],
                    rule="RULE_BACKFILL_SHIFT",
                    from_x=item["x"],
                    from_y=item["y"],
                    to_x=copy["x"],
                    to_y=copy["y"],
                )
        result.append(copy)
    return result
