"""Single entry point computing the outcome of a proposed move.

Phases:
1) backfill of the slots truly vacated by the dragged items (optional),
2) bump propagation, or plain collision check with rigid group relocation,
3) composition of the full resulting layout.

The same call serves both preview and commit; nothing is retained between
calls and no input collection is mutated.
"""

from __future__ import annotations

import logging
from typing import Any

from timegrid.reporting.move_trace import MoveTraceCollector

from .backfill import resolve_backfill
from .bump import MAX_BUMP_ITERATIONS, resolve_bumps
from .collision import check_collision, item_rect, rects_overlap
from .search import MAX_SEARCH_RADIUS, fits_grid, iter_ring_offsets

logger = logging.getLogger(__name__)


def _right_edge(items: list[dict[str, Any]], cell_size: int) -> int:
    return max((item["x"] + item["width_units"] * cell_size for item in items), default=0)


def _outcome(
    items: list[dict[str, Any]],
    dragged_items: list[dict[str, Any]],
    *,
    is_valid: bool,
    grid_width: int,
    cell_size: int,
) -> dict[str, Any]:
    return {
        "items": items,
        "is_valid": is_valid,
        "dragged_items": dragged_items,
        "required_grid_width": max(grid_width, _right_edge(items, cell_size)),
    }


def _vacated_gaps(
    originals: list[dict[str, Any]],
    dragged: list[dict[str, Any]],
    cell_size: int,
) -> list[dict[str, Any]]:
    # Any pixel of overlap with its own footprint means the item did not vacate it.
    gaps = [
        original
        for original, moved in zip(originals, dragged)
        if not rects_overlap(item_rect(moved, cell_size), item_rect(original, cell_size))
    ]
    return sorted(gaps, key=lambda item: item["x"], reverse=True)


def _relocate_group(
    dragged: list[dict[str, Any]],
    world: list[dict[str, Any]],
    cell_size: int,
    grid_width: int,
    grid_height: int,
    max_radius: int,
) -> list[dict[str, Any]] | None:
    """Shift the whole group by the first anchor offset where every member fits."""
    # Radius 0 re-tests the unshifted targets so the walk covers radii 0..max_radius
    # exactly like the single-item search; it is already known to collide.
    for radius in range(0, max_radius + 1):
        for dx, dy in iter_ring_offsets(radius):
            shifted = [
                {**item, "x": item["x"] + dx * cell_size, "y": item["y"] + dy * cell_size}
                for item in dragged
            ]
            if all(
                fits_grid(member["x"], member["y"], member["width_units"], cell_size, grid_width, grid_height)
                and not check_collision(member, world, cell_size)
                for member in shifted
            ):
                return shifted
    return None


def _resolve_plain(
    dragged: list[dict[str, Any]],
    world: list[dict[str, Any]],
    cell_size: int,
    grid_width: int,
    grid_height: int,
    max_radius: int,
    trace: MoveTraceCollector | None,
) -> list[dict[str, Any]]:
    if not any(check_collision(item, world, cell_size) for item in dragged):
        return dragged

    relocated = _relocate_group(dragged, world, cell_size, grid_width, grid_height, max_radius)
    if relocated is None:
        anchor = dragged[0]
        logger.warning("No collision-free placement for group anchored at %r; keeping targets", anchor["id"])
        if trace is not None:
            trace.record(
                item_id=anchor["id"],
                rule="RULE_GROUP_RELOCATE_EXHAUSTED",
                from_x=anchor["x"],
                from_y=anchor["y"],
                to_x=anchor["x"],
                to_y=anchor["y"],
            )
        return dragged

    if trace is not None:
        for before, after in zip(dragged, relocated):
            trace.record(
                item_id=after["id"],
                rule="RULE_GROUP_RELOCATE",
                from_x=before["x"],
                from_y=before["y"],
                to_x=after["x"],
                to_y=after["y"],
                caused_by=dragged[0]["id"],
            )
    return relocated


def calculate_layout_outcome(
    dragged_specs: list[dict[str, Any]],
    all_items: list[dict[str, Any]],
    cell_size: int,
    options: dict[str, Any],
    *,
    trace: MoveTraceCollector | None = None,
) -> dict[str, Any]:
    """Compute the full layout resulting from moving the dragged items.

    ``dragged_specs`` holds ``{"id", "target_x", "target_y"}`` records already
    expressed as a rigid offset from the anchor (the first resolvable spec).
    ``options`` must carry ``grid_width`` and ``grid_height``; the mode flags
    and search/bump limits fall back to their defaults.
    ``is_valid`` is False only when no dragged id exists in ``all_items``.
    """

    grid_width = options["grid_width"]
    grid_height = options["grid_height"]
    max_radius = options.get("max_search_radius", MAX_SEARCH_RADIUS)
    max_iterations = options.get("max_bump_iterations", MAX_BUMP_ITERATIONS)

    by_id = {item["id"]: item for item in all_items}
    originals: list[dict[str, Any]] = []
    dragged: list[dict[str, Any]] = []
    for spec in dragged_specs:
        original = by_id.get(spec["id"])
        if original is None:
            logger.debug("Dragged id %r not found in layout", spec["id"])
            continue
        if any(item["id"] == spec["id"] for item in originals):
            continue
        originals.append(original)
        dragged.append({**original, "x": spec["target_x"], "y": spec["target_y"]})

    if not dragged:
        return _outcome(
            [dict(item) for item in all_items],
            [],
            is_valid=False,
            grid_width=grid_width,
            cell_size=cell_size,
        )

    if trace is not None:
        for original, moved in zip(originals, dragged):
            trace.record(
                item_id=moved["id"],
                rule="RULE_DRAG_TARGET",
                from_x=original["x"],
                from_y=original["y"],
                to_x=moved["x"],
                to_y=moved["y"],
            )

    dragged_ids = {item["id"] for item in dragged}
    world = [dict(item) for item in all_items if item["id"] not in dragged_ids]

    if options.get("is_backfill_mode"):
        for gap in _vacated_gaps(originals, dragged, cell_size):
            world = resolve_backfill(gap["x"], gap["y"], gap["width_units"], world, cell_size, trace=trace)

    if options.get("is_bump_mode"):
        resolved = {
            item["id"]: item
            for item in resolve_bumps(dragged, world, cell_size, max_iterations=max_iterations, trace=trace)
        }
        dragged = [resolved[item["id"]] for item in dragged]
        world = [resolved[item["id"]] for item in world]
    else:
        dragged = _resolve_plain(dragged, world, cell_size, grid_width, grid_height, max_radius, trace)

    merged = {item["id"]: item for item in world}
    merged.update((item["id"], item) for item in dragged)
    items = [merged[item["id"]] for item in all_items if item["id"] in merged]

    return _outcome(
        items,
        [dict(item) for item in dragged],
        is_valid=True,
        grid_width=grid_width,
        cell_size=cell_size,
    )
