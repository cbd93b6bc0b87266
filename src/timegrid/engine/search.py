"""Nearest free slot search around a target cell.

Candidates are scanned in concentric square rings (Chebyshev radius) around
the target. Inside a ring ``dx`` runs from ``-r`` to ``r`` and, for each
``dx``, ``dy`` runs from ``-r`` to ``r``; that order is the tie-break between
free cells at the same radius.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator

from .collision import check_collision

logger = logging.getLogger(__name__)

MAX_SEARCH_RADIUS = 10


def iter_ring_offsets(radius: int) -> Iterator[tuple[int, int]]:
    """Yield ``(dx, dy)`` cell offsets on the ring of the given radius."""
    if radius == 0:
        yield (0, 0)
        return
    for dx in range(-radius, radius + 1):
        for dy in range(-radius, radius + 1):
            if abs(dx) != radius and abs(dy) != radius:
                continue
            yield (dx, dy)


def fits_grid(x: float, y: float, width_units: int, cell_size: int, grid_width: float, grid_height: float) -> bool:
    if x < 0 or y < 0:
        return False
    if x + width_units * cell_size > grid_width:
        return False
    return y + cell_size <= grid_height


def find_closest_valid_position(
    item_id: Any,
    items: list[dict[str, Any]],
    target_x: int,
    target_y: int,
    width_units: int,
    cell_size: int,
    grid_width: int,
    grid_height: int,
    *,
    max_radius: int = MAX_SEARCH_RADIUS,
) -> dict[str, int]:
    """Return the nearest in-bounds, collision-free position to the target.

    Falls back to the item's current position in ``items`` (or the origin for
    an unknown id) when nothing is free within ``max_radius`` cells.
    """

    target = {"id": item_id, "x": target_x, "y": target_y, "width_units": width_units}
    if not check_collision(target, items, cell_size):
        return {"x": target_x, "y": target_y}

    for radius in range(1, max_radius + 1):
        for dx, dy in iter_ring_offsets(radius):
            test_x = target_x + dx * cell_size
            test_y = target_y + dy * cell_size
            if not fits_grid(test_x, test_y, width_units, cell_size, grid_width, grid_height):
                continue
            candidate = {"id": item_id, "x": test_x, "y": test_y, "width_units": width_units}
            if not check_collision(candidate, items, cell_size):
                return {"x": test_x, "y": test_y}

    logger.warning(
        "No free slot within %d cells of (%s, %s) for item %r; falling back",
        max_radius,
        target_x,
        target_y,
        item_id,
    )
    for item in items:
        if item["id"] == item_id:
            return {"x": item["x"], "y": item["y"]}
    return {"x": 0, "y": 0}
