"""Layout outcome metrics."""

from __future__ import annotations

from itertools import combinations
from typing import Any

from timegrid.engine.collision import items_overlap


def _displacement(before: dict[str, Any], after: dict[str, Any]) -> float:
    return abs(after["x"] - before["x"]) + abs(after["y"] - before["y"])


def count_unresolved_collisions(items: list[dict[str, Any]], cell_size: int) -> int:
    """Count item pairs that still overlap in the final layout."""
    return sum(1 for a, b in combinations(items, 2) if items_overlap(a, b, cell_size))


def collect_metrics(result: dict[str, Any]) -> dict[str, Any]:
    """Compute displacement and grid-growth metrics for one resolution."""
    options = result["effective_options"]
    cell_size = options["cell_size"]
    grid_width = options["grid_width"]

    originals = {item["id"]: item for item in result.get("original_items", []) if isinstance(item, dict)}
    items = [item for item in result.get("items", []) if isinstance(item, dict)]
    dragged_ids = {item["id"] for item in result.get("dragged_items", []) if isinstance(item, dict)}

    moved = 0
    displaced = 0
    total_displacement = 0.0
    max_displacement = 0.0
    for item in items:
        before = originals.get(item["id"])
        if before is None:
            continue
        distance = _displacement(before, item)
        if distance == 0:
            continue
        moved += 1
        if item["id"] not in dragged_ids:
            displaced += 1
        total_displacement += distance
        max_displacement = max(max_displacement, distance)

    rightmost_edge = max((item["x"] + item["width_units"] * cell_size for item in items), default=0)
    required_grid_width = max(grid_width, rightmost_edge)

    return {
        "moved_items_count": moved,
        "displaced_items_count": displaced,
        "total_displacement_px": total_displacement,
        "max_displacement_px": max_displacement,
        "rightmost_edge_px": rightmost_edge,
        "required_grid_width": required_grid_width,
        "grid_growth_px": required_grid_width - grid_width,
        "unresolved_collisions": count_unresolved_collisions(items, cell_size),
    }
