"""Axis-aligned collision tests for items on the lane/time grid."""

from __future__ import annotations

from typing import Any, Iterable

Rect = tuple[float, float, float, float]


def item_rect(item: dict[str, Any], cell_size: int) -> Rect:
    """Return ``(left, top, right, bottom)`` in pixels for one item."""
    left = item["x"]
    top = item["y"]
    return (left, top, left + item["width_units"] * cell_size, top + cell_size)


def rects_overlap(a: Rect, b: Rect) -> bool:
    """Strict overlap on both axes; touching edges do not count."""
    overlap_x = a[0] < b[2] and a[2] > b[0]
    overlap_y = a[1] < b[3] and a[3] > b[1]
    return overlap_x and overlap_y


def items_overlap(a: dict[str, Any], b: dict[str, Any], cell_size: int) -> bool:
    return rects_overlap(item_rect(a, cell_size), item_rect(b, cell_size))


def check_collision(candidate: dict[str, Any], others: Iterable[dict[str, Any]], cell_size: int) -> bool:
    """Return True if ``candidate`` overlaps any item with a different id."""
    candidate_rect = item_rect(candidate, cell_size)
    for other in others:
        if other["id"] == candidate["id"]:
            continue
        if rects_overlap(candidate_rect, item_rect(other, cell_size)):
            return True
    return False
