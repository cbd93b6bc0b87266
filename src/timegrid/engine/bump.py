"""Cascading bump propagation.

Candidates are placed at their decided targets and every item they overlap is
pushed sideways until it just touches its bumper. Pushed items become bumpers
themselves, so displacement travels along the row breadth-first.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Any

from timegrid.reporting.move_trace import MoveTraceCollector

from .collision import items_overlap

logger = logging.getLogger(__name__)

MAX_BUMP_ITERATIONS = 1000


def _pixel_width(item: dict[str, Any], cell_size: int) -> int:
    return item["width_units"] * cell_size


def _center_x(item: dict[str, Any], cell_size: int) -> float:
    return item["x"] + _pixel_width(item, cell_size) / 2


def _pushed_x(bumper: dict[str, Any], connection: dict[str, Any], cell_size: int) -> tuple[int, str]:
    if _center_x(bumper, cell_size) <= _center_x(connection, cell_size):
        return bumper["x"] + _pixel_width(bumper, cell_size), "RULE_BUMP_PUSH_RIGHT"
    return bumper["x"] - _pixel_width(connection, cell_size), "RULE_BUMP_PUSH_LEFT"


def resolve_bumps(
    candidates: list[dict[str, Any]],
    world: list[dict[str, Any]],
    cell_size: int,
    *,
    max_iterations: int = MAX_BUMP_ITERATIONS,
    trace: MoveTraceCollector | None = None,
) -> list[dict[str, Any]]:
    """Return world and candidates with all transitive bumps applied.

    Only ``x`` is ever changed and the right grid edge is not enforced; the
    caller decides whether the grid grows. The iteration ceiling guards
    against cyclic pushes and is not a correctness bound.
    """

    tracked: dict[Any, dict[str, Any]] = {}
    for item in world:
        tracked[item["id"]] = dict(item)
    for item in candidates:
        tracked[item["id"]] = dict(item)

    queue: deque[Any] = deque(item["id"] for item in candidates)
    iterations = 0

    while queue:
        if iterations >= max_iterations:
            logger.warning("Bump propagation stopped after %d iterations", iterations)
            break
        iterations += 1

        bumper = tracked[queue.popleft()]
        for connection in tracked.values():
            if connection["id"] == bumper["id"]:
                continue
            if not items_overlap(bumper, connection, cell_size):
                continue

            new_x, rule = _pushed_x(bumper, connection, cell_size)
            new_x = max(0, new_x)
            if new_x == connection["x"]:
                continue

            if trace is not None:
                trace.record(
                    item_id=connection["id"],
                    rule=rule,
                    from_x=connection["x"],
                    from_y=connection["y"],
                    to_x=new_x,
                    to_y=connection["y"],
                    caused_by=bumper["id"],
                )
            logger.debug("Item %r bumped %r from x=%s to x=%s", bumper["id"], connection["id"], connection["x"], new_x)
            connection["x"] = new_x
            queue.append(connection["id"])

    return list(tracked.values())
