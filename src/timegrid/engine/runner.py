"""Layout engine runner."""

from __future__ import annotations

import logging
from typing import Any

from timegrid.reporting.move_trace import MoveTraceCollector

from .orchestrator import calculate_layout_outcome

logger = logging.getLogger(__name__)


def _extract_items(payload: dict[str, Any]) -> list[dict[str, Any]]:
    items = payload.get("items", [])
    if isinstance(items, list):
        return [item for item in items if isinstance(item, dict)]
    return []


def _extract_drag_specs(payload: dict[str, Any]) -> list[dict[str, Any]]:
    drag = payload.get("drag", [])
    if isinstance(drag, list):
        return [spec for spec in drag if isinstance(spec, dict)]
    return []


def run_layout(payload: dict[str, Any]) -> dict[str, Any]:
    """Resolve one proposed move from a loaded, validated payload.

    ``effective_options`` must be the output of ``resolve_effective_options``.
    """
    options = payload["effective_options"]
    items = _extract_items(payload)
    drag_specs = _extract_drag_specs(payload)
    cell_size = options["cell_size"]
    grid_width = options["grid_width"]

    trace = MoveTraceCollector()
    outcome = calculate_layout_outcome(drag_specs, items, cell_size, options, trace=trace)
    logger.info(
        "Resolved move of %d item(s) over %d item layout (valid=%s)",
        len(outcome["dragged_items"]),
        len(items),
        outcome["is_valid"],
    )

    return {
        "status": "ok",
        "items": outcome["items"],
        "dragged_items": outcome["dragged_items"],
        "is_valid": outcome["is_valid"],
        "required_grid_width": outcome["required_grid_width"],
        "grid_width_grew": outcome["required_grid_width"] > grid_width,
        "original_items": items,
        "move_trace": trace.as_list(),
        "effective_options": options,
    }
