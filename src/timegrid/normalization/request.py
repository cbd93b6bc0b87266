"""Normalization for incoming request payloads."""

from __future__ import annotations

from typing import Any

_ITEM_ALIASES = {"widthUnits": "width_units"}
_DRAG_ALIASES = {"targetX": "target_x", "targetY": "target_y"}
_OPTION_ALIASES = {
    "cellSize": "cell_size",
    "gridWidth": "grid_width",
    "gridHeight": "grid_height",
    "isBackfillMode": "is_backfill_mode",
    "isBumpMode": "is_bump_mode",
    "maxSearchRadius": "max_search_radius",
    "maxBumpIterations": "max_bump_iterations",
}


def _rename_keys(record: dict[str, Any], aliases: dict[str, str]) -> dict[str, Any]:
    renamed: dict[str, Any] = {}
    for key, value in record.items():
        target = aliases.get(key, key)
        # An explicit snake_case key wins over its camelCase alias.
        if target != key and target in record:
            continue
        renamed[target] = value
    return renamed


def normalize_items(items: Any) -> Any:
    if not isinstance(items, list):
        return items
    return [_rename_keys(item, _ITEM_ALIASES) if isinstance(item, dict) else item for item in items]


def normalize_request(payload: dict[str, Any]) -> dict[str, Any]:
    """Return a normalized copy of the input request."""
    normalized = _rename_keys(payload, {"cellSize": "cell_size", "layoutPath": "layout_path"})
    if "schema_version" not in normalized:
        normalized["schema_version"] = "1.0"

    normalized["items"] = normalize_items(normalized.get("items"))
    if normalized["items"] is None:
        del normalized["items"]

    drag = normalized.get("drag")
    if isinstance(drag, list):
        normalized["drag"] = [_rename_keys(spec, _DRAG_ALIASES) if isinstance(spec, dict) else spec for spec in drag]

    options = normalized.get("options")
    if isinstance(options, dict):
        normalized["options"] = _rename_keys(options, _OPTION_ALIASES)

    # A top-level cell_size is accepted as a shorthand for options.cell_size.
    if "cell_size" in normalized:
        cell_size = normalized.pop("cell_size")
        if isinstance(normalized.get("options"), dict):
            normalized["options"].setdefault("cell_size", cell_size)
        elif "options" not in normalized:
            normalized["options"] = {"cell_size": cell_size}

    return normalized
