"""Domain-level rules for items and drag specs."""

from __future__ import annotations

from typing import Any

from .errors import ValidationReport


def validate_domain_inputs(loaded_payload: dict[str, Any]) -> ValidationReport:
    """Validate item records, drag specs and grid geometry together."""
    report = ValidationReport()

    options = loaded_payload.get("effective_options")
    if not isinstance(options, dict):
        options = loaded_payload.get("options", {}) if isinstance(loaded_payload.get("options"), dict) else {}
    cell_size = options.get("cell_size")
    if not _is_int(cell_size) or cell_size <= 0:
        report.error("INVALID_CELL_SIZE", "cell_size must be a positive integer", "$.options.cell_size")
        cell_size = None

    items = loaded_payload.get("items", [])
    item_ids: set[Any] = set()
    for idx, item in enumerate(items if isinstance(items, list) else []):
        path = f"$.items[{idx}]"
        if not isinstance(item, dict):
            report.error("INVALID_ITEM", "Items must be objects", path)
            continue

        item_id = item.get("id")
        if not _is_valid_id(item_id):
            report.error("INVALID_ITEM_ID", "id must be a string or an integer", f"{path}.id")
        elif item_id in item_ids:
            report.error(
                "DUPLICATE_ITEM_ID",
                f"Duplicate item id: {item_id!r}",
                f"{path}.id",
                suggested_fix="Give every item a unique, stable id.",
            )
        else:
            item_ids.add(item_id)

        width_units = item.get("width_units")
        if not _is_int(width_units) or width_units <= 0:
            report.error("INVALID_WIDTH_UNITS", "width_units must be a positive integer", f"{path}.width_units")

        for axis in ("x", "y"):
            _validate_coordinate(item.get(axis), f"{path}.{axis}", cell_size, report)

    drag = loaded_payload.get("drag", [])
    drag_ids: set[Any] = set()
    for idx, spec in enumerate(drag if isinstance(drag, list) else []):
        if not isinstance(spec, dict):
            continue
        path = f"$.drag[{idx}]"
        drag_id = spec.get("id")
        if _is_valid_id(drag_id):
            if drag_id in drag_ids:
                report.error("DUPLICATE_DRAG_ID", f"Item {drag_id!r} is dragged more than once", f"{path}.id")
            drag_ids.add(drag_id)
            if drag_id not in item_ids:
                report.info(
                    "INFO_UNKNOWN_DRAG_ID",
                    f"Dragged id {drag_id!r} does not match any item and will be ignored",
                    f"{path}.id",
                )

        for key in ("target_x", "target_y"):
            value = spec.get(key)
            if not _is_int(value):
                report.error("INVALID_DRAG_TARGET", f"{key} must be an integer pixel offset", f"{path}.{key}")
            elif cell_size is not None and value % cell_size != 0:
                report.error(
                    "UNSNAPPED_COORDINATE",
                    f"{key}={value} is not a multiple of cell_size={cell_size}",
                    f"{path}.{key}",
                    suggested_fix="Snap targets to the grid before resolving the layout.",
                )

    return report


def _validate_coordinate(value: Any, path: str, cell_size: int | None, report: ValidationReport) -> None:
    if not _is_int(value) or value < 0:
        report.error("INVALID_COORDINATE", "Coordinates must be non-negative integers", path)
        return
    if cell_size is not None and value % cell_size != 0:
        report.error("UNSNAPPED_COORDINATE", f"{value} is not a multiple of cell_size={cell_size}", path)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_valid_id(value: Any) -> bool:
    return (isinstance(value, str) and bool(value)) or _is_int(value)
