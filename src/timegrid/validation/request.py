"""Validation for the layout request payload."""

from __future__ import annotations

from typing import Any

from .errors import ValidationReport


def validate_layout_request(payload: dict[str, Any]) -> ValidationReport:
    """Validate the request with basic shape checks."""
    report = ValidationReport()

    drag = payload.get("drag")
    if drag is None:
        report.error("MISSING_FIELD", "Missing required field: drag", "$.drag")
    elif not isinstance(drag, list) or not drag:
        report.error("INVALID_TYPE", "Field must be a non-empty list: drag", "$.drag")
    else:
        for idx, spec in enumerate(drag):
            if not isinstance(spec, dict):
                report.error("INVALID_TYPE", "Drag entries must be objects", f"$.drag[{idx}]")
                continue
            for key in ("id", "target_x", "target_y"):
                if key not in spec:
                    report.error("MISSING_FIELD", f"Missing required field: {key}", f"$.drag[{idx}].{key}")

    items = payload.get("items")
    layout_path = payload.get("layout_path")
    if items is None and layout_path is None:
        report.error(
            "MISSING_FIELD",
            "One of items or layout_path is required",
            "$.items",
            suggested_fix="Inline the items list or point layout_path at a layout JSON file",
        )
    if items is not None and not isinstance(items, list):
        report.error("INVALID_TYPE", "Field must be a list: items", "$.items")
    if layout_path is not None and (not isinstance(layout_path, str) or not layout_path.strip()):
        report.error("INVALID_TYPE", "Field must be a non-empty string path: layout_path", "$.layout_path")
    if items is not None and layout_path is not None:
        report.error(
            "AMBIGUOUS_ITEMS_SOURCE",
            "Use either items or layout_path, not both",
            "$.layout_path",
            suggested_fix="Remove one of items or layout_path",
        )

    options = payload.get("options")
    if options is not None and not isinstance(options, dict):
        report.error("INVALID_TYPE", "Field must be an object: options", "$.options")

    return report
