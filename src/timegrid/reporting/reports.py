"""Build CLI reports."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from timegrid.validation import ValidationReport

_OUTPUT_ITEM_KEYS = ("items", "dragged_items", "is_valid", "required_grid_width", "grid_width_grew")


def build_error_report(validation_report: ValidationReport, code: str = "validation_error") -> dict[str, Any]:
    """Return a JSON-serializable error report.

    ``error.details`` lists the blocking issues; ``validation_report`` keeps
    the infos gathered before the run stopped.
    """
    errors = validation_report.errors
    return {
        "status": "error",
        "error": {
            "code": code,
            "count": len(errors),
            "details": [issue.as_dict() for issue in errors],
        },
        "validation_report": validation_report.as_dict(),
    }


def build_success_report(
    result: dict[str, Any], metrics: dict[str, Any], validation_report: ValidationReport
) -> dict[str, Any]:
    """Return a JSON-serializable success report.

    ``layout`` carries what a caller adopts as the new authoritative state;
    the trace and metrics are diagnostic.
    """
    generated_at = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    layout = {key: result.get(key) for key in _OUTPUT_ITEM_KEYS}
    return {
        "status": "ok",
        "schema_version": "1.0.0",
        "generated_at": generated_at,
        "layout": layout,
        "metrics": metrics,
        "move_trace": result.get("move_trace", []),
        "effective_options": result.get("effective_options", {}),
        "validation_report": validation_report.as_dict(),
    }
