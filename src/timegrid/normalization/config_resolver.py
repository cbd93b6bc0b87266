"""Resolve effective layout options from defaults and request overrides."""

from __future__ import annotations

from typing import Any

from timegrid.engine.bump import MAX_BUMP_ITERATIONS
from timegrid.engine.search import MAX_SEARCH_RADIUS
from timegrid.validation import ValidationReport

DEFAULT_LAYOUT_OPTIONS: dict[str, Any] = {
    "cell_size": 50,
    "grid_width": 1000,
    "grid_height": 1000,
    "is_backfill_mode": False,
    "is_bump_mode": False,
    "max_search_radius": MAX_SEARCH_RADIUS,
    "max_bump_iterations": MAX_BUMP_ITERATIONS,
}

_MODE_FLAGS = ("is_backfill_mode", "is_bump_mode")
_GRID_SIZES = ("grid_width", "grid_height")
_TUNING_BOUNDS: dict[str, tuple[int, int]] = {
    "max_search_radius": (0, 50),
    "max_bump_iterations": (1, 100_000),
}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _reject(options: dict[str, Any], key: str, expected: str, validation_report: ValidationReport) -> None:
    validation_report.error(
        "INVALID_OPTION_VALUE",
        f"{key} must be {expected}, got {options[key]!r}",
        f"$.options.{key}",
        suggested_fix=f"Omit {key} to use the default ({DEFAULT_LAYOUT_OPTIONS[key]!r})",
    )
    options[key] = DEFAULT_LAYOUT_OPTIONS[key]


def resolve_effective_options(loaded_payload: dict[str, Any], validation_report: ValidationReport) -> dict[str, Any]:
    """Build an engine-ready options mapping.

    Precedence: request ``options`` > ``DEFAULT_LAYOUT_OPTIONS``. Unknown keys
    are reported and dropped. Mode flags must be real booleans and grid sizes
    positive integers; a rejected value is reported and replaced by its
    default. Tuning values are clamped into their bounds.
    ``cell_size`` is checked by the domain validator.
    """

    source = loaded_payload.get("options", {})
    options = dict(DEFAULT_LAYOUT_OPTIONS)
    if isinstance(source, dict):
        for key, value in source.items():
            if key not in DEFAULT_LAYOUT_OPTIONS:
                validation_report.error(
                    "INVALID_OPTION_KEY",
                    f"Option {key!r} is not supported",
                    f"$.options.{key}",
                    suggested_fix=f"Use one of: {', '.join(sorted(DEFAULT_LAYOUT_OPTIONS))}",
                )
                continue
            options[key] = value

    for key in _MODE_FLAGS:
        if not isinstance(options[key], bool):
            _reject(options, key, "true or false", validation_report)

    for key in _GRID_SIZES:
        if not _is_int(options[key]) or options[key] <= 0:
            _reject(options, key, "a positive integer", validation_report)

    for key, (low, high) in _TUNING_BOUNDS.items():
        value = options[key]
        if not _is_int(value):
            _reject(options, key, "an integer", validation_report)
            continue
        clamped = min(high, max(low, value))
        if clamped != value:
            options[key] = clamped
            validation_report.info(
                f"INFO_CLAMP_{key.upper()}_APPLIED",
                f"{key} was clamped into [{low},{high}]",
                f"$.options.{key}",
                applied_value=clamped,
            )

    return options
