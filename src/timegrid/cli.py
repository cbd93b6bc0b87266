"""CLI entrypoint for timegrid."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any

from timegrid.engine import run_layout
from timegrid.io import read_json, read_layout_items, write_json
from timegrid.metrics import collect_metrics
from timegrid.normalization import normalize_items, normalize_request, resolve_effective_options
from timegrid.reporting import build_error_report, build_success_report
from timegrid.validation import ValidationReport, validate_domain_inputs, validate_layout_request

logger = logging.getLogger(__name__)


def _resolve_input_path(request_file: Path, value: str) -> Path:
    path = Path(value)
    if path.is_absolute():
        return path
    return (request_file.parent / path).resolve()


def _load_referenced_items(
    request_file: Path, request: dict[str, Any], validation_report: ValidationReport
) -> dict[str, Any]:
    loaded = dict(request)

    layout_path = request.get("layout_path")
    if layout_path is None:
        return loaded

    resolved = _resolve_input_path(request_file, layout_path)
    try:
        loaded["items"] = normalize_items(read_layout_items(resolved))
    except FileNotFoundError:
        validation_report.error(
            "FILE_NOT_FOUND",
            f"Referenced file not found: {resolved}",
            "$.layout_path",
            suggested_fix="Paths are resolved relative to the request file",
        )
    except OSError as exc:
        validation_report.error("UNREADABLE_FILE", f"Cannot read {resolved}: {exc.strerror or exc}", "$.layout_path")
    except ValueError as exc:
        validation_report.error("INVALID_JSON", str(exc), "$.layout_path")

    return loaded


def _fail(output_path: str, validation_report: ValidationReport, code: str) -> int:
    logger.info("Rejected request (%s): %s", code, ", ".join(sorted(validation_report.error_codes())))
    write_json(output_path, build_error_report(validation_report, code=code))
    return 2


def run_resolve_command(request_path: str, output_path: str) -> int:
    try:
        request_payload = read_json(request_path)
    except (OSError, ValueError) as exc:
        validation_report = ValidationReport()
        validation_report.error("INVALID_REQUEST", str(exc), "$.request")
        return _fail(output_path, validation_report, "request_read_error")

    request_payload = normalize_request(request_payload)
    validation_report = validate_layout_request(request_payload)
    if validation_report.errors:
        return _fail(output_path, validation_report, "validation_error")

    loaded_request = _load_referenced_items(Path(request_path), request_payload, validation_report)
    if validation_report.errors:
        return _fail(output_path, validation_report, "input_load_error")

    loaded_request["effective_options"] = resolve_effective_options(loaded_request, validation_report)
    validation_report.merge(validate_domain_inputs(loaded_request))
    if validation_report.errors:
        return _fail(output_path, validation_report, "validation_error")

    result = run_layout(loaded_request)
    metrics = collect_metrics(result)
    if metrics["unresolved_collisions"]:
        logger.warning("Layout still has %d overlapping pair(s)", metrics["unresolved_collisions"])
    write_json(output_path, build_success_report(result, metrics, validation_report))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="timegrid", description="Lane/time grid layout resolver")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve_parser = subparsers.add_parser("resolve", help="Resolve a proposed move from a request JSON")
    resolve_parser.add_argument("--request", required=True, help="Path to the layout request JSON")
    resolve_parser.add_argument("--output", required=True, help="Path to the resolution report JSON")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "resolve":
        return run_resolve_command(args.request, args.output)

    parser.error("Unknown command")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
