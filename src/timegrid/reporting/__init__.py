"""Reporting utilities."""

from .move_trace import MoveTraceCollector
from .reports import build_error_report, build_success_report

__all__ = [
    "MoveTraceCollector",
    "build_error_report",
    "build_success_report",
]
