"""Layout resolution engine."""

from .backfill import resolve_backfill
from .bump import resolve_bumps
from .collision import check_collision
from .orchestrator import calculate_layout_outcome
from .runner import run_layout
from .search import find_closest_valid_position, iter_ring_offsets

__all__ = [
    "calculate_layout_outcome",
    "check_collision",
    "find_closest_valid_position",
    "iter_ring_offsets",
    "resolve_backfill",
    "resolve_bumps",
    "run_layout",
]
