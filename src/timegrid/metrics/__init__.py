"""Layout metrics."""

from .collector import collect_metrics, count_unresolved_collisions

__all__ = ["collect_metrics", "count_unresolved_collisions"]
