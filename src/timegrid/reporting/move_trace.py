"""Move trace utilities for layout resolution events."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class MoveTraceCollector:
    """Collect item displacements while the resolution phases are executed."""

    _sequence: int = 0
    _items: list[dict[str, Any]] = field(default_factory=list)

    def record(
        self,
        *,
        item_id: Any,
        rule: str,
        from_x: float,
        from_y: float,
        to_x: float,
        to_y: float,
        caused_by: Any = None,
    ) -> None:
        self._sequence += 1
        self._items.append(
            {
                "move_id": f"m-{self._sequence:06d}",
                "item_id": item_id,
                "rule": rule,
                "from": {"x": from_x, "y": from_y},
                "to": {"x": to_x, "y": to_y},
                "caused_by": caused_by,
            }
        )

    def rules_for(self, item_id: Any) -> list[str]:
        return [item["rule"] for item in self._items if item["item_id"] == item_id]

    def as_list(self) -> list[dict[str, Any]]:
        """Return trace in recording order."""
        return [dict(item) for item in self._items]
