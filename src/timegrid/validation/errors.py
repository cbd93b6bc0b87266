"""Issue records shared by the request, load, option and domain checks.

Every check reports through :class:`ValidationIssue`, so an error report has
the same ``details`` shape whether the request failed on its JSON shape, on
reading ``layout_path`` or on a layout rule.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

ERROR = "error"
INFO = "info"


@dataclass(slots=True)
class ValidationIssue:
    code: str
    message: str
    field_path: str
    severity: str = ERROR
    suggested_fix: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"code": self.code, "message": self.message, "path": self.field_path}
        if self.suggested_fix:
            payload["suggested_fix"] = self.suggested_fix
        payload.update(self.extra)
        return payload


@dataclass(slots=True)
class ValidationReport:
    """Issues in the order the checks found them; nothing short-circuits."""

    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == ERROR]

    @property
    def infos(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == INFO]

    def error(
        self, code: str, message: str, field_path: str, *, suggested_fix: str | None = None, **extra: Any
    ) -> None:
        self.issues.append(ValidationIssue(code, message, field_path, ERROR, suggested_fix, extra))

    def info(self, code: str, message: str, field_path: str, **extra: Any) -> None:
        self.issues.append(ValidationIssue(code, message, field_path, INFO, None, extra))

    def merge(self, other: ValidationReport) -> None:
        self.issues.extend(other.issues)

    def error_codes(self) -> set[str]:
        return {issue.code for issue in self.errors}

    def as_dict(self) -> dict[str, list[dict[str, Any]]]:
        return {
            "errors": [issue.as_dict() for issue in self.errors],
            "infos": [issue.as_dict() for issue in self.infos],
        }
