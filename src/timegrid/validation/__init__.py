"""Validation helpers."""

from .errors import ValidationIssue
from .errors import ValidationReport
from .domain_validator import validate_domain_inputs
from .request import validate_layout_request

__all__ = [
    "ValidationIssue",
    "ValidationReport",
    "validate_domain_inputs",
    "validate_layout_request",
]
