"""Input normalization."""

from .config_resolver import DEFAULT_LAYOUT_OPTIONS, resolve_effective_options
from .request import normalize_items, normalize_request

__all__ = ["DEFAULT_LAYOUT_OPTIONS", "normalize_items", "normalize_request", "resolve_effective_options"]
