from __future__ import annotations

from .common import OUTPUT_FORMATS, VARIANTS, read_points, resolve_config, validate_choice

__all__ = [
    "OUTPUT_FORMATS",
    "VARIANTS",
    "read_points",
    "resolve_config",
    "validate_choice",
]
