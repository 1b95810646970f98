from __future__ import annotations

from typing import Any


def normalize_choice(
    value: Any,
    *,
    allowed: tuple[str, ...],
    name: str,
) -> str:
    v = str(value).strip().lower()
    allowed_norm = tuple(str(a).strip().lower() for a in allowed)
    if v not in set(allowed_norm):
        allowed_s = ", ".join(allowed_norm)
        raise ValueError(f"{name} must be one of: {allowed_s}")
    return v
