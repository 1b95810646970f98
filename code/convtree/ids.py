from __future__ import annotations

import itertools
import uuid
from typing import Callable

IdSupplier = Callable[[], str]


def uuid_ids() -> str:
    return str(uuid.uuid4())


def counter_ids(prefix: str = "node") -> IdSupplier:
    """Deterministic supplier yielding ``prefix-0``, ``prefix-1``, ..."""
    counter = itertools.count()

    def _next() -> str:
        return f"{prefix}-{next(counter)}"

    return _next
