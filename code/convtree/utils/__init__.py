from __future__ import annotations

from .atomic_files import atomic_replace, atomic_write_text
from .io import dump_points, load_points
from .loggers import get_logger, set_verbosity
from .torchops import as_tensor

__all__ = [
    "atomic_replace",
    "atomic_write_text",
    "as_tensor",
    "dump_points",
    "get_logger",
    "load_points",
    "set_verbosity",
]
