from __future__ import annotations

import logging
from logging import Logger

_DEFAULT_LOGGER_NAME = "convtree"


def get_logger(name: str | None = None) -> Logger:
    base = logging.getLogger(_DEFAULT_LOGGER_NAME)
    if not base.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        base.addHandler(handler)
        base.setLevel(logging.INFO)
        base.propagate = False
    return base if name is None else base.getChild(str(name))


def set_verbosity(verbose: bool) -> None:
    get_logger().setLevel(logging.DEBUG if verbose else logging.INFO)


def log_convolution_aborted(applied: int, requested: int, exc: Exception) -> None:
    get_logger("grid").warning(
        "Convolution aborted after %d of %d pass(es); using the last computed grid: %s",
        applied,
        requested,
        exc,
    )


def log_flat_density(node_id: str) -> None:
    get_logger("tree").debug(
        "Density grid for node %s is flat; splitting at the geometric midpoint.", node_id
    )


def log_kernel_fallback() -> None:
    get_logger("tree").debug("Kernel missing or not square; using the default 3x3 smoothing kernel.")


def log_point_rejected(x: float, y: float, node_id: str) -> None:
    get_logger("tree").warning(
        "Point (%g, %g) lies outside the region of node %s; ignoring it.", x, y, node_id
    )


def log_split(node_id: str, depth: int, cut_x: float, cut_y: float) -> None:
    get_logger("tree").debug(
        "Split node %s at depth=%d with cut x=%g, y=%g.", node_id, depth, cut_x, cut_y
    )
