from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np

from convtree.geometry import Point, Rectangle

Array = np.ndarray


def cell_steps(region: Rectangle, grid_size: int) -> Tuple[float, float]:
    """Signed cell extents; the Y step is negative since rows run top to bottom."""
    n = int(grid_size)
    return (region.right - region.left) / n, (region.bottom - region.top) / n


def rasterize(region: Rectangle, points: Sequence[Point], grid_size: int) -> Array:
    n = int(grid_size)
    if n < 1:
        raise ValueError("grid_size must be >= 1")
    grid = np.zeros((n, n), dtype=np.float64)
    if not points:
        return grid

    x_step, y_step = cell_steps(region, n)
    idx = np.arange(n + 1, dtype=np.float64)
    x_edges = region.left + idx * x_step
    y_edges = region.top + idx * y_step

    xs = np.fromiter((p.x for p in points), dtype=np.float64, count=len(points))
    ys = np.fromiter((p.y for p in points), dtype=np.float64, count=len(points))
    ws = np.fromiter((p.weight for p in points), dtype=np.float64, count=len(points))

    # Closed cell bounds: a point on a shared edge counts in every touching cell.
    in_col = (xs[None, :] >= x_edges[:-1, None]) & (xs[None, :] <= x_edges[1:, None])
    in_row = (ys[None, :] <= y_edges[:-1, None]) & (ys[None, :] >= y_edges[1:, None])

    grid[:, :] = (in_col * ws[None, :]) @ in_row.T.astype(np.float64)
    return grid


def normalize(grid: Array) -> Array:
    g = np.asarray(grid, dtype=np.float64)
    if g.size == 0:
        return g.copy()
    peak = float(g.max())
    if not np.isfinite(peak) or peak <= 0.0:
        return np.zeros_like(g)
    return g / peak


def is_flat(grid: Array) -> bool:
    g = np.asarray(grid)
    return g.size == 0 or not bool(np.any(g))
