from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

Array = np.ndarray

THRESHOLD_FACTOR = 0.8


def _peak(grid: Array) -> Tuple[int, int, float]:
    # argmax keeps the first maximum in row-major order.
    flat_idx = int(np.argmax(grid))
    max_value = float(grid.flat[flat_idx])
    if max_value <= 0.0:
        return 0, 0, 0.0
    max_x, max_y = np.unravel_index(flat_idx, grid.shape)
    return int(max_x), int(max_y), max_value


def _nearer_center(current: Optional[int], candidate: int, size: int) -> int:
    if current is None:
        return candidate
    center = size // 2
    if abs(current - center) > abs(candidate - center):
        return candidate
    return current


def find_split_point(grid: Array) -> Tuple[int, int]:
    """Ring search around the density peak.

    Rings grow outward from the peak while some ring cell stays above a
    threshold (80% of the previous ring's mean). The returned offsets sit one
    cell past the last significant ring on each axis.
    """
    g = np.asarray(grid, dtype=np.float64)
    width, height = int(g.shape[0]), int(g.shape[1])
    max_x, max_y, max_value = _peak(g)

    split_value = max_value * THRESHOLD_FACTOR
    split_x, split_y = 0, 0
    counter = 1
    while True:
        x: Optional[int] = None
        y: Optional[int] = None
        vals: list[float] = []

        i = max_x - counter
        if i >= 0:
            for j in range(max(0, max_y - counter), min(height, max_y + counter + 1)):
                if g[i, j] > split_value:
                    x = i
                    vals.append(float(g[i, j]))

        i = max_x + counter
        if i < width:
            for j in range(max(0, max_y - counter), min(height, max_y + counter + 1)):
                if g[i, j] > split_value:
                    x = _nearer_center(x, i, width)
                    vals.append(float(g[i, j]))

        i = max_y - counter
        if i >= 0:
            for j in range(max(0, max_x - counter), min(width, max_x + counter + 1)):
                if g[j, i] > split_value:
                    y = i
                    if j != max_x - counter and j != max_x + counter:
                        vals.append(float(g[j, i]))

        i = max_y + counter
        if i < height:
            for j in range(max(0, max_x - counter), min(width, max_x + counter + 1)):
                if g[j, i] > split_value:
                    y = _nearer_center(y, i, height)
                    if j != max_x - counter and j != max_x + counter:
                        vals.append(float(g[j, i]))

        if x is None and y is None:
            break
        if x is not None:
            split_x = x
        if y is not None:
            split_y = y
        split_value = float(np.mean(vals)) * THRESHOLD_FACTOR
        counter += 1

    split_x = split_x + 1 if split_x > max_x else split_x - 1
    split_y = split_y + 1 if split_y > max_y else split_y - 1
    return split_x, split_y


def clamp_split_index(index: int, grid_size: int) -> int:
    if index < 1 or index >= grid_size - 1:
        return int(grid_size) // 2
    return int(index)
