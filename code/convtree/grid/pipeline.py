from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple

import numpy as np

from convtree.geometry import Point, Rectangle
from convtree.utils.loggers import log_convolution_aborted

from .convolution import InvalidConvolution, convolve
from .raster import is_flat, normalize, rasterize
from .split_point import clamp_split_index, find_split_point

Array = np.ndarray


@dataclass(frozen=True)
class DensityResult:
    grid: Array
    passes_applied: int
    flat: bool


@dataclass(frozen=True)
class SplitIndices:
    x: int
    y: int
    flat: bool
    raw: Tuple[Optional[int], Optional[int]]
    density: DensityResult


def smooth_density(grid: Any, kernel: Any, passes: int) -> DensityResult:
    convolved = normalize(grid)
    if is_flat(convolved):
        return DensityResult(grid=convolved, passes_applied=0, flat=True)

    applied = 0
    for _ in range(int(passes)):
        try:
            tmp = convolve(convolved, kernel, stride=1, padding=1)
        except InvalidConvolution as exc:
            log_convolution_aborted(applied, int(passes), exc)
            break
        convolved = normalize(tmp)
        applied += 1

    convolved = normalize(convolved)
    return DensityResult(grid=convolved, passes_applied=applied, flat=is_flat(convolved))


def density_split(
    region: Rectangle,
    points: Sequence[Point],
    grid_size: int,
    kernel: Any,
    passes: int,
) -> SplitIndices:
    """Cell indices of the cut for ``points`` inside ``region``.

    Indices always address the rasterized ``grid_size`` grid, even when a
    kernel smaller than 3x3 grows the convolved grid past it.
    """
    n = int(grid_size)
    density = smooth_density(rasterize(region, points, n), kernel, passes)
    if density.flat:
        return SplitIndices(x=n // 2, y=n // 2, flat=True, raw=(None, None), density=density)
    raw_x, raw_y = find_split_point(density.grid)
    return SplitIndices(
        x=clamp_split_index(raw_x, n),
        y=clamp_split_index(raw_y, n),
        flat=False,
        raw=(raw_x, raw_y),
        density=density,
    )
