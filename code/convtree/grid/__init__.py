"""Density-grid pipeline used by the adaptive tree.

Rasterization of weighted points, normalization, kernel convolution and the
ring search that turns a smoothed grid into cut offsets.
"""

from __future__ import annotations

from .convolution import DEFAULT_KERNEL, InvalidConvolution, check_kernel, convolve, resolve_kernel
from .pipeline import DensityResult, SplitIndices, density_split, smooth_density
from .raster import cell_steps, is_flat, normalize, rasterize
from .split_point import clamp_split_index, find_split_point

__all__ = [
    "DEFAULT_KERNEL",
    "DensityResult",
    "InvalidConvolution",
    "SplitIndices",
    "cell_steps",
    "check_kernel",
    "clamp_split_index",
    "convolve",
    "density_split",
    "find_split_point",
    "is_flat",
    "normalize",
    "rasterize",
    "resolve_kernel",
    "smooth_density",
]
