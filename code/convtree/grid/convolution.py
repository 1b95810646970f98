from __future__ import annotations

from typing import Any, Optional, Sequence

import numpy as np
import torch
from torch.nn import functional as F

from convtree.utils.torchops import as_tensor

Array = np.ndarray

DEFAULT_KERNEL: tuple[tuple[float, ...], ...] = (
    (0.5, 0.5, 0.5),
    (0.5, 1.0, 0.5),
    (0.5, 0.5, 0.5),
)


class InvalidConvolution(ValueError):
    pass


def check_kernel(kernel: Optional[Sequence[Sequence[float]]]) -> bool:
    if kernel is None:
        return False
    try:
        rows = [list(r) for r in kernel]
    except TypeError:
        return False
    if not rows or not rows[0]:
        return False
    size = len(rows[0])
    if size != len(rows):
        return False
    return all(len(r) == size for r in rows)


def resolve_kernel(kernel: Optional[Sequence[Sequence[float]]]) -> Array:
    if not check_kernel(kernel):
        return np.asarray(DEFAULT_KERNEL, dtype=np.float64)
    return np.asarray([[float(v) for v in row] for row in kernel], dtype=np.float64)


def convolve(grid: Any, kernel: Any, stride: int = 1, padding: int = 1) -> Array:
    if stride < 1:
        raise InvalidConvolution("convolutional stride must be larger than 0")
    if padding < 1:
        raise InvalidConvolution("convolutional padding must be larger than 0")

    try:
        g = np.asarray(grid, dtype=np.float64)
        k = np.asarray(kernel, dtype=np.float64)
    except ValueError as exc:
        raise InvalidConvolution(f"grid and kernel must be rectangular numeric arrays: {exc}") from exc
    if g.ndim != 2:
        raise InvalidConvolution(f"grid must be 2-D, got shape {g.shape}")
    if k.ndim != 2 or k.shape[0] != k.shape[1] or k.shape[0] == 0:
        raise InvalidConvolution(f"convolutional kernel must be square, got shape {k.shape}")

    kernel_size = int(k.shape[0])
    if g.shape[0] < kernel_size:
        raise InvalidConvolution("grid width is less than convolutional kernel size")
    if g.shape[1] < kernel_size:
        raise InvalidConvolution("grid height is less than convolutional kernel size")

    device = torch.device("cpu")
    inp = as_tensor(g, device, dtype=torch.float64).reshape(1, 1, *g.shape)
    weight = as_tensor(k, device, dtype=torch.float64).reshape(1, 1, kernel_size, kernel_size)
    with torch.no_grad():
        out = F.conv2d(inp, weight, stride=int(stride), padding=int(padding))
    return out[0, 0].numpy().copy()
