from __future__ import annotations

from typing import Iterable, Optional, Sequence, Tuple

import numpy as np

from convtree.cfg.schema import ConvConfig, TreeConfig
from convtree.geometry import Coord, Point, Rectangle
from convtree.grid import cell_steps, check_kernel, density_split, resolve_kernel
from convtree.ids import IdSupplier
from convtree.utils.loggers import log_flat_density, log_kernel_fallback

from .node import RegionTree


def validate_conv_config(cfg: ConvConfig) -> None:
    if cfg.grid_size < 2:
        raise ValueError("grid_size must be >= 2")
    if cfg.convolution_passes < 0:
        raise ValueError("convolution_passes must be >= 0")


class ConvTree(RegionTree):
    """Tree whose cuts follow the smoothed point density of each cell."""

    def __init__(
        self,
        region: Rectangle,
        cfg: Optional[TreeConfig] = None,
        conv_cfg: Optional[ConvConfig] = None,
        points: Optional[Iterable[Point]] = None,
        *,
        depth: int = 0,
        id_supplier: Optional[IdSupplier] = None,
        seed_tags: frozenset[str] = frozenset(),
        kernel: Optional[np.ndarray] = None,
        build: bool = True,
    ) -> None:
        self.conv_cfg = conv_cfg if conv_cfg is not None else ConvConfig()
        validate_conv_config(self.conv_cfg)
        if kernel is None:
            if not check_kernel(self.conv_cfg.kernel):
                log_kernel_fallback()
            kernel = resolve_kernel(self.conv_cfg.kernel)
        self.kernel: np.ndarray = kernel
        super().__init__(
            region,
            cfg,
            points,
            depth=depth,
            id_supplier=id_supplier,
            seed_tags=seed_tags,
            build=build,
        )

    def _child_kwargs(self) -> dict:
        return {"conv_cfg": self.conv_cfg, "kernel": self.kernel}

    def _cut(self) -> Tuple[float, float]:
        assert self.points is not None
        n = int(self.conv_cfg.grid_size)
        idx = density_split(
            self.region,
            self.points,
            n,
            self.kernel,
            int(self.conv_cfg.convolution_passes),
        )
        if idx.flat:
            log_flat_density(self.id)
            return self.region.midpoint()
        x_step, y_step = cell_steps(self.region, n)
        return self.region.left + idx.x * x_step, self.region.top + idx.y * y_step


def new_conv_tree(
    top_left: Coord,
    bottom_right: Coord,
    min_width: float,
    min_height: float,
    max_point_weight: int,
    max_depth: int,
    convolution_passes: int,
    grid_size: int,
    kernel: Optional[Sequence[Sequence[float]]] = None,
    points: Optional[Iterable[Point]] = None,
    *,
    id_supplier: Optional[IdSupplier] = None,
    tag_inheritance: str = "overwrite",
) -> ConvTree:
    region = Rectangle(top_left, bottom_right)
    cfg = TreeConfig(
        min_width=float(min_width),
        min_height=float(min_height),
        max_point_weight=int(max_point_weight),
        max_depth=int(max_depth),
        tag_inheritance=tag_inheritance,  # type: ignore[arg-type]
    )
    conv_cfg = ConvConfig(
        grid_size=int(grid_size),
        convolution_passes=int(convolution_passes),
        kernel=[[float(v) for v in row] for row in kernel] if check_kernel(kernel) else None,
    )
    return ConvTree(region, cfg, conv_cfg, points, id_supplier=id_supplier)
