from __future__ import annotations

from typing import Iterable, Optional

from convtree.cfg.schema import Config
from convtree.geometry import Point, Rectangle
from convtree.ids import IdSupplier

from .conv import ConvTree
from .node import RegionTree
from .quad import QuadTree


def create_tree(
    cfg: Config,
    points: Optional[Iterable[Point]] = None,
    *,
    variant: Optional[str] = None,
    id_supplier: Optional[IdSupplier] = None,
) -> RegionTree:
    kind = str(variant or cfg.variant).strip().lower()
    region = Rectangle(cfg.region.top_left, cfg.region.bottom_right)
    if kind == "conv":
        return ConvTree(region, cfg.tree, cfg.conv, points, id_supplier=id_supplier)
    if kind == "quad":
        return QuadTree(region, cfg.tree, points, id_supplier=id_supplier)
    raise ValueError(f"Unknown tree variant: {kind!r} (expected 'conv' or 'quad')")
