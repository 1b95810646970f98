from __future__ import annotations

from typing import Iterable, Optional, Tuple

from convtree.cfg.schema import TreeConfig
from convtree.geometry import Coord, Point, Rectangle
from convtree.ids import IdSupplier

from .node import RegionTree


class QuadTree(RegionTree):
    """Tree that always cuts at the geometric midpoint of a cell."""

    def _cut(self) -> Tuple[float, float]:
        return self.region.midpoint()


def new_quad_tree(
    top_left: Coord,
    bottom_right: Coord,
    min_width: float,
    min_height: float,
    max_point_weight: int,
    max_depth: int,
    points: Optional[Iterable[Point]] = None,
    *,
    id_supplier: Optional[IdSupplier] = None,
    tag_inheritance: str = "overwrite",
) -> QuadTree:
    cfg = TreeConfig(
        min_width=float(min_width),
        min_height=float(min_height),
        max_point_weight=int(max_point_weight),
        max_depth=int(max_depth),
        tag_inheritance=tag_inheritance,  # type: ignore[arg-type]
    )
    return QuadTree(Rectangle(top_left, bottom_right), cfg, points, id_supplier=id_supplier)
