"""Region trees: the density-guided :class:`ConvTree` and the midpoint
:class:`QuadTree`, both built on :class:`RegionTree`."""

from __future__ import annotations

from .conv import ConvTree, new_conv_tree
from .factory import create_tree
from .node import CHILD_NAMES, RegionTree
from .quad import QuadTree, new_quad_tree

__all__ = [
    "CHILD_NAMES",
    "ConvTree",
    "QuadTree",
    "RegionTree",
    "create_tree",
    "new_conv_tree",
    "new_quad_tree",
]
