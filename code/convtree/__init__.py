from ._version import __version__
from .geometry import InvalidRegion, Point, Rectangle
from .grid import DEFAULT_KERNEL, InvalidConvolution
from .ids import counter_ids, uuid_ids
from .stats import CellStats, baseline_tags, compute_cell_stats
from .tree import ConvTree, QuadTree, RegionTree, create_tree, new_conv_tree, new_quad_tree

__all__ = (
    "__version__",
    "CellStats",
    "ConvTree",
    "DEFAULT_KERNEL",
    "InvalidConvolution",
    "InvalidRegion",
    "Point",
    "QuadTree",
    "Rectangle",
    "RegionTree",
    "baseline_tags",
    "compute_cell_stats",
    "counter_ids",
    "create_tree",
    "new_conv_tree",
    "new_quad_tree",
    "uuid_ids",
)
