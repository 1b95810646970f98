from __future__ import annotations

from typing import Iterable, Iterator, Optional, Sequence, Tuple

from convtree.cfg.schema import TreeConfig
from convtree.geometry import Point, Rectangle, total_weight
from convtree.ids import IdSupplier, uuid_ids
from convtree.stats import TAG_INHERITANCE_POLICIES, CellStats, compute_cell_stats
from convtree.utils.loggers import log_point_rejected, log_split

CHILD_NAMES: tuple[str, str, str, str] = ("top_left", "top_right", "bottom_left", "bottom_right")


def validate_tree_config(cfg: TreeConfig) -> None:
    if cfg.min_width < 0:
        raise ValueError("min_width must be >= 0")
    if cfg.min_height < 0:
        raise ValueError("min_height must be >= 0")
    if cfg.max_point_weight < 0:
        raise ValueError("max_point_weight must be >= 0")
    if cfg.max_depth < 0:
        raise ValueError("max_depth must be >= 0")
    if cfg.tag_inheritance not in TAG_INHERITANCE_POLICIES:
        raise ValueError(
            f"tag_inheritance must be one of {', '.join(TAG_INHERITANCE_POLICIES)}, "
            f"got {cfg.tag_inheritance!r}"
        )


class RegionTree:
    """Four-way partition of a rectangle into cells of bounded point weight.

    A node is either a leaf holding points or an internal node owning exactly
    four children (top-left, top-right, bottom-left, bottom-right). A leaf
    turns internal when its weight exceeds ``max_point_weight`` and the region
    is still large enough; this is never undone.

    Subclasses choose where the cut goes by implementing :meth:`_cut`.

    Not safe for concurrent use: ``insert`` and ``clear`` must come from a
    single writer.
    """

    def __init__(
        self,
        region: Rectangle,
        cfg: Optional[TreeConfig] = None,
        points: Optional[Iterable[Point]] = None,
        *,
        depth: int = 0,
        id_supplier: Optional[IdSupplier] = None,
        seed_tags: frozenset[str] = frozenset(),
        build: bool = True,
    ) -> None:
        self.cfg = cfg if cfg is not None else TreeConfig()
        validate_tree_config(self.cfg)
        if not isinstance(region, Rectangle):
            region = Rectangle(*region)

        self._ids: IdSupplier = id_supplier if id_supplier is not None else uuid_ids
        self.id: str = str(self._ids())
        self.region: Rectangle = region
        self.depth: int = int(depth)
        self.children: Optional[Tuple["RegionTree", "RegionTree", "RegionTree", "RegionTree"]] = None
        self.stats: Optional[CellStats] = None
        self.points: Optional[list[Point]] = []

        for p in points or ():
            if region.contains_point(p):
                self.points.append(p)
            else:
                log_point_rejected(p.x, p.y, self.id)

        # Inherited tags: the parent's baseline when it was split.
        self._seed_tags = frozenset(seed_tags)
        if build:
            _grow([self])

    @property
    def is_leaf(self) -> bool:
        return self.children is None

    def weight(self) -> int:
        if self.is_leaf:
            assert self.points is not None
            return total_weight(self.points)
        return sum(total_weight(leaf.points) for leaf in self.iter_leaves())

    def should_split(self) -> bool:
        if not self.is_leaf:
            return False
        big_enough = (
            self.region.width > 2 * self.cfg.min_width
            and self.region.height > 2 * self.cfg.min_height
        )
        overloaded = self.weight() > self.cfg.max_point_weight and self.depth < self.cfg.max_depth
        return big_enough and overloaded

    def _cut(self) -> Tuple[float, float]:
        raise NotImplementedError

    def _clamp_cut(self, cut_x: float, cut_y: float) -> Tuple[float, float]:
        r = self.region
        mid_x, mid_y = r.midpoint()
        x = max(cut_x, r.left + self.cfg.min_width)
        x = min(x, r.right - self.cfg.min_width)
        y = min(cut_y, r.top - self.cfg.min_height)
        y = max(y, r.bottom + self.cfg.min_height)
        # Every quadrant needs a positive width and height.
        if not r.left < x < r.right:
            x = mid_x
        if not r.bottom < y < r.top:
            y = mid_y
        return x, y

    def _child_kwargs(self) -> dict:
        return {}

    def split(self) -> None:
        if not self.is_leaf:
            return
        _grow(list(self._divide()))

    def _divide(self) -> Tuple["RegionTree", ...]:
        assert self.points is not None
        cut_x, cut_y = self._clamp_cut(*self._cut())
        log_split(self.id, self.depth, cut_x, cut_y)

        regions = self.region.quadrants(cut_x, cut_y)
        buckets: list[list[Point]] = [[], [], [], []]
        for p in self.points:
            idx = _first_containing(regions, p)
            if idx is not None:
                buckets[idx].append(p)

        seed = self.stats.baseline_tags if self.stats is not None else self._seed_tags

        self.children = tuple(
            type(self)(
                region,
                self.cfg,
                points=bucket,
                depth=self.depth + 1,
                id_supplier=self._ids,
                seed_tags=seed,
                build=False,
                **self._child_kwargs(),
            )
            for region, bucket in zip(regions, buckets)
        )
        self.points = None
        self.stats = None
        return self.children

    def _finalize(self, inherited: frozenset[str]) -> None:
        assert self.points is not None
        self.stats = compute_cell_stats(self.points, inherited, self.cfg.tag_inheritance)

    def _route(self, point: Point) -> Optional["RegionTree"]:
        assert self.children is not None
        idx = _first_containing([c.region for c in self.children], point)
        return None if idx is None else self.children[idx]

    def insert(self, point: Point, allow_split: bool = True) -> bool:
        if not self.region.contains_point(point):
            log_point_rejected(point.x, point.y, self.id)
            return False
        node: Optional[RegionTree] = self
        while node is not None and not node.is_leaf:
            node = node._route(point)
        if node is None:
            return False
        assert node.points is not None
        node.points.append(point)
        if allow_split and node.should_split():
            node.split()
        else:
            node._finalize(node._seed_tags)
        return True

    def check(self) -> None:
        for leaf in list(self.iter_leaves()):
            if leaf.should_split():
                leaf.split()

    def clear(self) -> None:
        for leaf in self.iter_leaves():
            leaf.points = []
            leaf._finalize(leaf._seed_tags)

    def refresh_stats(self) -> None:
        for leaf in self.iter_leaves():
            leaf._finalize(leaf._seed_tags)

    def iter_nodes(self) -> Iterator["RegionTree"]:
        stack: list[RegionTree] = [self]
        while stack:
            node = stack.pop()
            yield node
            if node.children is not None:
                stack.extend(reversed(node.children))

    def iter_leaves(self) -> Iterator["RegionTree"]:
        return (n for n in self.iter_nodes() if n.is_leaf)

    def locate(self, x: float, y: float) -> Optional["RegionTree"]:
        if not self.region.contains(x, y):
            return None
        target = Point(x, y, weight=0)
        node: Optional[RegionTree] = self
        while node is not None and not node.is_leaf:
            node = node._route(target)
        return node

    def num_leaves(self) -> int:
        return sum(1 for _ in self.iter_leaves())

    def max_depth_reached(self) -> int:
        return max(n.depth for n in self.iter_leaves())

    def as_dict(self, include_points: bool = False) -> dict:
        d: dict = {
            "id": self.id,
            "depth": self.depth,
            "is_leaf": self.is_leaf,
            "region": self.region.as_dict(),
            "weight": self.weight(),
        }
        if self.is_leaf:
            assert self.points is not None
            d["count"] = len(self.points)
            d["stats"] = None if self.stats is None else self.stats.as_dict()
            if include_points:
                d["points"] = [[p.x, p.y, p.weight] for p in self.points]
        else:
            d["children"] = {
                name: child.as_dict(include_points)
                for name, child in zip(CHILD_NAMES, self.children)
            }
        return d

    def format_tree(self, prefix: str = "") -> str:
        r = self.region
        lines = [
            f"{prefix}top left X - {r.left:f}, top left Y - {r.top:f}",
            f"{prefix}bottom right X - {r.right:f}, bottom right Y - {r.bottom:f}",
        ]
        if self.is_leaf:
            assert self.points is not None
            lines.append(f"{prefix}number of points - {len(self.points)}, weight - {self.weight()}")
        else:
            for child in self.children:
                lines.append(child.format_tree(prefix + "\t"))
        return "\n".join(lines)

    def __repr__(self) -> str:
        kind = "leaf" if self.is_leaf else "internal"
        return f"{type(self).__name__}(id={self.id!r}, depth={self.depth}, {kind}, region={self.region})"


def _first_containing(regions: Sequence[Rectangle], point: Point) -> Optional[int]:
    # Closed bounds; a point on a shared edge goes to the first match in
    # top-left, top-right, bottom-left, bottom-right order.
    for i, region in enumerate(regions):
        if region.contains_point(point):
            return i
    return None


def _grow(pending: list[RegionTree]) -> None:
    # Depth-first with an explicit stack, top-left child first.
    pending.reverse()
    while pending:
        node = pending.pop()
        if node.should_split():
            pending.extend(reversed(node._divide()))
        else:
            node._finalize(node._seed_tags)
