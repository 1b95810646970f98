from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Literal, Optional, Sequence, Tuple

import numpy as np

from convtree.geometry import Point, point_tags

TagInheritance = Literal["overwrite", "union", "replace"]
TAG_INHERITANCE_POLICIES: tuple[str, ...] = ("overwrite", "union", "replace")


@dataclass(frozen=True)
class CellStats:
    point_count: int
    center: Optional[Tuple[float, float]]
    average_distance: float
    baseline_tags: frozenset[str]

    def as_dict(self) -> dict:
        return {
            "point_count": self.point_count,
            "center": None if self.center is None else list(self.center),
            "average_distance": self.average_distance,
            "baseline_tags": sorted(self.baseline_tags),
        }


def tag_counts(points: Iterable[Point]) -> Counter:
    counts: Counter = Counter()
    for p in points:
        counts.update(point_tags(p))
    return counts


def baseline_tags(points: Iterable[Point]) -> frozenset[str]:
    """Tags carried by more points than the average tag."""
    counts = tag_counts(points)
    if not counts:
        return frozenset()
    mean = sum(counts.values()) / len(counts)
    return frozenset(tag for tag, n in counts.items() if n > mean)


def inherit_tags(
    inherited: frozenset[str], computed: frozenset[str], policy: TagInheritance = "overwrite"
) -> frozenset[str]:
    if policy == "overwrite":
        return computed if computed else inherited
    if policy == "union":
        return inherited | computed
    if policy == "replace":
        return computed
    raise ValueError(f"Unknown tag inheritance policy: {policy!r}")


def compute_cell_stats(
    points: Sequence[Point],
    inherited: frozenset[str] = frozenset(),
    policy: TagInheritance = "overwrite",
) -> CellStats:
    tags = inherit_tags(frozenset(inherited), baseline_tags(points), policy)
    if not points:
        return CellStats(point_count=0, center=None, average_distance=0.0, baseline_tags=tags)

    xy = np.asarray([(p.x, p.y) for p in points], dtype=np.float64)
    center = xy.mean(axis=0)
    dist = np.linalg.norm(xy - center[None, :], axis=1)
    return CellStats(
        point_count=len(points),
        center=(float(center[0]), float(center[1])),
        average_distance=float(dist.mean()),
        baseline_tags=tags,
    )
