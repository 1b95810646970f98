from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Iterable, Tuple

Coord = Tuple[float, float]


class InvalidRegion(ValueError):
    pass


@dataclass(frozen=True)
class Point:
    x: float
    y: float
    weight: int = 1
    content: Any = None

    def __post_init__(self) -> None:
        if isinstance(self.weight, bool) or int(self.weight) != self.weight:
            raise ValueError(f"Point weight must be an integer, got {self.weight!r}")
        if self.weight < 0:
            raise ValueError(f"Point weight must be >= 0, got {self.weight}")
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))
        object.__setattr__(self, "weight", int(self.weight))


def point_tags(point: Point) -> frozenset[str]:
    content = point.content
    if content is None:
        return frozenset()
    if isinstance(content, str):
        return frozenset([content])
    if isinstance(content, Mapping):
        tags = content.get("tags")
        if tags is None:
            return frozenset()
        if isinstance(tags, str):
            return frozenset([tags])
        return frozenset(str(t) for t in tags)
    if isinstance(content, (set, frozenset, list, tuple)):
        return frozenset(t for t in content if isinstance(t, str))
    return frozenset()


def total_weight(points: Iterable[Point]) -> int:
    return sum(int(p.weight) for p in points)


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned region; Y grows upward so ``top_left`` has the larger Y."""

    top_left: Coord
    bottom_right: Coord

    def __post_init__(self) -> None:
        tl = (float(self.top_left[0]), float(self.top_left[1]))
        br = (float(self.bottom_right[0]), float(self.bottom_right[1]))
        if tl[0] >= br[0]:
            raise InvalidRegion(
                f"X of top left point ({tl[0]}) must be smaller than X of bottom right point ({br[0]})"
            )
        if tl[1] <= br[1]:
            raise InvalidRegion(
                f"Y of top left point ({tl[1]}) must be larger than Y of bottom right point ({br[1]})"
            )
        object.__setattr__(self, "top_left", tl)
        object.__setattr__(self, "bottom_right", br)

    @property
    def left(self) -> float:
        return self.top_left[0]

    @property
    def right(self) -> float:
        return self.bottom_right[0]

    @property
    def top(self) -> float:
        return self.top_left[1]

    @property
    def bottom(self) -> float:
        return self.bottom_right[1]

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.top - self.bottom

    def midpoint(self) -> Coord:
        return (self.left + self.width / 2.0, self.top - self.height / 2.0)

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x <= self.right and self.bottom <= y <= self.top

    def contains_point(self, point: Point) -> bool:
        return self.contains(point.x, point.y)

    def quadrants(self, cut_x: float, cut_y: float) -> tuple["Rectangle", "Rectangle", "Rectangle", "Rectangle"]:
        """Top-left, top-right, bottom-left and bottom-right parts around the cut."""
        return (
            Rectangle((self.left, self.top), (cut_x, cut_y)),
            Rectangle((cut_x, self.top), (self.right, cut_y)),
            Rectangle((self.left, cut_y), (cut_x, self.bottom)),
            Rectangle((cut_x, cut_y), (self.right, self.bottom)),
        )

    def as_dict(self) -> dict:
        return {"top_left": list(self.top_left), "bottom_right": list(self.bottom_right)}
