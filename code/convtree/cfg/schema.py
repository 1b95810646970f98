from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional

TagInheritanceLiteral = Literal["overwrite", "union", "replace"]
VariantLiteral = Literal["conv", "quad"]


@dataclass(frozen=True)
class RegionConfig:
    top_left: tuple[float, float] = (0.0, 1.0)
    bottom_right: tuple[float, float] = (1.0, 0.0)


@dataclass(frozen=True)
class TreeConfig:
    min_width: float = 0.0
    min_height: float = 0.0
    max_point_weight: int = 100
    max_depth: int = 8
    tag_inheritance: TagInheritanceLiteral = "overwrite"


@dataclass(frozen=True)
class ConvConfig:
    grid_size: int = 10
    convolution_passes: int = 1
    kernel: Optional[list[list[float]]] = None


@dataclass(frozen=True)
class Config:
    variant: VariantLiteral = "conv"
    region: RegionConfig = field(default_factory=RegionConfig)
    tree: TreeConfig = field(default_factory=TreeConfig)
    conv: ConvConfig = field(default_factory=ConvConfig)
