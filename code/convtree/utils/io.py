from __future__ import annotations

import csv
import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Iterable

from convtree.geometry import Point, point_tags

from .atomic_files import atomic_write_text

TAG_SEPARATOR = ";"


def _point_from_mapping(row: Mapping[str, Any], where: str) -> Point:
    try:
        x = float(row["x"])
        y = float(row["y"])
    except KeyError as exc:
        raise ValueError(f"{where}: missing coordinate {exc.args[0]!r}") from exc
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{where}: coordinates must be numeric") from exc

    raw_weight = row.get("weight")
    if raw_weight is None or raw_weight == "":
        weight = 1
    else:
        try:
            w = float(raw_weight)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"{where}: weight must be an integer, got {raw_weight!r}") from exc
        if not w.is_integer() or w < 0:
            raise ValueError(f"{where}: weight must be a non-negative integer, got {raw_weight!r}")
        weight = int(w)

    tags = row.get("tags")
    if isinstance(tags, str):
        tags = [t.strip() for t in tags.split(TAG_SEPARATOR) if t.strip()]
    content = frozenset(str(t) for t in tags) if tags else None
    return Point(x, y, weight=weight, content=content)


def _point_from_sequence(row: Any, where: str) -> Point:
    if isinstance(row, str) or len(row) < 2:
        raise ValueError(f"{where}: expected [x, y] or [x, y, weight]")
    mapping: dict[str, Any] = {"x": row[0], "y": row[1]}
    if len(row) > 2:
        mapping["weight"] = row[2]
    if len(row) > 3:
        mapping["tags"] = row[3]
    return _point_from_mapping(mapping, where)


def load_points(path: Path | str) -> list[Point]:
    p = Path(path)
    if not p.exists():
        raise ValueError(f"Points file not found: {p}")

    if p.suffix.lower() == ".json":
        try:
            data = json.loads(p.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in {p}: {exc}") from exc
        if isinstance(data, Mapping):
            data = data.get("points", [])
        if not isinstance(data, list):
            raise ValueError(f"{p}: expected a list of points")
        out: list[Point] = []
        for i, row in enumerate(data):
            where = f"{p}[{i}]"
            if isinstance(row, Mapping):
                out.append(_point_from_mapping(row, where))
            else:
                out.append(_point_from_sequence(row, where))
        return out

    with p.open("r", newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        fields = set(reader.fieldnames or ())
        if not {"x", "y"} <= fields:
            raise ValueError(f"{p}: CSV header must contain 'x' and 'y' columns")
        return [_point_from_mapping(row, f"{p}:{i + 2}") for i, row in enumerate(reader)]


def points_to_rows(points: Iterable[Point]) -> list[dict]:
    rows = []
    for pt in points:
        rows.append(
            {
                "x": pt.x,
                "y": pt.y,
                "weight": pt.weight,
                "tags": sorted(point_tags(pt)),
            }
        )
    return rows


def dump_points(path: Path | str, points: Iterable[Point]) -> None:
    atomic_write_text(Path(path), json.dumps(points_to_rows(points), indent=2) + "\n")
