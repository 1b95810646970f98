from __future__ import annotations

from pathlib import Path
from typing import Any

import typer

from convtree.cfg import Config, ConfigError, load_config
from convtree.geometry import Point
from convtree.utils.io import load_points

from .validators import normalize_choice

VARIANTS = ("conv", "quad")
OUTPUT_FORMATS = ("json", "text")


def validate_choice(value: Any, *, allowed: tuple[str, ...], option: str) -> str:
    try:
        return normalize_choice(value, allowed=allowed, name=option)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def resolve_config(config: Path | None) -> Config:
    if config is None:
        return Config()
    try:
        return load_config(config)
    except ConfigError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc


def read_points(path: Path) -> list[Point]:
    try:
        return load_points(path)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="POINTS") from exc
