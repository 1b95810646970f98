from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path

import typer

from convtree.cfg import to_dict
from convtree.cli.common import (
    OUTPUT_FORMATS,
    VARIANTS,
    read_points,
    resolve_config,
    validate_choice,
)
from convtree.geometry import InvalidRegion
from convtree.tree import RegionTree, create_tree
from convtree.utils.atomic_files import atomic_write_text
from convtree.utils.loggers import get_logger, set_verbosity


def render_tree(tree: RegionTree, cfg_dict: dict, fmt: str, include_points: bool = False) -> str:
    if fmt == "text":
        return tree.format_tree() + "\n"
    payload = {
        "config": cfg_dict,
        "num_leaves": tree.num_leaves(),
        "max_depth": tree.max_depth_reached(),
        "weight": tree.weight(),
        "root": tree.as_dict(include_points=include_points),
    }
    return json.dumps(payload, indent=2, sort_keys=True) + "\n"


def cli_build(
    points: Path = typer.Argument(..., help="CSV (x,y,weight,tags) or JSON points file."),
    config: Path | None = typer.Option(
        None, "--config", "-c", help="YAML tree configuration; defaults apply when omitted."
    ),
    variant: str | None = typer.Option(None, "--variant", help="conv or quad; overrides the config."),
    fmt: str = typer.Option("json", "--format", "-f", help="json or text."),
    out: Path | None = typer.Option(None, "--out", "-o", help="Write the result here instead of stdout."),
    include_points: bool = typer.Option(False, "--include-points/--no-include-points"),
    verbose: bool = typer.Option(False, "--verbose/--quiet"),
) -> None:
    """Build a tree from a points file and print its shape."""
    set_verbosity(verbose)
    cfg = resolve_config(config)
    if variant is not None:
        cfg = replace(cfg, variant=validate_choice(variant, allowed=VARIANTS, option="--variant"))
    fmt = validate_choice(fmt, allowed=OUTPUT_FORMATS, option="--format")
    pts = read_points(points)

    try:
        tree = create_tree(cfg, pts)
    except (InvalidRegion, ValueError) as exc:
        raise typer.BadParameter(str(exc)) from exc

    get_logger("cli").info(
        "Built %s tree: %d point(s), %d leaf/leaves, max depth %d.",
        cfg.variant,
        len(pts),
        tree.num_leaves(),
        tree.max_depth_reached(),
    )

    text = render_tree(tree, to_dict(cfg), fmt, include_points=include_points)
    if out is None:
        typer.echo(text, nl=False)
    else:
        atomic_write_text(out, text)
