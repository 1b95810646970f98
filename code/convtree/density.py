from __future__ import annotations

from pathlib import Path

import numpy as np
import typer

from convtree.cli.common import read_points, resolve_config
from convtree.geometry import InvalidRegion, Rectangle
from convtree.grid import density_split, resolve_kernel
from convtree.utils.loggers import set_verbosity


def format_grid(grid: np.ndarray, precision: int = 3) -> str:
    """Rows are Y (top first), columns are X, matching the region layout."""
    rows = []
    for j in range(grid.shape[1]):
        rows.append("\t".join(f"{grid[i, j]:.{precision}f}" for i in range(grid.shape[0])))
    return "\n".join(rows)


def cli_density(
    points: Path = typer.Argument(..., help="CSV (x,y,weight,tags) or JSON points file."),
    config: Path | None = typer.Option(None, "--config", "-c"),
    precision: int = typer.Option(3, "--precision", min=0, max=12),
    verbose: bool = typer.Option(False, "--verbose/--quiet"),
) -> None:
    """Print the smoothed density grid of the root region and its split cell."""
    set_verbosity(verbose)
    cfg = resolve_config(config)
    pts = read_points(points)
    try:
        region = Rectangle(cfg.region.top_left, cfg.region.bottom_right)
    except InvalidRegion as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc

    split = density_split(
        region,
        pts,
        cfg.conv.grid_size,
        resolve_kernel(cfg.conv.kernel),
        cfg.conv.convolution_passes,
    )
    typer.echo(format_grid(split.density.grid, precision))
    typer.echo("-----")
    if split.flat:
        typer.echo(f"flat density; midpoint split at cell ({split.x}, {split.y})")
        return
    sx, sy = split.raw
    typer.echo(
        f"passes applied: {split.density.passes_applied}; raw split ({sx}, {sy}); "
        f"clamped split ({split.x}, {split.y})"
    )
