from __future__ import annotations

import inspect
import json
from pathlib import Path

from typer.models import OptionInfo
from typer.testing import CliRunner

import convtree.build as build_cmd
from convtree.cfg import load_config
from convtree.cli.app import app
from convtree.geometry import Rectangle
from convtree.grid import density_split, resolve_kernel
from convtree.utils.io import load_points

CONFIG = """
variant: conv
region:
  top_left: [0, 10]
  bottom_right: [10, 0]
tree:
  min_width: 1
  min_height: 1
  max_point_weight: 5
  max_depth: 3
conv:
  grid_size: 10
  convolution_passes: 2
"""


def _write_inputs(tmp_path: Path) -> tuple[Path, Path]:
    rows = ["x,y,weight,tags"]
    for dx, dy in [(-0.3, -0.3), (-0.3, 0.3), (0.3, -0.3), (0.3, 0.3), (0.1, 0.2), (-0.2, -0.1)]:
        rows.append(f"{2 + dx},{8 + dy},1,cafe")
        rows.append(f"{8 + dx},{2 + dy},1,park")
    pts = tmp_path / "pts.csv"
    pts.write_text("\n".join(rows) + "\n", encoding="utf-8")
    cfg = tmp_path / "tree.yaml"
    cfg.write_text(CONFIG, encoding="utf-8")
    return pts, cfg


def _opt_default(fn: object, name: str) -> object:
    sig = inspect.signature(fn)
    p = sig.parameters[name]
    assert isinstance(p.default, OptionInfo)
    return p.default.default


def test_build_cli_defaults() -> None:
    assert _opt_default(build_cmd.cli_build, "config") is None
    assert _opt_default(build_cmd.cli_build, "variant") is None
    assert _opt_default(build_cmd.cli_build, "fmt") == "json"
    assert _opt_default(build_cmd.cli_build, "out") is None
    assert _opt_default(build_cmd.cli_build, "include_points") is False


def test_build_writes_json_summary(tmp_path: Path) -> None:
    pts, cfg = _write_inputs(tmp_path)
    out = tmp_path / "tree.json"

    result = CliRunner().invoke(
        app, ["build", str(pts), "--config", str(cfg), "--out", str(out), "--include-points"]
    )
    assert result.exit_code == 0, result.output

    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["weight"] == 12
    assert payload["root"]["is_leaf"] is False
    assert payload["num_leaves"] >= 4
    assert payload["config"]["tree"]["max_point_weight"] == 5


def test_build_text_format_for_quad_variant(tmp_path: Path) -> None:
    pts, cfg = _write_inputs(tmp_path)
    result = CliRunner().invoke(
        app, ["build", str(pts), "--config", str(cfg), "--variant", "quad", "--format", "text"]
    )
    assert result.exit_code == 0, result.output
    assert "number of points" in result.output
    assert "top left X - 0.000000, top left Y - 10.000000" in result.output


def test_build_rejects_bad_inputs(tmp_path: Path) -> None:
    pts, cfg = _write_inputs(tmp_path)
    runner = CliRunner()

    assert runner.invoke(app, ["build", str(pts), "--variant", "octree"]).exit_code != 0
    assert runner.invoke(app, ["build", str(pts), "--format", "xml"]).exit_code != 0
    assert runner.invoke(app, ["build", str(tmp_path / "missing.csv")]).exit_code != 0

    bad_cfg = tmp_path / "bad.yaml"
    bad_cfg.write_text("region:\n  top_left: [0, 0]\n  bottom_right: [1, 1]\n", encoding="utf-8")
    assert runner.invoke(app, ["build", str(pts), "--config", str(bad_cfg)]).exit_code != 0


def test_density_prints_grid_and_split(tmp_path: Path) -> None:
    pts, cfg = _write_inputs(tmp_path)
    result = CliRunner().invoke(app, ["density", str(pts), "--config", str(cfg)])
    assert result.exit_code == 0, result.output
    assert "clamped split" in result.output
    grid_lines = result.output.split("-----")[0].splitlines()
    assert sum(1 for line in grid_lines if line.count("\t") == 9) == 10


def test_density_reports_the_split_the_tree_uses(tmp_path: Path) -> None:
    pts, cfg_path = _write_inputs(tmp_path)
    cfg = load_config(cfg_path)
    split = density_split(
        Rectangle(cfg.region.top_left, cfg.region.bottom_right),
        load_points(pts),
        cfg.conv.grid_size,
        resolve_kernel(cfg.conv.kernel),
        cfg.conv.convolution_passes,
    )

    result = CliRunner().invoke(app, ["density", str(pts), "--config", str(cfg_path)])
    assert result.exit_code == 0, result.output
    assert f"clamped split ({split.x}, {split.y})" in result.output
