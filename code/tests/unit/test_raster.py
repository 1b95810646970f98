import numpy as np
import pytest

from convtree.geometry import Point, Rectangle
from convtree.grid import cell_steps, is_flat, normalize, rasterize


def test_rasterize_sums_weights_per_cell():
    region = Rectangle((0.0, 4.0), (4.0, 0.0))
    pts = [
        Point(0.5, 3.5, weight=2),
        Point(0.6, 3.4, weight=1),
        Point(3.5, 0.5, weight=4),
    ]
    grid = rasterize(region, pts, 4)

    assert grid.shape == (4, 4)
    # Axis 0 is X from the left, axis 1 is Y from the top.
    assert grid[0, 0] == 3.0
    assert grid[3, 3] == 4.0
    assert grid.sum() == 7.0


def test_rasterize_counts_shared_edges_in_every_touching_cell():
    region = Rectangle((0.0, 2.0), (2.0, 0.0))
    grid = rasterize(region, [Point(1.0, 1.0, weight=1)], 2)
    assert np.array_equal(grid, np.ones((2, 2)))


def test_rasterize_is_order_independent():
    region = Rectangle((0.0, 10.0), (10.0, 0.0))
    rng = np.random.default_rng(3)
    pts = [Point(float(x), float(y), weight=int(w)) for x, y, w in zip(
        rng.uniform(0, 10, 50), rng.uniform(0, 10, 50), rng.integers(0, 4, 50)
    )]
    a = rasterize(region, pts, 6)
    b = rasterize(region, list(reversed(pts)), 6)
    assert np.array_equal(a, b)


def test_rasterize_empty_and_invalid_size():
    region = Rectangle((0.0, 1.0), (1.0, 0.0))
    assert not rasterize(region, [], 3).any()
    with pytest.raises(ValueError):
        rasterize(region, [], 0)


def test_cell_steps_are_signed():
    x_step, y_step = cell_steps(Rectangle((0.0, 10.0), (5.0, 0.0)), 5)
    assert x_step == pytest.approx(1.0)
    assert y_step == pytest.approx(-2.0)


def test_normalize_scales_to_unit_max_and_guards_zero():
    g = np.array([[0.0, 2.0], [4.0, 1.0]])
    out = normalize(g)
    assert out.max() == pytest.approx(1.0)
    assert g[1, 0] == 4.0

    flat = normalize(np.zeros((3, 3)))
    assert is_flat(flat)
    assert not np.isnan(flat).any()
