import numpy as np

from convtree.grid import clamp_split_index, find_split_point


def test_block_peak_cuts_just_past_the_cluster():
    grid = np.zeros((10, 10))
    grid[1:3, 1:3] = 1.0

    assert find_split_point(grid) == (3, 3)


def test_isolated_peak_yields_degenerate_offsets():
    grid = np.zeros((7, 7))
    grid[1, 1] = 1.0

    sx, sy = find_split_point(grid)
    assert (sx, sy) == (-1, -1)
    assert clamp_split_index(sx, 7) == 3
    assert clamp_split_index(sy, 7) == 3


def test_first_maximum_in_row_major_order_wins():
    grid = np.zeros((9, 9))
    grid[6:8, 6:8] = 1.0
    grid[1:3, 1:3] = 1.0

    # The peak at (1, 1) is seen first, so the cut hugs that block.
    assert find_split_point(grid) == (3, 3)


def test_candidate_nearer_the_center_wins_between_sides():
    grid = np.zeros((9, 9))
    grid[2, 4] = 1.0
    grid[1, 4] = 0.9
    grid[3, 4] = 0.9

    sx, sy = find_split_point(grid)
    assert sx == 4
    assert sy == -1


def test_rings_grow_while_density_stays_high():
    grid = np.zeros((12, 12))
    grid[2:6, 2:6] = 1.0

    sx, sy = find_split_point(grid)
    assert (sx, sy) == (6, 6)


def test_clamp_split_index_bounds():
    assert clamp_split_index(0, 10) == 5
    assert clamp_split_index(9, 10) == 5
    assert clamp_split_index(1, 10) == 1
    assert clamp_split_index(8, 10) == 8


def test_all_zero_grid_has_peak_at_origin():
    sx, sy = find_split_point(np.zeros((6, 6)))
    assert clamp_split_index(sx, 6) == 3
    assert clamp_split_index(sy, 6) == 3
