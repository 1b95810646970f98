import pytest

from convtree.geometry import Point
from convtree.stats import baseline_tags, compute_cell_stats, inherit_tags, tag_counts


def _tagged(*tags):
    return Point(0.0, 0.0, content=set(tags))


def test_baseline_tags_keep_above_mean_frequency():
    pts = [_tagged("a", "b"), _tagged("a"), _tagged("a", "c"), _tagged("b")]
    # a=3, b=2, c=1; mean is 2.
    assert baseline_tags(pts) == {"a"}


def test_duplicate_tags_within_a_point_count_once():
    pts = [
        Point(0.0, 0.0, content=["a", "a", "a"]),
        Point(0.0, 0.0, content=["b"]),
        Point(0.0, 0.0, content=["b"]),
    ]
    assert tag_counts(pts) == {"a": 1, "b": 2}
    assert baseline_tags(pts) == {"b"}


def test_no_tags_or_uniform_tags_give_empty_baseline():
    assert baseline_tags([]) == frozenset()
    assert baseline_tags([Point(0.0, 0.0), Point(1.0, 1.0)]) == frozenset()
    assert baseline_tags([_tagged("a"), _tagged("b")]) == frozenset()


def test_inherit_tags_policies():
    seed = frozenset({"old"})
    assert inherit_tags(seed, frozenset({"new"}), "overwrite") == {"new"}
    assert inherit_tags(seed, frozenset(), "overwrite") == {"old"}
    assert inherit_tags(seed, frozenset({"new"}), "union") == {"old", "new"}
    assert inherit_tags(seed, frozenset(), "replace") == frozenset()
    with pytest.raises(ValueError):
        inherit_tags(seed, frozenset(), "merge")  # type: ignore[arg-type]


def test_cell_stats_centroid_and_mean_distance():
    pts = [Point(0.0, 0.0), Point(2.0, 0.0), Point(1.0, 3.0, weight=5), Point(1.0, -3.0)]
    stats = compute_cell_stats(pts)
    assert stats.point_count == 4
    assert stats.center == pytest.approx((1.0, 0.0))
    assert stats.average_distance == pytest.approx((1.0 + 1.0 + 3.0 + 3.0) / 4)


def test_cell_stats_for_empty_leaf():
    stats = compute_cell_stats([], frozenset({"seed"}))
    assert stats.point_count == 0
    assert stats.center is None
    assert stats.average_distance == 0.0
    assert stats.baseline_tags == {"seed"}
    assert stats.as_dict()["baseline_tags"] == ["seed"]
