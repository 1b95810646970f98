import pytest

from convtree.geometry import InvalidRegion, Point, Rectangle, point_tags


def test_rectangle_requires_top_above_bottom():
    with pytest.raises(InvalidRegion):
        Rectangle((0.0, 0.0), (10.0, 10.0))
    with pytest.raises(InvalidRegion):
        Rectangle((10.0, 10.0), (0.0, 0.0))
    with pytest.raises(InvalidRegion):
        Rectangle((0.0, 10.0), (0.0, 0.0))
    with pytest.raises(InvalidRegion):
        Rectangle((0.0, 5.0), (10.0, 5.0))


def test_rectangle_dimensions_and_closed_containment():
    r = Rectangle((1.0, 9.0), (5.0, 3.0))
    assert (r.left, r.right, r.top, r.bottom) == (1.0, 5.0, 9.0, 3.0)
    assert r.width == 4.0
    assert r.height == 6.0
    assert r.midpoint() == (3.0, 6.0)
    assert r.contains(1.0, 9.0)
    assert r.contains(5.0, 3.0)
    assert not r.contains(5.01, 4.0)


def test_quadrants_tile_the_rectangle():
    r = Rectangle((0.0, 10.0), (10.0, 0.0))
    tl, tr, bl, br = r.quadrants(3.0, 7.0)
    assert tl == Rectangle((0.0, 10.0), (3.0, 7.0))
    assert tr == Rectangle((3.0, 10.0), (10.0, 7.0))
    assert bl == Rectangle((0.0, 7.0), (3.0, 0.0))
    assert br == Rectangle((3.0, 7.0), (10.0, 0.0))
    area = sum(q.width * q.height for q in (tl, tr, bl, br))
    assert area == pytest.approx(r.width * r.height)


def test_point_weight_validation():
    assert Point(1, 2).weight == 1
    assert Point(1, 2, weight=3.0).weight == 3
    with pytest.raises(ValueError):
        Point(0.0, 0.0, weight=-1)
    with pytest.raises(ValueError):
        Point(0.0, 0.0, weight=1.5)


def test_point_tags_from_payloads():
    assert point_tags(Point(0, 0)) == frozenset()
    assert point_tags(Point(0, 0, content="cafe")) == {"cafe"}
    assert point_tags(Point(0, 0, content=["a", "a", "b", 3])) == {"a", "b"}
    assert point_tags(Point(0, 0, content={"tags": ["x", "y"]})) == {"x", "y"}
    assert point_tags(Point(0, 0, content=object())) == frozenset()
