from __future__ import annotations

import math

import pytest

from batterylevel.geometry import Point, Rect
from batterylevel.path import ArcTo, Close, LineTo, MoveTo, Path, PathBuilder, format_number


def test_from_rect():
    path = Path.from_rect(Rect(0, 0, 10, 5))
    assert path.subpath_count == 1
    assert path.is_closed
    assert path.polygons() == [[(0, 0), (10, 0), (10, 5), (0, 5)]]
    assert path.svg_d() == "M0 0 L10 0 L10 5 L0 5 Z"


def test_arc_to_tangent_corner():
    b = PathBuilder()
    b.move_to(Point(0, 0))
    b.arc_to_tangent(Point(10, 0), Point(10, 10), 2)
    segs = b.build().segments

    assert isinstance(segs[0], MoveTo)
    assert isinstance(segs[1], LineTo)
    assert segs[1].point.x == pytest.approx(8)
    assert segs[1].point.y == pytest.approx(0)

    arc = segs[2]
    assert isinstance(arc, ArcTo)
    assert arc.radius == 2
    assert arc.center.x == pytest.approx(8)
    assert arc.center.y == pytest.approx(2)
    # clockwise quarter turn on a y-down screen
    assert arc.sweep == pytest.approx(math.pi / 2)
    assert arc.start.x == pytest.approx(8)
    assert arc.start.y == pytest.approx(0)
    assert arc.end.x == pytest.approx(10)
    assert arc.end.y == pytest.approx(2)
    assert b.current_point == arc.end


def test_arc_to_tangent_skips_zero_length_line():
    b = PathBuilder()
    b.move_to(Point(8, 0))
    b.arc_to_tangent(Point(10, 0), Point(10, 10), 2)
    segs = b.build().segments
    assert [type(s) for s in segs] == [MoveTo, ArcTo]


def test_arc_to_tangent_counter_clockwise():
    b = PathBuilder()
    b.move_to(Point(10, 8))
    b.arc_to_tangent(Point(10, 10), Point(0, 10), 2)
    b.move_to(Point(0, 0))
    b.arc_to_tangent(Point(0, 10), Point(10, 10), 2)
    arcs = [s for s in b.build().segments if isinstance(s, ArcTo)]
    assert arcs[0].sweep == pytest.approx(math.pi / 2)
    assert arcs[1].sweep == pytest.approx(-math.pi / 2)


def test_arc_to_tangent_zero_radius_is_line():
    b = PathBuilder()
    b.move_to(Point(0, 0))
    b.arc_to_tangent(Point(10, 0), Point(10, 10), 0)
    assert b.build().segments[-1] == LineTo(Point(10, 0))


def test_arc_to_tangent_collinear_is_line():
    b = PathBuilder()
    b.move_to(Point(0, 0))
    b.arc_to_tangent(Point(5, 0), Point(10, 0), 2)
    assert b.build().segments[-1] == LineTo(Point(5, 0))


def test_arc_svg_and_flattening():
    b = PathBuilder()
    b.move_to(Point(0, 0))
    b.arc_to_tangent(Point(10, 0), Point(10, 10), 2)
    b.close()
    path = b.build()

    assert "A2 2 0 0 1 10 2" in path.svg_d()
    poly = path.polygons()[0]
    # every flattened arc point sits on the circle
    for x, y in poly[2:]:
        assert math.hypot(x - 8, y - 2) == pytest.approx(2)


def test_bounding_box():
    path = Path.from_rect(Rect(1, 2, 3, 4))
    assert path.bounding_box() == Rect(1, 2, 3, 4)
    assert Path().bounding_box() == Rect(0, 0, 0, 0)
    assert Path().is_empty
    assert Path.from_rect(Rect(0, 5, 10, 0)).is_empty


def test_rotated():
    b = PathBuilder()
    b.move_to(Point(1, 0))
    b.line_to(Point(2, 0))
    path = b.build().rotated(90, Point(0, 0))
    start = path.segments[0].point
    end = path.segments[1].point
    assert start.x == pytest.approx(0)
    assert start.y == pytest.approx(1)
    assert end.x == pytest.approx(0)
    assert end.y == pytest.approx(2)


def test_rotated_round_trip_keeps_arcs():
    b = PathBuilder()
    b.move_to(Point(0, 0))
    b.arc_to_tangent(Point(10, 0), Point(10, 10), 2)
    b.close()
    path = b.build()
    back = path.rotated(-12, Point(5, 5)).rotated(12, Point(5, 5))
    for a, c in zip(path.polygons()[0], back.polygons()[0]):
        assert a == pytest.approx(c)
    assert isinstance(back.segments[-1], Close)


def test_paths_compare_structurally():
    assert Path.from_rect(Rect(0, 0, 1, 1)) == Path.from_rect(Rect(0, 0, 1, 1))
    assert Path.from_rect(Rect(0, 0, 1, 1)) != Path.from_rect(Rect(0, 0, 1, 2))


def test_format_number():
    assert format_number(10) == "10"
    assert format_number(2.5) == "2.5"
    assert format_number(1 / 3) == "0.333"
    assert format_number(-0.0001) == "0"
