"""Tests for Catmull-Rom bubble curves, sampling and path serialization."""
from __future__ import annotations

import pytest

from geometry.curves import bezier_segments, bubble_path_commands, curved_area, sample_curve
from geometry.paths import ClosePath, CubicTo, LineTo, MoveTo, polygon_commands, quad_to_cubic, to_svg_path
from geometry.shapes import polygon_area

SQUARE = [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)]


class TestBezierSegments:
    def test_control_points_from_neighbours(self):
        start, cp1, cp2, end = bezier_segments(SQUARE)[0]
        assert start == (0.0, 0.0)
        assert end == (10.0, 0.0)
        # CP1 = P1 + (P2 - P0) / 6 with P0 = (0, 10)
        assert cp1 == pytest.approx((10.0 / 6, -10.0 / 6))
        # CP2 = P2 - (P3 - P1) / 6 with P3 = (10, 10)
        assert cp2 == pytest.approx((10.0 - 10.0 / 6, -10.0 / 6))

    def test_one_segment_per_edge(self):
        assert len(bezier_segments(SQUARE)) == 4

    def test_too_few_points(self):
        assert bezier_segments([(0, 0), (1, 1)]) == []


class TestBubblePath:
    def test_command_shape(self):
        cmds = bubble_path_commands(SQUARE)
        assert isinstance(cmds[0], MoveTo)
        assert cmds[0].point == (0.0, 0.0)
        assert all(isinstance(c, CubicTo) for c in cmds[1:-1])
        assert isinstance(cmds[-1], ClosePath)
        assert len(cmds) == len(SQUARE) + 2

    def test_path_closes_on_first_point(self):
        cmds = bubble_path_commands(SQUARE)
        assert cmds[-2].point == SQUARE[0]

    def test_passes_through_every_control_point(self):
        ends = [c.point for c in bubble_path_commands(SQUARE)[1:-1]]
        assert ends == SQUARE[1:] + SQUARE[:1]

    def test_degenerate_ring(self):
        assert bubble_path_commands([(0, 0), (5, 0)]) == []


class TestSampling:
    def test_samples_per_segment(self):
        assert len(sample_curve(SQUARE, 5)) == 20

    def test_first_sample_is_first_knot(self):
        assert sample_curve(SQUARE, 5)[0] == pytest.approx((0.0, 0.0))

    def test_knots_are_on_the_curve(self):
        pts = sample_curve(SQUARE, 4)
        for i, knot in enumerate(SQUARE):
            assert pts[i * 4] == pytest.approx(knot)

    def test_degenerate_ring_returned_unchanged(self):
        assert sample_curve([(1.0, 2.0)]) == [(1.0, 2.0)]

    def test_curved_area_bulges_past_control_polygon(self):
        assert curved_area(SQUARE) > polygon_area(SQUARE)

    def test_curved_area_converges(self):
        coarse = curved_area(SQUARE, 5)
        fine = curved_area(SQUARE, 40)
        finer = curved_area(SQUARE, 80)
        assert abs(finer - fine) < abs(fine - coarse)

    def test_curved_area_degenerate(self):
        assert curved_area([(0, 0), (1, 0)]) == 0.0


class TestPathCommands:
    def test_polygon_commands(self):
        cmds = polygon_commands(SQUARE[:3])
        assert cmds == [MoveTo((0.0, 0.0)), LineTo((10.0, 0.0)), LineTo((10.0, 10.0)), ClosePath()]

    def test_quad_to_cubic(self):
        c = quad_to_cubic((0.0, 0.0), (3.0, 3.0), (6.0, 0.0))
        assert c.cp1 == pytest.approx((2.0, 2.0))
        assert c.cp2 == pytest.approx((4.0, 2.0))
        assert c.point == (6.0, 0.0)

    def test_svg_serialization(self):
        cmds = [MoveTo((0, 0)), LineTo((10.5, 0)), CubicTo((1, 2), (3.333, 4), (5, 6)), ClosePath()]
        assert to_svg_path(cmds) == "M 0,0 L 10.5,0 C 1,2 3.33,4 5,6 Z"

    def test_svg_empty(self):
        assert to_svg_path([]) == ""
