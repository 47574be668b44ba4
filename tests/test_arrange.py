"""Tests for the spiral auto-arrange placer."""
from __future__ import annotations

import itertools
import math

import pytest

from geometry.shapes import world_bounds
from layout.arrange import arrange, find_slot, spiral_candidates
from models import BoundaryKind, BoundingBox, Space
from settings import ArrangeSettings


def _squares(areas, category="Public", **kw):
    return [Space.square(f"s{i}", category, a, **kw) for i, a in enumerate(areas)]


def _dist_from_origin(space):
    cx, cy = world_bounds(space).center
    return math.hypot(cx, cy)


class TestSpiral:
    def test_starts_at_origin(self):
        first, second = itertools.islice(spiral_candidates(ArrangeSettings()), 2)
        assert first == (0.0, 0.0)
        assert second == pytest.approx((math.cos(0.5) * 2.5, math.sin(0.5) * 2.5))

    def test_budget(self):
        assert len(list(spiral_candidates(ArrangeSettings(max_iterations=7)))) == 7

    def test_first_slot_centred_on_origin(self):
        assert find_slot(10, 20, [], 0, ArrangeSettings()) == BoundingBox(-5, -10, 10, 20)


class TestArrange:
    def test_scenario_five_decreasing_spaces(self):
        spaces = _squares([2500.0, 1600.0, 900.0, 400.0, 100.0])
        out = arrange(spaces, margin=20)

        assert _dist_from_origin(out[0]) == pytest.approx(0.0)
        assert _dist_from_origin(out[0]) == min(_dist_from_origin(s) for s in out)
        for a, b in itertools.combinations(out, 2):
            assert not world_bounds(a).overlaps(world_bounds(b), spacing=20)

    def test_input_order_kept(self):
        spaces = _squares([100.0, 2500.0, 400.0])
        out = arrange(spaces, margin=20)
        assert [s.id for s in out] == ["s0", "s1", "s2"]
        # Largest anchors first regardless of input position
        assert _dist_from_origin(out[1]) == pytest.approx(0.0)

    def test_categories_sorted_before_area(self):
        spaces = [
            Space.square("big", "Service", 2500.0),
            Space.square("small", "Admin", 100.0),
        ]
        out = arrange(spaces, margin=10)
        assert _dist_from_origin(out[1]) == pytest.approx(0.0)

    def test_unplaced_and_other_floors_untouched(self):
        spaces = _squares([400.0, 400.0]) + [
            Space.square("u", "Public", 400.0, origin=(999.0, 999.0), is_placed=False),
            Space.square("f", "Public", 400.0, origin=(500.0, 500.0), floor=3),
        ]
        out = arrange(spaces, margin=20, floor=0)
        assert out[2] is spaces[2]
        assert out[3] is spaces[3]

    def test_polygon_ring_carried_unchanged(self):
        ring = [(40.0, 40.0), (80.0, 40.0), (60.0, 90.0)]
        s = Space(id="p", kind=BoundaryKind.POLYGON, control_points=ring,
                  origin=(300.0, 300.0), target_area=1000.0)
        out = arrange([s], margin=0)[0]
        assert out.control_points == ring
        assert world_bounds(out).center == pytest.approx((0.0, 0.0))

    def test_budget_exhausted_keeps_last_candidate(self):
        spaces = _squares([400.0, 400.0])
        out = arrange(spaces, margin=20, settings=ArrangeSettings(max_iterations=1))
        # Only the origin is ever tried, so both end up there
        assert _dist_from_origin(out[0]) == pytest.approx(0.0)
        assert _dist_from_origin(out[1]) == pytest.approx(0.0)

    def test_empty(self):
        assert arrange([]) == []

    def test_settings_margin_default(self):
        spaces = _squares([400.0, 400.0])
        out = arrange(spaces, settings=ArrangeSettings(margin=50.0))
        assert not world_bounds(out[0]).overlaps(world_bounds(out[1]), spacing=50.0)
