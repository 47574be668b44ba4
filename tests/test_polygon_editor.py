"""Tests for the polygon editor state machine.

Covers vertex, multi-vertex and edge drags, edge extrusion, vertex
insertion and deletion, and area preservation for organic shapes.
"""
from __future__ import annotations

import math

import pytest

from editor.polygon_editor import EditState, PolygonEditor, preserve_area
from editor.shape_ops import convert_shape
from geometry.shapes import polygon_area
from models import BoundaryKind, Space
from settings import SnapSettings
from store import SpaceStore

NO_SNAP = SnapSettings(enabled=False)


@pytest.fixture()
def store(square_polygon):
    return SpaceStore([square_polygon])


@pytest.fixture()
def editor(store):
    return PolygonEditor(store.update_space, snap_settings=NO_SNAP)


def _organic_from_rect(store):
    """100 x 100 rectangle converted to an 8-point bubble with target area 25."""
    rect = Space(id="bubble", category="Public", width=100.0, height=100.0, target_area=25.0)
    store.add(rect)
    store.update_space("bubble", convert_shape(rect, BoundaryKind.ORGANIC))
    return store.get("bubble")


# ─────────────────────────────────────────────────────────
# State transitions
# ─────────────────────────────────────────────────────────


class TestStates:
    def test_starts_idle(self, editor):
        assert editor.state == EditState.IDLE
        assert editor.drag_to(5, 5) is None

    def test_vertex_drag_cycle(self, editor, square_polygon):
        assert editor.begin_vertex_drag(square_polygon, 1)
        assert editor.state == EditState.VERTEX_DRAG
        assert editor.is_dragging
        editor.end_drag()
        assert editor.state == EditState.IDLE
        assert editor.active_vertex is None
        assert editor.active_edge is None

    def test_out_of_range_vertex(self, editor, square_polygon):
        assert not editor.begin_vertex_drag(square_polygon, 9)
        assert editor.state == EditState.IDLE

    def test_edge_states(self, editor, store, square_polygon):
        editor.begin_edge_drag(square_polygon, 0)
        assert editor.state == EditState.EDGE_DRAG
        editor.end_drag()
        editor.begin_edge_drag(store.get("poly"), 0, extrude=True)
        assert editor.state == EditState.EDGE_EXTRUDE


# ─────────────────────────────────────────────────────────
# Polygon edits
# ─────────────────────────────────────────────────────────


class TestPolygonDrag:
    def test_vertex_move_recomputes_area(self, editor, store, square_polygon):
        editor.begin_vertex_drag(square_polygon, 2)
        editor.drag_to(100, 0)
        s = store.get("poly")
        assert s.control_points[2] == (200.0, 100.0)
        assert s.target_area == pytest.approx(15000.0)

    def test_drag_delta_is_relative_to_gesture_start(self, editor, store, square_polygon):
        editor.begin_vertex_drag(square_polygon, 2)
        editor.drag_to(10, 0)
        editor.drag_to(20, 0)
        assert store.get("poly").control_points[2] == (120.0, 100.0)

    def test_grid_snapping(self, store, square_polygon):
        editor = PolygonEditor(store.update_space, snap_settings=SnapSettings(grid_size=10.0))
        editor.begin_vertex_drag(square_polygon, 2)
        editor.drag_to(13, 7)
        assert store.get("poly").control_points[2] == (110.0, 110.0)

    def test_multi_select_moves_all_selected(self, editor, store, square_polygon):
        editor.begin_vertex_drag(square_polygon, 1)
        editor.begin_vertex_drag(square_polygon, 2, additive=True)
        assert editor.selected_vertices == {1, 2}
        editor.drag_to(50, 0)
        s = store.get("poly")
        assert s.control_points[1] == (150.0, 0.0)
        assert s.control_points[2] == (150.0, 100.0)
        assert s.target_area == pytest.approx(15000.0)

    def test_edge_drag_moves_both_endpoints(self, editor, store, square_polygon):
        editor.begin_edge_drag(square_polygon, 1)
        editor.drag_to(50, 0)
        s = store.get("poly")
        assert s.control_points == [(0.0, 0.0), (150.0, 0.0), (150.0, 100.0), (0.0, 100.0)]
        assert s.target_area == pytest.approx(15000.0)

    def test_closing_edge_wraps(self, editor, store, square_polygon):
        editor.begin_edge_drag(square_polygon, 3)
        editor.drag_to(-20, 0)
        pts = store.get("poly").control_points
        assert pts[3] == (-20.0, 100.0)
        assert pts[0] == (-20.0, 0.0)

    def test_extrude_splices_and_drags_new_edge(self, editor, store, square_polygon):
        editor.begin_edge_drag(square_polygon, 1, extrude=True)
        assert len(store.get("poly").control_points) == 6
        assert polygon_area(store.get("poly").control_points) == pytest.approx(10000.0)
        editor.drag_to(50, 0)
        assert store.get("poly").control_points == [
            (0.0, 0.0), (100.0, 0.0), (150.0, 0.0), (150.0, 100.0), (100.0, 100.0), (0.0, 100.0),
        ]
        assert store.get("poly").target_area == pytest.approx(15000.0)

    def test_rectangle_promoted_to_polygon(self):
        store = SpaceStore([Space(id="r", width=100.0, height=100.0, target_area=10000.0)])
        editor = PolygonEditor(store.update_space, snap_settings=NO_SNAP)
        editor.begin_vertex_drag(store.get("r"), 2)
        editor.drag_to(0, 50)
        s = store.get("r")
        assert s.kind == BoundaryKind.POLYGON
        assert s.control_points[2] == (100.0, 150.0)
        assert s.target_area == pytest.approx(12500.0)


class TestInsertDelete:
    def test_insert_after_edge_start(self, editor, store, square_polygon):
        assert editor.insert_vertex(square_polygon, 0, (50.0, -20.0))
        pts = store.get("poly").control_points
        assert len(pts) == 5
        assert pts[1] == (50.0, -20.0)
        assert editor.selected_vertices == {1}

    def test_insert_snaps(self, store, square_polygon):
        editor = PolygonEditor(store.update_space, snap_settings=SnapSettings(grid_size=20.0))
        editor.insert_vertex(square_polygon, 0, (47.0, -18.0))
        assert store.get("poly").control_points[1] == (40.0, -20.0)

    def test_delete_selected(self, editor, store, square_polygon):
        editor.insert_vertex(square_polygon, 0, (50.0, -20.0))
        assert editor.delete_selected(store.get("poly"))
        assert store.get("poly").control_points == square_polygon.control_points
        assert editor.selected_vertices == set()

    def test_delete_below_three_rejected(self, editor, store, square_polygon):
        editor.begin_vertex_drag(square_polygon, 0)
        editor.begin_vertex_drag(square_polygon, 1, additive=True)
        editor.end_drag()
        before = store.get("poly")
        assert not editor.delete_selected(before)
        assert store.get("poly") is before

    def test_delete_with_empty_selection(self, editor, square_polygon):
        assert not editor.delete_selected(square_polygon)

    def test_insert_stores_new_area(self, editor, store, square_polygon):
        editor.insert_vertex(square_polygon, 0, (50.0, -20.0))
        s = store.get("poly")
        assert s.target_area == pytest.approx(polygon_area(s.control_points))
        assert s.target_area == pytest.approx(11000.0)

    def test_insert_keeps_organic_target(self, editor, store):
        bubble = _organic_from_rect(store)
        before = bubble.target_area
        assert editor.insert_vertex(bubble, 0, (60.0, -30.0))
        s = store.get("bubble")
        assert len(s.control_points) == len(bubble.control_points) + 1
        assert s.target_area == before

    def test_delete_ignores_selection_from_other_space(self, editor, store, square_polygon):
        other = Space(id="other", category="Private", kind=BoundaryKind.POLYGON,
                      control_points=list(square_polygon.control_points), target_area=10000.0)
        store.add(other)
        editor.begin_vertex_drag(square_polygon, 2)
        editor.end_drag()
        before = store.get("other")
        assert not editor.delete_selected(before)
        assert store.get("other") is before
        assert len(before.control_points) == 4
        assert editor.selected_vertices == set()


# ─────────────────────────────────────────────────────────
# Organic area preservation
# ─────────────────────────────────────────────────────────


class TestAreaPreservation:
    def test_scenario_circle_dragged_outward(self, store, editor):
        bubble = _organic_from_rect(store)
        assert len(bubble.control_points) == 8
        start = bubble.control_points[0]

        editor.begin_vertex_drag(bubble, 0)
        editor.drag_to(50, 50)
        editor.end_drag()

        ring = store.get("bubble").control_points
        assert polygon_area(ring) == pytest.approx(25.0, abs=1e-6)
        assert ring[0] == pytest.approx((start[0] + 50, start[1] + 50))

    def test_no_drift_over_repeated_drags(self, store, editor):
        _organic_from_rect(store)
        for i in range(12):
            bubble = store.get("bubble")
            editor.begin_vertex_drag(bubble, i % 8)
            editor.drag_to(7.5 * (1 if i % 2 else -1), 3.0)
            editor.end_drag()
            assert polygon_area(store.get("bubble").control_points) == pytest.approx(25.0, abs=1e-6)
        assert store.get("bubble").target_area == 25.0

    def test_dragged_vertex_lands_on_snapped_target(self, store):
        bubble = _organic_from_rect(store)
        editor = PolygonEditor(store.update_space, snap_settings=SnapSettings(grid_size=5.0))
        editor.begin_vertex_drag(bubble, 3)
        editor.drag_to(12, 12)
        x, y = bubble.control_points[3]
        ring = store.get("bubble").control_points
        assert ring[3] == pytest.approx((round((x + 12) / 5) * 5, round((y + 12) / 5) * 5))
        assert polygon_area(ring) == pytest.approx(25.0, abs=1e-6)

    def test_degenerate_ring_skips_correction(self):
        ring = [(0.0, 0.0), (10.0, 0.0), (20.0, 0.0)]
        out = preserve_area(ring, 1, (15.0, 0.0), 25.0)
        assert out == [(0.0, 0.0), (15.0, 0.0), (20.0, 0.0)]
        assert all(math.isfinite(c) for p in out for c in p)

    def test_preserve_area_scales_about_centroid(self):
        ring = [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)]
        out = preserve_area(ring, 2, (20.0, 20.0), 100.0)
        assert out[2] == pytest.approx((20.0, 20.0))
        assert polygon_area(out) == pytest.approx(100.0)
