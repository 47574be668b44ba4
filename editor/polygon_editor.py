"""
editor/polygon_editor.py

Interactive vertex / edge editing of one space boundary.

The editor is a small state machine driven by the input layer:

    IDLE -> VERTEX_DRAG | EDGE_DRAG | EDGE_EXTRUDE -> IDLE

Drags are expressed as the total delta since the gesture started, applied
to the ring captured when the gesture began.  Every resulting change is
written through the ``update_space(space_id, changes)`` callable given at
construction; the editor never mutates a ``Space``.
"""

from __future__ import annotations

import math
from typing import Any, Callable, Dict, List, Optional, Set, Tuple

from debug_trace import trace
from editor.snapping import snap_point
from geometry.shapes import boundary_points, centroid, polygon_area, scale_ring, translate_ring
from models import BoundaryKind, Point, Ring, Space
from settings import ShapeSettings, SnapSettings

UpdateSpace = Callable[[str, Dict[str, Any]], None]

MIN_VERTICES = 3


class EditState:
    """Editor state constants."""
    IDLE = "idle"
    VERTEX_DRAG = "vertex_drag"
    EDGE_DRAG = "edge_drag"
    EDGE_EXTRUDE = "edge_extrude"


def preserve_area(ring: Ring, index: int, target: Point, target_area: float,
                  epsilon: float = 1e-6) -> Ring:
    """Move ``ring[index]`` to ``target`` and rescale the ring to ``target_area``.

    The ring is scaled about its vertex centroid by sqrt(target / current)
    and then translated so the moved vertex sits exactly on ``target``.
    When the moved ring's area is below ``epsilon`` the correction is
    skipped and only the raw move is returned.
    """
    moved = list(ring)
    moved[index] = target
    current = polygon_area(moved)
    if current < epsilon or target_area <= 0:
        return moved
    scaled = scale_ring(moved, centroid(moved), math.sqrt(target_area / current))
    sx, sy = scaled[index]
    return translate_ring(scaled, target[0] - sx, target[1] - sy)


class PolygonEditor:
    """Edits the ring of a single active space.

    Args:
        update_space: Write contract, usually ``SpaceStore.update_space``.
        shape_settings: Supplies ``area_epsilon``.
        snap_settings: Supplies the grid unit for committed positions.
    """

    def __init__(self, update_space: UpdateSpace,
                 shape_settings: Optional[ShapeSettings] = None,
                 snap_settings: Optional[SnapSettings] = None):
        self._update_space = update_space
        self.shapes = shape_settings or ShapeSettings()
        self.snap = snap_settings or SnapSettings()

        self.state = EditState.IDLE
        self.space_id: Optional[str] = None
        self.active_vertex: Optional[int] = None
        self.active_edge: Optional[int] = None
        self.selected_vertices: Set[int] = set()

        # Ring at gesture start, kept as an immutable value
        self._snapshot: Tuple[Point, ...] = ()
        self._kind = BoundaryKind.RECTANGLE
        self._target_area = 0.0

    # ---- Selection ----

    def select_vertex(self, index: int, additive: bool = False) -> None:
        if not additive:
            self.selected_vertices = {index}
        elif index in self.selected_vertices:
            self.selected_vertices.discard(index)
        else:
            self.selected_vertices.add(index)

    def clear_selection(self) -> None:
        self.selected_vertices = set()

    @property
    def is_dragging(self) -> bool:
        return self.state != EditState.IDLE

    # ---- Gesture start ----

    def _capture(self, space: Space, ring: Ring) -> None:
        if self.space_id != space.id:
            self.selected_vertices = set()
        self.space_id = space.id
        self._snapshot = tuple(ring)
        self._kind = space.kind
        self._target_area = space.target_area

    def begin_vertex_drag(self, space: Space, index: int, additive: bool = False) -> bool:
        """Start dragging vertex ``index``.

        A vertex outside the current selection replaces it unless
        ``additive`` is set, in which case it is toggled into the selection.

        Returns:
            False when ``index`` is not a vertex of the ring.
        """
        ring = boundary_points(space)
        if not 0 <= index < len(ring):
            return False
        self._capture(space, ring)
        if additive:
            self.select_vertex(index, additive=True)
        elif index not in self.selected_vertices:
            self.select_vertex(index)
        self.active_vertex = index
        self.active_edge = None
        self.state = EditState.VERTEX_DRAG
        trace(f"{space.id}: vertex drag {index}, selection {sorted(self.selected_vertices)}", "EDIT")
        return True

    def begin_edge_drag(self, space: Space, edge_index: int, extrude: bool = False) -> bool:
        """Start dragging edge ``edge_index`` (vertex i to vertex i + 1).

        With ``extrude`` the edge endpoints are first duplicated right after
        the edge start, and the new middle edge is the one being dragged, so
        the drag pulls a rectangular tab out of the boundary.

        Returns:
            False when ``edge_index`` is not an edge of the ring.
        """
        ring = boundary_points(space)
        n = len(ring)
        if n < 2 or not 0 <= edge_index < n:
            return False
        self._capture(space, ring)
        self.active_vertex = None
        self.clear_selection()

        if extrude:
            p1 = ring[edge_index]
            p2 = ring[(edge_index + 1) % n]
            ring = ring[:edge_index + 1] + [p1, p2] + ring[edge_index + 1:]
            self._snapshot = tuple(ring)
            self.active_edge = edge_index + 1
            self.state = EditState.EDGE_EXTRUDE
            self._commit({"control_points": ring})
            trace(f"{space.id}: extruded edge {edge_index}, ring now {len(ring)} points", "EDIT")
        else:
            self.active_edge = edge_index
            self.state = EditState.EDGE_DRAG
            trace(f"{space.id}: edge drag {edge_index}", "EDIT")
        return True

    # ---- Gesture progress ----

    def _snapped(self, point: Point) -> Point:
        return snap_point(point, self.snap.grid_unit)

    def drag_to(self, dx: float, dy: float) -> Optional[Dict[str, Any]]:
        """Apply the total pointer delta (model units) since the gesture began.

        Returns:
            The changes written, or None when idle.
        """
        if self.state == EditState.IDLE or not self._snapshot:
            return None
        if self.state == EditState.VERTEX_DRAG:
            changes = self._vertex_changes(dx, dy)
        else:
            changes = self._edge_changes(dx, dy)
        self._commit(changes)
        return changes

    def _vertex_changes(self, dx: float, dy: float) -> Dict[str, Any]:
        ring = list(self._snapshot)
        index = self.active_vertex
        if len(self.selected_vertices) > 1 and index in self.selected_vertices:
            for i in self.selected_vertices:
                if 0 <= i < len(ring):
                    x, y = self._snapshot[i]
                    ring[i] = self._snapped((x + dx, y + dy))
            return self._with_area(ring)

        x, y = self._snapshot[index]
        target = self._snapped((x + dx, y + dy))
        if self._kind == BoundaryKind.ORGANIC:
            goal = self._target_area if self._target_area > 0 else polygon_area(self._snapshot)
            ring = preserve_area(ring, index, target, goal, self.shapes.area_epsilon)
            return {"control_points": ring}
        ring[index] = target
        return self._with_area(ring)

    def _edge_changes(self, dx: float, dy: float) -> Dict[str, Any]:
        ring = list(self._snapshot)
        i = self.active_edge
        j = (i + 1) % len(ring)
        for k in (i, j):
            x, y = self._snapshot[k]
            ring[k] = self._snapped((x + dx, y + dy))
        return self._with_area(ring)

    @staticmethod
    def _with_area(ring: Ring) -> Dict[str, Any]:
        changes: Dict[str, Any] = {"control_points": ring}
        area = polygon_area(ring)
        if area > 0:
            changes["target_area"] = area
        return changes

    def _commit(self, changes: Dict[str, Any]) -> None:
        if self._kind == BoundaryKind.RECTANGLE:
            changes["kind"] = BoundaryKind.POLYGON
            self._kind = BoundaryKind.POLYGON
        self._update_space(self.space_id, changes)

    def end_drag(self) -> None:
        """Return to IDLE.  Selection survives for later deletes."""
        if self.state != EditState.IDLE:
            trace(f"{self.space_id}: {self.state} finished", "EDIT")
        self.state = EditState.IDLE
        self.active_vertex = None
        self.active_edge = None
        self._snapshot = ()

    # ---- One-shot edits ----

    def insert_vertex(self, space: Space, edge_index: int, point: Point) -> bool:
        """Insert ``point`` (local coordinates, snapped) after vertex ``edge_index``.

        The new vertex becomes the only selected vertex.
        """
        ring = boundary_points(space)
        if not 0 <= edge_index < len(ring):
            return False
        self._capture(space, ring)
        ring.insert(edge_index + 1, self._snapped(point))
        if self._kind == BoundaryKind.ORGANIC:
            self._commit({"control_points": ring})
        else:
            self._commit(self._with_area(ring))
        self.select_vertex(edge_index + 1)
        self._snapshot = ()
        trace(f"{space.id}: inserted vertex at {edge_index + 1}", "EDIT")
        return True

    def delete_selected(self, space: Space) -> bool:
        """Delete the selected vertices.

        Returns:
            False (and leaves the space untouched) when nothing is selected,
            the selection belongs to another space, or fewer than 3 vertices
            would remain.
        """
        if space.id != self.space_id:
            self.clear_selection()
            return False
        ring = boundary_points(space)
        doomed = {i for i in self.selected_vertices if 0 <= i < len(ring)}
        if not doomed:
            return False
        remaining: List[Point] = [p for i, p in enumerate(ring) if i not in doomed]
        if len(remaining) < MIN_VERTICES:
            trace(f"{space.id}: delete rejected, {len(remaining)} vertices would remain", "EDIT")
            return False
        self._kind = space.kind
        self._target_area = space.target_area
        if space.kind == BoundaryKind.ORGANIC:
            self._commit({"control_points": remaining})
        else:
            self._commit(self._with_area(remaining))
        self.clear_selection()
        self.active_vertex = None
        trace(f"{space.id}: deleted {len(doomed)} vertices", "EDIT")
        return True
