"""
editor/snapping.py

Grid snapping for edited vertices and edge-alignment snapping for whole
spaces being dragged.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from geometry.shapes import local_bounds, world_bounds
from models import Point, Space
from settings import SnapSettings


def snap_value(value: float, grid: float) -> float:
    """Round to the nearest multiple of ``grid``; a non-positive grid is identity."""
    if grid <= 0:
        return value
    return round(value / grid) * grid


def snap_point(point: Point, grid: float) -> Point:
    return (snap_value(point[0], grid), snap_value(point[1], grid))


@dataclass(frozen=True)
class SnapResult:
    """Snapped origin plus the guide lines a renderer may draw."""
    origin: Point
    guide_x: Optional[float] = None
    guide_y: Optional[float] = None

    @property
    def snapped(self) -> bool:
        return self.guide_x is not None or self.guide_y is not None


def snapped_position(space: Space, proposed: Point, others: Iterable[Space],
                     settings: SnapSettings) -> SnapResult:
    """Align a dragged space's bounding box to the edges of other spaces.

    Left/right edges snap to another space's left/right edges, top/bottom
    edges to its top/bottom edges, whenever the gap is within
    ``settings.tolerance``.  The first matching candidate per axis wins.

    Args:
        space: The space being dragged.
        proposed: Origin the pointer would put the space at.
        others: Candidate neighbours; unplaced spaces, other floors and
            ``space`` itself are skipped.
        settings: Snapping settings.

    Returns:
        A ``SnapResult``; the proposed origin unchanged when nothing snaps.
    """
    if not settings.enabled or not settings.to_objects:
        return SnapResult(proposed)

    local = local_bounds(space)
    box = local.translated(proposed[0], proposed[1])
    threshold = settings.tolerance
    dx = dy = None
    guide_x = guide_y = None

    for other in others:
        if other.id == space.id or not other.is_placed or other.floor != space.floor:
            continue
        ob = world_bounds(other)
        if dx is None:
            for target, edge in ((ob.x, box.x), (ob.right, box.x),
                                 (ob.x, box.right), (ob.right, box.right)):
                if abs(edge - target) < threshold:
                    dx = target - edge
                    guide_x = target
                    break
        if dy is None:
            for target, edge in ((ob.y, box.y), (ob.bottom, box.y),
                                 (ob.y, box.bottom), (ob.bottom, box.bottom)):
                if abs(edge - target) < threshold:
                    dy = target - edge
                    guide_y = target
                    break
        if dx is not None and dy is not None:
            break

    return SnapResult(
        (proposed[0] + (dx or 0.0), proposed[1] + (dy or 0.0)),
        guide_x,
        guide_y,
    )
