"""
geometry/shapes.py

Shape model measurements: implicit rings, shoelace area, vertex centroid,
bounding boxes and the local -> world transform.

All functions are pure and total over degenerate input.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Sequence

from models import BoundaryKind, BoundingBox, Point, Ring, Space


def rectangle_ring(width: float, height: float) -> Ring:
    """Corners of an extent, clockwise in screen coordinates from (0, 0)."""
    return [(0.0, 0.0), (width, 0.0), (width, height), (0.0, height)]


def boundary_points(space: Space) -> Ring:
    """Return the space's ring in local coordinates.

    Polygon and Organic spaces return a copy of ``control_points``;
    Rectangles return the four implicit corners of their extent.
    """
    if space.kind != BoundaryKind.RECTANGLE and space.control_points:
        return list(space.control_points)
    return rectangle_ring(space.width, space.height)


def polygon_area(ring: Sequence[Point]) -> float:
    """Shoelace area (absolute, halved).  Rings with < 3 points have zero area."""
    n = len(ring)
    if n < 3:
        return 0.0
    acc = 0.0
    for i in range(n):
        x1, y1 = ring[i]
        x2, y2 = ring[(i + 1) % n]
        acc += x1 * y2 - x2 * y1
    return abs(acc) / 2.0


def centroid(ring: Sequence[Point]) -> Point:
    """Arithmetic mean of the vertices.

    Not the area centroid of a non-convex ring; it is only used as a
    scaling anchor.
    """
    if not ring:
        return (0.0, 0.0)
    n = len(ring)
    return (sum(p[0] for p in ring) / n, sum(p[1] for p in ring) / n)


def scale_ring(ring: Iterable[Point], anchor: Point, factor: float) -> Ring:
    ax, ay = anchor
    return [(ax + (x - ax) * factor, ay + (y - ay) * factor) for x, y in ring]


def translate_ring(ring: Iterable[Point], dx: float, dy: float) -> Ring:
    return [(x + dx, y + dy) for x, y in ring]


def ring_bounds(ring: Sequence[Point]) -> BoundingBox:
    """Axis-aligned bounds of a ring; an empty ring yields a zero box at the origin."""
    if not ring:
        return BoundingBox(0.0, 0.0, 0.0, 0.0)
    xs = [p[0] for p in ring]
    ys = [p[1] for p in ring]
    return BoundingBox(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))


def local_bounds(space: Space) -> BoundingBox:
    """Bounds of the space's ring in local coordinates."""
    return ring_bounds(boundary_points(space))


def rotate_ring(ring: Iterable[Point], pivot: Point, degrees: float) -> Ring:
    if not degrees:
        return list(ring)
    rad = math.radians(degrees)
    cos_a = math.cos(rad)
    sin_a = math.sin(rad)
    px, py = pivot
    out = []
    for x, y in ring:
        dx = x - px
        dy = y - py
        out.append((px + dx * cos_a - dy * sin_a, py + dx * sin_a + dy * cos_a))
    return out


def to_world(space: Space, ring: Sequence[Point]) -> Ring:
    """Map a local ring to world coordinates.

    Rotation is applied about the center of the space's local bounding box,
    then the ring is translated by ``origin``.
    """
    pivot = local_bounds(space).center
    ox, oy = space.origin
    return translate_ring(rotate_ring(ring, pivot, space.rotation), ox, oy)


def world_points(space: Space) -> Ring:
    return to_world(space, boundary_points(space))


def world_bounds(space: Space) -> BoundingBox:
    """Axis-aligned bounds of the rotated, translated ring."""
    return ring_bounds(world_points(space))


def distinct_points(points: Iterable[Point], tol: float = 1e-9) -> List[Point]:
    """Drop exact (within ``tol``) duplicates, keeping first occurrence order."""
    seen = set()
    out = []
    scale = 1.0 / tol if tol > 0 else 1.0
    for x, y in points:
        key = (round(x * scale), round(y * scale))
        if key in seen:
            continue
        seen.add(key)
        out.append((x, y))
    return out
