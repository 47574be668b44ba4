"""
geometry/hull.py

Convex hull (Andrew's monotone chain) and the padded point cloud used for
zone outlines.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

from geometry.shapes import distinct_points
from models import Point, Ring


def _cross(o: Point, a: Point, b: Point) -> float:
    return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])


def convex_hull(points: Iterable[Point]) -> Ring:
    """Return the convex hull as a counter-clockwise ring (y-up convention).

    Collinear boundary points are dropped so only hull-extreme vertices
    remain.  Fewer than 3 distinct points, or an all-collinear set, yields
    an empty ring.
    """
    pts = sorted(distinct_points(points))
    if len(pts) < 3:
        return []

    lower: List[Point] = []
    for p in pts:
        while len(lower) >= 2 and _cross(lower[-2], lower[-1], p) <= 0:
            lower.pop()
        lower.append(p)

    upper: List[Point] = []
    for p in reversed(pts):
        while len(upper) >= 2 and _cross(upper[-2], upper[-1], p) <= 0:
            upper.pop()
        upper.append(p)

    hull = lower[:-1] + upper[:-1]
    if len(hull) < 3:
        return []
    return hull


def padded_points(points: Sequence[Point], padding: float) -> Ring:
    """Expand each point into the 4 corners of a ``2 * padding`` square around it."""
    out: Ring = []
    for x, y in points:
        out.append((x - padding, y - padding))
        out.append((x + padding, y - padding))
        out.append((x + padding, y + padding))
        out.append((x - padding, y + padding))
    return out
