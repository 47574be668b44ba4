"""
geometry/rounding.py

Rounded outlines: every polygon corner is replaced by a curve from a point
inset along the incoming edge to a point inset along the outgoing edge,
with the original vertex as the (quadratic) control point.

The inset is clamped per corner to half of each adjacent edge, so short
edges get proportionally smaller rounding and neighbouring corners never
cross.
"""

from __future__ import annotations

import math
from typing import List, Sequence, Tuple

from geometry.paths import ClosePath, CommandSequence, LineTo, MoveTo, polygon_commands, quad_to_cubic
from models import Point


def _toward(a: Point, b: Point, dist: float) -> Point:
    """Point ``dist`` along the segment a -> b (``a`` for a zero-length segment)."""
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    length = math.hypot(dx, dy)
    if length == 0.0:
        return a
    return (a[0] + dx / length * dist, a[1] + dy / length * dist)


def corner_insets(ring: Sequence[Point], radius: float) -> List[Tuple[Point, Point, Point]]:
    """Return ``(inset_in, vertex, inset_out)`` for every vertex of the ring."""
    n = len(ring)
    r = max(0.0, radius)
    corners = []
    for i in range(n):
        prev = tuple(ring[(i - 1) % n])
        cur = tuple(ring[i])
        nxt = tuple(ring[(i + 1) % n])
        len_in = math.dist(prev, cur)
        len_out = math.dist(cur, nxt)
        inset_in = _toward(cur, prev, min(r, len_in / 2.0))
        inset_out = _toward(cur, nxt, min(r, len_out / 2.0))
        corners.append((inset_in, cur, inset_out))
    return corners


def rounded_path_commands(ring: Sequence[Point], radius: float) -> CommandSequence:
    """Closed path with uniformly rounded corners.

    Args:
        ring: Polygon vertices (any winding).
        radius: Requested corner radius; clamped per corner.

    Returns:
        Move/Line/Cubic/Close commands; empty for fewer than 3 points.
        A non-positive radius yields the plain polygon.
    """
    if len(ring) < 3:
        return []
    if radius <= 0:
        return polygon_commands(ring)

    corners = corner_insets(ring, radius)
    cmds: CommandSequence = [MoveTo(corners[0][0])]
    for i, (inset_in, vertex, inset_out) in enumerate(corners):
        if i > 0:
            cmds.append(LineTo(inset_in))
        cmds.append(quad_to_cubic(inset_in, vertex, inset_out))
    cmds.append(LineTo(corners[0][0]))
    cmds.append(ClosePath())
    return cmds
