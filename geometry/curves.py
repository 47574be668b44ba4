"""
geometry/curves.py

Organic ("bubble") outlines: every control point is a Catmull-Rom knot and
each edge P1 -> P2 becomes one cubic Bezier segment with

    CP1 = P1 + (P2 - P0) / 6
    CP2 = P2 - (P3 - P1) / 6

where P0 and P3 are the neighbours of the edge (indices wrap).
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from geometry.paths import ClosePath, CommandSequence, CubicTo, LineTo, MoveTo
from geometry.shapes import polygon_area
from models import Point, Ring

DEFAULT_SAMPLES = 5
AREA_SAMPLES = 20


def bezier_segments(ring: Sequence[Point]) -> List[Tuple[Point, Point, Point, Point]]:
    """Return ``(start, cp1, cp2, end)`` for every edge of a closed ring."""
    n = len(ring)
    if n < 3:
        return []
    segments = []
    for i in range(n):
        p0 = ring[(i - 1) % n]
        p1 = ring[i]
        p2 = ring[(i + 1) % n]
        p3 = ring[(i + 2) % n]
        cp1 = (p1[0] + (p2[0] - p0[0]) / 6.0, p1[1] + (p2[1] - p0[1]) / 6.0)
        cp2 = (p2[0] - (p3[0] - p1[0]) / 6.0, p2[1] - (p3[1] - p1[1]) / 6.0)
        segments.append((tuple(p1), cp1, cp2, tuple(p2)))
    return segments


def bubble_path_commands(ring: Sequence[Point]) -> CommandSequence:
    """Smooth closed path through every control point; empty for < 3 points."""
    segments = bezier_segments(ring)
    if not segments:
        return []
    cmds: CommandSequence = [MoveTo(tuple(ring[0]))]
    cmds.extend(CubicTo(cp1, cp2, end) for _, cp1, cp2, end in segments)
    cmds.append(ClosePath())
    return cmds


def sample_curve(ring: Sequence[Point], samples_per_segment: int = DEFAULT_SAMPLES) -> Ring:
    """Flatten the bubble curve into ``samples_per_segment`` points per edge.

    Each segment contributes t = 0, 1/k, ..., (k-1)/k so the closing point of
    one segment is not duplicated by the start of the next.  Rings with fewer
    than 3 points are returned unchanged.
    """
    segments = bezier_segments(ring)
    if not segments:
        return list(ring)
    k = max(1, int(samples_per_segment))
    t = np.arange(k, dtype=float) / k
    it = 1.0 - t
    # Bernstein weights, shape (k, 4)
    weights = np.stack([it ** 3, 3 * it ** 2 * t, 3 * it * t ** 2, t ** 3], axis=1)
    ctrl = np.asarray(segments, dtype=float)          # (n, 4, 2)
    pts = np.einsum("kc,ncd->nkd", weights, ctrl)     # (n, k, 2)
    return [(float(x), float(y)) for x, y in pts.reshape(-1, 2)]


def sampled_path_commands(ring: Sequence[Point], samples_per_segment: int) -> CommandSequence:
    """Polyline approximation of the bubble curve as Move/Line/Close commands."""
    pts = sample_curve(ring, samples_per_segment)
    if len(pts) < 3:
        return []
    cmds: CommandSequence = [MoveTo(pts[0])]
    cmds.extend(LineTo(p) for p in pts[1:])
    cmds.append(ClosePath())
    return cmds


def curved_area(ring: Sequence[Point], steps: int = AREA_SAMPLES) -> float:
    """Area enclosed by the bubble curve, approximated with ``steps`` samples per edge."""
    if len(ring) < 3:
        return 0.0
    return polygon_area(sample_curve(ring, steps))
