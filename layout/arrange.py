"""
layout/arrange.py

Auto-arrange: deterministic spiral packing of the placed spaces of one floor.

Spaces are placed one by one, sorted by category and then by descending
target area, so the large spaces of a category anchor first and the small
ones fill in around them.  Each space scans an Archimedean spiral
(radius = factor * angle) out from the world origin and takes the first
center whose margin-expanded bounding box is clear of everything already
placed.
"""

from __future__ import annotations

import math
from typing import List, Optional, Sequence

from debug_trace import trace, trace_call
from geometry.shapes import world_bounds
from models import BoundingBox, PlacementConstraint, Point, Space
from settings import ArrangeSettings


def spiral_candidates(settings: ArrangeSettings):
    """Yield spiral points (cos a * r, sin a * r) for the configured budget."""
    angle = 0.0
    radius = 0.0
    for _ in range(settings.max_iterations):
        yield (math.cos(angle) * radius, math.sin(angle) * radius)
        angle += settings.angle_step
        radius = settings.radius_factor * angle


def find_slot(width: float, height: float, placed: List[BoundingBox], margin: float,
              settings: ArrangeSettings) -> BoundingBox:
    """First collision-free box centred on the spiral.

    When the iteration budget runs out the last candidate examined is
    returned, overlapping or not.
    """
    candidate = BoundingBox(-width / 2, -height / 2, width, height)
    for cx, cy in spiral_candidates(settings):
        candidate = BoundingBox(cx - width / 2, cy - height / 2, width, height)
        if not PlacementConstraint(candidate, margin).collides(placed):
            return candidate
    trace(f"no free slot for {width:.0f}x{height:.0f} after "
          f"{settings.max_iterations} candidates, keeping last", "ARRANGE")
    return candidate


@trace_call("ARRANGE")
def arrange(spaces: Sequence[Space], margin: Optional[float] = None,
            floor: Optional[int] = None,
            settings: Optional[ArrangeSettings] = None) -> List[Space]:
    """Reposition the placed spaces of ``floor`` without overlaps.

    Only ``origin`` changes; rings and extents are untouched, so a
    polygon's shape is carried along by the same offset as its bounding
    box.

    Args:
        spaces: All spaces; unplaced ones and other floors pass through.
        margin: Minimum gap between bounding boxes; defaults to settings.
        floor: Floor to arrange, or every placed space when None.
        settings: Spiral parameters.

    Returns:
        A new list in input order.  Spaces that did not move keep their
        identity.
    """
    cfg = settings or ArrangeSettings()
    gap = cfg.margin if margin is None else margin

    movable = [s for s in spaces if s.is_placed and (floor is None or s.floor == floor)]
    if not movable:
        return list(spaces)

    order = sorted(movable, key=lambda s: (s.category, -s.target_area))
    placed: List[BoundingBox] = []
    new_origins = {}
    for space in order:
        bounds = world_bounds(space)
        # Offset of the bounding box from the origin, so the shape keeps its
        # position relative to its own box.
        offset: Point = (bounds.x - space.origin[0], bounds.y - space.origin[1])
        slot = find_slot(bounds.w, bounds.h, placed, gap, cfg)
        placed.append(slot)
        new_origins[space.id] = (slot.x - offset[0], slot.y - offset[1])

    out = []
    for space in spaces:
        origin = new_origins.get(space.id)
        if origin is None or origin == space.origin:
            out.append(space)
        else:
            out.append(space.with_changes(origin=origin))
    trace(f"arranged {len(order)} spaces with margin {gap}", "ARRANGE")
    return out
