"""
editor/shape_ops.py

One-shot shape operations driven by handles and panel actions:
area-preserving rectangle resize, rotation and boundary-kind conversion.

Each function returns a change dict for ``SpaceStore.update_space``; none of
them touch shared state.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Optional

from debug_trace import trace
from geometry.curves import curved_area
from geometry.shapes import centroid, polygon_area, rectangle_ring, scale_ring
from models import BoundaryKind, Point, Ring, Space
from settings import ShapeSettings


def resize_rectangle(space: Space, handle: str, dx: float, dy: float,
                     settings: Optional[ShapeSettings] = None,
                     start: Optional[Space] = None) -> Dict[str, Any]:
    """Resize a rectangle from a corner handle while keeping its area.

    The pointer delta only decides the new aspect ratio; width * height of
    the starting extent is preserved.

    Args:
        space: The space being resized (used when ``start`` is None).
        handle: Two-letter corner handle such as ``"se"`` or ``"nw"``.
        dx: Pointer delta in model units since the gesture started.
        dy: Pointer delta in model units since the gesture started.
        settings: Supplies ``min_size``.
        start: Snapshot of the space when the gesture started.

    Returns:
        Changes for ``width``, ``height`` and ``origin``.
    """
    cfg = settings or ShapeSettings()
    s = start or space
    min_size = cfg.min_size
    area = s.width * s.height

    if "e" in handle:
        target_w = max(min_size, s.width + dx)
    else:
        target_w = max(min_size, s.width - dx)
    if "s" in handle:
        target_h = max(min_size, s.height + dy)
    else:
        target_h = max(min_size, s.height - dy)

    if area <= 0:
        new_w, new_h = target_w, target_h
    else:
        ratio = target_w / target_h
        new_w = max(min_size, math.sqrt(area * ratio))
        new_h = area / new_w
        if new_h < min_size:
            new_h = min_size
            new_w = max(min_size, area / new_h)

    x, y = s.origin
    if "w" in handle:
        x = x + (s.width - new_w)
    if "n" in handle:
        y = y + (s.height - new_h)
    return {"width": new_w, "height": new_h, "origin": (x, y)}


def rotation_towards(center: Point, pointer: Point, snap_degrees: float = 0.0) -> float:
    """Rotation (degrees) that points the shape's top toward ``pointer``."""
    angle = math.degrees(math.atan2(pointer[1] - center[1], pointer[0] - center[0])) + 90.0
    if snap_degrees > 0:
        angle = round(angle / snap_degrees) * snap_degrees
    return angle


def circular_ring(width: float, height: float, count: int = 8) -> Ring:
    """``count`` points on the circle inscribed in a width x height extent."""
    cx = width / 2.0
    cy = height / 2.0
    r = min(width, height) / 2.0
    return [
        (cx + r * math.cos(2.0 * math.pi * i / count), cy + r * math.sin(2.0 * math.pi * i / count))
        for i in range(count)
    ]


def fit_curved_area(ring: Ring, target_area: float, settings: ShapeSettings) -> Ring:
    """Rescale a bubble ring about its centroid until its curved area nears ``target_area``."""
    anchor = centroid(ring)
    points = list(ring)
    for _ in range(settings.organic_fit_iterations):
        current = curved_area(points, settings.area_steps)
        if current <= settings.area_epsilon or abs(current - target_area) < settings.organic_fit_tolerance:
            break
        points = scale_ring(points, anchor, math.sqrt(target_area / current))
    return points


def convert_shape(space: Space, kind: str, settings: Optional[ShapeSettings] = None) -> Dict[str, Any]:
    """Changes that convert ``space`` to another boundary kind.

    - Rectangle: drops the ring and becomes a square of ``target_area``.
    - Polygon: keeps the existing ring, or the rectangle's corners.
    - Organic: from a Rectangle, a circle inscribed in its extent; from a
      Polygon, its ring shrunk about the centroid.  Either way the ring is
      then rescaled so the curved area approaches ``target_area``.

    Returns an empty dict when the space already has that kind.
    """
    BoundaryKind.validate(kind)
    cfg = settings or ShapeSettings()
    if space.kind == kind:
        return {}

    if kind == BoundaryKind.RECTANGLE:
        side = math.sqrt(max(0.0, space.target_area))
        return {"kind": kind, "control_points": None, "width": side, "height": side}

    if space.has_ring:
        ring = list(space.control_points)
    else:
        ring = rectangle_ring(space.width, space.height)

    if kind == BoundaryKind.POLYGON:
        changes: Dict[str, Any] = {"kind": kind, "control_points": ring}
        if space.target_area <= 0:
            changes["target_area"] = polygon_area(ring)
        return changes

    if space.has_ring:
        ring = scale_ring(ring, centroid(ring), cfg.organic_shrink)
    else:
        ring = circular_ring(space.width, space.height, cfg.circle_points)

    target = space.target_area if space.target_area > 0 else curved_area(ring, cfg.area_steps)
    ring = fit_curved_area(ring, target, cfg)
    trace(f"{space.id}: converted to organic, curved area "
          f"{curved_area(ring, cfg.area_steps):.1f} for target {target:.1f}", "EDIT")
    return {"kind": kind, "control_points": ring, "target_area": target}

