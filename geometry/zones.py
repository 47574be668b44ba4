"""
geometry/zones.py

Rendering contracts built on the geometry primitives:

- ``boundary_path_commands``: the outline of one space.
- ``zone_outlines``: one rounded convex hull per category.

Outlines are recomputed from scratch on every call; nothing is cached.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from debug_trace import trace
from geometry.curves import DEFAULT_SAMPLES, bubble_path_commands, sample_curve, sampled_path_commands
from geometry.hull import convex_hull, padded_points
from geometry.paths import CommandSequence
from geometry.rounding import rounded_path_commands
from geometry.shapes import boundary_points, to_world
from models import BoundaryKind, Ring, Space, resolve_zone_color
from settings import ZoneSettings


@dataclass
class ZoneOutline:
    """Rendered outline of one category on one floor."""
    category: str
    color: str
    hull: Ring = field(default_factory=list)
    commands: CommandSequence = field(default_factory=list)


def _on_floor(space: Space, floor: Optional[int]) -> bool:
    return space.is_placed and (floor is None or space.floor == floor)


def boundary_path_commands(space: Space, curve_detail: Optional[int] = None,
                           corner_radius: float = 0.0, world: bool = False) -> CommandSequence:
    """Outline commands for one space.

    Args:
        space: The space to outline.
        curve_detail: For Organic spaces, ``None`` emits exact cubic segments;
            an integer emits a polyline with that many samples per segment
            (for consumers that only understand straight edges).
        corner_radius: Corner rounding for Rectangle and Polygon outlines.
        world: When True, points are rotated and translated into world space.

    Returns:
        The command sequence; empty when the ring has fewer than 3 points.
    """
    ring = boundary_points(space)
    if world:
        ring = to_world(space, ring)
    if space.kind == BoundaryKind.ORGANIC:
        if curve_detail is None:
            return bubble_path_commands(ring)
        return sampled_path_commands(ring, curve_detail)
    return rounded_path_commands(ring, corner_radius)


def zone_points(space: Space, padding: float, curve_samples: int = DEFAULT_SAMPLES) -> Ring:
    """World-space hull contributions of one space, padded by ``padding``.

    Organic rings are sampled along their curve first so the hull hugs the
    rendered bubble rather than its control polygon.
    """
    ring = boundary_points(space)
    if len(ring) < 3:
        return []
    if space.kind == BoundaryKind.ORGANIC:
        ring = sample_curve(ring, curve_samples)
    return padded_points(to_world(space, ring), padding)


def zone_outlines(spaces: Iterable[Space], colors: Optional[Dict[str, str]] = None,
                  padding: Optional[float] = None, corner_radius: Optional[float] = None,
                  floor: Optional[int] = None,
                  settings: Optional[ZoneSettings] = None) -> List[ZoneOutline]:
    """Group spaces by category and build one rounded hull per group.

    The outline corner radius is ``corner_radius + padding`` so the zone
    follows the rounding of the spaces it wraps.  Groups whose hull is
    degenerate are skipped.

    Args:
        spaces: All spaces; unplaced spaces and other floors are ignored.
        colors: Category -> hex color table (see ``resolve_zone_color``).
        padding: Halo around every boundary point; defaults to settings.
        corner_radius: Base rounding; defaults to settings.
        floor: Only spaces on this floor, or every floor when None.
        settings: Zone settings supplying the defaults.

    Returns:
        Outlines in order of first appearance of each category.
    """
    cfg = settings or ZoneSettings()
    pad = cfg.padding if padding is None else padding
    radius = cfg.corner_radius if corner_radius is None else corner_radius

    groups: Dict[str, Ring] = {}
    for space in spaces:
        if not _on_floor(space, floor):
            continue
        pts = zone_points(space, pad, cfg.curve_samples)
        if not pts:
            continue
        groups.setdefault(space.category, []).extend(pts)

    outlines = []
    for category, points in groups.items():
        hull = convex_hull(points)
        if not hull:
            trace(f"Zone '{category}' skipped: degenerate hull", "ZONE")
            continue
        outlines.append(ZoneOutline(
            category=category,
            color=resolve_zone_color(category, colors),
            hull=hull,
            commands=rounded_path_commands(hull, radius + pad),
        ))
    return outlines
