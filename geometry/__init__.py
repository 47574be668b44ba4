"""
geometry package

Pure geometry for space boundaries: measurements, Catmull-Rom bubble curves,
convex hulls, rounded outlines and zone outlines.
"""

from geometry.curves import bubble_path_commands, curved_area, sample_curve
from geometry.hull import convex_hull, padded_points
from geometry.paths import ClosePath, CubicTo, LineTo, MoveTo, to_svg_path
from geometry.rounding import rounded_path_commands
from geometry.shapes import boundary_points, centroid, polygon_area, world_bounds
from geometry.zones import ZoneOutline, boundary_path_commands, zone_outlines

__all__ = [
    "MoveTo",
    "LineTo",
    "CubicTo",
    "ClosePath",
    "to_svg_path",
    "boundary_points",
    "polygon_area",
    "centroid",
    "world_bounds",
    "bubble_path_commands",
    "sample_curve",
    "curved_area",
    "convex_hull",
    "padded_points",
    "rounded_path_commands",
    "ZoneOutline",
    "boundary_path_commands",
    "zone_outlines",
]
