"""
editor package

Interactive boundary editing: the polygon editor state machine, grid and
object snapping, and one-shot shape operations (resize, rotate, convert).
"""

from editor.polygon_editor import EditState, PolygonEditor, preserve_area
from editor.shape_ops import circular_ring, convert_shape, resize_rectangle, rotation_towards
from editor.snapping import SnapResult, snap_point, snap_value, snapped_position

__all__ = [
    "EditState",
    "PolygonEditor",
    "preserve_area",
    "circular_ring",
    "convert_shape",
    "resize_rectangle",
    "rotation_towards",
    "SnapResult",
    "snap_point",
    "snap_value",
    "snapped_position",
]
