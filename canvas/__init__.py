"""
canvas package

PyQt6 adapters that turn renderer-neutral path commands into painter paths.
"""

from canvas.paths import ZONE_FILL_ALPHA, to_painter_path, zone_fill_color, zone_painter_paths

__all__ = [
    "ZONE_FILL_ALPHA",
    "to_painter_path",
    "zone_fill_color",
    "zone_painter_paths",
]
