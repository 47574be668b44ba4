"""
canvas/paths.py

Qt renderer adapter: turns path command sequences into ``QPainterPath``
objects and zone outlines into (category, path, color) triples.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from PyQt6.QtGui import QColor, QPainterPath

from geometry.paths import ClosePath, CubicTo, LineTo, MoveTo, PathCommand
from geometry.zones import ZoneOutline
from models import ZONE_COLORS
from utils import hex_to_qcolor, with_alpha

ZONE_FILL_ALPHA = 40


def to_painter_path(commands: Sequence[PathCommand]) -> QPainterPath:
    """Replay ``commands`` onto a new QPainterPath."""
    path = QPainterPath()
    for cmd in commands:
        if isinstance(cmd, MoveTo):
            path.moveTo(cmd.point[0], cmd.point[1])
        elif isinstance(cmd, LineTo):
            path.lineTo(cmd.point[0], cmd.point[1])
        elif isinstance(cmd, CubicTo):
            path.cubicTo(cmd.cp1[0], cmd.cp1[1], cmd.cp2[0], cmd.cp2[1],
                         cmd.point[0], cmd.point[1])
        elif isinstance(cmd, ClosePath):
            path.closeSubpath()
        else:
            raise TypeError(f"Unknown path command: {cmd!r}")
    return path


def zone_fill_color(color: QColor) -> QColor:
    """Translucent fill for a zone whose stroke is ``color``."""
    return with_alpha(color, ZONE_FILL_ALPHA)


def zone_painter_paths(outlines: Iterable[ZoneOutline]) -> List[Tuple[str, QPainterPath, QColor]]:
    """Painter paths for zone outlines, colored from each outline's hex color."""
    fallback = hex_to_qcolor(ZONE_COLORS["Default"], QColor(203, 213, 225))
    return [
        (o.category, to_painter_path(o.commands), hex_to_qcolor(o.color, fallback))
        for o in outlines
    ]
