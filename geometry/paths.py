"""
geometry/paths.py

Renderer-neutral path commands.

A path is a list of ``MoveTo`` / ``LineTo`` / ``CubicTo`` / ``ClosePath``
commands.  Renderers (a Qt canvas, an SVG exporter, a 3D extruder) walk the
list without knowing anything about the shape that produced it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Union

from models import Point


@dataclass(frozen=True)
class MoveTo:
    point: Point


@dataclass(frozen=True)
class LineTo:
    point: Point


@dataclass(frozen=True)
class CubicTo:
    cp1: Point
    cp2: Point
    point: Point


@dataclass(frozen=True)
class ClosePath:
    pass


PathCommand = Union[MoveTo, LineTo, CubicTo, ClosePath]
CommandSequence = List[PathCommand]


def quad_to_cubic(start: Point, control: Point, end: Point) -> CubicTo:
    """Exact cubic equivalent of a quadratic Bezier segment."""
    sx, sy = start
    cx, cy = control
    ex, ey = end
    cp1 = (sx + 2.0 / 3.0 * (cx - sx), sy + 2.0 / 3.0 * (cy - sy))
    cp2 = (ex + 2.0 / 3.0 * (cx - ex), ey + 2.0 / 3.0 * (cy - ey))
    return CubicTo(cp1, cp2, (ex, ey))


def polygon_commands(ring: Sequence[Point]) -> CommandSequence:
    """Straight-edged closed path through ``ring``; empty for < 3 points."""
    if len(ring) < 3:
        return []
    cmds: CommandSequence = [MoveTo(tuple(ring[0]))]
    cmds.extend(LineTo(tuple(p)) for p in ring[1:])
    cmds.append(ClosePath())
    return cmds


def command_points(commands: Sequence[PathCommand]) -> List[Point]:
    """All end points (not control points) in command order."""
    return [c.point for c in commands if not isinstance(c, ClosePath)]


def _fmt(v: float, precision: int) -> str:
    text = f"{v:.{precision}f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def to_svg_path(commands: Sequence[PathCommand], precision: int = 2) -> str:
    """Serialize commands as an SVG path ``d`` attribute.

    Args:
        commands: The command sequence.
        precision: Decimal places kept for each coordinate.

    Returns:
        A string such as ``"M 0,0 L 10,0 L 10,10 Z"``; empty for no commands.
    """
    def pt(p: Point) -> str:
        return f"{_fmt(p[0], precision)},{_fmt(p[1], precision)}"

    parts = []
    for c in commands:
        if isinstance(c, MoveTo):
            parts.append(f"M {pt(c.point)}")
        elif isinstance(c, LineTo):
            parts.append(f"L {pt(c.point)}")
        elif isinstance(c, CubicTo):
            parts.append(f"C {pt(c.cp1)} {pt(c.cp2)} {pt(c.point)}")
        elif isinstance(c, ClosePath):
            parts.append("Z")
    return " ".join(parts)
