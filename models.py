"""
models.py

Data models and constants for the bubble-diagram layout core.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Optional, Tuple

Point = Tuple[float, float]
Ring = List[Point]


# ----------------------------
# Boundary kinds
# ----------------------------

class BoundaryKind:
    """Boundary representation constants for a space."""
    RECTANGLE = "rect"
    POLYGON = "polygon"
    ORGANIC = "bubble"

    ALL = (RECTANGLE, POLYGON, ORGANIC)

    @classmethod
    def validate(cls, kind: str) -> str:
        if kind not in cls.ALL:
            raise ValueError(f"Unknown boundary kind: {kind!r}")
        return kind


# ----------------------------
# Space model
# ----------------------------

@dataclass
class Space:
    """One placeable entity on the plan.

    ``origin`` is the world position of the boundary's local (0, 0).
    ``control_points`` are relative to ``origin`` and are authoritative for
    Polygon and Organic spaces; ``width``/``height`` are authoritative for
    Rectangle spaces.  ``target_area`` is the area edits must preserve.

    Spaces are treated as values: writers build a new instance through
    ``SpaceStore.update_space`` instead of mutating a shared one.
    """
    id: str
    category: str = "Default"
    origin: Point = (0.0, 0.0)
    kind: str = BoundaryKind.RECTANGLE
    width: float = 0.0
    height: float = 0.0
    control_points: Optional[Ring] = None
    target_area: float = 0.0
    rotation: float = 0.0          # degrees, about the local center
    name: str = ""
    floor: int = 0
    is_placed: bool = True
    # Arbitrary extra keys preserved through to_dict/from_dict
    extras: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def square(cls, space_id: str, category: str, area: float, **kwargs) -> "Space":
        """Create a Rectangle space whose side is ``sqrt(area)``."""
        side = math.sqrt(max(0.0, area))
        return cls(id=space_id, category=category, kind=BoundaryKind.RECTANGLE,
                   width=side, height=side, target_area=area, **kwargs)

    @property
    def has_ring(self) -> bool:
        return self.kind != BoundaryKind.RECTANGLE and bool(self.control_points)

    def with_changes(self, **changes) -> "Space":
        """Return a copy with ``changes`` applied."""
        return replace(self, **changes)

    @classmethod
    def field_names(cls) -> frozenset:
        return frozenset(f.name for f in fields(cls) if f.name != "extras")

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Space":
        """Create a Space from a plain dict, preserving unknown keys in ``extras``.

        Args:
            d: Dict with at least an ``id`` key.

        Returns:
            A ``Space`` instance.
        """
        known_names = cls.field_names()
        known = {}
        extras = {}
        for k, v in d.items():
            if k in known_names:
                known[k] = v
            else:
                extras[k] = v
        if "origin" in known:
            ox, oy = known["origin"]
            known["origin"] = (float(ox), float(oy))
        if known.get("control_points") is not None:
            known["control_points"] = [(float(x), float(y)) for x, y in known["control_points"]]
        if "kind" in known:
            BoundaryKind.validate(known["kind"])
        return cls(**known, extras=extras)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a plain dict, merging extras back in."""
        d = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "extras"}
        d["origin"] = [self.origin[0], self.origin[1]]
        if self.control_points is not None:
            d["control_points"] = [[x, y] for x, y in self.control_points]
        d.update(self.extras)
        return d


# ----------------------------
# Axis-aligned boxes
# ----------------------------

@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box with top-left corner (x, y)."""
    x: float
    y: float
    w: float
    h: float

    @property
    def center(self) -> Point:
        return (self.x + self.w / 2, self.y + self.h / 2)

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    def overlaps(self, other: "BoundingBox", spacing: float = 0.0) -> bool:
        """True when the boxes are closer than ``spacing`` on both axes."""
        return (self.x < other.right + spacing and self.right + spacing > other.x
                and self.y < other.bottom + spacing and self.bottom + spacing > other.y)

    def translated(self, dx: float, dy: float) -> "BoundingBox":
        return BoundingBox(self.x + dx, self.y + dy, self.w, self.h)


@dataclass(frozen=True)
class PlacementConstraint:
    """A candidate box plus the inter-box spacing the placer must keep."""
    box: BoundingBox
    margin: float = 0.0

    def collides(self, placed: List[BoundingBox]) -> bool:
        return any(self.box.overlaps(other, self.margin) for other in placed)


# ----------------------------
# Zone colors
# ----------------------------

ZONE_COLORS: Dict[str, str] = {
    "Public":      "#FB923C",
    "Private":     "#60A5FA",
    "Service":     "#9CA3AF",
    "Circulation": "#FACC15",
    "Outdoor":     "#4ADE80",
    "Admin":       "#C084FC",
    "Default":     "#CBD5E1",
}


def resolve_zone_color(category: str, colors: Optional[Dict[str, str]] = None) -> str:
    """Resolve the display color for a category.

    Exact key first, then the first key contained in the category name
    (case-insensitive), then ``Default``.

    Args:
        category: The space category / zone name.
        colors: Category -> hex color table.  Defaults to ``ZONE_COLORS``.

    Returns:
        A hex color string.
    """
    table = ZONE_COLORS if colors is None else colors
    if category in table:
        return table[category]
    lowered = category.lower()
    for key, color in table.items():
        if key.lower() in lowered:
            return color
    return table.get("Default", ZONE_COLORS["Default"])
