"""
store.py

The single write path for spaces.

Every mutation (interactive edits, auto-arrange, declutter ticks, zone
drags) goes through ``update_space`` / ``update_spaces`` / ``replace_all``.
Spaces are replaced with new values, never mutated in place, so readers can
detect changes by identity.
"""

from __future__ import annotations

import math
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Set, Union

from debug_trace import trace
from models import BoundaryKind, Space

ChangeListener = Callable[[List[str]], None]


def _normalize_changes(space: Space, changes: Mapping[str, Any]) -> Dict[str, Any]:
    """Validate field names and coerce points to tuples."""
    if not isinstance(changes, Mapping):
        raise TypeError(f"changes must be a mapping, got {type(changes).__name__}")
    unknown = set(changes) - Space.field_names()
    if unknown:
        raise ValueError(f"Unknown Space fields: {sorted(unknown)}")
    out = dict(changes)
    if "kind" in out:
        BoundaryKind.validate(out["kind"])
    if "origin" in out:
        ox, oy = out["origin"]
        out["origin"] = (float(ox), float(oy))
    if out.get("control_points") is not None:
        out["control_points"] = [(float(x), float(y)) for x, y in out["control_points"]]
    return out


def apply_changes(space: Space, changes: Mapping[str, Any]) -> Space:
    """Return ``space`` with ``changes`` applied.

    A Rectangle whose ``target_area`` changes without an explicit
    ``width``/``height``/``control_points`` in the same change is resized to
    a square of that area.
    """
    out = _normalize_changes(space, changes)
    kind = out.get("kind", space.kind)
    if ("target_area" in out
            and "width" not in out and "height" not in out
            and "control_points" not in out
            and kind == BoundaryKind.RECTANGLE):
        side = math.sqrt(max(0.0, float(out["target_area"])))
        out["width"] = side
        out["height"] = side
    return space.with_changes(**out)


class SpaceStore:
    """Ordered collection of spaces with change notification.

    Args:
        spaces: Initial spaces; ids must be unique.
    """

    def __init__(self, spaces: Iterable[Space] = ()):
        self._spaces: List[Space] = []
        self._index: Dict[str, int] = {}
        self._listeners: List[ChangeListener] = []
        for s in spaces:
            self.add(s)

    # ---- Read side ----

    def spaces(self) -> List[Space]:
        """Current collection.  The list object changes whenever any space does."""
        return self._spaces

    def get(self, space_id: str) -> Optional[Space]:
        idx = self._index.get(space_id)
        return None if idx is None else self._spaces[idx]

    def __len__(self) -> int:
        return len(self._spaces)

    def __contains__(self, space_id: str) -> bool:
        return space_id in self._index

    # ---- Listeners ----

    def subscribe(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, changed: List[str]) -> None:
        if not changed:
            return
        for listener in list(self._listeners):
            listener(changed)

    # ---- Write side ----

    def add(self, space: Space) -> None:
        if space.id in self._index:
            raise ValueError(f"Duplicate space id: {space.id}")
        self._spaces = self._spaces + [space]
        self._index[space.id] = len(self._spaces) - 1
        self._notify([space.id])

    def remove(self, space_id: str) -> None:
        if space_id not in self._index:
            return
        self._spaces = [s for s in self._spaces if s.id != space_id]
        self._index = {s.id: i for i, s in enumerate(self._spaces)}
        self._notify([space_id])

    def update_space(self, space_id: str, changes: Mapping[str, Any]) -> None:
        """Apply a partial update to one space."""
        self.update_spaces([space_id], changes)

    def update_spaces(self, space_ids: Sequence[str],
                      changes: Union[Mapping[str, Any], Sequence[Mapping[str, Any]]]) -> None:
        """Apply partial updates to several spaces in one write.

        Args:
            space_ids: Target ids; unknown ids are skipped.
            changes: One mapping applied to every id, or one mapping per id.
        """
        if isinstance(changes, Mapping):
            per_id = [changes] * len(space_ids)
        else:
            per_id = list(changes)
            if len(per_id) != len(space_ids):
                raise ValueError("update_spaces needs one change set per id")

        new_list = list(self._spaces)
        changed: List[str] = []
        for space_id, delta in zip(space_ids, per_id):
            idx = self._index.get(space_id)
            if idx is None:
                trace(f"update for unknown space {space_id!r} ignored", "STORE")
                continue
            new_list[idx] = apply_changes(new_list[idx], delta)
            changed.append(space_id)
        if not changed:
            return
        self._spaces = new_list
        trace(f"updated {changed}", "STORE")
        self._notify(changed)

    def replace_all(self, spaces: Sequence[Space]) -> List[str]:
        """Write back a whole collection produced by a layout algorithm.

        Only spaces whose object identity changed are written (as
        ``origin`` updates through ``update_spaces``).

        Returns:
            The ids that changed.
        """
        if spaces is self._spaces:
            return []
        ids = []
        deltas = []
        for new in spaces:
            current = self.get(new.id)
            if current is None or current is new:
                continue
            ids.append(new.id)
            deltas.append({"origin": new.origin})
        if ids:
            self.update_spaces(ids, deltas)
        return ids

    # ---- Compound moves ----

    def move_space(self, space_id: str, x: float, y: float,
                   selection: Optional[Set[str]] = None) -> None:
        """Move a space to (x, y); a multi-selection moves along by the same delta."""
        leader = self.get(space_id)
        if leader is None:
            return
        dx = x - leader.origin[0]
        dy = y - leader.origin[1]
        if dx == 0 and dy == 0:
            return
        if selection and space_id in selection and len(selection) > 1:
            ids = [s.id for s in self._spaces
                   if s.id in selection and s.is_placed and s.floor == leader.floor]
        else:
            ids = [space_id]
        self.update_spaces(ids, [{"origin": (s.origin[0] + dx, s.origin[1] + dy)}
                                 for s in (self.get(i) for i in ids)])

    def move_category(self, category: str, dx: float, dy: float,
                      floor: Optional[int] = None) -> None:
        """Zone drag: translate every placed space of ``category`` on ``floor``."""
        targets = [s for s in self._spaces
                   if s.category == category and s.is_placed
                   and (floor is None or s.floor == floor)]
        if not targets or (dx == 0 and dy == 0):
            return
        self.update_spaces([s.id for s in targets],
                           [{"origin": (s.origin[0] + dx, s.origin[1] + dy)} for s in targets])
