"""
layout/declutter.py

Magnetic declutter: one relaxation step over the placed spaces of a floor.

Every pair of spaces is compared through its world bounding boxes.  The
separation of a pair is the larger of the two per-axis gaps between the
boxes, so it is negative while the boxes overlap and equals the clear
distance otherwise.

- Pairs closer than ``proximity`` push apart along the line between their
  centers, with a magnitude given by the repulsion curve.
- Pairs of the same category further apart than ``attraction_range`` pull
  together, weakly and linearly in the excess distance.

Between ``proximity`` and ``attraction_range`` no force acts, which is what
lets a layout come to rest.  All displacements are accumulated first and
applied together at the end of the tick.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence

import numpy as np

from debug_trace import trace
from geometry.shapes import world_bounds
from models import Space
from settings import DeclutterSettings

RepulsionCurve = Callable[[np.ndarray, DeclutterSettings], np.ndarray]


def default_repulsion(separation: np.ndarray, settings: DeclutterSettings) -> np.ndarray:
    """strength / (1 + separation), with overlap counted as zero separation, capped at ``max_step``."""
    raw = settings.repulsion_strength / (1.0 + np.maximum(separation, 0.0))
    return np.minimum(raw, settings.max_step)


def _pair_directions(delta: np.ndarray) -> np.ndarray:
    """Unit vectors from i to j; coincident centers get +x for i < j and -x for i > j."""
    n = delta.shape[0]
    dist = np.linalg.norm(delta, axis=2)
    unit = np.zeros_like(delta)
    apart = dist > 1e-9
    unit[apart] = delta[apart] / dist[apart][:, None]
    upper = np.triu(np.ones((n, n), dtype=bool), k=1)
    unit[~apart & upper] = (1.0, 0.0)
    unit[~apart & upper.T] = (-1.0, 0.0)
    return unit


def displacements(spaces: Sequence[Space], settings: DeclutterSettings,
                  repulsion_curve: RepulsionCurve = default_repulsion) -> np.ndarray:
    """Net displacement per space for one tick, shape (n, 2).

    Each row is capped at ``max_step`` in length.
    """
    n = len(spaces)
    if n < 2:
        return np.zeros((n, 2))

    boxes = [world_bounds(s) for s in spaces]
    centers = np.array([b.center for b in boxes], dtype=float)
    halves = np.array([(b.w / 2.0, b.h / 2.0) for b in boxes], dtype=float)

    delta = centers[None, :, :] - centers[:, None, :]             # (n, n, 2), i -> j
    gaps = np.abs(delta) - (halves[:, None, :] + halves[None, :, :])
    separation = gaps.max(axis=2)
    unit = _pair_directions(delta)

    not_self = ~np.eye(n, dtype=bool)
    categories = np.array([s.category for s in spaces], dtype=object)
    same = categories[:, None] == categories[None, :]

    push = np.where(not_self & (separation < settings.proximity),
                    repulsion_curve(separation, settings), 0.0)
    excess = separation - settings.attraction_range
    pull = np.where(not_self & same & (excess > 0),
                    np.minimum(settings.attraction_strength * np.maximum(excess, 0.0),
                               settings.max_step), 0.0)

    # Repulsion moves i away from j, attraction moves i toward j
    disp = np.einsum("ij,ijd->id", pull - push, unit)

    length = np.linalg.norm(disp, axis=1)
    over = length > settings.max_step
    disp[over] *= (settings.max_step / length[over])[:, None]
    return disp


def declutter_tick(spaces: List[Space], settings: Optional[DeclutterSettings] = None,
                   floor: Optional[int] = None,
                   repulsion_curve: RepulsionCurve = default_repulsion) -> List[Space]:
    """Advance the declutter simulation by one tick.

    Args:
        spaces: All spaces; unplaced spaces and other floors are ignored.
        settings: Force parameters.
        floor: Floor to simulate, or every placed space when None.
        repulsion_curve: ``f(separation, settings) -> magnitude``, applied
            element-wise to an array of pair separations.

    Returns:
        ``spaces`` itself when no space would move more than ``epsilon``,
        otherwise a new list in which only the moved spaces are replaced.
    """
    cfg = settings or DeclutterSettings()
    active = [i for i, s in enumerate(spaces)
              if s.is_placed and (floor is None or s.floor == floor)]
    if len(active) < 2:
        return spaces

    disp = displacements([spaces[i] for i in active], cfg, repulsion_curve)
    moving = np.linalg.norm(disp, axis=1) > cfg.epsilon
    if not moving.any():
        return spaces

    out = list(spaces)
    for k in np.flatnonzero(moving):
        i = active[k]
        s = spaces[i]
        out[i] = s.with_changes(origin=(s.origin[0] + float(disp[k, 0]),
                                        s.origin[1] + float(disp[k, 1])))
    trace(f"moved {int(moving.sum())} of {len(active)} spaces", "TICK")
    return out
