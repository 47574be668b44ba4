"""
layout package

Whole-collection layout algorithms: spiral auto-arrange and the magnetic
declutter simulation with its timer-driven worker.
"""

from layout.arrange import arrange
from layout.declutter import declutter_tick, default_repulsion
from layout.worker import DeclutterWorker

__all__ = [
    "arrange",
    "declutter_tick",
    "default_repulsion",
    "DeclutterWorker",
]
