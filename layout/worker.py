"""
layout/worker.py

Timer-driven driver for the declutter simulation.
Runs one declutter tick per timer period on the Qt event loop and writes
the result back through the store.
"""

from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from debug_trace import trace, trace_exception
from layout.declutter import RepulsionCurve, declutter_tick, default_repulsion
from settings import DeclutterSettings
from store import SpaceStore


class DeclutterWorker(QObject):
    """
    Periodically relaxes the layout of a ``SpaceStore`` while active.

    Ticks run on the thread that owns the worker, so a tick is always
    applied in one ``replace_all`` write and stopping never leaves a
    half-applied tick.

    Signals:
        ticked(list): Emitted with the ids moved by a tick
        failed(str): Emitted with an error message when a tick raises;
            the timer is stopped
    """

    ticked = pyqtSignal(list)
    failed = pyqtSignal(str)

    def __init__(self, store: SpaceStore, settings: Optional[DeclutterSettings] = None,
                 floor: Optional[int] = None,
                 repulsion_curve: RepulsionCurve = default_repulsion,
                 parent: Optional[QObject] = None):
        """
        Initialize the declutter worker.

        Args:
            store: Store whose spaces are relaxed
            settings: Force parameters and tick period
            floor: Floor to simulate (None for every floor)
            repulsion_curve: Force curve passed to each tick
            parent: Optional Qt parent
        """
        super().__init__(parent)
        self.store = store
        self.settings = settings or DeclutterSettings()
        self.floor = floor
        self.repulsion_curve = repulsion_curve

        self._timer = QTimer(self)
        self._timer.setInterval(int(self.settings.tick_ms))
        self._timer.timeout.connect(self._on_tick)

    def start(self) -> None:
        if not self._timer.isActive():
            trace(f"declutter started ({self.settings.tick_ms} ms)", "DECLUTTER")
            self._timer.start()

    def stop(self) -> None:
        if self._timer.isActive():
            self._timer.stop()
            trace("declutter stopped", "DECLUTTER")

    def set_active(self, active: bool) -> None:
        if active:
            self.start()
        else:
            self.stop()

    def is_active(self) -> bool:
        return self._timer.isActive()

    def step(self) -> list:
        """Run one tick immediately and return the ids it moved."""
        current = self.store.spaces()
        updated = declutter_tick(current, self.settings, self.floor, self.repulsion_curve)
        if updated is current:
            return []
        return self.store.replace_all(updated)

    def _on_tick(self):
        try:
            changed = self.step()
        except Exception as e:
            trace_exception("declutter tick failed")
            self.stop()
            self.failed.emit(f"{type(e).__name__}: {e}")
            return
        if changed:
            self.ticked.emit(changed)
