"""Shared fixtures for the bubbleplan test suite."""
from __future__ import annotations

import os
import sys

import pytest
from PyQt6.QtCore import QCoreApplication

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from models import BoundaryKind, Space


@pytest.fixture(scope="session")
def qapp():
    """Provide a single QCoreApplication for the entire test session."""
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    yield app


@pytest.fixture()
def square_polygon():
    """A 100 x 100 polygon space at the world origin."""
    ring = [(0.0, 0.0), (100.0, 0.0), (100.0, 100.0), (0.0, 100.0)]
    return Space(id="poly", category="Private", kind=BoundaryKind.POLYGON,
                 control_points=ring, target_area=10000.0)
