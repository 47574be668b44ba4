"""
settings.py

Persistent settings management for bubbleplan.

Handles cross-platform settings storage using TOML format with platformdirs
for proper user config directory detection.

Settings file location:
    - Windows: %APPDATA%/bubbleplan/settings.toml
    - macOS: ~/Library/Application Support/bubbleplan/settings.toml
    - Linux: ~/.config/bubbleplan/settings.toml

Default values are documented in comments throughout this file.
If settings.toml is corrupted, these defaults will be used.

Geometry and layout functions never read the global manager; the host
passes the relevant settings group into every call.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

# TOML reading - use tomllib for Python 3.11+, tomli for earlier versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import tomli_w

from debug_trace import trace

APP_NAME = "bubbleplan"

# Global settings manager instance (singleton)
_settings_manager: Optional["SettingsManager"] = None


def get_settings() -> "SettingsManager":
    """Get the global settings manager instance.

    Returns:
        The singleton SettingsManager instance.
    """
    global _settings_manager
    if _settings_manager is None:
        _settings_manager = SettingsManager()
    return _settings_manager


# =============================================================================
# Snapping Settings
# =============================================================================

@dataclass
class SnapSettings:
    """Grid and object snapping.

    Defaults:
        enabled: True
        grid_size: 40.0
        tolerance: 10.0
        to_grid: True
        to_objects: True
        while_scaling: False
    """
    enabled: bool = True          # Default: True
    grid_size: float = 40.0       # Default: 40.0 units (2 m at 20 units/m)
    tolerance: float = 10.0       # Default: 10.0 units
    to_grid: bool = True          # Default: True
    to_objects: bool = True       # Default: True
    while_scaling: bool = False   # Default: False

    @property
    def grid_unit(self) -> float:
        """Effective grid unit for vertex snapping (0 disables)."""
        if not self.enabled or not self.to_grid:
            return 0.0
        return self.grid_size


# =============================================================================
# Shape Settings
# =============================================================================

@dataclass
class ShapeSettings:
    """Shape editing settings.

    Defaults:
        min_size: 20.0
        corner_radius: 12.0
        area_epsilon: 1e-6
        area_steps: 20
        circle_points: 8
        organic_shrink: 0.9
        organic_fit_iterations: 10
        organic_fit_tolerance: 10.0
        rotation_snap_degrees: 15.0
    """
    min_size: float = 20.0                # Default: 20.0 units
    corner_radius: float = 12.0           # Default: 12.0 units
    area_epsilon: float = 1e-6            # Default: 1e-6 square units
    area_steps: int = 20                  # Default: 20 samples per curve segment
    circle_points: int = 8                # Default: 8 control points
    organic_shrink: float = 0.9           # Default: 0.9
    organic_fit_iterations: int = 10      # Default: 10
    organic_fit_tolerance: float = 10.0   # Default: 10.0 square units
    rotation_snap_degrees: float = 15.0   # Default: 15.0 degrees


# =============================================================================
# Zone Settings
# =============================================================================

@dataclass
class ZoneSettings:
    """Zone outline settings.

    Defaults:
        padding: 10.0
        corner_radius: 12.0
        curve_samples: 5
    """
    padding: float = 10.0        # Default: 10.0 units
    corner_radius: float = 12.0  # Default: 12.0 units
    curve_samples: int = 5       # Default: 5 samples per curve segment


# =============================================================================
# Layout Settings
# =============================================================================

@dataclass
class ArrangeSettings:
    """Auto-arrange spiral placement.

    Defaults:
        margin: 20.0
        angle_step: 0.5
        radius_factor: 5.0
        max_iterations: 5000
    """
    margin: float = 20.0         # Default: 20.0 units
    angle_step: float = 0.5      # Default: 0.5 rad
    radius_factor: float = 5.0   # Default: 5.0 (radius = factor * angle)
    max_iterations: int = 5000   # Default: 5000


@dataclass
class DeclutterSettings:
    """Magnetic declutter physics.

    Defaults:
        tick_ms: 50
        repulsion_strength: 8.0
        max_step: 4.0
        proximity: 10.0
        attraction_strength: 0.02
        attraction_range: 60.0
        epsilon: 0.01
    """
    tick_ms: int = 50                  # Default: 50 ms (20 Hz)
    repulsion_strength: float = 8.0    # Default: 8.0
    max_step: float = 4.0              # Default: 4.0 units per tick
    proximity: float = 10.0            # Default: 10.0 units
    attraction_strength: float = 0.02  # Default: 0.02
    attraction_range: float = 60.0     # Default: 60.0 units
    epsilon: float = 0.01              # Default: 0.01 units


# =============================================================================
# Main App Settings
# =============================================================================

@dataclass
class AppSettings:
    """Application settings with default values.

    Attributes:
        snap: Grid and object snapping.
        shapes: Shape editing settings.
        zones: Zone outline settings.
        arrange: Auto-arrange settings.
        declutter: Declutter physics settings.
    """
    snap: SnapSettings = field(default_factory=SnapSettings)
    shapes: ShapeSettings = field(default_factory=ShapeSettings)
    zones: ZoneSettings = field(default_factory=ZoneSettings)
    arrange: ArrangeSettings = field(default_factory=ArrangeSettings)
    declutter: DeclutterSettings = field(default_factory=DeclutterSettings)


def _apply_table(target: Any, table: Dict[str, Any]) -> None:
    """Copy known keys from a TOML table onto a settings dataclass.

    Unknown keys are ignored.  Values are coerced to the type of the
    current default so that ``grid_size = 40`` still yields a float.
    """
    for f in fields(target):
        if f.name not in table:
            continue
        current = getattr(target, f.name)
        value = table[f.name]
        if is_dataclass(current):
            if isinstance(value, dict):
                _apply_table(current, value)
            continue
        try:
            if isinstance(current, bool):
                value = bool(value)
            elif isinstance(current, int):
                value = int(value)
            elif isinstance(current, float):
                value = float(value)
        except (TypeError, ValueError):
            trace(f"Ignoring invalid setting {f.name}={value!r}", "ERROR")
            continue
        setattr(target, f.name, value)


def _table_from(settings: Any) -> Dict[str, Any]:
    return {f.name: getattr(settings, f.name) for f in fields(settings)}


# =============================================================================
# Settings Manager
# =============================================================================

class SettingsManager:
    """Manages loading, saving, and accessing application settings.

    Settings are stored in a TOML file at the platform-appropriate location.
    If the settings file doesn't exist, defaults are used and the file is
    created on first save.

    Args:
        app_name: Application name used for the config directory.
        settings_dir: Override for the config directory (tests, portable mode).
    """

    def __init__(self, app_name: str = APP_NAME, settings_dir: Optional[Path] = None):
        if settings_dir is None:
            settings_dir = Path(platformdirs.user_config_dir(app_name))
        self.settings_dir = Path(settings_dir)
        self.settings_file = self.settings_dir / "settings.toml"
        self.settings = self.load()
        self._needs_save = not self.settings_file.exists()  # Save if file didn't exist

    def ensure_file_complete(self) -> None:
        """Ensure settings file exists with all sections. Call once at startup."""
        if self._needs_save or not self.settings_file.exists():
            self.save()
            self._needs_save = False

    def load(self) -> AppSettings:
        """Load settings from the TOML file.

        Returns:
            AppSettings instance with values from file or defaults if file
            doesn't exist or is invalid.
        """
        if not self.settings_file.exists():
            return AppSettings()

        try:
            with open(self.settings_file, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            # If file is corrupted or invalid, return defaults
            trace(f"Settings file unreadable, using defaults: {e}", "ERROR")
            return AppSettings()

        return self._parse_toml(data)

    def _parse_toml(self, data: Dict[str, Any]) -> AppSettings:
        """Parse TOML data into AppSettings.

        Args:
            data: Parsed TOML dictionary.

        Returns:
            AppSettings instance populated from TOML data.
        """
        settings = AppSettings()
        for section in fields(settings):
            table = data.get(section.name, {})
            if isinstance(table, dict):
                _apply_table(getattr(settings, section.name), table)
        return settings

    def save(self) -> None:
        """Save current settings to the TOML file.

        Creates the settings directory if it doesn't exist.
        """
        self.settings_dir.mkdir(parents=True, exist_ok=True)
        data = self._to_toml_dict()
        with open(self.settings_file, "wb") as f:
            tomli_w.dump(data, f)

    def _to_toml_dict(self) -> Dict[str, Any]:
        """Convert settings to a TOML-compatible dictionary structure.

        Returns:
            Dictionary organized by TOML sections.
        """
        s = self.settings
        return {
            "snap": _table_from(s.snap),
            "shapes": _table_from(s.shapes),
            "zones": _table_from(s.zones),
            "arrange": _table_from(s.arrange),
            "declutter": _table_from(s.declutter),
        }

    def to_toml(self) -> str:
        """Convert current settings to a TOML-formatted string."""
        return tomli_w.dumps(self._to_toml_dict())

    def get_settings_path(self) -> Path:
        """Get the path to the settings file."""
        return self.settings_file
