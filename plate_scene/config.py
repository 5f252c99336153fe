"""
Viewer and render settings.

Scene content (layout, palette, scatter ranges) lives with the code that
uses it; this module only holds how the scene is looked at.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field


@dataclass
class CameraConfig:
    """Initial camera, in scene units.

    Screen up is always scene +z (MuJoCo's free camera is Z-up), so only
    the eye and target are configurable.
    """

    eye: tuple[float, float, float] = (-800.0, 800.0, 600.0)
    target: tuple[float, float, float] = (0.0, 0.0, 0.0)


@dataclass
class ViewConfig:
    """Viewer / offscreen render configuration."""

    units_per_meter: float = 100.0  # scene units per MuJoCo meter
    fps: int = 60
    width: int = 960  # offscreen render size
    height: int = 720
    show_ui: bool = False  # MuJoCo viewer side panels
    max_geoms: int = 1000  # MjvScene buffer for offscreen renders


@dataclass
class Config:
    """Top-level configuration."""

    camera: CameraConfig = field(default_factory=CameraConfig)
    view: ViewConfig = field(default_factory=ViewConfig)

    def to_dict(self) -> dict:
        return {
            "camera": asdict(self.camera),
            "view": asdict(self.view),
        }

    @classmethod
    def for_snapshot(cls) -> Config:
        """Smaller square frames for grid renders."""
        return cls(view=ViewConfig(width=500, height=500))
