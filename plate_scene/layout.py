"""Authored plate layout.

These are ground-truth constants, not derived from anything. Each entry
feeds both support-line derivation and Plate instantiation.
"""

from __future__ import annotations

from dataclasses import dataclass

from plate_scene.palette import COLOR_NAMES, ColorPalette
from plate_scene.primitives import Plate


@dataclass(frozen=True)
class PlateConfig:
    """One plate as authored.

    Attributes:
        x, y, z: Plate center
        width: Footprint extent along x
        thickness: Extent along z
        depth: Footprint extent along y
        color: Palette color name
    """

    x: float
    y: float
    z: float
    width: float
    thickness: float
    depth: float
    color: str

    def __post_init__(self):
        if self.color not in COLOR_NAMES:
            raise KeyError(f"Unknown palette color {self.color!r}")

    def to_plate(self, palette: ColorPalette) -> Plate:
        return Plate(
            x=self.x,
            y=self.y,
            z=self.z,
            width=self.width,
            height=self.thickness,
            depth=self.depth,
            color=palette[self.color],
        )


PLATE_CONFIGS: tuple[PlateConfig, ...] = (
    # Long grey plates
    PlateConfig(-200, -130, -40, 200, 10, 80, "grey"),
    PlateConfig(-50, 200, -20, 200, 10, 80, "grey"),
    # Colored blocks: blue x1, red x2, yellow x3
    PlateConfig(100, 0, -15, 120, 10, 100, "blue"),
    PlateConfig(-150, 50, -30, 80, 10, 80, "red"),
    PlateConfig(-10, -50, -25, 80, 10, 80, "red"),
    PlateConfig(200, 100, -10, 80, 10, 180, "yellow"),
    PlateConfig(-250, 30, -20, 80, 10, 200, "yellow"),
    PlateConfig(130, -150, 0, 200, 10, 80, "yellow"),
)


def build_plates(
    configs: tuple[PlateConfig, ...], palette: ColorPalette
) -> tuple[Plate, ...]:
    """One Plate per config, same order."""
    return tuple(c.to_plate(palette) for c in configs)
