"""Support-line anchors from plate footprint corners.

Each plate gets two posts on a diagonal of its footprint: the
(-x, -y) corner and the (+x, +y) corner, both at the plate's z.
"""

from __future__ import annotations

from collections.abc import Iterable

from plate_scene.layout import PlateConfig
from plate_scene.palette import ColorPalette
from plate_scene.primitives import LINE_HEIGHT, LINE_THICKNESS, VerticalLine

Anchor = tuple[float, float, float]


def corner_anchors(config: PlateConfig) -> tuple[Anchor, Anchor]:
    """(bottom_left, top_right) corners of a plate's footprint."""
    hw = config.width / 2
    hd = config.depth / 2
    bottom_left = (config.x - hw, config.y - hd, config.z)
    top_right = (config.x + hw, config.y + hd, config.z)
    return bottom_left, top_right


def derive_vertical_lines(
    configs: Iterable[PlateConfig],
    palette: ColorPalette,
    height: float = LINE_HEIGHT,
    thickness: float = LINE_THICKNESS,
) -> tuple[VerticalLine, ...]:
    """Two lines per config, in config order (bottom-left first)."""
    lines: list[VerticalLine] = []
    for config in configs:
        for x, y, z in corner_anchors(config):
            lines.append(
                VerticalLine(
                    x=x,
                    y=y,
                    z=z,
                    color=palette.line,
                    height=height,
                    width=thickness,
                )
            )
    return tuple(lines)
