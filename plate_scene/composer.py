"""Scene composer: builds the plate scene and draws it.

Composition runs once, in a fixed dependency order:
  1. Support lines from the plate configs' footprint corners
  2. Plates from the same configs (independent of the lines)
  3. Scatter boxes anchored to the finished line list

The result is an immutable Scene. Rendering is a read-only pass that
draws lines, then plates, then scatter boxes, so the colored plates sit
over their supports and the scatter field sits over everything.

Usage:
    scene = create_scene(seed=42)
    canvas = RecordingCanvas()
    scene.render(canvas)          # 16 lines + 8 plates + 20 boxes
    print(describe_scene(scene))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from plate_scene.anchors import derive_vertical_lines
from plate_scene.canvas import DrawContext
from plate_scene.layout import PLATE_CONFIGS, PlateConfig, build_plates
from plate_scene.palette import DEFAULT_PALETTE, ColorPalette
from plate_scene.primitives import Drawable, Plate, VerticalLine
from plate_scene.scatter import ScatterConfig, generate_random_boxes

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Scene:
    """Everything needed to draw one frame.

    Attributes:
        palette: Colors used by every entity
        plate_configs: Authored layout the scene was built from
        vertical_lines: Two support lines per config, in config order
        plates: One plate per config, in config order
        random_boxes: Scatter cubes, in sampling order
        seed: Seed used for the scatter boxes, if one was given
    """

    palette: ColorPalette
    plate_configs: tuple[PlateConfig, ...]
    vertical_lines: tuple[VerticalLine, ...]
    plates: tuple[Plate, ...]
    random_boxes: tuple[Plate, ...]
    seed: int | None = None

    @property
    def draw_order(self) -> tuple[Drawable, ...]:
        """Lines, then plates, then scatter boxes."""
        return (*self.vertical_lines, *self.plates, *self.random_boxes)

    @property
    def draw_count(self) -> int:
        return len(self.vertical_lines) + len(self.plates) + len(self.random_boxes)

    def render(self, ctx: DrawContext) -> None:
        """Emit one frame: background, then every entity in draw order."""
        ctx.background(self.palette.background)
        for entity in self.draw_order:
            entity.draw(ctx)


def create_scene(
    seed: int | None = None,
    rng: np.random.Generator | None = None,
    palette: ColorPalette = DEFAULT_PALETTE,
    plate_configs: tuple[PlateConfig, ...] = PLATE_CONFIGS,
    scatter: ScatterConfig = ScatterConfig(),
) -> Scene:
    """Compose the scene.

    Args:
        seed: Integer seed for the scatter boxes. Overrides rng if both given.
        rng: Numpy random generator (for reproducibility).
        palette: Color table.
        plate_configs: Authored plate layout.
        scatter: Scatter-box sampling ranges.
    """
    if seed is not None:
        rng = np.random.default_rng(seed)
    elif rng is None:
        rng = np.random.default_rng()

    lines = derive_vertical_lines(plate_configs, palette)
    plates = build_plates(plate_configs, palette)
    boxes = generate_random_boxes(lines, palette.box_colors, rng, scatter)

    scene = Scene(
        palette=palette,
        plate_configs=tuple(plate_configs),
        vertical_lines=lines,
        plates=plates,
        random_boxes=boxes,
        seed=seed,
    )
    log.info(
        "Composed scene seed=%s: %d lines, %d plates, %d boxes",
        seed,
        len(lines),
        len(plates),
        len(boxes),
    )
    return scene


# ---------------------------------------------------------------------------
# Scene description & identity
# ---------------------------------------------------------------------------


def scene_id(seed: int) -> str:
    """Short hex identifier for a scene seed (6 chars)."""
    return f"{seed & 0xFFFFFF:06x}"


def describe_plate(plate: Plate, palette: ColorPalette) -> str:
    """One-line description of a plate or scatter box."""
    try:
        color = palette.name_of(plate.color)
    except KeyError:
        color = "custom"
    if plate.is_cube:
        dims = f"cube {plate.width:.1f}"
    else:
        dims = f"{plate.width:g} x {plate.depth:g} x {plate.height:g}"
    return f"{color:<6} at ({plate.x:+7.1f}, {plate.y:+7.1f}, {plate.z:+7.1f})  {dims}"


def describe_scene(scene: Scene) -> str:
    """Multi-line textual description of a composed scene.

    Example output:
        Scene #00002a (seed=42)  16 lines, 8 plates, 20 boxes
          lines:
            [0] (-300.0, -170.0) z=-40.0
          ...
          plates:
            [0] grey   at ( -200.0,  -130.0,   -40.0)  200 x 80 x 10
          ...
    """
    counts = (
        f"{len(scene.vertical_lines)} lines, {len(scene.plates)} plates, "
        f"{len(scene.random_boxes)} boxes"
    )
    if scene.seed is not None:
        header = f"Scene #{scene_id(scene.seed)} (seed={scene.seed})  {counts}"
    else:
        header = f"Scene  {counts}"
    lines = [header, "  lines:"]

    for i, line in enumerate(scene.vertical_lines):
        lines.append(f"    [{i}] ({line.x:+.1f}, {line.y:+.1f}) z={line.z:+.1f}")

    lines.append("  plates:")
    for i, plate in enumerate(scene.plates):
        lines.append(f"    [{i}] {describe_plate(plate, scene.palette)}")

    lines.append("  boxes:")
    for i, box in enumerate(scene.random_boxes):
        lines.append(f"    [{i}] {describe_plate(box, scene.palette)}")

    return "\n".join(lines)
