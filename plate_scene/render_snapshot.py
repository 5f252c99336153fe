"""Render plate scenes offscreen as a PNG grid for visual validation.

Usage:
    python -m plate_scene.render_snapshot                    # 4 random seeds
    python -m plate_scene.render_snapshot --seeds 42 43 44   # specific seeds
    python -m plate_scene.render_snapshot --count 9          # 9 random scenes
    python -m plate_scene.render_snapshot --out docs/scenes  # custom output dir
"""

from __future__ import annotations

import argparse
import logging
import math
from pathlib import Path

import mujoco
import numpy as np
from PIL import Image, ImageDraw, ImageFont

from plate_scene.canvas import MjvSceneCanvas
from plate_scene.composer import Scene, create_scene, scene_id
from plate_scene.config import Config
from plate_scene.world import apply_camera, build_world

log = logging.getLogger(__name__)

LABEL_H = 32
GRID_BG = (40, 42, 48)
LABEL_BG = (30, 32, 36)
LABEL_FG = (220, 220, 220)


def render_snapshot(scene: Scene, config: Config | None = None) -> np.ndarray:
    """Render one frame of a scene. Returns an (H, W, 3) uint8 image."""
    config = config or Config()
    model, data, texid = build_world(scene.palette.background, config)
    cam = mujoco.MjvCamera()
    apply_camera(cam, config.camera, config.view.units_per_meter)

    renderer = mujoco.Renderer(
        model,
        height=config.view.height,
        width=config.view.width,
        max_geom=config.view.max_geoms,
    )
    try:
        renderer.update_scene(data, cam)
        canvas = MjvSceneCanvas(
            renderer.scene,
            units_per_meter=config.view.units_per_meter,
            model=model,
            skybox_texid=texid,
        )
        canvas.begin_frame()
        scene.render(canvas)
        canvas.end_frame()
        log.debug("Drew %d geoms for seed=%s", canvas.drawn, scene.seed)
        return renderer.render().copy()
    finally:
        renderer.close()


def _try_load_font(size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """Try to load a nice font, fall back to default."""
    candidates = [
        "/System/Library/Fonts/SFNSMono.ttf",
        "/System/Library/Fonts/Menlo.ttc",
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    ]
    for path in candidates:
        if Path(path).exists():
            try:
                return ImageFont.truetype(path, size)
            except OSError:
                continue
    return ImageFont.load_default()


def render_grid(seeds: list[int], out_dir: Path, config: Config | None = None) -> Path:
    """Render a grid of scenes, one per seed. Returns output path."""
    if not seeds:
        raise ValueError("render_grid needs at least one seed")
    config = config or Config.for_snapshot()
    cell_w, cell_h = config.view.width, config.view.height

    n = len(seeds)
    cols = min(4, n)
    rows = math.ceil(n / cols)
    cell_total_h = cell_h + LABEL_H

    grid = Image.new("RGB", (cols * cell_w, rows * cell_total_h), GRID_BG)
    draw = ImageDraw.Draw(grid)
    font = _try_load_font(14)

    for idx, seed in enumerate(seeds):
        scene = create_scene(seed=seed)
        pixels = render_snapshot(scene, config)

        x = (idx % cols) * cell_w
        y = (idx // cols) * cell_total_h
        grid.paste(Image.fromarray(pixels), (x, y))

        label = f"#{scene_id(seed)}  {len(scene.random_boxes)} boxes"
        label_y = y + cell_h
        draw.rectangle([x, label_y, x + cell_w, label_y + LABEL_H], fill=LABEL_BG)
        bbox = font.getbbox(label)
        tx = x + (cell_w - (bbox[2] - bbox[0])) // 2
        ty = label_y + (LABEL_H - (bbox[3] - bbox[1])) // 2
        draw.text((tx, ty), label, fill=LABEL_FG, font=font)

        log.info("[%d/%d] rendered scene #%s", idx + 1, n, scene_id(seed))

    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / "scenes.png"
    grid.save(out_path)
    return out_path


def random_seeds(count: int) -> list[int]:
    rng = np.random.default_rng()
    return [int(rng.integers(0, 2**32)) for _ in range(count)]


def main():
    parser = argparse.ArgumentParser(description="Render plate scene grids")
    parser.add_argument("--seeds", nargs="*", type=int, help="Specific seeds to render")
    parser.add_argument(
        "--count", type=int, default=4, help="Number of random scenes (default: 4)"
    )
    parser.add_argument("--out", default="docs/scenes", help="Output directory")
    args = parser.parse_args()
    if args.count < 1:
        parser.error("--count must be at least 1")
    if args.seeds and min(args.seeds) < 0:
        parser.error("seeds must be non-negative")

    logging.basicConfig(level=logging.INFO, format="%(message)s")
    seeds = args.seeds or random_seeds(args.count)
    path = render_grid(seeds, Path(args.out))
    print(f"\n-> {path}")


if __name__ == "__main__":
    main()
