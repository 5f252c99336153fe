"""Scatter boxes: small random cubes hung off the support lines.

Each box picks a support line at random, jitters off its (x, y) anchor,
and drops into a depth band behind the main composition. Boxes may
overlap each other and the plates; nothing is rejected.

The random source is always passed in. Draw order per box is fixed
(color, size, line, jitter x, jitter y, z) so a seeded generator gives
the same layout every time.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from plate_scene.palette import Color
from plate_scene.primitives import Plate, VerticalLine

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScatterConfig:
    """Sampling ranges for scatter boxes (scene units)."""

    count: int = 20
    size_range: tuple[float, float] = (10.0, 30.0)
    jitter: float = 10.0  # max |offset| from the anchor in x and y
    depth_band: tuple[float, float] = (-300.0, -40.0)


def sample_box(
    lines: Sequence[VerticalLine],
    colors: Sequence[Color],
    rng: np.random.Generator,
    config: ScatterConfig = ScatterConfig(),
) -> Plate:
    """Sample one cube anchored near a random support line."""
    color = colors[rng.integers(len(colors))]
    size = float(rng.uniform(*config.size_range))

    base = lines[rng.integers(len(lines))]
    x = base.x + float(rng.uniform(-config.jitter, config.jitter))
    y = base.y + float(rng.uniform(-config.jitter, config.jitter))
    z = float(rng.uniform(*config.depth_band))

    return Plate(x=x, y=y, z=z, width=size, height=size, depth=size, color=color)


def generate_random_boxes(
    lines: Sequence[VerticalLine],
    colors: Sequence[Color],
    rng: np.random.Generator,
    config: ScatterConfig = ScatterConfig(),
) -> tuple[Plate, ...]:
    """Sample ``config.count`` independent scatter boxes.

    Args:
        lines: Support lines to anchor on (must be non-empty)
        colors: Candidate fill colors (must be non-empty)
        rng: Random generator; seed it for reproducible layouts
        config: Sampling ranges

    Returns:
        Tuple of Plate, one per box, in sampling order.
    """
    if not lines:
        raise ValueError("Cannot place scatter boxes without support lines")
    if not colors:
        raise ValueError("Cannot place scatter boxes without colors")

    boxes = tuple(sample_box(lines, colors, rng, config) for _ in range(config.count))
    log.debug("Sampled %d scatter boxes over %d lines", len(boxes), len(lines))
    return boxes
