"""Drawable entities: plates (and scatter boxes) and vertical support lines.

Coordinate convention (scene units, same as the authored layout):
    - x, y span the plate footprint
    - z is depth; support lines run from their anchor toward -z
    - Box extents are full sizes, not half-extents

Every draw() brackets its work in push()/pop() so the caller's transform
stack is left exactly as it was found, even if the backend raises.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from plate_scene.palette import Color

if TYPE_CHECKING:
    from plate_scene.canvas import DrawContext

LINE_HEIGHT = 300.0
LINE_THICKNESS = 5.0


class Drawable(Protocol):
    def draw(self, ctx: DrawContext) -> None: ...


@dataclass(frozen=True)
class Plate:
    """A colored axis-aligned box centered at (x, y, z).

    Attributes:
        x, y, z: Center position
        width: Extent along x
        height: Extent along z (plate thickness)
        depth: Extent along y
        color: RGBA fill
    """

    x: float
    y: float
    z: float
    width: float
    height: float
    depth: float
    color: Color

    def __post_init__(self):
        for name in ("width", "height", "depth"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"Plate {name} must be positive, got {value}")

    @property
    def pos(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    @property
    def is_cube(self) -> bool:
        return self.width == self.depth == self.height

    def draw(self, ctx: DrawContext) -> None:
        ctx.push()
        try:
            ctx.translate(self.x, self.y, self.z)
            ctx.fill(self.color)
            ctx.no_stroke()
            ctx.box(self.width, self.depth, self.height)
        finally:
            ctx.pop()


@dataclass(frozen=True)
class VerticalLine:
    """A thin square-section post hanging from an anchor point.

    The post's nominal z is one end of it; it extends ``height`` units
    toward -z, so draw() offsets the box center by -height/2.
    """

    x: float
    y: float
    z: float
    color: Color
    height: float = LINE_HEIGHT
    width: float = LINE_THICKNESS

    def __post_init__(self):
        if self.height <= 0 or self.width <= 0:
            raise ValueError(
                f"VerticalLine extents must be positive, got "
                f"height={self.height}, width={self.width}"
            )

    @property
    def anchor(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def draw(self, ctx: DrawContext) -> None:
        ctx.push()
        try:
            ctx.translate(self.x, self.y, self.z - self.height / 2)
            ctx.fill(self.color)
            ctx.no_stroke()
            ctx.box(self.width, self.width, self.height)
        finally:
            ctx.pop()
