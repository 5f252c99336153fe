"""Drawing backends for the plate scene.

Entities draw through a small immediate-mode interface (DrawContext):
push/pop a translation scope, translate, set fill, disable stroke, and
emit an axis-aligned box. Two implementations:

  - RecordingCanvas: keeps every call and the resolved world position of
    every box. Used in tests and for describing a frame.
  - MjvSceneCanvas: appends box geoms to a MuJoCo MjvScene. Works with
    both ``viewer.user_scn`` (interactive) and ``Renderer.scene``
    (offscreen), since both are plain MjvScene buffers.

Scene units map to MuJoCo world coordinates as
    world = (x, -y, z) / units_per_meter
which mirrors y and keeps +z up. Support lines hang from the plates toward
-z and the scatter band sits among them, below the composition. The mirror
turns the authored y-down screen layout into a right-handed Z-up world.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

import mujoco
import numpy as np

from plate_scene.palette import Color

Vec3 = tuple[float, float, float]

_IDENTITY_MAT = np.eye(3).flatten()


class CanvasError(RuntimeError):
    """The backend cannot honor a drawing call."""


class DrawContext(Protocol):
    """Immediate-mode drawing interface consumed by Plate / VerticalLine."""

    def background(self, color: Color) -> None: ...

    def fill(self, color: Color) -> None: ...

    def no_stroke(self) -> None: ...

    def push(self) -> None: ...

    def pop(self) -> None: ...

    def translate(self, x: float, y: float, z: float) -> None: ...

    def box(self, width: float, depth: float, height: float) -> None: ...


class _TransformStack:
    """Translation-only transform stack shared by both canvases."""

    def __init__(self):
        self._offset = np.zeros(3)
        self._saved: list[np.ndarray] = []

    @property
    def depth(self) -> int:
        return len(self._saved)

    @property
    def offset(self) -> Vec3:
        return (float(self._offset[0]), float(self._offset[1]), float(self._offset[2]))

    def push(self):
        self._saved.append(self._offset.copy())

    def pop(self):
        if not self._saved:
            raise CanvasError("pop() without matching push()")
        self._offset = self._saved.pop()

    def translate(self, x: float, y: float, z: float):
        self._offset = self._offset + np.array([x, y, z], dtype=float)

    def reset(self):
        self._offset = np.zeros(3)
        self._saved.clear()


# ---------------------------------------------------------------------------
# Recording backend
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DrawCall:
    name: str
    args: tuple = ()


@dataclass(frozen=True)
class BoxCall:
    """A resolved box: center in scene units after all translations."""

    pos: Vec3
    size: Vec3  # (width, depth, height)
    color: Color | None
    stroke: bool


@dataclass
class RecordingCanvas:
    """DrawContext that records instead of rasterizing."""

    calls: list[DrawCall] = field(default_factory=list)
    boxes: list[BoxCall] = field(default_factory=list)
    background_color: Color | None = None

    def __post_init__(self):
        self._stack = _TransformStack()
        self._fill: Color | None = None
        self._stroke = True

    @property
    def stack_depth(self) -> int:
        return self._stack.depth

    def background(self, color: Color) -> None:
        self.calls.append(DrawCall("background", (color,)))
        self.background_color = color

    def fill(self, color: Color) -> None:
        self.calls.append(DrawCall("fill", (color,)))
        self._fill = color

    def no_stroke(self) -> None:
        self.calls.append(DrawCall("no_stroke"))
        self._stroke = False

    def push(self) -> None:
        self.calls.append(DrawCall("push"))
        self._stack.push()

    def pop(self) -> None:
        self.calls.append(DrawCall("pop"))
        self._stack.pop()

    def translate(self, x: float, y: float, z: float) -> None:
        self.calls.append(DrawCall("translate", (x, y, z)))
        self._stack.translate(x, y, z)

    def box(self, width: float, depth: float, height: float) -> None:
        self.calls.append(DrawCall("box", (width, depth, height)))
        self.boxes.append(
            BoxCall(
                pos=self._stack.offset,
                size=(width, depth, height),
                color=self._fill,
                stroke=self._stroke,
            )
        )

    def call_names(self) -> list[str]:
        return [c.name for c in self.calls]


# ---------------------------------------------------------------------------
# MuJoCo backend
# ---------------------------------------------------------------------------


def scene_to_world(p: Vec3, units_per_meter: float) -> np.ndarray:
    """Scene units -> MuJoCo world meters (see module docstring)."""
    x, y, z = p
    return np.array([x, -y, z], dtype=float) / units_per_meter


class MjvSceneCanvas:
    """DrawContext that writes box geoms into a MuJoCo MjvScene.

    Call begin_frame() before drawing and end_frame() after. begin_frame()
    drops the geoms drawn last frame (anything already in the buffer when
    the canvas was created, e.g. model geoms in a Renderer scene, is kept).

    Background changes are written into a flat skybox texture when
    ``model`` and ``skybox_texid`` are given; ``texture_dirty`` tells the
    host to re-upload it.
    """

    def __init__(
        self,
        scn: mujoco.MjvScene,
        units_per_meter: float = 100.0,
        model: mujoco.MjModel | None = None,
        skybox_texid: int = -1,
    ):
        self.scn = scn
        self.units_per_meter = units_per_meter
        self.model = model
        self.skybox_texid = skybox_texid
        self.texture_dirty = False
        self._base_ngeom = scn.ngeom
        self._stack = _TransformStack()
        self._rgba = np.ones(4, dtype=np.float32)
        self._background: Color | None = None

    @property
    def drawn(self) -> int:
        """Geoms emitted since the last begin_frame()."""
        return self.scn.ngeom - self._base_ngeom

    def begin_frame(self):
        self.scn.ngeom = self._base_ngeom
        self._stack.reset()

    def end_frame(self):
        if self._stack.depth != 0:
            depth = self._stack.depth
            self._stack.reset()
            raise CanvasError(
                f"Unbalanced transform stack at end of frame (depth={depth})"
            )

    # -- DrawContext --------------------------------------------------------

    def background(self, color: Color) -> None:
        if color == self._background:
            return
        self._background = color
        if self.model is None or self.skybox_texid < 0:
            return
        tid = self.skybox_texid
        adr = int(self.model.tex_adr[tid])
        nchannel = int(self.model.tex_nchannel[tid])
        npixel = int(self.model.tex_width[tid]) * int(self.model.tex_height[tid])
        pixel = np.round(np.asarray(color[:nchannel]) * 255).astype(np.uint8)
        self.model.tex_data[adr : adr + npixel * nchannel] = np.tile(pixel, npixel)
        self.texture_dirty = True

    def fill(self, color: Color) -> None:
        self._rgba = np.asarray(color, dtype=np.float32)

    def no_stroke(self) -> None:
        # MjvScene boxes never carry an outline
        pass

    def push(self) -> None:
        self._stack.push()

    def pop(self) -> None:
        self._stack.pop()

    def translate(self, x: float, y: float, z: float) -> None:
        self._stack.translate(x, y, z)

    def box(self, width: float, depth: float, height: float) -> None:
        if self.scn.ngeom >= self.scn.maxgeom:
            raise CanvasError(f"MjvScene is full ({self.scn.maxgeom} geoms)")
        size = np.array([width, depth, height], dtype=float)
        half = size / (2 * self.units_per_meter)
        pos = scene_to_world(self._stack.offset, self.units_per_meter)
        mujoco.mjv_initGeom(
            self.scn.geoms[self.scn.ngeom],
            mujoco.mjtGeom.mjGEOM_BOX,
            half,
            pos,
            _IDENTITY_MAT,
            self._rgba,
        )
        self.scn.ngeom += 1
