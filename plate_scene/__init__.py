"""Procedural plate scene: colored plates on support lines, with scatter boxes.

The layout is authored; support lines come from each plate's footprint
corners and scatter boxes are sampled around those lines. Drawing goes
through a small immediate-mode interface so the same scene renders into
a MuJoCo viewer, an offscreen image, or a recording test double.

Usage:
    from plate_scene import create_scene, RecordingCanvas

    scene = create_scene(seed=42)    # lines -> plates -> scatter boxes
    canvas = RecordingCanvas()
    scene.render(canvas)             # 44 box draws
"""

from plate_scene.canvas import DrawContext, MjvSceneCanvas, RecordingCanvas
from plate_scene.composer import Scene, create_scene, describe_scene, scene_id
from plate_scene.primitives import Plate, VerticalLine

__all__ = [
    "Scene",
    "create_scene",
    "describe_scene",
    "scene_id",
    "Plate",
    "VerticalLine",
    "DrawContext",
    "RecordingCanvas",
    "MjvSceneCanvas",
]
