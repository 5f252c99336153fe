"""MuJoCo world and camera for hosting the plate scene.

The world holds no bodies of its own: just a light, a flat skybox in the
palette background color, and visual settings sized for the scene. All
scene geometry is drawn per frame through MjvSceneCanvas.
"""

from __future__ import annotations

import math

import mujoco
import numpy as np

from plate_scene.canvas import scene_to_world
from plate_scene.config import CameraConfig, Config
from plate_scene.palette import Color

SKYBOX_NAME = "background"

_WORLD_XML = """
<mujoco model="plate_scene">
  <visual>
    <global offwidth="{offwidth}" offheight="{offheight}"/>
    <headlight ambient="0.45 0.45 0.45" diffuse="0.5 0.5 0.5" specular="0.1 0.1 0.1"/>
    <map znear="0.01" zfar="100"/>
  </visual>
  <statistic center="0 0 0" extent="{extent}"/>
  <asset>
    <texture name="{skybox}" type="skybox" builtin="flat"
             rgb1="{rgb}" rgb2="{rgb}" width="32" height="32"/>
  </asset>
  <worldbody>
    <light pos="0 0 10" dir="0 0 -1" diffuse="0.4 0.4 0.4"/>
  </worldbody>
</mujoco>
"""


def build_world_xml(background: Color, config: Config) -> str:
    rgb = " ".join(f"{c:.4f}" for c in background[:3])
    # Scene spans roughly 800 units across
    extent = 800.0 / config.view.units_per_meter
    return _WORLD_XML.format(
        offwidth=config.view.width,
        offheight=config.view.height,
        extent=f"{extent:.3f}",
        skybox=SKYBOX_NAME,
        rgb=rgb,
    )


def build_world(
    background: Color, config: Config
) -> tuple[mujoco.MjModel, mujoco.MjData, int]:
    """Compile the empty world. Returns (model, data, skybox_texid)."""
    model = mujoco.MjModel.from_xml_string(build_world_xml(background, config))
    data = mujoco.MjData(model)
    mujoco.mj_forward(model, data)
    texid = mujoco.mj_name2id(model, mujoco.mjtObj.mjOBJ_TEXTURE, SKYBOX_NAME)
    return model, data, texid


def orbit_from_eye(
    camera: CameraConfig, units_per_meter: float
) -> tuple[np.ndarray, float, float, float]:
    """Convert an eye/target camera into MuJoCo free-camera parameters.

    MuJoCo's free camera looks along
        (cos(el) cos(az), cos(el) sin(az), sin(el))
    from lookat - distance * forward. World up is always +Z, the same
    axis as scene +z after scene_to_world, so an eye above the plates
    gives a negative elevation.

    Returns:
        (lookat, distance, azimuth_deg, elevation_deg)
    """
    eye = scene_to_world(camera.eye, units_per_meter)
    target = scene_to_world(camera.target, units_per_meter)
    offset = target - eye
    distance = float(np.linalg.norm(offset))
    if distance == 0:
        raise ValueError("Camera eye and target coincide")
    fx, fy, fz = offset / distance
    azimuth = math.degrees(math.atan2(fy, fx))
    elevation = math.degrees(math.asin(fz))
    return target, distance, azimuth, elevation


def apply_camera(cam: mujoco.MjvCamera, camera: CameraConfig, units_per_meter: float):
    """Point a free MjvCamera using an eye/target camera config."""
    lookat, distance, azimuth, elevation = orbit_from_eye(camera, units_per_meter)
    cam.type = mujoco.mjtCamera.mjCAMERA_FREE
    cam.lookat[:] = lookat
    cam.distance = distance
    cam.azimuth = azimuth
    cam.elevation = elevation
