"""Interactive plate scene viewer.

Opens the MuJoCo viewer on an empty world and redraws the plate scene
into the viewer's user scene every frame. Each scene gets a
deterministic seed so it can be recreated.

Controls:
    Mouse drag:  Orbit / pan / zoom (handled by MuJoCo viewer)
    Space:       Compose a new scene with a fresh seed
    Backspace:   Print the current scene description
    Q/Escape:    Quit (handled by MuJoCo viewer)
"""

from __future__ import annotations

import logging
import time

import mujoco
import mujoco.viewer
import numpy as np

from plate_scene import MjvSceneCanvas, create_scene, describe_scene
from plate_scene.config import Config
from plate_scene.world import apply_camera, build_world

log = logging.getLogger(__name__)

# GLFW key codes
KEY_SPACE = 32
KEY_BACKSPACE = 259


def run_scene_view(seed: int | None = None, config: Config | None = None):
    """Open the MuJoCo viewer and draw the plate scene every frame."""
    config = config or Config()
    if seed is None:
        seed = int(np.random.default_rng().integers(0, 2**32))

    scene = create_scene(seed=seed)
    m, d, texid = build_world(scene.palette.background, config)

    print("Controls: drag=orbit, Space=new scene, Backspace=describe")
    print(describe_scene(scene))
    print()

    pending: list[int] = []

    def on_key(keycode):
        if keycode == KEY_SPACE:
            pending.append(int(np.random.default_rng().integers(0, 2**32)))
        elif keycode == KEY_BACKSPACE:
            print(describe_scene(scene))

    frame_time = 1.0 / config.view.fps

    with mujoco.viewer.launch_passive(
        m,
        d,
        key_callback=on_key,
        show_left_ui=config.view.show_ui,
        show_right_ui=config.view.show_ui,
    ) as viewer:
        with viewer.lock():
            apply_camera(viewer.cam, config.camera, config.view.units_per_meter)
        canvas = MjvSceneCanvas(
            viewer.user_scn,
            units_per_meter=config.view.units_per_meter,
            model=m,
            skybox_texid=texid,
        )

        while viewer.is_running():
            frame_start = time.time()

            if pending:
                scene = create_scene(seed=pending.pop())
                pending.clear()
                print(describe_scene(scene))

            with viewer.lock():
                canvas.begin_frame()
                scene.render(canvas)
                canvas.end_frame()
            if canvas.texture_dirty:
                viewer.update_texture(texid)
                canvas.texture_dirty = False

            viewer.sync()
            remaining = frame_time - (time.time() - frame_start)
            if remaining > 0:
                time.sleep(remaining)

    log.info("Viewer closed (last seed=%s)", scene.seed)
