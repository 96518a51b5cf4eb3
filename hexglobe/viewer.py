"""pyrender glue: interactive window and offscreen rendering.

pyrender owns the window, GL context and event loop.  The viewer below
only translates pyglet events into :class:`InputCollector` calls and, once
per frame, drains them into the active camera controller.
"""

import logging
import math
import pathlib
import time

import numpy as np
from PIL import Image

from .camera import FlyCameraController, OrbitCameraController, update_cameras
from .constants import CAMERA_EYE, CAMERA_FOCUS, CAMERA_YFOV_DEG, WINDOW_SIZE
from .input import InputCollector
from .models import Projection
from .scene import SceneRepository

logger = logging.getLogger(__name__)

_MOUSE_BUTTONS = {1: 'left', 2: 'middle', 4: 'right'}


def default_controller(fly: bool = False):
    if fly:
        return FlyCameraController.looking_at(CAMERA_EYE, CAMERA_FOCUS)
    return OrbitCameraController.looking_at(CAMERA_EYE, CAMERA_FOCUS)


class _ControllerTrackball:  # pragma: no cover - needs a display
    """Stands in for pyrender's trackball; the pose comes from our controller."""

    def __init__(self, controller):
        self.controller = controller

    @property
    def pose(self):
        return self.controller.pose.matrix()

    def resize(self, size):
        pass

    def set_state(self, state):
        pass

    def down(self, point):
        pass

    def drag(self, point):
        pass

    def scroll(self, clicks):
        pass

    def rotate(self, azimuth, axis=None):
        pass


def run_viewer(scene: SceneRepository, fly: bool = False,
               window_size=WINDOW_SIZE):  # pragma: no cover - needs a display
    """Open a window on *scene* and block until it is closed."""
    import pyglet
    import pyrender

    pr_scene = scene.to_pyrender_scene()
    yfov = math.radians(CAMERA_YFOV_DEG)
    camera = pyrender.PerspectiveCamera(yfov=yfov)
    controller = default_controller(fly)
    pr_scene.add(camera, pose=controller.pose.matrix())

    class GlobeViewer(pyrender.Viewer):

        def _reset_view(self):
            self._trackball = _ControllerTrackball(controller)

        def on_draw(self):
            now = time.perf_counter()
            dt = now - self._last_tick
            self._last_tick = now
            snapshot = self._collector.drain(dt)
            update_cameras([controller], snapshot,
                           Projection.for_viewport(yfov, snapshot.viewport))
            super().on_draw()

        def on_resize(self, width, height):
            self._collector.resize(width, height)
            super().on_resize(width, height)

        def on_mouse_press(self, x, y, buttons, modifiers):
            self._collector.on_button_press(_MOUSE_BUTTONS.get(buttons, buttons))

        def on_mouse_release(self, x, y, button, modifiers):
            self._collector.on_button_release(_MOUSE_BUTTONS.get(button, button))

        def on_mouse_drag(self, x, y, dx, dy, buttons, modifiers):
            # pyglet's y axis points up the screen
            self._collector.on_motion(dx, -dy)

        def on_mouse_motion(self, x, y, dx, dy):
            if fly and controller.state.enabled:
                self._collector.on_motion(dx, -dy)

        def on_mouse_scroll(self, x, y, dx, dy):
            self._collector.on_scroll(dy)

        def on_key_press(self, symbol, modifiers):
            name = pyglet.window.key.symbol_string(symbol).lower()
            if name in ('q', 'escape'):
                self.on_close()
                return
            self._collector.on_key_press(name)
            if fly and name == controller.toggle_key:
                # toggle happens on the next tick; capture follows the new state
                self.set_exclusive_mouse(not controller.state.enabled)

        def on_key_release(self, symbol, modifiers):
            self._collector.on_key_release(
                pyglet.window.key.symbol_string(symbol).lower())

    GlobeViewer._collector = InputCollector(window_size)
    GlobeViewer._last_tick = time.perf_counter()

    logger.info(f"Opening viewer ({'fly' if fly else 'orbit'} camera)")
    GlobeViewer(pr_scene, viewport_size=window_size,
                use_raymond_lighting=False,
                window_title="HexGlobe")


def render_image(scene: SceneRepository, output_path, controller=None,
                 size=WINDOW_SIZE) -> str:
    """Render one frame offscreen and save it as a PNG."""
    import pyrender

    output_path = pathlib.Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    controller = controller or default_controller()

    pr_scene = scene.to_pyrender_scene()
    cam = pyrender.PerspectiveCamera(yfov=math.radians(CAMERA_YFOV_DEG),
                                     aspectRatio=size[0] / size[1])
    pr_scene.add(cam, pose=controller.pose.matrix())

    renderer = pyrender.OffscreenRenderer(*size)
    try:
        color, _ = renderer.render(pr_scene)
    finally:
        renderer.delete()
    Image.fromarray(np.asarray(color)).save(str(output_path))
    logger.info(f"Rendered {output_path}")
    return str(output_path)
