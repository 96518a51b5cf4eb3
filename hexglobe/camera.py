"""Camera navigation: pan/orbit/zoom around a focus point, plus free fly.

Both controllers consume one :class:`~hexglobe.models.InputSnapshot` per
tick.  Mouse motion is in window pixels with +y pointing down the screen.
Quaternions are ``(w, x, y, z)`` as in ``trimesh.transformations``.
"""

import logging
import math
from typing import Iterable, Optional, Sequence

import numpy as np
from trimesh import transformations as tf

from .constants import (FLY_PITCH_LIMIT_DEG, FLY_SENSITIVITY, FLY_SPEED,
                        FLY_TOGGLE_KEY, MIN_ORBIT_RADIUS, ORBIT_BUTTON,
                        PAN_BUTTON, ZOOM_SENSITIVITY)
from .models import (CameraPose, FlyCameraState, InputSnapshot,
                     OrbitCameraState, Projection)
from .transforms import AXIS_X, AXIS_Y, look_at_matrix

logger = logging.getLogger(__name__)

IDENTITY = np.array([1.0, 0.0, 0.0, 0.0])


def _qmul(a, b) -> np.ndarray:
    q = tf.quaternion_multiply(a, b)
    return q / np.linalg.norm(q)


def _rotate(q, v) -> np.ndarray:
    return tf.quaternion_matrix(q)[:3, :3] @ v


# ── Orbit camera ────────────────────────────────────────────────────────

class OrbitCameraController:
    """Turntable camera rig: orbit with the orbit button, pan with the pan
    button, zoom with the scroll wheel.

    The camera always sits ``radius`` units behind ``focus`` along its own
    local +Z, so one transform stands in for a rotating parent with an
    offset child.
    """

    def __init__(self, state: Optional[OrbitCameraState] = None,
                 rotation: Sequence[float] = IDENTITY,
                 translation: Optional[Sequence[float]] = None,
                 orbit_button: str = ORBIT_BUTTON,
                 pan_button: str = PAN_BUTTON):
        self.state = state or OrbitCameraState()
        self.state.focus = np.asarray(self.state.focus, dtype=np.float64)
        self.state.radius = max(float(self.state.radius), MIN_ORBIT_RADIUS)
        self.rotation = np.array(rotation, dtype=np.float64)
        if translation is None:
            translation = self.state.focus + _rotate(
                self.rotation, np.array([0.0, 0.0, self.state.radius]))
        self.translation = np.asarray(translation, dtype=np.float64)
        self.orbit_button = orbit_button
        self.pan_button = pan_button

    @classmethod
    def looking_at(cls, eye, focus=(0.0, 0.0, 0.0), **kwargs):
        """Camera at *eye* facing *focus*, world up +Y."""
        eye = np.asarray(eye, dtype=np.float64)
        focus = np.asarray(focus, dtype=np.float64)
        rotation = tf.quaternion_from_matrix(look_at_matrix(eye, focus))
        radius = float(np.linalg.norm(eye - focus))
        # Closer than the floor: let the constructor back the eye off
        translation = eye if radius >= MIN_ORBIT_RADIUS else None
        state = OrbitCameraState(focus=focus, radius=radius)
        return cls(state=state, rotation=rotation, translation=translation,
                   **kwargs)

    def __repr__(self):
        return (f"OrbitCameraController(focus={self.state.focus.tolist()}, "
                f"radius={self.state.radius:.3f}, "
                f"upside_down={self.state.upside_down})")

    @property
    def pose(self) -> CameraPose:
        return CameraPose(position=tuple(self.translation.tolist()),
                          orientation=tuple(self.rotation.tolist()))

    def up_vector(self) -> np.ndarray:
        return _rotate(self.rotation, AXIS_Y)

    def orbit_deltas(self, rotation_move, viewport) -> tuple:
        """Pixel drag -> (yaw, pitch) radians; a full window width is one turn."""
        width, height = viewport
        if width <= 0 or height <= 0:
            return 0.0, 0.0
        delta_x = rotation_move[0] / width * math.pi * 2.0
        if self.state.upside_down:
            delta_x = -delta_x
        delta_y = rotation_move[1] / height * math.pi
        return delta_x, delta_y

    def update(self, snapshot: InputSnapshot,
               projection: Projection = Projection()) -> bool:
        """Apply one tick of input.  Returns True if the transform moved."""
        motion = np.asarray(snapshot.mouse_motion, dtype=np.float64)
        rotation_move = np.zeros(2)
        pan = np.zeros(2)
        width, height = snapshot.viewport
        # A minimised window has no pixels to map drags onto
        if width > 0 and height > 0:
            if self.orbit_button in snapshot.buttons_held:
                rotation_move += motion
            elif self.pan_button in snapshot.buttons_held:
                pan += motion
        scroll = snapshot.scroll

        # Only on press/release, so a drag across the pole keeps its direction
        if snapshot.button_changed(self.orbit_button):
            self.state.upside_down = bool(self.up_vector()[1] <= 0.0)

        state = self.state
        any_motion = False
        if rotation_move @ rotation_move > 0.0:
            any_motion = True
            delta_x, delta_y = self.orbit_deltas(rotation_move, snapshot.viewport)
            yaw = tf.quaternion_about_axis(-delta_x, AXIS_Y)
            pitch = tf.quaternion_about_axis(-delta_y, AXIS_X)
            self.rotation = _qmul(yaw, self.rotation)    # world Y
            self.rotation = _qmul(self.rotation, pitch)  # local X
        elif pan @ pan > 0.0:
            any_motion = True
            pan *= np.array([projection.yfov * projection.aspect_ratio,
                             projection.yfov]) / np.array([width, height])
            right = _rotate(self.rotation, AXIS_X) * -pan[0]
            up = _rotate(self.rotation, AXIS_Y) * pan[1]
            state.focus = state.focus + (right + up) * state.radius
        elif abs(scroll) > 0.0:
            any_motion = True
            state.radius -= scroll * state.radius * ZOOM_SENSITIVITY
            state.radius = max(state.radius, MIN_ORBIT_RADIUS)

        if any_motion:
            self.translation = state.focus + _rotate(
                self.rotation, np.array([0.0, 0.0, state.radius]))
        return any_motion


# ── Fly camera ──────────────────────────────────────────────────────────

FLY_KEYS = {
    'w': np.array([0.0, 0.0, -1.0]),
    's': np.array([0.0, 0.0, 1.0]),
    'a': np.array([-1.0, 0.0, 0.0]),
    'd': np.array([1.0, 0.0, 0.0]),
}
FLY_UP_KEY = 'space'
FLY_DOWN_KEY = 'lshift'


class FlyCameraController:
    """Free-look camera: mouse turns, WASD moves, Space/Shift rise and sink.

    ``toggle_key`` flips ``state.enabled``; a disabled camera ignores input.
    """

    def __init__(self, state: Optional[FlyCameraState] = None,
                 toggle_key: str = FLY_TOGGLE_KEY,
                 speed: float = FLY_SPEED,
                 sensitivity: float = FLY_SENSITIVITY):
        self.state = state or FlyCameraState()
        self.state.position = np.asarray(self.state.position, dtype=np.float64)
        self.toggle_key = toggle_key
        self.speed = speed
        self.sensitivity = sensitivity

    @classmethod
    def looking_at(cls, eye, target=(0.0, 0.0, 0.0), **kwargs):
        eye = np.asarray(eye, dtype=np.float64)
        d = np.asarray(target, dtype=np.float64) - eye
        norm = np.linalg.norm(d)
        if norm < 1e-12:
            return cls(state=FlyCameraState(position=eye), **kwargs)
        d = d / norm
        state = FlyCameraState(position=eye,
                               yaw=math.atan2(-d[0], -d[2]),
                               pitch=math.asin(max(-1.0, min(1.0, d[1]))))
        return cls(state=state, **kwargs)

    def __repr__(self):
        return (f"FlyCameraController(position={self.state.position.tolist()}, "
                f"enabled={self.state.enabled})")

    @property
    def rotation(self) -> np.ndarray:
        yaw = tf.quaternion_about_axis(self.state.yaw, AXIS_Y)
        pitch = tf.quaternion_about_axis(self.state.pitch, AXIS_X)
        return _qmul(yaw, pitch)

    @property
    def pose(self) -> CameraPose:
        return CameraPose(position=tuple(self.state.position.tolist()),
                          orientation=tuple(self.rotation.tolist()))

    def toggle(self) -> bool:
        self.state.enabled = not self.state.enabled
        logger.info(f"Fly camera {'enabled' if self.state.enabled else 'disabled'}")
        return self.state.enabled

    def update(self, snapshot: InputSnapshot) -> bool:
        if self.toggle_key in snapshot.keys_pressed:
            self.toggle()
        if not self.state.enabled:
            return False

        state = self.state
        moved = False
        dx, dy = snapshot.mouse_motion
        if dx or dy:
            limit = math.radians(FLY_PITCH_LIMIT_DEG)
            state.yaw -= dx * self.sensitivity
            state.pitch = max(-limit, min(limit, state.pitch - dy * self.sensitivity))
            moved = True

        local = np.zeros(3)
        for key, direction in FLY_KEYS.items():
            if key in snapshot.keys_held:
                local += direction
        velocity = _rotate(self.rotation, local)
        if FLY_UP_KEY in snapshot.keys_held:
            velocity += AXIS_Y
        if FLY_DOWN_KEY in snapshot.keys_held:
            velocity -= AXIS_Y
        norm = np.linalg.norm(velocity)
        if norm > 0.0 and snapshot.dt > 0.0:
            state.position = state.position + velocity / norm * self.speed * snapshot.dt
            moved = True
        return moved


def update_cameras(controllers: Iterable, snapshot: InputSnapshot,
                   projection: Projection = Projection()) -> int:
    """Run one navigation tick for every active camera; returns how many moved."""
    moved = 0
    for controller in controllers:
        if isinstance(controller, OrbitCameraController):
            changed = controller.update(snapshot, projection)
        else:
            changed = controller.update(snapshot)
        moved += int(changed)
    return moved
