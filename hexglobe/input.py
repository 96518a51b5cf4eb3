"""Accumulate window events between ticks and drain them as one snapshot."""

import logging

from .constants import WINDOW_SIZE
from .models import InputSnapshot

logger = logging.getLogger(__name__)


class InputCollector:
    """Event sink for the windowing layer.

    Motion and scroll are summed until :meth:`drain`, which hands back an
    immutable :class:`InputSnapshot` and clears the per-tick buffers.  Held
    buttons and keys persist across drains; press/release edges do not.
    """

    def __init__(self, viewport=WINDOW_SIZE):
        self.viewport = (float(viewport[0]), float(viewport[1]))
        self.buttons_held = set()
        self.keys_held = set()
        self._reset()

    def _reset(self):
        self._dx = 0.0
        self._dy = 0.0
        self._scroll = 0.0
        self._buttons_pressed = set()
        self._buttons_released = set()
        self._keys_pressed = set()

    def resize(self, width, height):
        self.viewport = (float(width), float(height))

    def on_motion(self, dx, dy):
        """Pointer delta in pixels, +y down."""
        self._dx += dx
        self._dy += dy

    def on_scroll(self, dy):
        self._scroll += dy

    def on_button_press(self, button):
        self.buttons_held.add(button)
        self._buttons_pressed.add(button)

    def on_button_release(self, button):
        self.buttons_held.discard(button)
        self._buttons_released.add(button)

    def on_key_press(self, key):
        self.keys_held.add(key)
        self._keys_pressed.add(key)

    def on_key_release(self, key):
        self.keys_held.discard(key)

    def drain(self, dt=0.0) -> InputSnapshot:
        snapshot = InputSnapshot(
            mouse_motion=(self._dx, self._dy),
            scroll=self._scroll,
            buttons_held=frozenset(self.buttons_held),
            buttons_pressed=frozenset(self._buttons_pressed),
            buttons_released=frozenset(self._buttons_released),
            keys_held=frozenset(self.keys_held),
            keys_pressed=frozenset(self._keys_pressed),
            viewport=self.viewport,
            dt=dt,
        )
        self._reset()
        return snapshot
