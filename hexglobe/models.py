"""Data classes shared by the mesh pipeline and the camera controllers."""

from dataclasses import dataclass, field
from typing import Tuple

import numpy as np
import trimesh
from trimesh import transformations as tf

from .constants import WINDOW_SIZE

Vec2 = Tuple[float, float]
Vec3 = Tuple[float, float, float]


@dataclass(frozen=True)
class GeoPoint:
    latitude: float   # degrees
    longitude: float  # degrees


# Ordered pentagon/hexagon ring, winding as supplied by the grid provider.
CellBoundary = Tuple[GeoPoint, ...]


@dataclass(frozen=True)
class ProjectedVertex:
    position: Vec3
    normal: Vec3
    uv: Vec2


@dataclass(frozen=True)
class MeshBuffer:
    """Triangle-list mesh for a single grid cell.

    ``indices`` is flat: every consecutive triple is one triangle.
    """
    vertices: Tuple[ProjectedVertex, ...]
    indices: Tuple[int, ...] = ()

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3

    @property
    def is_empty(self) -> bool:
        """True when there is nothing to draw (no triangles)."""
        return not self.indices

    def positions(self) -> np.ndarray:
        return np.array([v.position for v in self.vertices],
                        dtype=np.float64).reshape(-1, 3)

    def normals(self) -> np.ndarray:
        return np.array([v.normal for v in self.vertices],
                        dtype=np.float64).reshape(-1, 3)

    def uvs(self) -> np.ndarray:
        return np.array([v.uv for v in self.vertices],
                        dtype=np.float64).reshape(-1, 2)

    def faces(self) -> np.ndarray:
        return np.array(self.indices, dtype=np.int64).reshape(-1, 3)

    def to_trimesh(self) -> trimesh.Trimesh:
        """Hand the buffer to trimesh without merging or reordering vertices."""
        return trimesh.Trimesh(
            vertices=self.positions(),
            faces=self.faces(),
            vertex_normals=self.normals(),
            process=False,
        )


@dataclass
class OrbitCameraState:
    focus: np.ndarray = field(default_factory=lambda: np.zeros(3))
    radius: float = 5.0
    upside_down: bool = False


@dataclass(frozen=True)
class CameraPose:
    """Camera position plus orientation as a unit quaternion ``(w, x, y, z)``."""
    position: Vec3
    orientation: Tuple[float, float, float, float]

    def matrix(self) -> np.ndarray:
        """4x4 camera-to-world transform (camera looks down its local -Z)."""
        m = tf.quaternion_matrix(self.orientation)
        m[:3, 3] = self.position
        return m


@dataclass(frozen=True)
class Projection:
    yfov: float = np.radians(45.0)  # radians
    aspect_ratio: float = 1.0

    @classmethod
    def for_viewport(cls, yfov: float, viewport: Vec2) -> "Projection":
        """Aspect ratio from a window size; a collapsed window keeps 1.0."""
        width, height = viewport
        if width <= 0 or height <= 0:
            return cls(yfov=yfov)
        return cls(yfov=yfov, aspect_ratio=width / height)


@dataclass(frozen=True)
class InputSnapshot:
    """Everything the input layer saw during one tick.

    Produced by :meth:`hexglobe.input.InputCollector.drain`; consumed once.
    """
    mouse_motion: Vec2 = (0.0, 0.0)
    scroll: float = 0.0
    buttons_held: frozenset = frozenset()
    buttons_pressed: frozenset = frozenset()
    buttons_released: frozenset = frozenset()
    keys_held: frozenset = frozenset()
    keys_pressed: frozenset = frozenset()
    viewport: Vec2 = (float(WINDOW_SIZE[0]), float(WINDOW_SIZE[1]))
    dt: float = 0.0

    def button_changed(self, button: str) -> bool:
        return button in self.buttons_pressed or button in self.buttons_released


@dataclass
class FlyCameraState:
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    yaw: float = 0.0    # radians about world +Y
    pitch: float = 0.0  # radians about local +X
    enabled: bool = True
