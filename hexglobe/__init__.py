"""HexGlobe package: the H3 resolution-0 grid as a navigable 3D globe.

Import constants FIRST so logging and environment overrides are in place
before any other module logs.
"""

from hexglobe import constants as _constants  # noqa: F401

from hexglobe.builder import GlobeBuilder
from hexglobe.camera import FlyCameraController, OrbitCameraController
from hexglobe.geometry import build_mesh
from hexglobe.models import GeoPoint, MeshBuffer
from hexglobe.projection import GeodeticProjector, project
