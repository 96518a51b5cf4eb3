"""Geodetic (lat, lon, height) to Earth-centred Cartesian coordinates.

The heavy lifting is done by pyproj on the WGS84 ellipsoid
(EPSG:4979 -> EPSG:4978).  ``geodetic_to_ecef`` is the same transform in
closed form and is kept for cross-checking and for callers that want a
plain numpy path.
"""

import logging
import threading

import numpy as np
from pyproj import Transformer

from .constants import (GEOCENTRIC_CRS, GEODETIC_CRS, RENDER_Y_UP,
                        SCALE_DIVISOR, WGS84_A, WGS84_E2)

logger = logging.getLogger(__name__)

# pyproj transformers must not be shared between threads
_local = threading.local()


def _transformer() -> Transformer:
    t = getattr(_local, "transformer", None)
    if t is None:
        t = Transformer.from_crs(GEODETIC_CRS, GEOCENTRIC_CRS, always_xy=True)
        _local.transformer = t
    return t


def geodetic_to_ecef(lat, lon, altitude=0.0):
    """Closed-form WGS84 geodetic -> ECEF, metres.

    Accepts scalars or numpy arrays (degrees).
    """
    lat_r = np.radians(lat)
    lon_r = np.radians(lon)
    sin_lat = np.sin(lat_r)
    cos_lat = np.cos(lat_r)
    n = WGS84_A / np.sqrt(1.0 - WGS84_E2 * sin_lat * sin_lat)
    x = (n + altitude) * cos_lat * np.cos(lon_r)
    y = (n + altitude) * cos_lat * np.sin(lon_r)
    z = ((1.0 - WGS84_E2) * n + altitude) * sin_lat
    return x, y, z


def to_render_frame(xyz: np.ndarray) -> np.ndarray:
    """Rotate Z-up ECEF into the renderer's Y-up frame: (x, y, z) -> (x, z, -y).

    This is a rotation (-90 deg about X), so triangle winding survives.
    """
    xyz = np.asarray(xyz, dtype=np.float64)
    return np.stack([xyz[..., 0], xyz[..., 2], -xyz[..., 1]], axis=-1)


class GeodeticProjector:
    """Project geodetic samples to scaled Cartesian coordinates.

    scale_divisor: raw ECEF metres are divided by this before returning.
    y_up: rotate the result into a Y-up frame for the renderer.
    """

    def __init__(self, scale_divisor: float = SCALE_DIVISOR, y_up: bool = False):
        if scale_divisor <= 0:
            raise ValueError(f"scale_divisor must be positive, got {scale_divisor}")
        self.scale_divisor = float(scale_divisor)
        self.y_up = y_up

    def __repr__(self):
        return (f"GeodeticProjector(scale_divisor={self.scale_divisor:g}, "
                f"y_up={self.y_up})")

    def project(self, lat: float, lon: float, altitude: float = 0.0) -> tuple:
        """Single sample -> (x, y, z) floats."""
        x, y, z = _transformer().transform(lon, lat, altitude)
        xyz = np.array([x, y, z], dtype=np.float64) / self.scale_divisor
        if self.y_up:
            xyz = to_render_frame(xyz)
        return float(xyz[0]), float(xyz[1]), float(xyz[2])

    def project_many(self, lats, lons, altitude: float = 0.0) -> np.ndarray:
        """Vectorised projection; returns an (n, 3) array."""
        lats = np.asarray(lats, dtype=np.float64)
        lons = np.asarray(lons, dtype=np.float64)
        heights = np.full(lats.shape, altitude, dtype=np.float64)
        x, y, z = _transformer().transform(lons, lats, heights)
        xyz = np.column_stack([x, y, z]) / self.scale_divisor
        if self.y_up:
            xyz = to_render_frame(xyz)
        return xyz


# Module-level default in the plain ECEF frame
_default = GeodeticProjector()


def project(lat: float, lon: float, altitude: float = 0.0) -> tuple:
    """Project with the default divisor in the ECEF frame."""
    return _default.project(lat, lon, altitude)


def render_projector() -> GeodeticProjector:
    """Projector configured for the viewer (divisor and axis from the environment)."""
    return GeodeticProjector(scale_divisor=SCALE_DIVISOR, y_up=RENDER_Y_UP)
