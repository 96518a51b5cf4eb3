"""Configuration constants, environment overrides, and logging setup."""

import os
import pathlib
import logging

from dotenv import load_dotenv

from .errors import ConfigError

# Load environment variables
load_dotenv()


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    if raw in ("1", "true", "yes", "on"):
        return True
    if raw in ("0", "false", "no", "off"):
        return False
    raise ConfigError(f"{name} must be a boolean flag, got {raw!r}")


# ── Geodesy ─────────────────────────────────────────────────────────────
# WGS84 reference ellipsoid
WGS84_A = 6378137.0
WGS84_F = 1.0 / 298.257223563
WGS84_E2 = WGS84_F * (2.0 - WGS84_F)

GEODETIC_CRS = "EPSG:4979"   # WGS84 lat/lon/ellipsoidal height
GEOCENTRIC_CRS = "EPSG:4978"  # WGS84 ECEF

# Raw ECEF metres (~1e6-1e7) are divided by this to keep renderer floats sane.
SCALE_DIVISOR = _env_float("HEXGLOBE_SCALE_DIVISOR", 1_000_000.0)
if SCALE_DIVISOR <= 0:
    raise ConfigError(f"HEXGLOBE_SCALE_DIVISOR must be positive, got {SCALE_DIVISOR}")

# Ellipsoid height (metres) the cell polygons are placed at
DEFAULT_ALTITUDE = _env_float("HEXGLOBE_ALTITUDE", 1.0)

# ECEF is Z-up, the renderer is Y-up
RENDER_Y_UP = _env_bool("HEXGLOBE_Y_UP", True)

# ── H3 grid ─────────────────────────────────────────────────────────────
BASE_RESOLUTION = 0
BASE_CELL_COUNT = 122
SUPPORTED_ARITIES = frozenset({5, 6})  # pentagon, hexagon

# ── Mesh attributes ─────────────────────────────────────────────────────
VERTEX_NORMAL = (0.0, 1.0, 0.0)
VERTEX_UV = (1.0, 1.0)

# ── Materials and lighting ──────────────────────────────────────────────
CELL_COLOR = [0.2, 0.2, 0.3, 1.0]
BACKGROUND_COLOR = [0.05, 0.05, 0.08, 1.0]
AMBIENT_LIGHT = [0.3, 0.3, 0.3]
LIGHT_POSITION = (4.0, 8.0, 4.0)
LIGHT_INTENSITY = 4.0

# ── Camera ──────────────────────────────────────────────────────────────
CAMERA_EYE = (-2.0, 5.5, 5.0)
CAMERA_FOCUS = (0.0, 0.0, 0.0)
CAMERA_YFOV_DEG = 45.0
ZOOM_SENSITIVITY = 0.2
MIN_ORBIT_RADIUS = 0.05

ORBIT_BUTTON = "left"
PAN_BUTTON = "right"

FLY_TOGGLE_KEY = "m"
FLY_SPEED = 2.0               # units per second
FLY_SENSITIVITY = 0.002       # radians per pixel
FLY_PITCH_LIMIT_DEG = 89.0

# ── Window ──────────────────────────────────────────────────────────────
WINDOW_SIZE = (1280, 960)

# Configure base paths
BASE_DIR = pathlib.Path(__file__).parent.parent.absolute()
OUTPUT_DIR = pathlib.Path(os.environ.get("HEXGLOBE_OUTPUT_DIR", BASE_DIR / "output"))

# Configure logging
LOG_LEVEL = os.environ.get("HEXGLOBE_LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=LOG_LEVEL, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)
