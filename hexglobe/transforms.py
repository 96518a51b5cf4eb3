"""Pose-matrix helpers shared by the camera rig and the scene lights."""

import numpy as np

AXIS_X = np.array([1.0, 0.0, 0.0])
AXIS_Y = np.array([0.0, 1.0, 0.0])
AXIS_Z = np.array([0.0, 0.0, 1.0])


def look_at_matrix(eye, target, up=(0.0, 1.0, 0.0)) -> np.ndarray:
    """Pose matrix for an object at *eye* whose local -Z points at *target*.

    When *eye* and *target* coincide there is no direction to face, so the
    rotation is left as identity (looking down world -Z).
    """
    eye = np.asarray(eye, dtype=np.float64)
    pose = np.eye(4)
    pose[:3, 3] = eye
    fwd = np.asarray(target, dtype=np.float64) - eye
    dist = np.linalg.norm(fwd)
    if dist < 1e-12:
        return pose
    fwd = fwd / dist
    r = np.cross(fwd, np.asarray(up, dtype=np.float64))
    if np.linalg.norm(r) < 1e-9:
        # Looking straight along up; any perpendicular will do
        r = np.cross(fwd, AXIS_Z)
    r = r / np.linalg.norm(r)
    u = np.cross(r, fwd)
    pose[:3, 0] = r
    pose[:3, 1] = u
    pose[:3, 2] = -fwd
    return pose
