"""
landmark value types and conversion to numpy arrays.

every core function takes landmark sequences in whatever shape the caller has:
  - list of Landmark3D / (x, y, z) tuples
  - list of {"x", "y", "z"} dicts (the reference pose json shape)
  - anything with a .landmarks attribute (ReferencePose)
  - numpy array [N, 3]

and works on a float64 [N, 3] array internally. index 0 is the anchor (wrist).
"""

from typing import NamedTuple

import numpy as np


class Landmark3D(NamedTuple):
    """single 3d landmark position (world coords in meters, or normalized units)."""

    x: float
    y: float
    z: float

    @classmethod
    def from_any(cls, point) -> "Landmark3D":
        """build from a tuple, dict, Landmark3D or mediapipe landmark object."""
        if isinstance(point, cls):
            return point
        if isinstance(point, dict):
            return cls(float(point["x"]), float(point["y"]), float(point["z"]))
        if hasattr(point, "x") and hasattr(point, "y") and hasattr(point, "z"):
            return cls(float(point.x), float(point.y), float(point.z))
        x, y, z = point
        return cls(float(x), float(y), float(z))

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "z": self.z}


def as_landmark_array(landmarks) -> np.ndarray:
    """
    convert a landmark sequence to a float64 [N, 3] array.

    empty input gives a [0, 3] array. raises ValueError if the result isn't [N, 3].
    """
    if landmarks is None:
        return np.zeros((0, 3), dtype=np.float64)

    # ReferencePose and friends
    if hasattr(landmarks, "landmarks"):
        landmarks = landmarks.landmarks

    if isinstance(landmarks, np.ndarray):
        arr = landmarks.astype(np.float64)
    else:
        points = list(landmarks)
        if len(points) == 0:
            return np.zeros((0, 3), dtype=np.float64)
        arr = np.array([Landmark3D.from_any(p) for p in points], dtype=np.float64)

    if arr.size == 0:
        return np.zeros((0, 3), dtype=np.float64)

    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(f"expected landmarks with shape [N, 3], got {arr.shape}")

    return arr


def to_landmark_tuple(landmarks) -> tuple:
    """convert a landmark sequence to an immutable tuple of Landmark3D."""
    arr = as_landmark_array(landmarks)
    return tuple(Landmark3D(float(x), float(y), float(z)) for x, y, z in arr)
