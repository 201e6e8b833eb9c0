"""
pose comparison: how far is the live hand from the reference mudra?

both poses are anchored at their own wrist (index 0) before comparing, so where the
hand sits in the frame doesn't matter, only its shape does.

math:
  P, R ∈ R^N×3  : live pose, reference pose
  P' = P - P[0] : anchored live pose (same for R')
  e_i = ||P'_i - R'_i||₂     per-landmark error
  E   = (1/N) Σ e_i          average error
  acc = max(0, 1 - E / E_max) with E_max = 0.2

incomparable inputs (empty or different lengths):
  - compute_average_error returns inf, which accuracy_score maps to 0
  - compute_per_landmark_error returns None, so the overlay falls back to default colours
"""

import math
from typing import List, Optional

import numpy as np

from .landmarks import as_landmark_array


# ============================================================
# configuration constants
# ============================================================

MAX_ERROR = 0.2       # average error at which accuracy hits 0
                      # world landmarks are in meters, so ~20cm

GOOD_ERROR = 0.03     # per-landmark error below this is "good" (green)
POOR_ERROR = 0.05     # per-landmark error above this is "poor" (red)
                      # anything in between is "fair" (yellow)

INCOMPARABLE = math.inf


# ============================================================
# normalization
# ============================================================

def normalize_pose(landmarks) -> np.ndarray:
    """translate pose so the anchor landmark (index 0) sits at the origin."""
    arr = as_landmark_array(landmarks)
    if arr.shape[0] == 0:
        return arr
    return arr - arr[0]


def _landmark_distances(user_pose, reference_pose) -> Optional[np.ndarray]:
    user = as_landmark_array(user_pose)
    reference = as_landmark_array(reference_pose)

    if user.shape[0] == 0 or reference.shape[0] == 0:
        return None
    if user.shape[0] != reference.shape[0]:
        return None

    diff = normalize_pose(user) - normalize_pose(reference)
    return np.linalg.norm(diff, axis=1)


# ============================================================
# comparison
# ============================================================

def compute_average_error(user_pose, reference_pose, verbose: bool = False) -> float:
    """
    mean euclidean distance between anchored poses.

    args:
      user_pose: live landmarks [N, 3]
      reference_pose: target landmarks [N, 3] (or a ReferencePose)
      verbose: print the value (debugging only)

    returns:
      average error (>= 0), or inf if the poses can't be compared
    """
    distances = _landmark_distances(user_pose, reference_pose)
    if distances is None:
        return INCOMPARABLE

    average_error = float(distances.mean())
    if verbose:
        print(f"[debug] avg error: {average_error:.4f}")
    return average_error


def compute_per_landmark_error(user_pose, reference_pose) -> Optional[np.ndarray]:
    """
    euclidean distance per landmark between anchored poses.

    returns:
      errors [N] in input order, or None if the poses can't be compared
    """
    return _landmark_distances(user_pose, reference_pose)


# ============================================================
# scoring
# ============================================================

def accuracy_score(error: float, max_error: float = MAX_ERROR) -> float:
    """map average error to [0, 1]. error 0 -> 1.0, error >= max_error -> 0.0."""
    # error is never negative so no upper clamp needed
    return max(0.0, 1.0 - error / max_error)


def grade_landmark_error(error: float) -> str:
    """bucket a single landmark error into good / fair / poor."""
    if error < GOOD_ERROR:
        return "good"
    if error > POOR_ERROR:
        return "poor"
    return "fair"


def grade_landmark_errors(errors) -> List[str]:
    if errors is None:
        return []
    return [grade_landmark_error(float(e)) for e in errors]
