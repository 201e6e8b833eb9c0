"""Pose assessment core: comparison, stability, reference poses and session recording."""

from .landmarks import Landmark3D, as_landmark_array
from .comparator import (
    MAX_ERROR,
    normalize_pose,
    compute_average_error,
    compute_per_landmark_error,
    accuracy_score,
    grade_landmark_error,
    grade_landmark_errors,
)
from .stability import WINDOW_DURATION, StabilitySample, StabilityTracker
from .reference import ReferencePose, ReferenceLibrary
from .session_recorder import SessionRecorder, load_session
from .coach import FrameAssessment, MudraCoach

__all__ = [
    "Landmark3D",
    "as_landmark_array",
    "MAX_ERROR",
    "normalize_pose",
    "compute_average_error",
    "compute_per_landmark_error",
    "accuracy_score",
    "grade_landmark_error",
    "grade_landmark_errors",
    "WINDOW_DURATION",
    "StabilitySample",
    "StabilityTracker",
    "ReferencePose",
    "ReferenceLibrary",
    "SessionRecorder",
    "load_session",
    "FrameAssessment",
    "MudraCoach",
]
