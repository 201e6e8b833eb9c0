"""
per-frame coaching pipeline: detector output in, assessment out.

each frame with a hand:
  1. wrist (landmark 0) -> stability tracker -> (std x, std y)
  2. if a target mudra is loaded: average error -> accuracy, per-landmark errors
  3. if recording and a target is loaded: append the frame to the session, timed on
     the same frame clock as the stability tracker (relative to the first recorded frame)

everything is synchronous. the live program calls process_frame() from its capture
loop; tests call it directly.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .comparator import accuracy_score, compute_average_error, compute_per_landmark_error
from .landmarks import as_landmark_array
from .reference import ReferencePose
from .session_recorder import SessionRecorder
from .stability import StabilityTracker


WRIST_INDEX = 0


@dataclass
class FrameAssessment:
    """what the overlay needs to draw one frame."""

    target: Optional[str] = None
    error: float = float("inf")
    accuracy: float = 0.0
    landmark_errors: Optional[np.ndarray] = None
    stability: Tuple[float, float] = (0.0, 0.0)
    hand_detected: bool = False


class MudraCoach:
    """
    holds the target mudra, stability tracker and (optional) session recorder.

    one instance per live session, used from a single thread.
    """

    def __init__(
        self,
        stability_tracker: Optional[StabilityTracker] = None,
        recorder: Optional[SessionRecorder] = None,
    ):
        self.stability_tracker = stability_tracker or StabilityTracker()
        self.recorder = recorder
        self.target: Optional[ReferencePose] = None
        self.stability: Tuple[float, float] = (0.0, 0.0)
        self._recording_start: Optional[float] = None  # frame clock at first recorded frame

    @property
    def is_recording(self) -> bool:
        return self.recorder is not None

    def set_target(self, pose: ReferencePose):
        self.target = pose
        print(f"[info] target mudra: {pose.name}")

    def clear_target(self):
        self.target = None

    def capture_reference(self, name: str, world_landmarks) -> ReferencePose:
        """turn the current hand into a new reference pose (not saved, not selected)."""
        return ReferencePose.from_landmarks(name, world_landmarks)

    def start_recording(self, recorder: SessionRecorder):
        self.recorder = recorder
        self._recording_start = None
        print(f"[info] recording session {recorder.session_id}")

    def stop_recording(self) -> Optional[SessionRecorder]:
        """stop recording, save the session and hand back the recorder."""
        recorder, self.recorder = self.recorder, None
        if recorder is not None:
            recorder.save()
            print("[info] stopped recording")
        return recorder

    def process_frame(self, world_landmarks, timestamp: float) -> FrameAssessment:
        """
        assess one detector frame.

        args:
          world_landmarks: [21, 3] landmarks of the first hand, or None if no hand
          timestamp: frame time in seconds (monotonic)

        returns:
          FrameAssessment for the overlay
        """
        if self.recorder is not None and self._recording_start is None:
            self._recording_start = float(timestamp)

        landmarks = as_landmark_array(world_landmarks)
        if landmarks.shape[0] == 0:
            return FrameAssessment(
                target=self.target.name if self.target else None,
                stability=self.stability,
            )

        self.stability_tracker.add_sample(landmarks[WRIST_INDEX], timestamp)
        self.stability = self.stability_tracker.compute_stability()

        if self.target is None:
            return FrameAssessment(stability=self.stability, hand_detected=True)

        error = compute_average_error(landmarks, self.target)
        assessment = FrameAssessment(
            target=self.target.name,
            error=error,
            accuracy=accuracy_score(error),
            landmark_errors=compute_per_landmark_error(landmarks, self.target),
            stability=self.stability,
            hand_detected=True,
        )

        if self.recorder is not None:
            self.recorder.record_frame(
                target=self.target.name,
                accuracy=assessment.accuracy,
                stability_x=self.stability[0],
                stability_y=self.stability[1],
                timestamp=timestamp - self._recording_start,
            )

        return assessment
