"""
wraps google's mediapipe hand tracking to get 21 3d keypoints from camera frames,
and draws the hand overlay colour-coded by per-landmark error.
"""

from typing import NamedTuple, Optional, Sequence

import cv2
import numpy as np

from .comparator import grade_landmark_error


# mediapipe hand topology
HAND_CONNECTIONS = [
    (0, 1), (1, 2), (2, 3), (3, 4),  # Thumb
    (0, 5), (5, 6), (6, 7), (7, 8),  # Index finger
    (0, 9), (9, 10), (10, 11), (11, 12),  # Middle finger
    (0, 13), (13, 14), (14, 15), (15, 16),  # Ring finger
    (0, 17), (17, 18), (18, 19), (19, 20),  # Pinky
    (5, 9), (9, 13), (13, 17)  # Palm connections
]

# bgr colours
BONE_COLOR = (0, 255, 0)
GRADE_COLORS = {
    "good": (0, 200, 0),      # green
    "fair": (0, 220, 255),    # yellow
    "poor": (0, 0, 255),      # red
}

# default colouring by finger when there's nothing to compare against
FINGER_COLORS = [
    (0, 0, 255),              # wrist: red
    (255, 0, 0),              # thumb: blue
    (0, 200, 0),              # index: green
    (0, 220, 255),            # middle: yellow
    (0, 165, 255),            # ring: orange
    (200, 0, 150),            # pinky: purple
]


class HandDetection(NamedTuple):
    image_landmarks: np.ndarray   # [21, 3] normalized 0-1, for drawing
    world_landmarks: np.ndarray   # [21, 3] meters, for assessment
    handedness: str               # "Left" / "Right"
    confidence: float             # handedness score [0-1]


_hands = None


def _get_hands():
    """create one mediapipe instance on first use (reusing it is much faster)."""
    global _hands
    if _hands is None:
        import mediapipe as mp

        _hands = mp.solutions.hands.Hands(
            static_image_mode=False,  # video mode (not single images)
            max_num_hands=1,  # only track one hand
            model_complexity=1,  # balance between speed and accuracy
            min_detection_confidence=0.5,
            min_tracking_confidence=0.5,
        )
    return _hands


def get_landmarks_world(frame_bgr: np.ndarray) -> Optional[HandDetection]:
    """
    find hand in image and return image + world keypoints, or none if no hand.

    world coordinates are metric (meters) with the origin near the wrist, which is
    what reference poses are captured and compared in.
    """
    if frame_bgr is None or frame_bgr.size == 0:
        return None

    # mediapipe neural network expects rgb
    rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
    results = _get_hands().process(rgb)

    if not (results.multi_hand_landmarks and results.multi_hand_world_landmarks):
        return None

    handedness, confidence = "Unknown", 0.0
    if results.multi_handedness:
        category = results.multi_handedness[0].classification[0]
        handedness, confidence = category.label, category.score

    image_lm = results.multi_hand_landmarks[0].landmark
    world_lm = results.multi_hand_world_landmarks[0].landmark

    return HandDetection(
        image_landmarks=np.array([[p.x, p.y, p.z] for p in image_lm], dtype=np.float32),
        world_landmarks=np.array([[p.x, p.y, p.z] for p in world_lm], dtype=np.float32),
        handedness=handedness,
        confidence=float(confidence),
    )


def landmark_color(index: int, errors: Optional[Sequence[float]] = None) -> tuple:
    """bgr colour for landmark `index`: by error grade if errors given, else by finger."""
    if errors is not None and index < len(errors):
        return GRADE_COLORS[grade_landmark_error(float(errors[index]))]
    if index == 0:
        return FINGER_COLORS[0]
    finger = (index - 1) // 4 + 1
    return FINGER_COLORS[finger] if finger < len(FINGER_COLORS) else (255, 255, 255)


def to_pixels(landmarks: np.ndarray, width: int, height: int) -> np.ndarray:
    """normalized [N, 3] landmarks -> integer pixel coords [N, 2]."""
    return (np.asarray(landmarks)[:, :2] * (width, height)).astype(int)


def draw_landmarks_on_frame(
    frame_bgr: np.ndarray,
    landmarks: np.ndarray,
    errors: Optional[Sequence[float]] = None,
) -> None:
    """
    draw hand skeleton with keypoints coloured by error grade. modifies frame in-place.

    args:
      frame_bgr: image frame
      landmarks: [21, 3] normalized image landmarks (0-1)
      errors: optional [21] per-landmark errors, colours dots green/yellow/red
    """
    if landmarks is None:
        return

    h, w = frame_bgr.shape[:2]
    pixels = to_pixels(landmarks, w, h)
    visible = (pixels[:, 0] >= 0) & (pixels[:, 0] < w) & (pixels[:, 1] >= 0) & (pixels[:, 1] < h)

    for a, b in HAND_CONNECTIONS:
        if b < len(pixels) and visible[a] and visible[b]:
            cv2.line(frame_bgr, tuple(map(int, pixels[a])), tuple(map(int, pixels[b])), BONE_COLOR, 2)

    for i in np.flatnonzero(visible):
        center = tuple(map(int, pixels[i]))
        cv2.circle(frame_bgr, center, 6, landmark_color(int(i), errors), -1)
        cv2.circle(frame_bgr, center, 6, (255, 255, 255), 1)


def draw_hud(
    frame_bgr: np.ndarray,
    assessment,
    recording: bool = False,
    handedness: Optional[str] = None,
) -> None:
    """draw target, accuracy, stability and handedness text in the top-left corner."""
    lines = [f"target: {assessment.target or 'none'}"]
    if assessment.landmark_errors is not None:
        lines.append(f"accuracy: {int(assessment.accuracy * 100)}%")
    else:
        lines.append("accuracy: --")
    lines.append(f"stability x: {assessment.stability[0]:.4f}")
    lines.append(f"stability y: {assessment.stability[1]:.4f}")
    if handedness:
        lines.append(f"hand: {handedness}")
    if recording:
        lines.append("[rec]")

    for i, text in enumerate(lines):
        cv2.putText(frame_bgr, text, (10, 30 + 28 * i), cv2.FONT_HERSHEY_SIMPLEX,
                    0.7, (0, 255, 0), 2, cv2.LINE_AA)
