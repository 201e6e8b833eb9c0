"""
live mudra coach: camera -> mediapipe -> accuracy + stability overlay.

keys:
  c  capture current hand as a new reference (asks for a name in the terminal)
  n  cycle to the next saved reference
  r  start / stop recording the session to hdf5
  q  quit

usage:
  python -m mudra_coach.programs.coach --library references --reference pataka
"""

import argparse
import sys
import time
from datetime import datetime
from pathlib import Path

import cv2

from mudra_coach.core.coach import FrameAssessment, MudraCoach
from mudra_coach.core.reference import ReferenceLibrary, file_stem
from mudra_coach.core.session_recorder import SessionRecorder
from mudra_coach.core.tracker import draw_hud, draw_landmarks_on_frame, get_landmarks_world


PROCESSING_INTERVAL = 0.033   # seconds between assessed frames (~30 fps)
WINDOW_NAME = "mudra coach"


def next_reference(library: ReferenceLibrary, coach: MudraCoach):
    """select the saved reference after the current one (wraps around)."""
    names = library.list_names()
    if not names:
        print("[warn] no saved references")
        return
    current = file_stem(coach.target.name) if coach.target else None
    idx = (names.index(current) + 1) % len(names) if current in names else 0
    coach.set_target(library.load(names[idx]))


def capture_reference(library: ReferenceLibrary, coach: MudraCoach, name: str, world_landmarks):
    """
    save the current hand as a new reference and practice it.

    returns:
      the new pose, or None if the name was rejected or the file couldn't be written
    """
    try:
        pose = coach.capture_reference(name, world_landmarks)
        library.save(pose)
    except (ValueError, OSError) as e:
        print(f"[warn] reference not saved: {e}")
        return None
    coach.set_target(pose)
    return pose


def run(args):
    library = ReferenceLibrary(args.library)
    coach = MudraCoach()

    if args.reference:
        coach.set_target(library.load(args.reference))

    print(f"[info] saved references: {', '.join(library.list_names()) or 'none'}")

    cap = cv2.VideoCapture(args.camera)
    if not cap.isOpened():
        print("[error] camera failed to open")
        return 1

    print("[ready] show your hand to the camera")
    print("[ready] c=capture  n=next reference  r=record  q=quit\n")

    last_processed = 0.0
    assessment = FrameAssessment()
    image_landmarks = None
    world_landmarks = None
    handedness = None

    try:
        while True:
            ret, frame = cap.read()
            if not ret or frame is None:
                break

            now = time.monotonic()
            # throttle: the detector and the assessment don't need every frame
            if now - last_processed >= PROCESSING_INTERVAL:
                last_processed = now
                detection = get_landmarks_world(frame)
                if detection is not None:
                    image_landmarks = detection.image_landmarks
                    world_landmarks = detection.world_landmarks
                    handedness = f"{detection.handedness} ({detection.confidence:.2f})"
                else:
                    image_landmarks, world_landmarks, handedness = None, None, None
                assessment = coach.process_frame(world_landmarks, now)

            draw_landmarks_on_frame(frame, image_landmarks, assessment.landmark_errors)
            draw_hud(frame, assessment, recording=coach.is_recording, handedness=handedness)
            cv2.imshow(WINDOW_NAME, frame)

            key = cv2.waitKey(1) & 0xFF
            if key == ord('q'):
                break
            elif key == ord('c'):
                if world_landmarks is None:
                    print("[warn] no hand to capture")
                    continue
                capture_reference(library, coach, input("reference name: "), world_landmarks)
            elif key == ord('n'):
                next_reference(library, coach)
            elif key == ord('r'):
                if coach.is_recording:
                    coach.stop_recording()
                else:
                    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
                    output = Path(args.sessions) / f"session_{stamp}.h5"
                    coach.start_recording(SessionRecorder(str(output)))

    finally:
        if coach.is_recording:
            coach.stop_recording()
        cap.release()
        cv2.destroyAllWindows()
        print("camera closed")

    return 0


def main():
    print("=" * 60)
    print("mudra coach - live accuracy + stability")
    print("=" * 60)

    parser = argparse.ArgumentParser(description="Mudra Coach - live hand pose practice")
    parser.add_argument("--library", type=str, default="references",
                        help="Directory of saved reference poses (json)")
    parser.add_argument("--reference", type=str, default=None,
                        help="Name of the reference pose to practice")
    parser.add_argument("--sessions", type=str, default="sessions",
                        help="Directory for recorded sessions (hdf5)")
    parser.add_argument("--camera", type=int, default=0,
                        help="Camera index")
    args = parser.parse_args()

    sys.exit(run(args))


if __name__ == "__main__":
    main()
