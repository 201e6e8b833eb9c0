"""
practice session recording to hdf5.

one record per assessed frame:
  - timestamp (seconds since session start)
  - target mudra name
  - accuracy score [0-1]
  - wrist stability (std x, std y)
"""

import time
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import h5py
import numpy as np

from .comparator import MAX_ERROR
from .stability import WINDOW_DURATION


class SessionRecorder:
    """
    records per-frame assessment results to hdf5 file.

    data format:
      /frames/timestamps    [N] float64     seconds since session start
      /frames/targets       [N] string      target mudra name
      /frames/accuracy      [N] float32     accuracy score [0-1]
      /frames/stability_x   [N] float32     wrist std dev (x)
      /frames/stability_y   [N] float32     wrist std dev (y)

      attributes             session metadata
    """

    def __init__(self, output_path: str, session_id: Optional[str] = None):
        """
        initialize recorder.

        args:
          output_path: path to hdf5 file (e.g., "sessions/session_001.h5")
          session_id: optional session identifier (auto-generated if None)
        """
        self.output_path = Path(output_path)
        self.session_id = session_id or datetime.now().strftime("session_%Y%m%d_%H%M%S")

        self.output_path.parent.mkdir(parents=True, exist_ok=True)

        # reference time for all timestamps (seconds)
        self.start_time = time.perf_counter()

        self.timestamps: List[float] = []
        self.targets: List[str] = []
        self.accuracy: List[float] = []
        self.stability_x: List[float] = []
        self.stability_y: List[float] = []

        print(f"[info] session recorder initialized")
        print(f"  output: {self.output_path}")
        print(f"  session: {self.session_id}")

    def _get_timestamp(self) -> float:
        """get current timestamp (seconds since session start)."""
        return time.perf_counter() - self.start_time

    def __len__(self) -> int:
        return len(self.timestamps)

    def record_frame(
        self,
        target: str,
        accuracy: float,
        stability_x: float,
        stability_y: float,
        timestamp: Optional[float] = None,
    ):
        """
        buffer one assessed frame.

        args:
          target: name of the reference pose being practiced
          accuracy: accuracy score [0-1]
          stability_x, stability_y: wrist std dev over the stability window
          timestamp: seconds since session start (None = now)
        """
        if timestamp is None:
            timestamp = self._get_timestamp()

        self.timestamps.append(float(timestamp))
        self.targets.append(target)
        self.accuracy.append(float(accuracy))
        self.stability_x.append(float(stability_x))
        self.stability_y.append(float(stability_y))

    def get_stats(self) -> dict:
        """get current recording statistics."""
        num_frames = len(self.timestamps)
        duration = self.timestamps[-1] - self.timestamps[0] if num_frames > 1 else 0.0

        return {
            'num_frames': num_frames,
            'duration_sec': duration,
            'mean_accuracy': float(np.mean(self.accuracy)) if num_frames else 0.0,
            'mean_stability_x': float(np.mean(self.stability_x)) if num_frames else 0.0,
            'mean_stability_y': float(np.mean(self.stability_y)) if num_frames else 0.0,
            'frame_rate_hz': (num_frames - 1) / duration if duration > 0 else 0,
        }

    def save(self):
        """write all buffered frames to hdf5 file."""
        print(f"[info] saving session to {self.output_path}...")

        try:
            stats = self.get_stats()
            str_dtype = h5py.string_dtype(encoding='utf-8')

            with h5py.File(self.output_path, 'w') as f:
                frames = f.create_group('frames')
                frames.create_dataset('timestamps', data=np.array(self.timestamps, dtype=np.float64))
                frames.create_dataset('targets',
                    data=np.array(self.targets, dtype=object),
                    dtype=str_dtype
                )
                frames.create_dataset('accuracy', data=np.array(self.accuracy, dtype=np.float32))
                frames.create_dataset('stability_x', data=np.array(self.stability_x, dtype=np.float32))
                frames.create_dataset('stability_y', data=np.array(self.stability_y, dtype=np.float32))

                # metadata attributes
                f.attrs['session_id'] = self.session_id
                f.attrs['date'] = datetime.now().strftime("%Y-%m-%d")
                f.attrs['time'] = datetime.now().strftime("%H:%M:%S")
                f.attrs['num_frames'] = stats['num_frames']
                f.attrs['duration_sec'] = stats['duration_sec']
                f.attrs['max_error'] = MAX_ERROR
                f.attrs['window_sec'] = WINDOW_DURATION

            print(f"[success] session saved!")
            print(f"  frames: {stats['num_frames']} @ {stats['frame_rate_hz']:.1f}hz")
            print(f"  duration: {stats['duration_sec']:.1f}s")
            print(f"  mean accuracy: {stats['mean_accuracy'] * 100:.1f}%")

        except Exception as e:
            print(f"[error] failed to save session: {e}")
            raise


def load_session(path) -> dict:
    """
    load a recorded session from hdf5.

    returns:
      dict with keys timestamps, targets, accuracy, stability_x, stability_y, metadata
    """
    with h5py.File(path, 'r') as f:
        targets = f['frames/targets'][:]
        data = {
            'timestamps': f['frames/timestamps'][:],
            'targets': [t.decode('utf-8') if isinstance(t, bytes) else str(t) for t in targets],
            'accuracy': f['frames/accuracy'][:],
            'stability_x': f['frames/stability_x'][:],
            'stability_y': f['frames/stability_y'][:],
            'metadata': dict(f.attrs),
        }

    return data
