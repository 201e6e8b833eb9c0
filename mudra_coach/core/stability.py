"""
wrist stability (tremor) over a sliding time window.

keeps the last WINDOW_DURATION seconds of one tracked point and reports the
population standard deviation of its x and y coordinates. lower = steadier hand.

z is left out on purpose: monocular depth is much noisier than x/y and
tremor along the viewing plane is what we care about.

not thread-safe. if more than one thread feeds the same tracker, the caller has
to serialize access.
"""

from collections import deque
from typing import NamedTuple, Tuple

import numpy as np

from .landmarks import Landmark3D


# ============================================================
# configuration constants
# ============================================================

WINDOW_DURATION = 2.0     # seconds of history kept in the buffer


class StabilitySample(NamedTuple):
    timestamp: float
    position: Landmark3D


class StabilityTracker:
    """
    sliding-window buffer of (timestamp, position) samples.

    eviction:
      - normal case (timestamps non-decreasing): drop every sample before the first
        one with timestamp >= latest - window_duration
      - fallback (no sample passes the cutoff, or an out-of-order timestamp left the
        buffer unsorted): filter the whole buffer against the newest timestamp

    out-of-order samples are accepted, never rejected.
    """

    def __init__(self, window_duration: float = WINDOW_DURATION):
        if window_duration <= 0:
            raise ValueError(f"window_duration must be positive, got {window_duration}")
        self.window_duration = float(window_duration)
        self._buffer: deque = deque()
        self._ordered = True  # buffer timestamps are non-decreasing

    def __len__(self) -> int:
        return len(self._buffer)

    @property
    def samples(self) -> Tuple[StabilitySample, ...]:
        """snapshot of the buffered samples, oldest first."""
        return tuple(self._buffer)

    def reset(self):
        """drop all samples."""
        self._buffer.clear()
        self._ordered = True

    def add_sample(self, position, timestamp: float):
        """
        buffer a new position and evict samples older than the window.

        args:
          position: tracked point (x, y, z), e.g. the wrist landmark
          timestamp: seconds, expected non-decreasing
        """
        timestamp = float(timestamp)
        if self._buffer and timestamp < self._buffer[-1].timestamp:
            self._ordered = False

        self._buffer.append(StabilitySample(timestamp, Landmark3D.from_any(position)))

        cutoff = timestamp - self.window_duration
        first_index = None
        if self._ordered:
            for i, sample in enumerate(self._buffer):
                if sample.timestamp >= cutoff:
                    first_index = i
                    break

        if first_index is not None:
            for _ in range(first_index):
                self._buffer.popleft()
            return

        # fallback: full filter pass relative to the newest timestamp
        kept = [s for s in self._buffer if s.timestamp >= cutoff]
        self._buffer = deque(kept)
        self._ordered = all(
            a.timestamp <= b.timestamp for a, b in zip(kept, kept[1:])
        )

    def compute_stability(self) -> Tuple[float, float]:
        """
        population std of x and y over the buffered samples.

        returns:
          (std_x, std_y), or (0.0, 0.0) with fewer than 2 samples
        """
        if len(self._buffer) < 2:
            return 0.0, 0.0

        xy = np.array([[s.position.x, s.position.y] for s in self._buffer], dtype=np.float64)
        std = xy.std(axis=0)  # ddof=0, divide by N
        return float(std[0]), float(std[1])
