"""
test suite for session plotting.
"""

import sys
import tempfile
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from mudra_coach.core.session_recorder import SessionRecorder, load_session
from mudra_coach.programs.plot_session import plot_session


def test_plot_session_writes_png():
    print("\n[test] session plot...")

    with tempfile.TemporaryDirectory() as tmpdir:
        session_path = Path(tmpdir) / "session.h5"
        recorder = SessionRecorder(str(session_path), session_id="plot_test")
        for i in range(20):
            recorder.record_frame("pataka", 0.5 + i / 50.0, 0.001, 0.002, timestamp=10.0 + i / 30.0)
        recorder.save()

        output = plot_session(load_session(session_path), Path(tmpdir) / "figures" / "session.png")
        assert output.exists(), "png not created"
        assert output.stat().st_size > 0

    print("[pass] session plot")
