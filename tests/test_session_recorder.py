"""
test suite for session recording (hdf5 format).
"""

import sys
import tempfile
from pathlib import Path

import h5py
import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from mudra_coach.core.session_recorder import SessionRecorder, load_session


def test_session_recorder():
    """test session recorder (hdf5 writing and format)."""
    print("\n[test] session recorder...")

    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = Path(tmpdir) / "sessions" / "test_session.h5"

        recorder = SessionRecorder(str(output_path), session_id="test_session")

        # simulate 30 frames @ 30fps
        for i in range(30):
            recorder.record_frame(
                target="pataka",
                accuracy=i / 30.0,
                stability_x=0.001 * i,
                stability_y=0.002 * i,
                timestamp=i / 30.0,
            )
        assert len(recorder) == 30

        stats = recorder.get_stats()
        assert stats['num_frames'] == 30
        assert stats['duration_sec'] == pytest.approx(29 / 30.0)
        assert stats['frame_rate_hz'] == pytest.approx(30.0)

        recorder.save()
        assert output_path.exists(), "hdf5 file not created"

        with h5py.File(output_path, 'r') as f:
            assert 'frames' in f, "missing frames group"
            for name in ['timestamps', 'targets', 'accuracy', 'stability_x', 'stability_y']:
                assert name in f['frames'], f"missing frames/{name}"

            assert f['frames/accuracy'].shape == (30,)
            assert f['frames/targets'][0].decode('utf-8') == 'pataka'
            assert f.attrs['session_id'] == 'test_session'
            assert f.attrs['num_frames'] == 30
            assert f.attrs['max_error'] == pytest.approx(0.2)
            assert f.attrs['window_sec'] == pytest.approx(2.0)

        data = load_session(output_path)
        assert data['targets'][-1] == 'pataka'
        assert np.allclose(data['stability_y'][:3], [0.0, 0.002, 0.004])
        assert data['metadata']['session_id'] == 'test_session'

    print("[pass] session recorder")


def test_empty_session_saves():
    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = Path(tmpdir) / "empty.h5"
        recorder = SessionRecorder(str(output_path))

        assert recorder.session_id.startswith("session_")
        assert recorder.get_stats()['num_frames'] == 0

        recorder.save()
        data = load_session(output_path)
        assert len(data['timestamps']) == 0
        assert data['targets'] == []


def test_default_timestamp_is_relative():
    with tempfile.TemporaryDirectory() as tmpdir:
        recorder = SessionRecorder(str(Path(tmpdir) / "s.h5"))
        recorder.record_frame("pataka", 0.5, 0.0, 0.0)
        assert 0.0 <= recorder.timestamps[0] < 5.0
