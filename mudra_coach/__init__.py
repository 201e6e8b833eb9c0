"""
Mudra Coach - hand gesture practice with live accuracy and stability feedback

Compares the live hand (21 mediapipe world landmarks) against a saved reference
mudra and tracks wrist tremor over a short sliding window.

Pieces:
- core.comparator: wrist-anchored pose error + accuracy score
- core.stability: sliding-window wrist std dev (tremor)
- core.reference: named reference poses saved as json
- core.session_recorder: per-frame results to hdf5
- programs.coach: live camera coach
- programs.plot_session: plots of a recorded session
"""

__version__ = "0.1.0"
__license__ = "MIT"

__all__ = [
    "__version__",
]
