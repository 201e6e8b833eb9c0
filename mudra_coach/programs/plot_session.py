#!/usr/bin/env python3
"""
plot accuracy and wrist stability over a recorded practice session.

usage:
    python -m mudra_coach.programs.plot_session sessions/session_20251219_101500.h5
"""

import argparse
from pathlib import Path

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np

from mudra_coach.core.session_recorder import load_session


def plot_session(data: dict, output_path: Path) -> Path:
    """figure: accuracy (top) and stability x/y (bottom) against time."""
    t = np.asarray(data['timestamps'])
    if len(t) > 0:
        t = t - t[0]

    fig, (ax_acc, ax_stab) = plt.subplots(2, 1, figsize=(10, 6), sharex=True)

    ax_acc.plot(t, np.asarray(data['accuracy']) * 100, color='#2171b5', linewidth=1.5)
    ax_acc.set_ylabel('accuracy (%)', fontweight='bold')
    ax_acc.set_ylim(0, 100)
    ax_acc.grid(alpha=0.3)

    targets = sorted(set(data['targets']))
    title = data['metadata'].get('session_id', 'session')
    if targets:
        title = f"{title} ({', '.join(targets)})"
    ax_acc.set_title(title, fontsize=13, fontweight='bold', pad=10)

    ax_stab.plot(t, data['stability_x'], label='std x', color='#d94801', linewidth=1.2)
    ax_stab.plot(t, data['stability_y'], label='std y', color='#238b45', linewidth=1.2)
    ax_stab.set_xlabel('time (s)', fontweight='bold')
    ax_stab.set_ylabel('wrist std dev', fontweight='bold')
    ax_stab.legend(loc='upper right')
    ax_stab.grid(alpha=0.3)

    plt.tight_layout(pad=1.5)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    print(f"✓ {output_path.name}")
    return output_path


def main():
    parser = argparse.ArgumentParser(description="Plot a recorded mudra coach session")
    parser.add_argument("session", type=str, help="Path to session .h5 file")
    parser.add_argument("--output", type=str, default=None,
                        help="Output png (default: next to the session file)")
    args = parser.parse_args()

    session_path = Path(args.session)
    output = Path(args.output) if args.output else session_path.with_suffix('.png')

    data = load_session(session_path)
    print(f"[info] {len(data['timestamps'])} frames in {session_path.name}")
    plot_session(data, output)


if __name__ == "__main__":
    main()
