# lamport/visualizer.py
import logging
import os

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

logger = logging.getLogger(__name__)


def plot_event_timeline(events, out_path="logs/timeline.png", max_events=None):
    # Plots wall time (x) against logical time (y), one point per recorded event
    events = list(events)
    if not events:
        logger.warning("No events to plot")
        return None
    if max_events:
        events = events[:max_events]

    t0 = min(e.wall_time for e in events)
    wall_s = [(e.wall_time - t0).total_seconds() for e in events]
    logical = [e.logical_time for e in events]

    plt.figure(figsize=(10, 6))
    plt.plot(wall_s, logical, 'o-', label='logical_time')
    for x, y, e in zip(wall_s, logical, events):
        plt.text(x, y + 0.1, e.label, fontsize=8, va='bottom')

    plt.xlabel("Wall time (s, relative)")
    plt.ylabel("Lamport time")
    plt.title("Event timeline: wall time vs Lamport time")
    plt.legend()
    plt.tight_layout()
    out_dir = os.path.dirname(out_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    plt.savefig(out_path)
    plt.close()
    logger.info("Saved plot to %s", out_path)
    return out_path
