"""
Deterministic scenario runner for demo:
- replays the classic single-node scenario (local, local, msg@5, local, msg@4)
- runs a small three-node cluster exchanging messages in-process
- checks every node's log for ordering anomalies
- plots each node's timeline and writes a JSON summary
"""

import json
import logging
import os
import random

from lamport.checker import OrderingChecker
from lamport.recorder import EventRecorder
from lamport.simulation import Cluster
from lamport.visualizer import plot_event_timeline

logger = logging.getLogger(__name__)

OUT_DIR = os.path.join(os.path.dirname(__file__), "..", "logs")


def run_single_node():
    recorder = EventRecorder()
    recorder.record_local("p1-1", "Process 1: Start transaction")
    recorder.record_local("p1-2", "Process 1: Read from database")
    recorder.record_message(5, "Process 2: Update notification")
    recorder.record_local("p1-3", "Process 1: Complete transaction")
    recorder.record_message(4, "Process 3: Status check")
    return recorder


def run_cluster(steps=20, seed=42):
    rng = random.Random(seed)
    cluster = Cluster()
    for node_id in ["A", "B", "C"]:
        cluster.add_node(node_id)
    node_ids = list(cluster.nodes)
    for step in range(steps):
        src = rng.choice(node_ids)
        if rng.random() < 0.4:
            cluster.local(src, f"work {step}")
            continue
        dst = rng.choice([n for n in node_ids if n != src])
        cluster.send(src, dst, f"msg {step}")
    return cluster


def run_demo(out_dir=OUT_DIR, steps=20, seed=42):
    os.makedirs(out_dir, exist_ok=True)
    checker = OrderingChecker()

    single = run_single_node().snapshot()
    logger.info("Single node times: %s", [e.logical_time for e in single.events])

    cluster = run_cluster(steps=steps, seed=seed)
    anomalies = {}
    plots = {}
    for node_id, snap in cluster.snapshot().items():
        anomalies[node_id] = checker.check(snap.events)
        plots[node_id] = plot_event_timeline(snap.events, os.path.join(out_dir, f"timeline_{node_id}.png"))

    summary = {
        "single_node": single.to_dict(),
        "deliveries": len(cluster.deliveries),
        "final_times": {n: r.peek() for n, r in cluster.nodes.items()},
        "anomalies": anomalies,
        "plots": plots,
    }
    with open(os.path.join(out_dir, "run_summary.json"), "w", encoding="utf-8") as f:
        json.dump(summary, f, indent=2)
    logger.info("Demo complete: %d deliveries, final times %s", summary["deliveries"], summary["final_times"])
    return summary


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run_demo()
