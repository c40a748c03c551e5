# lamport/simulation.py
import logging
from typing import Dict, List, Tuple

from .clock import LogicalClock
from .recorder import Event, EventRecorder, RecorderSnapshot

logger = logging.getLogger(__name__)


class Cluster:
    """
    Several independent nodes living in one process. Each node owns its own
    clock and recorder; a "send" hands the sender's logical time straight to
    the receiver's recorder, standing in for a real transport.
    """

    def __init__(self):
        self.nodes: Dict[str, EventRecorder] = {}
        self.deliveries: List[dict] = []

    def add_node(self, node_id: str) -> EventRecorder:
        if node_id in self.nodes:
            raise ValueError(f"Node already exists: {node_id}")
        self.nodes[node_id] = EventRecorder(LogicalClock(node_id))
        return self.nodes[node_id]

    def _node(self, node_id: str) -> EventRecorder:
        if node_id not in self.nodes:
            raise ValueError(f"Unknown node: {node_id}")
        return self.nodes[node_id]

    def local(self, node_id: str, label: str) -> Event:
        recorder = self._node(node_id)
        return recorder.record_local(None, label, id_prefix=f"{node_id}-local")

    def send(self, src: str, dst: str, label: str) -> Tuple[Event, Event]:
        if src not in self.nodes or dst not in self.nodes:
            raise ValueError("Unknown src or dst node")
        sender = self.nodes[src]
        sent = sender.record_local(None, f"Send to {dst}: {label}", id_prefix=f"{src}-send")
        received = self.nodes[dst].record_message(sent.logical_time, f"{label} from {src}",
                                                  id_prefix=f"{dst}-msg")
        self.deliveries.append({
            "src": src,
            "dst": dst,
            "label": label,
            "sent_time": sent.logical_time,
            "received_time": received.logical_time,
        })
        logger.debug("Delivered %s -> %s (%d -> %d)", src, dst, sent.logical_time, received.logical_time)
        return sent, received

    def snapshot(self) -> Dict[str, RecorderSnapshot]:
        return {node_id: recorder.snapshot() for node_id, recorder in self.nodes.items()}
