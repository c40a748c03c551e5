# lamport/recorder.py
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Tuple

from .clock import LogicalClock

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Event:
    id: str
    label: str
    logical_time: int
    wall_time: datetime  # informational only, never used for ordering

    def to_dict(self):
        return {
            "id": self.id,
            "label": self.label,
            "logical_time": self.logical_time,
            "wall_time": self.wall_time.isoformat(),
        }


@dataclass(frozen=True)
class RecorderSnapshot:
    current_time: int
    events: Tuple[Event, ...]
    count: int

    def to_dict(self):
        return {
            "current_time": self.current_time,
            "events": [e.to_dict() for e in self.events],
            "count": self.count,
        }


class EventRecorder:
    """
    Append-only log of events, each stamped by exactly one clock operation.

    Advancing the clock, building the record and appending it happen under a
    single lock, so logical times read in append order are strictly increasing
    no matter how callers interleave.
    """

    def __init__(self, clock: Optional[LogicalClock] = None, get_wall_time=utc_now):
        self._clock = clock if clock is not None else LogicalClock()
        self.get_wall_time = get_wall_time
        self._events = []
        self._lock = threading.Lock()

    @property
    def clock(self) -> LogicalClock:
        return self._clock

    def record_local(self, event_id: Optional[str], label: str, id_prefix: str = "event") -> Event:
        """Tick the clock and append a local event.

        When ``event_id`` is None the id is derived from the new logical time.
        """
        with self._lock:
            logical_time = self._clock.tick()
            if event_id is None:
                event_id = f"{id_prefix}-{logical_time}"
            event = Event(event_id, label, logical_time, self.get_wall_time())
            self._events.append(event)
        logger.info("Event logged: %s (Lamport: %d)", label, logical_time)
        return event

    def record_message(self, received: int, label: str, id_prefix: str = "msg") -> Event:
        with self._lock:
            logical_time = self._clock.merge(received)
            # ids come from the logical time, which is unique per merge
            event = Event(f"{id_prefix}-{logical_time}", f"Processed: {label}",
                          logical_time, self.get_wall_time())
            self._events.append(event)
        logger.info("Message processed: %s (Received: %d, New: %d)", label, received, logical_time)
        return event

    def snapshot(self) -> RecorderSnapshot:
        with self._lock:
            events = tuple(self._events)
            current_time = self._clock.peek()
        return RecorderSnapshot(current_time=current_time, events=events, count=len(events))

    def peek(self) -> int:
        return self._clock.peek()

    def __len__(self):
        with self._lock:
            return len(self._events)
