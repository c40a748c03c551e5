# lamport/clock.py
import threading


class LogicalClock:
    """
    Lamport logical clock.

    The counter only moves forward: tick() for a local event, merge() when a
    message stamped with a remote logical time is received. All access goes
    through one lock so concurrent callers never observe or produce the same
    value.
    """

    def __init__(self, name: str = ""):
        self.name = name
        self._value = 0
        self._lock = threading.Lock()

    def tick(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    def merge(self, received: int) -> int:
        # max is always computed so a stale or negative stamp cannot move us back
        with self._lock:
            self._value = max(self._value, received) + 1
            return self._value

    def peek(self) -> int:
        with self._lock:
            return self._value

    @property
    def value(self) -> int:
        return self.peek()

    def __repr__(self):
        return f"LogicalClock({self.name}:{self.peek()})" if self.name else f"LogicalClock({self.peek()})"
