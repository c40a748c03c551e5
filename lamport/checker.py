from typing import Iterable, List


def _field(event, name):
    if isinstance(event, dict):
        return event[name]
    return getattr(event, name)


class OrderingChecker:
    """Scans an event log for ordering and identity anomalies."""

    def check(self, events: Iterable) -> List[dict]:
        anomalies = []
        seen_ids = set()
        prev_time = None
        for i, event in enumerate(events):
            logical_time = _field(event, "logical_time")
            event_id = _field(event, "id")
            if prev_time is not None and logical_time <= prev_time:
                anomalies.append({
                    "type": "out_of_order",
                    "index": i,
                    "previous": prev_time,
                    "current": logical_time,
                })
            if event_id in seen_ids:
                anomalies.append({"type": "duplicate_id", "index": i, "id": event_id})
            seen_ids.add(event_id)
            prev_time = logical_time
        return anomalies

    def is_ordered(self, events: Iterable) -> bool:
        return not self.check(events)
