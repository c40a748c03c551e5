import itertools
import logging
import os
import re
import threading
import time
from typing import Optional

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from lamport.clock import LogicalClock
from lamport.logger import setup_logger
from lamport.recorder import EventRecorder, utc_now

logger = logging.getLogger(__name__)

HOST = os.environ.get("LAMPORT_HOST", "127.0.0.1")
PORT = int(os.environ.get("LAMPORT_PORT", "8080"))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1
TIMESTAMP_RE = re.compile(r"[+-]?[0-9]+")

USAGE = """Lamport Timestamp Server

Available endpoints:
- POST /event?message=<msg>     : Create a local event
- POST /message?timestamp=<ts>&message=<msg> : Process received message
- GET  /events                  : Get all events with timestamps
- GET  /time                    : Get current Lamport timestamp

Example usage:
curl -X POST "http://localhost:{port}/event?message=User login"
curl -X POST "http://localhost:{port}/message?timestamp=5&message=External event"
curl http://localhost:{port}/events
"""


class EventIdGenerator:
    """Unique ids for local events: nanosecond wall clock plus a sequence number."""

    def __init__(self, prefix="event"):
        self.prefix = prefix
        self._seq = itertools.count(1)
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            seq = next(self._seq)
        return f"{self.prefix}-{time.time_ns()}-{seq}"


def parse_timestamp(raw: str) -> int:
    # ASCII digits only: int() alone would take whitespace, underscores and unicode digits
    if not TIMESTAMP_RE.fullmatch(raw):
        raise HTTPException(status_code=400, detail="Invalid timestamp")
    value = int(raw)
    if not INT64_MIN <= value <= INT64_MAX:
        raise HTTPException(status_code=400, detail="Invalid timestamp")
    return value


def create_app(recorder: Optional[EventRecorder] = None) -> FastAPI:
    """Build the HTTP app around an injected recorder.

    Nothing is built at import time. `main()` sets up logging and records the
    startup event before serving; `uvicorn --factory backend.app:create_app`
    serves a fresh recorder with neither.
    """
    recorder = recorder if recorder is not None else EventRecorder()
    next_event_id = EventIdGenerator()

    app = FastAPI(title="Lamport Timestamp Server")
    app.state.recorder = recorder

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/", response_class=PlainTextResponse)
    def index():
        return USAGE.format(port=PORT)

    @app.post("/event")
    def create_event(message: Optional[str] = None):
        label = message or "Local event"
        event = recorder.record_local(next_event_id(), label)
        return event.to_dict()

    @app.post("/message")
    def receive_message(timestamp: Optional[str] = None, message: Optional[str] = None):
        if not timestamp or not message:
            raise HTTPException(status_code=400, detail="Missing timestamp or message parameter")
        received = parse_timestamp(timestamp)
        event = recorder.record_message(received, message)
        return event.to_dict()

    @app.get("/events")
    def list_events():
        return recorder.snapshot().to_dict()

    @app.get("/time")
    def current_time():
        return {
            "logical_time": recorder.peek(),
            "wall_time": utc_now().isoformat(),
        }

    return app


def main():
    clock = LogicalClock("server")
    setup_logger("lamport", clock, log_level=LOG_LEVEL)
    setup_logger(__name__, clock, log_level=LOG_LEVEL)
    recorder = EventRecorder(clock)
    server_app = create_app(recorder)

    logger.info("Starting Lamport timestamp server on %s:%d", HOST, PORT)
    logger.info("Visit http://%s:%d for usage instructions", HOST, PORT)
    recorder.record_local("init", "Server started")

    uvicorn.run(server_app, host=HOST, port=PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
