# lamport/logger.py
import logging
import sys


class LogicalClockFilter(logging.Filter):
    """A filter that adds the current logical time to log records"""

    def __init__(self, clock):
        super().__init__()
        self.clock = clock

    def filter(self, record):
        record.logical_clock = self.clock.peek()
        return True


def setup_logger(name, clock, log_level=logging.INFO, stream=None):
    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Clear any existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    for f in logger.filters[:]:
        logger.removeFilter(f)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(log_level)
    # filter on the handler so records propagated from child loggers get the field too
    handler.addFilter(LogicalClockFilter(clock))
    handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | [Lamport: %(logical_clock)s] %(message)s"
    ))
    logger.addHandler(handler)
    return logger
