"""
Structured logging setup and swipe event logging.
"""

import logging
import logging.handlers
import os
from collections import Counter
from typing import Optional

from swipenav.core.types import SwipeEvent


def setup_logging(level="INFO", log_file=None, max_size_mb=10, backup_count=3):
    """Configure console (and optional rotating file) logging for the application."""
    console_format = "%(asctime)s  %(levelname)-5s  %(message)s"
    file_format = "%(asctime)s [%(levelname)-7s] %(name)-30s | %(message)s"
    date_format = "%H:%M:%S"

    root_logger = logging.getLogger()
    root_level = getattr(logging, str(level).upper(), logging.INFO)
    root_logger.setLevel(root_level)

    root_logger.handlers.clear()

    console = logging.StreamHandler()
    console.setLevel(root_level)
    console.setFormatter(logging.Formatter(console_format, datefmt=date_format))
    root_logger.addHandler(console)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_size_mb * 1024 * 1024,
            backupCount=backup_count,
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(file_format, datefmt=date_format))
        root_logger.addHandler(file_handler)

    return root_logger


class SwipeLogger:
    """Logs fired and suppressed swipes and keeps this session's history in memory."""

    def __init__(self):
        self.logger = logging.getLogger("gesture_events")
        self._history = []
        self._suppressed = 0

    def log_swipe(self, event: SwipeEvent, detector: Optional[str] = None, **_):
        """Record a fired swipe."""
        self._history.append({
            "time": event.time,
            "direction": event.direction.value,
            "detector": detector,
        })
        self.logger.info(
            "Swipe: %-6s | t=%.3fs | Detector: %s",
            event.direction.value,
            event.time,
            detector or "n/a",
        )

    def log_suppressed(self, event: SwipeEvent, detector: Optional[str] = None, **_):
        """Record a swipe refused by the gesture lock."""
        self._suppressed += 1
        self.logger.debug("Suppressed: %-6s | t=%.3fs | Detector: %s",
                          event.direction.value, event.time, detector or "n/a")

    def get_history(self, last_n=None):
        """Get recent swipe history."""
        if last_n:
            return self._history[-last_n:]
        return self._history.copy()

    def summary(self) -> dict:
        counts = Counter(entry["direction"] for entry in self._history)
        return {
            "total": len(self._history),
            "suppressed": self._suppressed,
            "by_direction": dict(counts),
        }

    @property
    def total_swipes(self):
        return len(self._history)
