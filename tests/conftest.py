"""
Shared fixtures for the swipenav test suite.
"""

import pytest

from swipenav.modules.capture.synthetic import make_hand_frame
from swipenav.modules.control.gesture_lock import GestureLock
from swipenav.modules.utils.config import Config

Z = -0.35
OPEN_GAP = 0.05


def hand_at(x: float, y: float, pinched: bool = True):
    """Hand frame with the middle fingertip at (x, y, Z)."""
    return make_hand_frame((x, y, Z), pinch_gap=0.0 if pinched else OPEN_GAP)


class Driver:
    """Feeds (time, x, y) samples into a detector the way the dispatcher does."""

    def __init__(self, detector, lock):
        self.detector = detector
        self.lock = lock
        self.events = []

    def step(self, t, x, y, neutral=True, tracked=True):
        self.lock.advance(t)
        frame = hand_at(x, y) if tracked else None
        event = self.detector.update(frame, t, neutral)
        if event is not None:
            self.events.append(event)
        return event

    def run(self, samples, neutral=True):
        for t, x, y in samples:
            self.step(t, x, y, neutral=neutral)
        return self.events


@pytest.fixture
def lock():
    return GestureLock()


@pytest.fixture
def recorder():
    """Collects callback invocations as direction names."""
    calls = []

    def make(name):
        return lambda: calls.append(name)

    make.calls = calls
    return make


@pytest.fixture(autouse=True)
def reset_config():
    Config.reset()
    yield
    Config.reset()
