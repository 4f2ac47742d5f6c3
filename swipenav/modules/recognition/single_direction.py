"""
Single-direction swipe detectors, kept for compatibility with layouts that
register one handler per direction.

Each detector watches only its own axis; there is no dominance
arbitration with the other axis. Motion toward the direction grows the
window, motion away re-anchors it, and no motion on the axis leaves it
alone. These detectors were historically used without the neutral gate
and with a 1.0s lock, which remain their defaults.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from swipenav.core.types import Direction, JointFrame, JointName, SwipeEvent, SwipeTrackState
from swipenav.modules.control.gesture_lock import GestureLock
from swipenav.modules.recognition.swipe_detector import SwipeCallback

logger = logging.getLogger(__name__)

_TRUE_STRINGS = ("true", "yes", "on", "1")
_FALSE_STRINGS = ("false", "no", "off", "0")


def _as_bool(value) -> bool:
    """Read a YAML/CLI flag; strings like "false" are parsed, not truth-tested."""
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
        raise ValueError(f"require_neutral must be a boolean, got {value!r}")
    return bool(value)


@dataclass
class SingleDirectionConfig:
    """Per-axis thresholds for the single-direction detectors."""
    horizontal_threshold: float = 0.07
    vertical_threshold: float = 0.05
    horizontal_time_threshold: float = 0.7
    vertical_time_threshold: float = 0.5
    require_neutral: bool = False
    tracked_joint: JointName = JointName.MIDDLE_TIP

    def __post_init__(self):
        for name in ("horizontal_threshold", "vertical_threshold",
                     "horizontal_time_threshold", "vertical_time_threshold"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be > 0, got {value}")
        if not isinstance(self.tracked_joint, JointName):
            self.tracked_joint = JointName.from_string(str(self.tracked_joint))
        self.require_neutral = _as_bool(self.require_neutral)

    @classmethod
    def from_dict(cls, config: dict) -> "SingleDirectionConfig":
        """Create config from dictionary."""
        return cls(
            horizontal_threshold=float(config.get("horizontal_threshold", 0.07)),
            vertical_threshold=float(config.get("vertical_threshold", 0.05)),
            horizontal_time_threshold=float(config.get("horizontal_time_threshold", 0.7)),
            vertical_time_threshold=float(config.get("vertical_time_threshold", 0.5)),
            require_neutral=_as_bool(config.get("require_neutral", False)),
            tracked_joint=JointName.from_string(config.get("tracked_joint", "middle_tip")),
        )


class SingleDirectionSwipeDetector:
    """Fires one callback when the tracked joint travels one way far and fast enough."""

    def __init__(
        self,
        direction: Direction,
        lock: GestureLock,
        callback: SwipeCallback,
        config: Optional[SingleDirectionConfig] = None,
    ):
        self.direction = direction
        self.name = f"swipe_{direction.value}"
        self.config = config or SingleDirectionConfig()
        self._callback = callback
        self._lock = lock
        self._state = SwipeTrackState()
        self._axis = 0 if direction.axis == "x" else 1
        if direction.axis == "x":
            self._threshold = self.config.horizontal_threshold
            self._time_threshold = self.config.horizontal_time_threshold
        else:
            self._threshold = self.config.vertical_threshold
            self._time_threshold = self.config.vertical_time_threshold
        self.last_suppressed: Optional[SwipeEvent] = None

    def update(self, frame: Optional[JointFrame], now: float, neutral: bool = True) -> Optional[SwipeEvent]:
        self.last_suppressed = None
        state = self._state

        gated = self.config.require_neutral and not neutral
        if frame is None or gated or not frame.is_tracked(self.config.tracked_joint):
            state.reset()
            return None

        position = frame.position(self.config.tracked_joint)
        if state.window_start_position is None:
            state.anchor(position, now)

        event = None
        if state.previous_position is not None and state.previous_time is not None:
            delta = position[self._axis] - state.previous_position[self._axis]
            if delta * self.direction.sign > 0:
                event = self._check_window(position, now)
            elif delta * self.direction.sign < 0:
                state.anchor(position, now)

        state.previous_position = position
        state.previous_time = now
        return event

    def _check_window(self, position, now: float) -> Optional[SwipeEvent]:
        state = self._state
        total_distance = abs(position[self._axis] - state.window_start_position[self._axis])
        total_time = now - state.window_start_time
        if total_distance < self._threshold or total_time > self._time_threshold:
            return None

        if not self._lock.try_trigger(now):
            self.last_suppressed = SwipeEvent(self.direction, now)
            return None

        logger.debug("[%s] fired: %.3fm in %.3fs", self.name, total_distance, total_time)
        state.anchor(position, now)
        self._callback()
        return SwipeEvent(self.direction, now)

    @property
    def lock(self) -> GestureLock:
        return self._lock

    @property
    def state(self) -> SwipeTrackState:
        return self._state.copy()

    def reset(self):
        self._state.reset()
        self.last_suppressed = None
