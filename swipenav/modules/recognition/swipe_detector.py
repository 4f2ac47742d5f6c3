"""
Directional Swipe Detector
===========================

Frame-driven recognition of Left/Right/Up/Down swipes from the motion of
one hand joint (the middle fingertip by default).

Each tick the detector compares the joint with its previous sample. The
axis with the larger per-tick delta is dominant; the window measures
displacement along that axis only, from an anchor sample, and fires once
the displacement reaches the axis threshold within the axis time budget.

Window lifecycle:
    Idle -> Tracking     first gated sample becomes the anchor
    Tracking -> Directed first classified delta locks a direction
    Directed -> Directed motion continues the same way
    Directed -> Tracking fire, reversal or axis change re-anchors here

Only hand loss or a non-neutral pose returns the window to Idle. A window
that is too slow is never expired; it just cannot fire until a reversal
or a loss re-anchors it.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from swipenav.core.types import (
    Direction,
    JointFrame,
    JointName,
    SwipeEvent,
    SwipeTrackState,
    Vec3,
)
from swipenav.modules.control.gesture_lock import GestureLock

logger = logging.getLogger(__name__)

SwipeCallback = Callable[[], None]


@dataclass
class SwipeConfig:
    """Swipe detection configuration (meters and seconds)."""
    horizontal_threshold: float = 0.06
    vertical_threshold: float = 0.05
    horizontal_time_threshold: float = 0.7
    vertical_time_threshold: float = 0.5
    tracked_joint: JointName = JointName.MIDDLE_TIP

    def __post_init__(self):
        for name in ("horizontal_threshold", "vertical_threshold",
                     "horizontal_time_threshold", "vertical_time_threshold"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be > 0, got {value}")
        if not isinstance(self.tracked_joint, JointName):
            self.tracked_joint = JointName.from_string(str(self.tracked_joint))

    @classmethod
    def from_dict(cls, config: dict) -> "SwipeConfig":
        """Create config from dictionary."""
        return cls(
            horizontal_threshold=float(config.get("horizontal_threshold", 0.06)),
            vertical_threshold=float(config.get("vertical_threshold", 0.05)),
            horizontal_time_threshold=float(config.get("horizontal_time_threshold", 0.7)),
            vertical_time_threshold=float(config.get("vertical_time_threshold", 0.5)),
            tracked_joint=JointName.from_string(config.get("tracked_joint", "middle_tip")),
        )

    def threshold_for(self, axis: str) -> float:
        return self.horizontal_threshold if axis == "x" else self.vertical_threshold

    def time_threshold_for(self, axis: str) -> float:
        return self.horizontal_time_threshold if axis == "x" else self.vertical_time_threshold


@dataclass
class SwipeCallbacks:
    """Per-direction handlers. A direction left as None never fires."""
    on_left: Optional[SwipeCallback] = None
    on_right: Optional[SwipeCallback] = None
    on_up: Optional[SwipeCallback] = None
    on_down: Optional[SwipeCallback] = None

    def get(self, direction: Direction) -> Optional[SwipeCallback]:
        return getattr(self, f"on_{direction.value}")

    def set(self, direction: Direction, callback: Optional[SwipeCallback]):
        setattr(self, f"on_{direction.value}", callback)


_AXIS_INDEX = {"x": 0, "y": 1}


class DirectionalSwipeDetector:
    """
    Four-direction swipe detector sharing a GestureLock with its peers.

    Fires at most one event per tick, and exactly one per successful
    GestureLock.try_trigger(). When the lock refuses, the window is kept
    as it is so the motion still counts after the lock expires.

    Example:
        >>> lock = GestureLock()
        >>> detector = DirectionalSwipeDetector(
        ...     lock, SwipeCallbacks(on_left=go_back, on_right=go_forward))
        >>> for now, frame in samples:
        ...     lock.advance(now)
        ...     detector.update(frame, now, neutral.update(frame).neutral)
    """

    def __init__(
        self,
        lock: GestureLock,
        callbacks: Optional[SwipeCallbacks] = None,
        config: Optional[SwipeConfig] = None,
        name: str = "swipe",
    ):
        self.name = name
        self.config = config or SwipeConfig()
        self.callbacks = callbacks or SwipeCallbacks()
        self._lock = lock
        self._state = SwipeTrackState()
        self.last_suppressed: Optional[SwipeEvent] = None

    def update(self, frame: Optional[JointFrame], now: float, neutral: bool) -> Optional[SwipeEvent]:
        """Process one tick.

        Args:
            frame: Latest pose snapshot, or None when the hand is untracked
            now: Host clock (seconds), strictly increasing across ticks
            neutral: Output of the neutral pose gate for this tick

        Returns:
            The SwipeEvent fired this tick, or None
        """
        self.last_suppressed = None
        state = self._state

        if frame is None or not neutral or not frame.is_tracked(self.config.tracked_joint):
            if not state.is_idle:
                logger.debug("[%s] gate closed (frame=%s, neutral=%s), window reset",
                             self.name, frame is not None, neutral)
            state.reset()
            return None

        position = frame.position(self.config.tracked_joint)

        if state.window_start_position is None:
            state.anchor(position, now)

        event = None
        if state.previous_position is not None and state.previous_time is not None:
            delta_x = position[0] - state.previous_position[0]
            delta_y = position[1] - state.previous_position[1]

            if abs(delta_x) > abs(delta_y):
                candidate = Direction.LEFT if delta_x < 0 else Direction.RIGHT
                event = self._advance_window(candidate, position, now)
            elif abs(delta_y) > abs(delta_x):
                candidate = Direction.UP if delta_y > 0 else Direction.DOWN
                event = self._advance_window(candidate, position, now)
            # Equal magnitudes: no dominant axis, nothing to classify.

        state.previous_position = position
        state.previous_time = now
        return event

    def _advance_window(self, candidate: Direction, position: Vec3, now: float) -> Optional[SwipeEvent]:
        state = self._state

        if state.locked_direction is not None and state.locked_direction != candidate:
            logger.debug("[%s] %s -> %s at %.3fs, window re-anchored",
                         self.name, state.locked_direction.value, candidate.value, now)
            state.anchor(position, now)
            return None

        state.locked_direction = candidate
        axis = _AXIS_INDEX[candidate.axis]
        total_distance = abs(position[axis] - state.window_start_position[axis])
        total_time = now - state.window_start_time

        if total_distance < self.config.threshold_for(candidate.axis):
            return None
        if total_time > self.config.time_threshold_for(candidate.axis):
            return None

        callback = self.callbacks.get(candidate)
        if callback is None:
            return None

        if not self._lock.try_trigger(now):
            self.last_suppressed = SwipeEvent(candidate, now)
            logger.debug("[%s] %s suppressed at %.3fs (lock held)", self.name, candidate.value, now)
            return None

        logger.debug("[%s] %s fired: %.3fm in %.3fs",
                     self.name, candidate.value, total_distance, total_time)
        state.anchor(position, now)
        callback()
        return SwipeEvent(candidate, now)

    @property
    def lock(self) -> GestureLock:
        return self._lock

    @property
    def state(self) -> SwipeTrackState:
        """Snapshot of the tracking window."""
        return self._state.copy()

    def reset(self):
        """Drop the window; the next gated sample bootstraps a fresh one."""
        self._state.reset()
        self.last_suppressed = None
