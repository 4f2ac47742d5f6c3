"""
Composition root for swipe recognition.

Drives one tick per host frame:
    PoseSource -> NeutralPositionDetector -> GestureLock.advance
    -> swipe detectors (in registration order) -> callbacks / bus events

The dispatcher owns the single GestureLock of the composition and builds
every detector around it, so all detectors draw from one trigger budget
and see the same `now`, frame and neutral value within a tick.
"""

import logging
from typing import Callable, List, Optional, Union

from swipenav.core.events import EventBus, Events
from swipenav.core.types import Direction, NeutralState, SwipeEvent
from swipenav.modules.capture.pose_source import PoseSource
from swipenav.modules.control.gesture_lock import DEFAULT_BLOCK_DURATION, GestureLock
from swipenav.modules.detection.neutral import NeutralConfig, NeutralPositionDetector
from swipenav.modules.recognition.single_direction import (
    SingleDirectionConfig,
    SingleDirectionSwipeDetector,
)
from swipenav.modules.recognition.swipe_detector import (
    DirectionalSwipeDetector,
    SwipeCallback,
    SwipeCallbacks,
    SwipeConfig,
)

logger = logging.getLogger(__name__)

Detector = Union[DirectionalSwipeDetector, SingleDirectionSwipeDetector]


class TickResult:
    """Outcome of a single dispatcher tick."""

    __slots__ = (
        "timestamp", "hand_detected", "neutral", "distance",
        "events", "suppressed", "dropped",
    )

    def __init__(self, timestamp: float):
        self.timestamp = timestamp
        self.hand_detected = False
        self.neutral = False
        self.distance = 0.0
        self.events: List[SwipeEvent] = []
        self.suppressed: List[SwipeEvent] = []
        self.dropped = False

    def __repr__(self):
        return (f"TickResult(t={self.timestamp:.3f}, neutral={self.neutral}, "
                f"events={[e.direction.value for e in self.events]})")


class GestureDispatcher:
    """Runs the neutral gate and all swipe detectors from one per-frame tick.

    Example:
        >>> dispatcher = GestureDispatcher(pose_source)
        >>> dispatcher.add_swipe_detector(on_left=prev_page, on_right=next_page)
        >>> dispatcher.on_neutral_change(lambda state: print(state.neutral))
        >>> # in the host's frame callback:
        >>> dispatcher.tick(clock.elapsed())
    """

    def __init__(
        self,
        pose_source: PoseSource,
        block_duration: float = DEFAULT_BLOCK_DURATION,
        neutral_config: Optional[NeutralConfig] = None,
        swipe_config: Optional[SwipeConfig] = None,
        event_bus: Optional[EventBus] = None,
    ):
        self._pose_source = pose_source
        self._lock = GestureLock(block_duration)
        self._neutral = NeutralPositionDetector(neutral_config)
        self._swipe_config = swipe_config or SwipeConfig()
        self._bus = event_bus or EventBus()
        self._detectors: List[Detector] = []

        self._last_now: Optional[float] = None
        self._hand_present = False
        self._tick_count = 0
        self._dropped_count = 0

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add_swipe_detector(
        self,
        on_left: Optional[SwipeCallback] = None,
        on_right: Optional[SwipeCallback] = None,
        on_up: Optional[SwipeCallback] = None,
        on_down: Optional[SwipeCallback] = None,
        config: Optional[SwipeConfig] = None,
        name: Optional[str] = None,
    ) -> DirectionalSwipeDetector:
        """Create a four-direction detector on the shared lock."""
        detector = DirectionalSwipeDetector(
            self._lock,
            SwipeCallbacks(on_left=on_left, on_right=on_right, on_up=on_up, on_down=on_down),
            config or self._swipe_config,
            name=name or f"swipe_{len(self._detectors)}",
        )
        self._detectors.append(detector)
        logger.debug("Registered %s", detector.name)
        return detector

    def add_single_direction_detector(
        self,
        direction: Direction,
        callback: SwipeCallback,
        config: Optional[SingleDirectionConfig] = None,
    ) -> SingleDirectionSwipeDetector:
        """Create a one-direction detector on the shared lock."""
        detector = SingleDirectionSwipeDetector(direction, self._lock, callback, config)
        self._detectors.append(detector)
        logger.debug("Registered %s", detector.name)
        return detector

    def add_detector(self, detector: Detector) -> Detector:
        """Register a detector built elsewhere.

        Raises:
            ValueError: if the detector does not use this dispatcher's lock;
                separate locks would let two gestures fire together.
        """
        if detector.lock is not self._lock:
            raise ValueError(
                f"detector '{detector.name}' must share the dispatcher's GestureLock"
            )
        if detector in self._detectors:
            return detector
        self._detectors.append(detector)
        return detector

    def remove_detector(self, detector: Detector):
        if detector in self._detectors:
            self._detectors.remove(detector)

    def on_neutral_change(self, callback: Callable[[NeutralState], None], priority: int = 0):
        """Call `callback(state)` whenever the neutral flag flips."""
        self._bus.subscribe(Events.NEUTRAL_CHANGED, lambda state, **_: callback(state), priority)

    def on_swipe(self, callback: Callable[[SwipeEvent], None], priority: int = 0):
        """Call `callback(event)` for every fired swipe, after its direction callback."""
        self._bus.subscribe(Events.SWIPE_DETECTED, lambda event, **_: callback(event), priority)

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def tick(self, now: float) -> TickResult:
        """Run one frame of recognition at host time `now` (seconds).

        Ticks must arrive with strictly increasing `now`; a tick that does
        not is dropped without touching any state.
        """
        result = TickResult(now)

        if self._last_now is not None and now <= self._last_now:
            self._dropped_count += 1
            result.dropped = True
            logger.warning("Dropping tick at %.4fs: clock did not advance past %.4fs",
                           now, self._last_now)
            self._bus.emit(Events.TICK_DROPPED, now=now, previous=self._last_now)
            return result

        self._last_now = now
        self._tick_count += 1

        # --- 1. Pose ---
        frame = self._pose_source.latest_frame()
        result.hand_detected = frame is not None
        if result.hand_detected != self._hand_present:
            self._hand_present = result.hand_detected
            self._bus.emit(Events.HAND_DETECTED if frame is not None else Events.HAND_LOST, now=now)

        # --- 2. Lock expiry, before anyone may trigger ---
        self._lock.advance(now)

        # --- 3. Neutral gate ---
        was_neutral = self._neutral.neutral
        state = self._neutral.update(frame)
        result.neutral = state.neutral
        result.distance = state.distance
        if state.neutral != was_neutral:
            logger.debug("Neutral %s at %.3fs (gap %.4fm)",
                         "on" if state.neutral else "off", now, state.distance)
            self._bus.emit(Events.NEUTRAL_CHANGED, state=state, now=now)

        # --- 4. Detectors ---
        for detector in list(self._detectors):
            event = detector.update(frame, now, state.neutral)
            if event is not None:
                result.events.append(event)
                logger.info("Swipe %s at %.3fs (%s)", event.direction.value, now, detector.name)
                self._bus.emit(Events.SWIPE_DETECTED, event=event, detector=detector.name)
            elif detector.last_suppressed is not None:
                result.suppressed.append(detector.last_suppressed)
                self._bus.emit(Events.GESTURE_SUPPRESSED,
                               event=detector.last_suppressed, detector=detector.name)

        return result

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def remaining_block_time(self, now: float) -> float:
        return self._lock.remaining_block_time(now)

    @property
    def neutral(self) -> bool:
        return self._neutral.neutral

    @property
    def distance(self) -> float:
        return self._neutral.distance

    @property
    def is_blocked(self) -> bool:
        return self._lock.is_blocked

    @property
    def lock(self) -> GestureLock:
        return self._lock

    @property
    def event_bus(self) -> EventBus:
        return self._bus

    @property
    def detectors(self) -> List[Detector]:
        return list(self._detectors)

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def dropped_count(self) -> int:
        return self._dropped_count

    def reset(self):
        """Forget all tracking and lock state; detectors stay registered."""
        self._lock.reset()
        self._neutral.reset()
        for detector in self._detectors:
            detector.reset()
        self._last_now = None
        self._hand_present = False
        logger.debug("Dispatcher reset")
