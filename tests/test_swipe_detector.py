"""
Tests for the Directional Swipe Detector
=========================================
"""

import numpy as np
import pytest

from conftest import Driver, hand_at
from swipenav.core.types import Direction, JointFrame, SwipeEvent
from swipenav.modules.control.gesture_lock import GestureLock
from swipenav.modules.recognition.swipe_detector import (
    DirectionalSwipeDetector,
    SwipeCallbacks,
    SwipeConfig,
)


def all_callbacks(recorder) -> SwipeCallbacks:
    return SwipeCallbacks(
        on_left=recorder("left"),
        on_right=recorder("right"),
        on_up=recorder("up"),
        on_down=recorder("down"),
    )


@pytest.fixture
def detector(lock, recorder):
    return DirectionalSwipeDetector(lock, all_callbacks(recorder))


@pytest.fixture
def driver(detector, lock):
    return Driver(detector, lock)


class TestSwipeConfig:
    """Test suite for SwipeConfig."""

    def test_defaults(self):
        config = SwipeConfig()
        assert config.horizontal_threshold == 0.06
        assert config.vertical_threshold == 0.05
        assert config.horizontal_time_threshold == 0.7
        assert config.vertical_time_threshold == 0.5

    def test_axis_lookup(self):
        config = SwipeConfig()
        assert config.threshold_for("x") == 0.06
        assert config.threshold_for("y") == 0.05
        assert config.time_threshold_for("x") == 0.7
        assert config.time_threshold_for("y") == 0.5

    def test_from_dict(self):
        config = SwipeConfig.from_dict({"horizontal_threshold": 0.1, "tracked_joint": "index_tip"})
        assert config.horizontal_threshold == 0.1
        assert config.vertical_threshold == 0.05
        assert config.tracked_joint.label == "Index_Tip"

    def test_non_positive_rejected(self):
        with pytest.raises(ValueError):
            SwipeConfig(vertical_threshold=0.0)


class TestSwipeCallbacks:

    def test_get_and_set(self):
        callbacks = SwipeCallbacks()
        assert callbacks.get(Direction.UP) is None
        handler = lambda: None  # noqa: E731
        callbacks.set(Direction.UP, handler)
        assert callbacks.on_up is handler
        assert callbacks.get(Direction.UP) is handler


class TestSwipeRecognition:
    """Direction classification and the distance/time window."""

    def test_left_swipe_fires_when_threshold_reached(self, driver, recorder):
        xs = [0.0, -0.01, -0.02, -0.03, -0.04, -0.05, -0.06, -0.07]
        ts = [0.0, 0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7]
        events = driver.run([(t, x, 0.0) for t, x in zip(ts, xs)])

        assert events == [SwipeEvent(Direction.LEFT, 0.6)]
        assert recorder.calls == ["left"]

    def test_right_swipe(self, driver, recorder):
        step = 1 / 32
        events = driver.run([(k * 0.125, k * step, 0.0) for k in range(3)])
        assert events == [SwipeEvent(Direction.RIGHT, 0.25)]
        assert recorder.calls == ["right"]

    def test_up_is_positive_y(self, driver, recorder):
        step = 1 / 32
        events = driver.run([(k * 0.125, 0.0, k * step) for k in range(3)])
        assert events == [SwipeEvent(Direction.UP, 0.25)]
        assert recorder.calls == ["up"]

    def test_down_is_negative_y(self, driver, recorder):
        step = 1 / 32
        events = driver.run([(k * 0.125, 0.0, -k * step) for k in range(3)])
        assert events == [SwipeEvent(Direction.DOWN, 0.25)]
        assert recorder.calls == ["down"]

    def test_dominant_axis_wins(self, driver, recorder):
        """Diagonal motion is classified by the larger per-tick delta."""
        events = driver.run([
            (0.0, 0.0, 0.0),
            (0.125, -1 / 32, 1 / 64),
            (0.25, -2 / 32, 2 / 64),
        ])
        assert [e.direction for e in events] == [Direction.LEFT]

    def test_below_threshold_does_not_fire(self, driver):
        events = driver.run([(0.0, 0.0, 0.0), (0.1, -0.02, 0.0), (0.2, -0.04, 0.0)])
        assert events == []

    def test_first_sample_only_anchors(self, detector):
        assert detector.update(hand_at(0.5, 0.0), 0.0, True) is None
        state = detector.state
        assert state.window_start_time == 0.0
        assert state.window_start_position[0] == 0.5
        assert state.locked_direction is None

    def test_time_budget_is_inclusive(self, recorder):
        """Vertical travel completed exactly at the budget still fires."""
        lock = GestureLock()
        driver = Driver(DirectionalSwipeDetector(lock, all_callbacks(recorder)), lock)
        events = driver.run([(k * 0.125, 0.0, k / 64) for k in range(5)])
        assert events == [SwipeEvent(Direction.UP, 0.5)]

    def test_too_slow_does_not_fire(self, driver):
        events = driver.run([(k * 0.25, 0.0, k / 64) for k in range(8)])
        assert events == []

    def test_equal_deltas_change_nothing(self, driver, detector):
        """No dominant axis: no direction is locked and the window stays put."""
        step = 1 / 32
        events = driver.run([(k * 0.125, -k * step, k * step) for k in range(6)])

        assert events == []
        state = detector.state
        assert state.window_start_time == 0.0
        assert state.window_start_position[0] == 0.0
        assert state.locked_direction is None
        assert state.previous_time == 0.625

    def test_event_re_anchors_window(self, driver, detector):
        driver.run([(k * 0.125, -k / 32, 0.0) for k in range(3)])
        state = detector.state
        assert state.window_start_time == 0.25
        assert state.window_start_position[0] == -2 / 32
        assert state.locked_direction is None


class TestReversal:
    """Changing direction re-anchors the window at the reversal sample."""

    def test_reversal_re_anchors(self, driver, detector):
        driver.run([
            (0.0, 0.0, 0.0),
            (0.1, -0.01, 0.0),
            (0.2, -0.02, 0.0),
            (0.3, -0.03, 0.0),
            (0.4, -0.02, 0.0),
        ])
        state = detector.state
        assert state.window_start_position[0] == -0.02
        assert state.window_start_time == 0.4
        assert state.locked_direction is None

    def test_distance_counts_from_reversal_point(self, driver):
        events = driver.run([
            (0.0, 0.0, 0.0),
            (0.1, -0.01, 0.0),
            (0.2, -0.02, 0.0),
            (0.3, -0.03, 0.0),
            (0.4, -0.02, 0.0),
            (0.5, 0.0, 0.0),
            (0.6, 0.05, 0.0),
        ])
        assert events == [SwipeEvent(Direction.RIGHT, 0.6)]

    def test_axis_change_re_anchors(self, driver, detector):
        driver.run([(0.0, 0.0, 0.0), (0.1, -0.02, 0.0), (0.2, -0.02, 0.02)])
        state = detector.state
        assert state.window_start_time == 0.2
        assert state.window_start_position[1] == 0.02

    def test_zigzag_never_fires(self, driver):
        """Alternating left and up ticks keep re-anchoring, however far they go."""
        step = 1 / 32
        samples = [(0.0, 0.0, 0.0)]
        x = y = 0.0
        for k in range(1, 21):
            if k % 2:
                x -= step
            else:
                y += step
            samples.append((k * 0.0625, x, y))
        assert driver.run(samples) == []

    def test_slow_window_recovers_after_reversal(self, driver):
        """A window past its time budget only fires again once re-anchored."""
        samples = [(k * 0.2, -0.01 * k, 0.0) for k in range(11)]
        samples += [(2.1, -0.09, 0.0), (2.2, -0.05, 0.0), (2.3, -0.01, 0.0)]
        events = driver.run(samples)
        assert events == [SwipeEvent(Direction.RIGHT, 2.3)]


class TestGating:
    """Loss of hand, of the tracked joint or of the neutral pose resets the window."""

    def test_non_neutral_resets(self, driver, detector):
        driver.run([(0.0, 0.0, 0.0), (0.1, -0.02, 0.0), (0.2, -0.04, 0.0)])
        driver.step(0.3, -0.06, 0.0, neutral=False)
        assert detector.state.is_idle

        driver.step(0.4, -0.08, 0.0)
        driver.step(0.5, -0.10, 0.0)
        assert driver.events == []
        assert detector.state.window_start_position[0] == -0.08

    def test_hand_lost_resets(self, driver, detector):
        driver.run([(0.0, 0.0, 0.0), (0.1, -0.04, 0.0)])
        driver.step(0.2, 0.0, 0.0, tracked=False)
        assert detector.state.is_idle

    def test_untracked_joint_resets(self, driver, detector):
        driver.run([(0.0, 0.0, 0.0), (0.1, -0.04, 0.0)])
        frame = JointFrame.from_mapping({"Thumb_Tip": (0.0, 0.0, 0.0), "Index_Tip": (0.0, 0.0, 0.0)})
        assert detector.update(frame, 0.2, True) is None
        assert detector.state.is_idle

    def test_non_neutral_never_fires(self, driver):
        step = 1 / 16
        events = driver.run([(k * 0.125, -k * step, 0.0) for k in range(6)], neutral=False)
        assert events == []

    def test_tracked_joint_is_configurable(self, lock, recorder):
        config = SwipeConfig(tracked_joint="index_tip")
        detector = DirectionalSwipeDetector(lock, all_callbacks(recorder), config)
        driver = Driver(detector, lock)
        events = driver.run([(k * 0.125, -k / 32, 0.0) for k in range(3)])
        assert [e.direction for e in events] == [Direction.LEFT]


class TestLockInteraction:
    """The shared GestureLock spaces out events."""

    def test_suppressed_swipe_keeps_window(self, driver, detector, lock):
        lock.try_trigger(0.0)
        driver.step(0.0, 0.0, 0.0)

        assert driver.step(0.125, -1 / 16, 0.0) is None
        assert detector.last_suppressed == SwipeEvent(Direction.LEFT, 0.125)
        state = detector.state
        assert state.window_start_time == 0.0
        assert state.window_start_position[0] == 0.0
        assert state.locked_direction is Direction.LEFT

        assert driver.step(0.25, -2 / 16, 0.0) == SwipeEvent(Direction.LEFT, 0.25)
        assert detector.last_suppressed is None

    def test_events_respect_block_duration(self, driver):
        step = 1 / 16
        events = driver.run([(k * 0.125, -k * step, 0.0) for k in range(4)])
        assert [e.time for e in events] == [0.125, 0.375]

    def test_missing_callback_does_not_take_lock(self, lock, recorder):
        detector = DirectionalSwipeDetector(lock, SwipeCallbacks(on_right=recorder("right")))
        driver = Driver(detector, lock)
        events = driver.run([(k * 0.125, -k / 16, 0.0) for k in range(4)])

        assert events == []
        assert lock.is_blocked is False
        assert detector.last_suppressed is None

    def test_window_is_re_anchored_before_callback_runs(self, lock):
        def boom():
            raise RuntimeError("handler failed")

        detector = DirectionalSwipeDetector(lock, SwipeCallbacks(on_left=boom))
        detector.update(hand_at(0.0, 0.0), 0.0, True)
        with pytest.raises(RuntimeError):
            detector.update(hand_at(-1 / 16, 0.0), 0.125, True)

        assert lock.is_blocked is True
        assert detector.state.window_start_time == 0.125

    def test_minimum_spacing_under_random_motion(self, lock):
        """Whatever the motion, fired events are at least one block apart."""
        fired = []
        detector = DirectionalSwipeDetector(
            lock, SwipeCallbacks(*(lambda: None for _ in range(4))),
        )
        rng = np.random.default_rng(7)
        x = y = 0.0
        for k in range(600):
            now = k / 60
            x += rng.normal(-0.015, 0.01)
            y += rng.normal(0.0, 0.006)
            lock.advance(now)
            event = detector.update(hand_at(x, y), now, True)
            if event is not None:
                fired.append(event.time)

        assert fired
        gaps = np.diff(fired)
        assert np.all(gaps >= lock.block_duration - 1e-9)


def test_reset_clears_window(detector):
    detector.update(hand_at(0.0, 0.0), 0.0, True)
    detector.reset()
    assert detector.state.is_idle
    assert detector.last_suppressed is None
