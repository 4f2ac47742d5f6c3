"""
swipenav command line.

Feeds recorded or synthetic hand poses through a GestureDispatcher, one
tick per sample, and reports the swipes it fires.

Usage:
    swipenav replay recording.yaml            # Replay a trace file
    swipenav replay recording.json --legacy   # Single-direction detectors, 1.0s lock
    swipenav demo left                        # Synthetic left swipe
    swipenav demo up --jitter 0.002 --show-hand
    swipenav demo right --save right.yaml     # Also write the synthetic trace
"""

import argparse
import logging
import signal
import sys
import time

from swipenav import __version__
from swipenav.core.dispatcher import GestureDispatcher
from swipenav.core.events import Events
from swipenav.core.types import Direction
from swipenav.modules.capture.pose_source import (
    ReplayPoseSource,
    ThrottledPoseSource,
    TraceFormatError,
    load_trace,
    save_trace,
)
from swipenav.modules.capture.synthetic import swipe_trace
from swipenav.modules.control.feedback_manager import FeedbackManager
from swipenav.modules.utils.config import Config
from swipenav.modules.utils.logger import SwipeLogger, setup_logging
from swipenav.modules.visualization.hand_view import render_hand_2d

logger = logging.getLogger(__name__)


class SwipeReplayApp:
    """Wires a replay source, a dispatcher and the feedback/logging listeners."""

    def __init__(self, config: Config, samples, legacy: bool = False,
                 throttle: bool = False, show_hand: bool = False):
        self._config = config
        self._replay = ReplayPoseSource(samples)
        self._show_hand = show_hand
        self._running = False
        self._fired = []

        # Replayed time drives the throttle so results are reproducible.
        source = self._replay
        if throttle:
            source = ThrottledPoseSource(
                self._replay,
                interval=config.throttle_interval,
                clock=lambda: self._replay.current_time,
            )

        block_duration = config.legacy_block_duration if legacy else config.block_duration
        self._dispatcher = GestureDispatcher(
            source,
            block_duration=block_duration,
            neutral_config=config.neutral,
            swipe_config=config.swipe,
        )

        if legacy:
            legacy_config = config.legacy
            for direction in Direction:
                self._dispatcher.add_single_direction_detector(
                    direction, self._make_callback(direction), legacy_config,
                )
        else:
            self._dispatcher.add_swipe_detector(
                on_left=self._make_callback(Direction.LEFT),
                on_right=self._make_callback(Direction.RIGHT),
                on_up=self._make_callback(Direction.UP),
                on_down=self._make_callback(Direction.DOWN),
            )

        self._feedback = FeedbackManager(config.feedback)
        self._swipe_logger = SwipeLogger()
        bus = self._dispatcher.event_bus
        bus.subscribe(Events.NEUTRAL_CHANGED, self._feedback.on_neutral_changed)
        bus.subscribe(Events.SWIPE_DETECTED, self._feedback.on_swipe)
        bus.subscribe(Events.SWIPE_DETECTED, self._swipe_logger.log_swipe)
        bus.subscribe(Events.GESTURE_SUPPRESSED, self._swipe_logger.log_suppressed)

        logger.info("SwipeReplayApp initialized (%d samples, %s detectors, lock %.2fs)",
                    len(self._replay), "single-direction" if legacy else "unified",
                    block_duration)

    def _make_callback(self, direction: Direction):
        def callback():
            self._fired.append(direction)
        return callback

    def run(self, realtime: bool = False) -> list:
        """Replay every sample. Returns the fired SwipeEvents in order."""
        self._running = True
        events = []
        previous = None

        for now in self._replay:
            if not self._running:
                logger.info("Replay interrupted at %.3fs", now)
                break
            if realtime and previous is not None:
                time.sleep(max(0.0, now - previous))
            previous = now

            result = self._dispatcher.tick(now)
            for event in result.events:
                events.append(event)
                feedback = self._feedback.active(now)
                if feedback is not None:
                    print(f"{now:8.3f}s  {feedback.icon:>2}  {feedback.label}")
                if self._show_hand:
                    frame = self._replay.latest_frame()
                    if frame is not None:
                        print(render_hand_2d(frame))

        self._running = False
        self._report()
        return events

    def _report(self):
        summary = self._swipe_logger.summary()
        logger.info("Replay done: %d ticks, %d swipes, %d suppressed",
                    self._dispatcher.tick_count, summary["total"], summary["suppressed"])
        for direction, count in sorted(summary["by_direction"].items()):
            logger.info("  %-6s %d", direction, count)

    @property
    def dispatcher(self) -> GestureDispatcher:
        return self._dispatcher

    @property
    def fired_directions(self) -> list:
        return list(self._fired)

    def handle_signal(self, signum, frame):
        """Handle SIGINT/SIGTERM for graceful shutdown."""
        logger.info("Signal %d received, stopping...", signum)
        self._running = False


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="swipenav",
        description="Recognize hand swipes from recorded joint poses",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", type=str, default=None, help="Path to config.yaml")
    parser.add_argument("--log-level", type=str, default=None,
                        help="Override logging.level (DEBUG, INFO, ...)")
    parser.add_argument("--legacy", action="store_true",
                        help="Use single-direction detectors with the legacy lock duration")
    parser.add_argument("--throttle", action="store_true",
                        help="Throttle pose updates to pose_source.throttle_interval")
    parser.add_argument("--show-hand", action="store_true",
                        help="Print a top-down view of the hand at each swipe")
    parser.add_argument("--realtime", action="store_true",
                        help="Pace the replay with the recorded timestamps")

    sub = parser.add_subparsers(dest="command", required=True)

    replay = sub.add_parser("replay", help="Replay a JSON/YAML pose trace")
    replay.add_argument("trace", type=str, help="Trace file")

    demo = sub.add_parser("demo", help="Replay a synthetic swipe")
    demo.add_argument("direction", choices=[d.value for d in Direction])
    demo.add_argument("--distance", type=float, default=0.08, help="Travel in meters")
    demo.add_argument("--duration", type=float, default=0.4, help="Swipe time in seconds")
    demo.add_argument("--fps", type=float, default=30.0, help="Samples per second")
    demo.add_argument("--jitter", type=float, default=0.0, help="Noise std-dev in meters")
    demo.add_argument("--seed", type=int, default=None, help="Jitter seed")
    demo.add_argument("--no-pinch", action="store_true",
                      help="Keep the hand open so the neutral gate stays closed")
    demo.add_argument("--save", type=str, default=None, help="Also write the trace here")

    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    config = Config()
    config.load(config_path=args.config)
    if args.log_level:
        config.set("logging.level", args.log_level)

    log_cfg = config.get_section("logging")
    setup_logging(
        level=log_cfg.get("level", "INFO"),
        log_file=log_cfg.get("file"),
        max_size_mb=log_cfg.get("max_size_mb", 10),
        backup_count=log_cfg.get("backup_count", 3),
    )

    if args.command == "replay":
        try:
            samples = load_trace(args.trace)
        except (OSError, TraceFormatError) as e:
            logger.error("Cannot load trace %s: %s", args.trace, e)
            return 1
    else:
        pinch_gap = 0.05 if args.no_pinch else 0.0
        samples = swipe_trace(
            Direction.from_string(args.direction),
            distance=args.distance,
            duration=args.duration,
            fps=args.fps,
            pinch_gap=pinch_gap,
            jitter=args.jitter,
            seed=args.seed,
        )
        if args.save:
            save_trace(args.save, samples)

    try:
        app = SwipeReplayApp(
            config, samples,
            legacy=args.legacy, throttle=args.throttle, show_hand=args.show_hand,
        )
    except (KeyError, ValueError) as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    signal.signal(signal.SIGINT, app.handle_signal)
    signal.signal(signal.SIGTERM, app.handle_signal)

    events = app.run(realtime=args.realtime)
    print(f"{len(events)} swipe(s): {', '.join(e.direction.value for e in events) or 'none'}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
