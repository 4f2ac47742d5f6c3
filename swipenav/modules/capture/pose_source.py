"""
Pose sources feeding joint frames to the dispatcher.

The dispatcher only needs latest_frame(); device and XR session handling
live outside this package. The sources here cover tests, recorded traces
and update-rate throttling.

Trace files are JSON or YAML:

    frames:
      - time: 0.0
        joints: {Thumb_Tip: [0.0, 1.2, -0.3], Index_Tip: [...], Middle_Tip: [...]}
      - time: 0.1
        joints: null          # hand not tracked on this frame
"""

import json
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Protocol, Sequence, Union

import yaml

from swipenav.core.types import JointFrame

logger = logging.getLogger(__name__)

DEFAULT_THROTTLE_INTERVAL = 0.1


class TraceFormatError(ValueError):
    """Raised when a trace file cannot be turned into pose samples."""


class PoseSource(Protocol):
    """Anything that can report the latest hand pose, or None when untracked."""

    def latest_frame(self) -> Optional[JointFrame]:
        ...


@dataclass
class PoseSample:
    """One recorded tick: host time and the frame seen (None if untracked)."""
    time: float
    frame: Optional[JointFrame]


class StaticPoseSource:
    """Returns whatever frame was last set. Handy for tests and host adapters."""

    def __init__(self, frame: Optional[JointFrame] = None):
        self._frame = frame

    def set_frame(self, frame: Optional[JointFrame]):
        self._frame = frame

    def clear(self):
        self._frame = None

    def latest_frame(self) -> Optional[JointFrame]:
        return self._frame


class ReplayPoseSource:
    """
    Steps through recorded samples.

    Iterating yields each sample's timestamp after making it current, so a
    host loop reads:

        >>> source = ReplayPoseSource(load_trace("swipe.yaml"))
        >>> for now in source:
        ...     dispatcher.tick(now)
    """

    def __init__(self, samples: Sequence[PoseSample]):
        self._samples = list(samples)
        _check_monotonic(self._samples)
        self._index = -1

    def __iter__(self) -> Iterator[float]:
        self._index = -1
        while self.step():
            yield self._samples[self._index].time

    def __len__(self):
        return len(self._samples)

    def step(self) -> bool:
        """Move to the next sample. Returns False when the trace is exhausted."""
        if self._index + 1 >= len(self._samples):
            return False
        self._index += 1
        return True

    @property
    def current_time(self) -> Optional[float]:
        if self._index < 0:
            return None
        return self._samples[self._index].time

    def latest_frame(self) -> Optional[JointFrame]:
        if self._index < 0:
            return None
        return self._samples[self._index].frame


class ThrottledPoseSource:
    """Republishes another source's frame at most once per `interval` seconds.

    Between publications the previously published frame is repeated, so a
    detector downstream sees zero motion on those ticks.
    """

    def __init__(
        self,
        source: PoseSource,
        interval: float = DEFAULT_THROTTLE_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ):
        if interval < 0:
            raise ValueError(f"interval must be >= 0, got {interval}")
        self._source = source
        self._interval = interval
        self._clock = clock
        self._published: Optional[JointFrame] = None
        self._last_publish: Optional[float] = None

    def latest_frame(self) -> Optional[JointFrame]:
        frame = self._source.latest_frame()
        if frame is None:
            # Loss is reported straight away.
            self._published = None
            self._last_publish = None
            return None

        now = self._clock()
        if self._last_publish is None or now - self._last_publish >= self._interval:
            self._published = frame
            self._last_publish = now
        return self._published


# =============================================================================
# Trace files
# =============================================================================

def _check_monotonic(samples: Sequence[PoseSample]):
    for previous, current in zip(samples, samples[1:]):
        if current.time <= previous.time:
            raise TraceFormatError(
                f"timestamps must strictly increase: {previous.time} then {current.time}"
            )


def _parse_frames(data) -> List[PoseSample]:
    if not isinstance(data, dict) or not isinstance(data.get("frames"), list):
        raise TraceFormatError("trace must be a mapping with a 'frames' list")

    samples = []
    for i, entry in enumerate(data["frames"]):
        if not isinstance(entry, dict) or "time" not in entry:
            raise TraceFormatError(f"frame {i}: expected a mapping with 'time'")
        joints = entry.get("joints")
        try:
            frame = None if joints is None else JointFrame.from_mapping(joints)
        except (AttributeError, IndexError, KeyError, ValueError, TypeError) as e:
            raise TraceFormatError(f"frame {i}: bad joints ({e})") from e
        try:
            timestamp = float(entry["time"])
        except (TypeError, ValueError) as e:
            raise TraceFormatError(f"frame {i}: bad time {entry['time']!r}") from e
        samples.append(PoseSample(time=timestamp, frame=frame))

    _check_monotonic(samples)
    return samples


def load_trace(path: Union[str, Path]) -> List[PoseSample]:
    """Load pose samples from a .json or .yaml/.yml trace file."""
    path = Path(path)
    with open(path, "r") as f:
        try:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise TraceFormatError(f"{path}: {e}") from e
    samples = _parse_frames(data)
    logger.info("Loaded %d pose samples from %s", len(samples), path)
    return samples


def save_trace(path: Union[str, Path], samples: Sequence[PoseSample]):
    """Write pose samples as a trace file (format chosen by extension)."""
    path = Path(path)
    data = {
        "frames": [
            {"time": s.time, "joints": None if s.frame is None else s.frame.to_dict()}
            for s in samples
        ]
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        if path.suffix.lower() == ".json":
            json.dump(data, f, indent=2)
        else:
            yaml.safe_dump(data, f, sort_keys=False)
    logger.info("Saved %d pose samples to %s", len(samples), path)
