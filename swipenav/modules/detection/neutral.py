"""
Neutral Pose Detector
======================

Gates swipe recognition on a thumb-to-index pinch. The hand counts as
"neutral" (ready to swipe) while the thumb tip and index tip are within
a small distance of each other.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from swipenav.core.types import JointFrame, JointName, NeutralState

logger = logging.getLogger(__name__)


@dataclass
class NeutralConfig:
    """Neutral pose detection configuration."""
    threshold: float = 0.01    # Max thumb/index tip gap (meters), inclusive

    def __post_init__(self):
        if self.threshold < 0:
            raise ValueError(f"neutral threshold must be >= 0, got {self.threshold}")

    @classmethod
    def from_dict(cls, config: dict) -> "NeutralConfig":
        """Create config from dictionary."""
        return cls(threshold=float(config.get("threshold", 0.01)))


class NeutralPositionDetector:
    """
    Derives the neutral flag from the latest joint frame.

    A pure function of the current frame: there is no time-based
    hysteresis, and a gap exactly equal to the threshold reads as neutral.

    Example:
        >>> detector = NeutralPositionDetector()
        >>> state = detector.update(pose_source.latest_frame())
        >>> if state.neutral:
        ...     print(f"Pinched ({state.distance * 100:.1f}cm)")
    """

    def __init__(self, config: Optional[NeutralConfig] = None):
        self.config = config or NeutralConfig()
        self._neutral = False
        self._distance = 0.0

    def update(self, frame: Optional[JointFrame]) -> NeutralState:
        """Recompute the neutral state for this tick.

        With no frame (or no usable thumb/index tips) the hand is not
        neutral and the last measured distance is kept.
        """
        if (
            frame is None
            or not frame.is_tracked(JointName.THUMB_TIP)
            or not frame.is_tracked(JointName.INDEX_TIP)
        ):
            self._neutral = False
            return self.state

        thumb = frame.position(JointName.THUMB_TIP)
        index = frame.position(JointName.INDEX_TIP)
        self._distance = float(np.linalg.norm(thumb - index))
        self._neutral = self._distance <= self.config.threshold
        return self.state

    @property
    def neutral(self) -> bool:
        return self._neutral

    @property
    def distance(self) -> float:
        return self._distance

    @property
    def state(self) -> NeutralState:
        return NeutralState(neutral=self._neutral, distance=self._distance)

    def reset(self):
        self._neutral = False
        self._distance = 0.0
