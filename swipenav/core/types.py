"""
Shared domain types for the swipe navigation system.

Centralizes enums, data classes, and type definitions used across modules
to eliminate circular imports and ensure type consistency.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict, Iterable, Mapping, Optional, Sequence

import numpy as np

Vec3 = np.ndarray

NUM_JOINTS = 25
FLOATS_PER_TRANSFORM = 16


# =============================================================================
# Joints
# =============================================================================

class JointName(IntEnum):
    """WebXR hand joints, valued by their slot in a pose snapshot."""
    WRIST = 0
    THUMB_METACARPAL = 1
    THUMB_PHALANX_PROXIMAL = 2
    THUMB_PHALANX_DISTAL = 3
    THUMB_TIP = 4
    INDEX_METACARPAL = 5
    INDEX_PHALANX_PROXIMAL = 6
    INDEX_PHALANX_INTERMEDIATE = 7
    INDEX_PHALANX_DISTAL = 8
    INDEX_TIP = 9
    MIDDLE_METACARPAL = 10
    MIDDLE_PHALANX_PROXIMAL = 11
    MIDDLE_PHALANX_INTERMEDIATE = 12
    MIDDLE_PHALANX_DISTAL = 13
    MIDDLE_TIP = 14
    RING_METACARPAL = 15
    RING_PHALANX_PROXIMAL = 16
    RING_PHALANX_INTERMEDIATE = 17
    RING_PHALANX_DISTAL = 18
    RING_TIP = 19
    PINKY_METACARPAL = 20
    PINKY_PHALANX_PROXIMAL = 21
    PINKY_PHALANX_INTERMEDIATE = 22
    PINKY_PHALANX_DISTAL = 23
    PINKY_TIP = 24

    @classmethod
    def from_string(cls, name: str) -> "JointName":
        """Accept "Thumb_Tip", "thumb_tip" or "THUMB_TIP".

        Raises:
            KeyError: if the name is not a hand joint.
        """
        return cls[name.strip().upper()]

    @property
    def label(self) -> str:
        """WebXR-style name, e.g. "Index_Phalanx_Distal"."""
        return "_".join(part.capitalize() for part in self.name.split("_"))


class JointFrame:
    """One pose snapshot: a 3D position per hand joint.

    Positions are held in a (25, 3) float array indexed by JointName.
    Joints the source did not report are NaN. The frame is read-only;
    accessors hand out copies.
    """

    __slots__ = ("_positions",)

    def __init__(self, positions: np.ndarray):
        positions = np.array(positions, dtype=np.float64)
        if positions.shape != (NUM_JOINTS, 3):
            raise ValueError(
                f"expected positions of shape ({NUM_JOINTS}, 3), got {positions.shape}"
            )
        positions.setflags(write=False)
        self._positions = positions

    @classmethod
    def from_mapping(cls, joints: Mapping) -> "JointFrame":
        """Build a frame from {joint: (x, y, z)}; keys may be JointName or str."""
        positions = np.full((NUM_JOINTS, 3), np.nan)
        for key, value in joints.items():
            joint = key if isinstance(key, JointName) else JointName.from_string(key)
            positions[joint] = np.asarray(value, dtype=np.float64)[:3]
        return cls(positions)

    @classmethod
    def from_transforms(cls, transforms: Sequence[float]) -> "JointFrame":
        """Build a frame from 25 packed 4x4 joint matrices.

        Each joint occupies 16 consecutive floats in column-major order,
        so its translation sits at offsets 12, 13 and 14.
        """
        flat = np.asarray(transforms, dtype=np.float64).ravel()
        expected = NUM_JOINTS * FLOATS_PER_TRANSFORM
        if flat.size != expected:
            raise ValueError(f"expected {expected} floats, got {flat.size}")
        matrices = flat.reshape(NUM_JOINTS, FLOATS_PER_TRANSFORM)
        return cls(matrices[:, 12:15])

    def position(self, joint: JointName) -> Vec3:
        return self._positions[joint].copy()

    def is_tracked(self, joint: JointName) -> bool:
        """True when the joint has a finite position."""
        return bool(np.all(np.isfinite(self._positions[joint])))

    def as_array(self) -> np.ndarray:
        return self._positions.copy()

    def to_dict(self) -> Dict[str, list]:
        """Tracked joints as {label: [x, y, z]}, for trace files."""
        return {
            joint.label: [float(v) for v in self._positions[joint]]
            for joint in JointName
            if self.is_tracked(joint)
        }

    def __iter__(self) -> Iterable:
        for joint in JointName:
            yield joint, self.position(joint)

    def __repr__(self):
        tracked = sum(1 for joint in JointName if self.is_tracked(joint))
        return f"JointFrame(tracked={tracked}/{NUM_JOINTS})"


# =============================================================================
# Directions & Events
# =============================================================================

class Direction(Enum):
    """Swipe directions recognized by the detectors."""
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"

    @classmethod
    def from_string(cls, name: str) -> "Direction":
        return cls(name.strip().lower())

    @property
    def axis(self) -> str:
        return "x" if self in (Direction.LEFT, Direction.RIGHT) else "y"

    @property
    def sign(self) -> int:
        """Sign of the per-tick delta that moves toward this direction."""
        return -1 if self in (Direction.LEFT, Direction.DOWN) else 1


@dataclass(frozen=True)
class SwipeEvent:
    """A fired swipe. Handed to listeners, never kept by the core."""
    direction: Direction
    time: float


# =============================================================================
# State Containers
# =============================================================================

@dataclass(frozen=True)
class NeutralState:
    """Whether the hand is in the pinch "ready" pose this tick."""
    neutral: bool = False
    distance: float = 0.0


@dataclass
class GestureLockState:
    """Shared trigger budget. One instance per running composition."""
    is_blocked: bool = False
    last_trigger_time: float = 0.0
    block_duration: float = 0.2


@dataclass
class SwipeTrackState:
    """Per-detector window memory; all-None means idle."""
    previous_position: Optional[Vec3] = None
    previous_time: Optional[float] = None
    window_start_position: Optional[Vec3] = None
    window_start_time: Optional[float] = None
    locked_direction: Optional[Direction] = None

    def reset(self):
        self.previous_position = None
        self.previous_time = None
        self.window_start_position = None
        self.window_start_time = None
        self.locked_direction = None

    def anchor(self, position: Vec3, now: float):
        """Restart the window at the given sample and unlock the direction."""
        self.window_start_position = position.copy()
        self.window_start_time = now
        self.locked_direction = None

    @property
    def is_idle(self) -> bool:
        return (
            self.previous_position is None
            and self.previous_time is None
            and self.window_start_position is None
            and self.window_start_time is None
            and self.locked_direction is None
        )

    def copy(self) -> "SwipeTrackState":
        return SwipeTrackState(
            previous_position=None if self.previous_position is None else self.previous_position.copy(),
            previous_time=self.previous_time,
            window_start_position=None if self.window_start_position is None else self.window_start_position.copy(),
            window_start_time=self.window_start_time,
            locked_direction=self.locked_direction,
        )
