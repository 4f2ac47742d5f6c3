"""
Synthetic hand poses for demos and tests.

Builds a plausible right-hand skeleton (meters, Y up) around a chosen
middle fingertip position, with the thumb and index tips pinched to a
given gap, and generates straight-line swipe traces from it.
"""

from typing import List, Optional, Sequence

import numpy as np

from swipenav.core.types import Direction, JointFrame, JointName
from swipenav.modules.capture.pose_source import PoseSample

DEFAULT_ORIGIN = (0.0, 1.2, -0.35)

# Joint offsets from the middle fingertip for a relaxed, slightly curled hand.
_HAND_OFFSETS = np.array([
    [0.000, -0.180, 0.020],   # Wrist
    [-0.025, -0.160, 0.015],  # Thumb_Metacarpal
    [-0.040, -0.130, 0.005],  # Thumb_Phalanx_Proximal
    [-0.045, -0.100, -0.005], # Thumb_Phalanx_Distal
    [-0.040, -0.075, -0.015], # Thumb_Tip
    [-0.020, -0.150, 0.015],  # Index_Metacarpal
    [-0.022, -0.100, 0.010],  # Index_Phalanx_Proximal
    [-0.028, -0.080, 0.000],  # Index_Phalanx_Intermediate
    [-0.034, -0.075, -0.008], # Index_Phalanx_Distal
    [-0.040, -0.075, -0.015], # Index_Tip
    [0.000, -0.150, 0.015],   # Middle_Metacarpal
    [0.000, -0.095, 0.010],   # Middle_Phalanx_Proximal
    [0.000, -0.050, 0.005],   # Middle_Phalanx_Intermediate
    [0.000, -0.022, 0.002],   # Middle_Phalanx_Distal
    [0.000, 0.000, 0.000],    # Middle_Tip
    [0.020, -0.150, 0.015],   # Ring_Metacarpal
    [0.020, -0.098, 0.010],   # Ring_Phalanx_Proximal
    [0.020, -0.058, 0.005],   # Ring_Phalanx_Intermediate
    [0.020, -0.032, 0.002],   # Ring_Phalanx_Distal
    [0.020, -0.012, 0.000],   # Ring_Tip
    [0.038, -0.145, 0.015],   # Pinky_Metacarpal
    [0.040, -0.105, 0.010],   # Pinky_Phalanx_Proximal
    [0.040, -0.078, 0.005],   # Pinky_Phalanx_Intermediate
    [0.040, -0.060, 0.002],   # Pinky_Phalanx_Distal
    [0.040, -0.045, 0.000],   # Pinky_Tip
])


def make_hand_frame(middle_tip: Sequence[float] = DEFAULT_ORIGIN, pinch_gap: float = 0.0) -> JointFrame:
    """Hand whose middle tip sits at `middle_tip` and whose thumb tip is
    `pinch_gap` meters from the index tip (0 = fully pinched)."""
    positions = np.asarray(middle_tip, dtype=np.float64) + _HAND_OFFSETS
    positions[JointName.THUMB_TIP] = positions[JointName.INDEX_TIP] + np.array([-pinch_gap, 0.0, 0.0])
    return JointFrame(positions)


def swipe_trace(
    direction: Direction,
    distance: float = 0.10,
    duration: float = 0.4,
    fps: float = 30.0,
    origin: Sequence[float] = DEFAULT_ORIGIN,
    pinch_gap: float = 0.0,
    start_time: float = 0.0,
    hold: float = 0.2,
    jitter: float = 0.0,
    seed: Optional[int] = None,
) -> List[PoseSample]:
    """Samples for a straight swipe, padded with `hold` seconds still before and after.

    Args:
        jitter: Std-dev (meters) of Gaussian noise added on all axes
        seed: Seed for the jitter generator
    """
    if fps <= 0:
        raise ValueError(f"fps must be > 0, got {fps}")
    rng = np.random.default_rng(seed)
    step = 1.0 / fps
    unit = np.zeros(3)
    unit[0 if direction.axis == "x" else 1] = direction.sign

    n_hold = int(round(hold * fps))
    n_move = max(1, int(round(duration * fps)))
    travel = np.concatenate([
        np.zeros(n_hold),
        np.linspace(0.0, distance, n_move + 1)[1:],
        np.full(n_hold, distance),
    ])

    origin = np.asarray(origin, dtype=np.float64)
    samples = []
    for i, d in enumerate(np.concatenate([[0.0], travel])):
        tip = origin + unit * d
        if jitter > 0:
            tip = tip + rng.normal(0.0, jitter, size=3)
        samples.append(PoseSample(
            time=round(start_time + i * step, 9),
            frame=make_hand_frame(tip, pinch_gap=pinch_gap),
        ))
    return samples
