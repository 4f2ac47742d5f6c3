"""
swipenav - Hand Swipe Navigation
=================================

Frame-driven recognition of directional swipes from tracked hand joints,
for navigating XR interfaces without a controller.

Modules:
    - core: shared types, event bus and the GestureDispatcher
    - capture: pose sources, trace files and synthetic hands
    - detection: neutral (pinch) pose gating
    - recognition: four-direction and single-direction swipe detectors
    - control: the shared GestureLock and visual feedback state
    - utils: configuration and logging
    - visualization: terminal hand view
"""

__version__ = "1.0.0"

from swipenav.core.dispatcher import GestureDispatcher, TickResult
from swipenav.core.types import Direction, JointFrame, JointName, NeutralState, SwipeEvent
from swipenav.modules.control.gesture_lock import GestureLock
from swipenav.modules.detection.neutral import NeutralPositionDetector
from swipenav.modules.recognition.swipe_detector import (
    DirectionalSwipeDetector,
    SwipeCallbacks,
    SwipeConfig,
)

__all__ = [
    "GestureDispatcher",
    "TickResult",
    "Direction",
    "JointFrame",
    "JointName",
    "NeutralState",
    "SwipeEvent",
    "GestureLock",
    "NeutralPositionDetector",
    "DirectionalSwipeDetector",
    "SwipeCallbacks",
    "SwipeConfig",
]
