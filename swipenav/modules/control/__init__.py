"""Gesture lock and feedback."""
from .gesture_lock import DEFAULT_BLOCK_DURATION, LEGACY_BLOCK_DURATION, GestureLock
from .feedback_manager import FeedbackConfig, FeedbackManager

__all__ = [
    "DEFAULT_BLOCK_DURATION",
    "LEGACY_BLOCK_DURATION",
    "GestureLock",
    "FeedbackConfig",
    "FeedbackManager",
]
