"""Swipe recognition module."""
from .swipe_detector import DirectionalSwipeDetector, SwipeCallbacks, SwipeConfig
from .single_direction import SingleDirectionConfig, SingleDirectionSwipeDetector

__all__ = [
    "DirectionalSwipeDetector",
    "SwipeCallbacks",
    "SwipeConfig",
    "SingleDirectionConfig",
    "SingleDirectionSwipeDetector",
]
