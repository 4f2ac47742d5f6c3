"""Pose sources and trace files."""
from .pose_source import (
    PoseSample,
    PoseSource,
    ReplayPoseSource,
    StaticPoseSource,
    ThrottledPoseSource,
    TraceFormatError,
    load_trace,
    save_trace,
)
from .synthetic import make_hand_frame, swipe_trace

__all__ = [
    "PoseSample",
    "PoseSource",
    "ReplayPoseSource",
    "StaticPoseSource",
    "ThrottledPoseSource",
    "TraceFormatError",
    "load_trace",
    "save_trace",
    "make_hand_frame",
    "swipe_trace",
]
