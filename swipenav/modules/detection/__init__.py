"""Hand pose gating."""
from .neutral import NeutralConfig, NeutralPositionDetector

__all__ = ["NeutralConfig", "NeutralPositionDetector"]
