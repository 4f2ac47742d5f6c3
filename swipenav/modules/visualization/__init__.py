"""Terminal visualization."""
from .hand_view import render_hand_2d

__all__ = ["render_hand_2d"]
