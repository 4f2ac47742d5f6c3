"""
Visual feedback state for the tracked hand.

Models the hand indicator tint (neutral pose on/off) and a short,
fading confirmation for each fired swipe. Rendering is left to the host;
this only decides what should be shown.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from swipenav.core.types import Direction, NeutralState, SwipeEvent

logger = logging.getLogger(__name__)

DEFAULT_NEUTRAL_COLOR = 0x0F2540


@dataclass
class FeedbackConfig:
    """Feedback timings (seconds) and tint colors (0xRRGGBB)."""
    duration: float = 1.0
    fade_duration: float = 0.3
    neutral_color: int = DEFAULT_NEUTRAL_COLOR
    off_color: Optional[int] = None
    neutral_emissive_intensity: float = 0.3

    @classmethod
    def from_dict(cls, config: dict) -> "FeedbackConfig":
        """Create config from dictionary."""
        off_color = config.get("off_color")
        return cls(
            duration=float(config.get("duration", 1.0)),
            fade_duration=float(config.get("fade_duration", 0.3)),
            neutral_color=int(config.get("neutral_color", DEFAULT_NEUTRAL_COLOR)),
            off_color=None if off_color is None else int(off_color),
            neutral_emissive_intensity=float(config.get("neutral_emissive_intensity", 0.3)),
        )


@dataclass(frozen=True)
class HandTint:
    """Material override for the hand model. color=None keeps the model's own color."""
    color: Optional[int]
    emissive: int
    emissive_intensity: float


@dataclass(frozen=True)
class SwipeFeedback:
    """What to show for a recent swipe, with its current opacity."""
    direction: Direction
    icon: str
    label: str
    opacity: float


_SWIPE_DISPLAY = {
    Direction.LEFT: {"icon": "<<", "label": "Swipe Left"},
    Direction.RIGHT: {"icon": ">>", "label": "Swipe Right"},
    Direction.UP: {"icon": "^", "label": "Swipe Up"},
    Direction.DOWN: {"icon": "v", "label": "Swipe Down"},
}


class FeedbackManager:
    """Tracks indicator tint and swipe confirmations.

    Wire on_neutral_changed / on_swipe to the dispatcher's bus events.
    """

    def __init__(self, config: Optional[FeedbackConfig] = None):
        self.config = config or FeedbackConfig()
        self._neutral = False
        self._active_event: Optional[SwipeEvent] = None

    def on_neutral_changed(self, state: NeutralState, **_):
        self._neutral = state.neutral
        logger.debug("Hand indicator %s (gap %.3fm)",
                     "tinted" if state.neutral else "cleared", state.distance)

    def on_swipe(self, event: SwipeEvent, **_):
        self.trigger(event)

    def trigger(self, event: SwipeEvent):
        """Start confirmation feedback for a fired swipe."""
        self._active_event = event

    @property
    def tint(self) -> HandTint:
        if self._neutral:
            return HandTint(
                color=self.config.neutral_color,
                emissive=self.config.neutral_color,
                emissive_intensity=self.config.neutral_emissive_intensity,
            )
        off = self.config.off_color
        return HandTint(color=off, emissive=off if off is not None else 0x000000, emissive_intensity=0.0)

    def active(self, now: float) -> Optional[SwipeFeedback]:
        """Feedback to display at `now`, or None once it has expired."""
        event = self._active_event
        if event is None:
            return None

        elapsed = now - event.time
        if elapsed > self.config.duration:
            self._active_event = None
            return None

        fade_start = self.config.duration - self.config.fade_duration
        if self.config.fade_duration > 0 and elapsed > fade_start:
            opacity = 1.0 - (elapsed - fade_start) / self.config.fade_duration
        else:
            opacity = 1.0

        display = _SWIPE_DISPLAY[event.direction]
        return SwipeFeedback(
            direction=event.direction,
            icon=display["icon"],
            label=display["label"],
            opacity=max(0.0, opacity),
        )

    @property
    def neutral(self) -> bool:
        return self._neutral
