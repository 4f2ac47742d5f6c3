"""
Global fire-once lock shared by every swipe detector in a composition.

Lifecycle (called by the dispatcher each tick):
    advance(now)      - expire the block once block_duration has elapsed
    try_trigger(now)  - claim the single trigger slot, or be refused

A detector that is refused must not fire its callback and must leave its
window alone, so the displacement it already gathered still counts once
the lock expires.
"""

import logging

from swipenav.core.types import GestureLockState

logger = logging.getLogger(__name__)

DEFAULT_BLOCK_DURATION = 0.2
LEGACY_BLOCK_DURATION = 1.0


class GestureLock:
    """Mutual-exclusion and cooldown register for gesture triggers."""

    def __init__(self, block_duration: float = DEFAULT_BLOCK_DURATION):
        if block_duration < 0:
            raise ValueError(f"block_duration must be >= 0, got {block_duration}")
        self._state = GestureLockState(block_duration=float(block_duration))

    def advance(self, now: float):
        """Release the lock if its block has run out. Run before any trigger."""
        state = self._state
        if state.is_blocked and now - state.last_trigger_time >= state.block_duration:
            state.is_blocked = False
            logger.debug("Gesture lock released at %.3fs (held since %.3fs)",
                         now, state.last_trigger_time)

    def try_trigger(self, now: float) -> bool:
        """Claim the lock for a gesture firing at `now`.

        Returns:
            True if the caller may fire; False if another gesture holds it.
        """
        state = self._state
        if state.is_blocked:
            return False
        state.is_blocked = True
        state.last_trigger_time = now
        logger.debug("Gesture lock taken at %.3fs for %.2fs", now, state.block_duration)
        return True

    def remaining_block_time(self, now: float) -> float:
        """Seconds until the lock may release (0 if not blocked)."""
        state = self._state
        if not state.is_blocked:
            return 0.0
        return max(0.0, state.block_duration - (now - state.last_trigger_time))

    @property
    def is_blocked(self) -> bool:
        return self._state.is_blocked

    @property
    def last_trigger_time(self) -> float:
        return self._state.last_trigger_time

    @property
    def block_duration(self) -> float:
        return self._state.block_duration

    @property
    def state(self) -> GestureLockState:
        """Snapshot of the lock register."""
        return GestureLockState(
            is_blocked=self._state.is_blocked,
            last_trigger_time=self._state.last_trigger_time,
            block_duration=self._state.block_duration,
        )

    def reset(self):
        """Clear the block, keeping the configured duration."""
        self._state.is_blocked = False
        self._state.last_trigger_time = 0.0

    def __repr__(self):
        return (f"GestureLock(blocked={self._state.is_blocked}, "
                f"block_duration={self._state.block_duration})")
