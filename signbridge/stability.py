"""
Temporal smoothing for per-frame classifications.
"""
import logging
from dataclasses import replace
from typing import Optional

from .types import ClassificationResult, StabilityPhase, StabilityState

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 10


class StabilityTracker:
    """
    Confirms a sign only after it has been seen for N consecutive frames.

    Features:
    - Resets on hand loss (None input) and forgets the confirmed sign
    - A label change restarts the streak at 1
    - Edge-triggered: a held sign is confirmed once, not every frame
    - The same sign is not re-confirmed until a different sign has been
      confirmed or the hand has left the frame

    One tracker belongs to one camera session. Call reset() (or create a new
    tracker) when the session restarts.
    """

    def __init__(self, threshold: int = DEFAULT_THRESHOLD):
        """Initialize the tracker with the number of frames needed to confirm."""
        if threshold < 1:
            raise ValueError(f"threshold must be at least 1, got {threshold}")
        self.threshold = threshold
        self._state = StabilityState()

    def observe(self, result: Optional[ClassificationResult]) -> Optional[str]:
        """
        Feed one frame's classification.

        Args:
            result: Classifier output for the frame, None when no hand was found

        Returns:
            The confirmed label on the frame where the streak reaches the
            threshold, None on every other frame
        """
        state = self._state

        if result is None:
            self.reset()
            return None

        label = result.label
        if label == state.last_label and state.consecutive_count > 0:
            state.consecutive_count += 1
        else:
            state.last_label = label
            state.consecutive_count = 1

        if (label is not None
                and state.consecutive_count >= self.threshold
                and label != state.confirmed_label):
            state.confirmed_label = label
            logger.debug("Confirmed %s after %d frames", label, state.consecutive_count)
            return label

        return None

    def reset(self) -> None:
        """Drop the streak and the confirmed sign."""
        self._state = StabilityState()

    @property
    def progress(self) -> float:
        """How close the current streak is to confirmation, in [0, 1]."""
        return min(self._state.consecutive_count / self.threshold, 1.0)

    @property
    def confirmed_label(self) -> Optional[str]:
        return self._state.confirmed_label

    @property
    def state(self) -> StabilityPhase:
        s = self._state
        if s.consecutive_count == 0:
            return "idle"
        if (s.last_label is not None
                and s.last_label == s.confirmed_label
                and s.consecutive_count >= self.threshold):
            return "confirmed"
        return "tracking"

    def snapshot(self) -> StabilityState:
        """Copy of the internal state, safe to hand to UI code."""
        return replace(self._state)
