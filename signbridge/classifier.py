"""
Rule-based sign classifier over 21 hand landmarks.

Each finger is reduced to an extended/folded flag (see landmarks.py) and the
five flags are matched against a fixed table of patterns. The first matching
pattern wins; its confidence is a per-label constant, not a geometric score.
"""
from dataclasses import dataclass
from typing import Optional, Tuple

from .landmarks import finger_states, is_thumb_pointing_up, is_valid_pose
from .types import ClassificationResult, HandPose


@dataclass(frozen=True)
class GesturePattern:
    """Finger flags (thumb, index, middle, ring, pinky) that identify a label."""
    label: str
    fingers: Tuple[bool, bool, bool, bool, bool]
    confidence: float
    thumb_pointing_up: bool = False


# Priority order: earlier entries win if two patterns ever overlap
GESTURE_PATTERNS = (
    GesturePattern("THUMBS_UP", (True, False, False, False, False), 0.95, thumb_pointing_up=True),
    GesturePattern("OPEN_PALM", (True, True, True, True, True), 0.95),
    GesturePattern("V", (False, True, True, False, False), 0.90),
    GesturePattern("L", (True, True, False, False, False), 0.88),
    GesturePattern("I_LOVE_YOU", (True, True, False, False, True), 0.92),
    GesturePattern("D", (False, True, False, False, False), 0.85),
    GesturePattern("A", (False, False, False, False, False), 0.85),
    GesturePattern("W", (False, True, True, True, False), 0.88),
    GesturePattern("B", (False, True, True, True, True), 0.90),
    GesturePattern("Y", (True, False, False, False, True), 0.92),
    GesturePattern("I", (False, False, False, False, True), 0.85),
    GesturePattern("F", (True, False, True, True, True), 0.82),
    GesturePattern("K", (True, True, True, False, False), 0.80),
    GesturePattern("ROCK_ON", (False, True, False, False, True), 0.88),
)

GESTURE_CONFIDENCE = {p.label: p.confidence for p in GESTURE_PATTERNS}
GESTURE_LABELS = tuple(p.label for p in GESTURE_PATTERNS)


def classify(pose: Optional[HandPose]) -> Optional[ClassificationResult]:
    """
    Classify one hand pose.

    Args:
        pose: 21 (x, y[, z]) landmarks in [0..1] range, or None when no hand is in frame

    Returns:
        None when there is no usable hand. Otherwise a ClassificationResult;
        its label is None when the finger flags match no known sign.
    """
    if not is_valid_pose(pose):
        return None

    states = finger_states(pose)
    flags = states.as_tuple()

    for pattern in GESTURE_PATTERNS:
        if pattern.fingers != flags:
            continue
        if pattern.thumb_pointing_up and not is_thumb_pointing_up(pose):
            continue
        return ClassificationResult(label=pattern.label, confidence=pattern.confidence, finger_states=states)

    return ClassificationResult(label=None, confidence=0.0, finger_states=states)
