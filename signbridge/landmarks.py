"""
Hand landmark indices and finger geometry helpers.
"""
from numbers import Real
from typing import Optional, Tuple

from .types import FingerStates, HandPose, NUM_LANDMARKS


WRIST = 0
THUMB_CMC, THUMB_MCP, THUMB_IP, THUMB_TIP = 1, 2, 3, 4
INDEX_MCP, INDEX_PIP, INDEX_DIP, INDEX_TIP = 5, 6, 7, 8
MIDDLE_MCP, MIDDLE_PIP, MIDDLE_DIP, MIDDLE_TIP = 9, 10, 11, 12
RING_MCP, RING_PIP, RING_DIP, RING_TIP = 13, 14, 15, 16
PINKY_MCP, PINKY_PIP, PINKY_DIP, PINKY_TIP = 17, 18, 19, 20

# (mcp, pip, tip) for the four non-thumb fingers
FINGER_JOINTS = {
    "index": (INDEX_MCP, INDEX_PIP, INDEX_TIP),
    "middle": (MIDDLE_MCP, MIDDLE_PIP, MIDDLE_TIP),
    "ring": (RING_MCP, RING_PIP, RING_TIP),
    "pinky": (PINKY_MCP, PINKY_PIP, PINKY_TIP),
}

FINGERTIPS = (THUMB_TIP, INDEX_TIP, MIDDLE_TIP, RING_TIP, PINKY_TIP)

HAND_CONNECTIONS = [
    (0, 1), (1, 2), (2, 3), (3, 4),
    (0, 5), (5, 6), (6, 7), (7, 8),
    (0, 9), (9, 10), (10, 11), (11, 12),
    (0, 13), (13, 14), (14, 15), (15, 16),
    (0, 17), (17, 18), (18, 19), (19, 20),
    (5, 9), (9, 13), (13, 17),
]

# Tip must rise further than this fraction of the PIP rise above the knuckle
EXTENSION_RATIO = 0.7
# Thumb tip must be this fraction of the thumb-MCP/index-MCP span away from the index knuckle
THUMB_SPREAD_RATIO = 0.5


def palm_center(landmarks: HandPose) -> Tuple[float, float]:
    """
    Calculate the center of the palm.

    Args:
        landmarks: List of 21 hand landmarks

    Returns:
        (x, y) coordinates of palm center in [0..1] range
    """
    palm_indices = [WRIST, INDEX_MCP, MIDDLE_MCP, RING_MCP, PINKY_MCP]

    x_sum = sum(landmarks[i][0] for i in palm_indices)
    y_sum = sum(landmarks[i][1] for i in palm_indices)

    return (x_sum / len(palm_indices), y_sum / len(palm_indices))


def is_valid_pose(pose: Optional[HandPose]) -> bool:
    """True when pose holds exactly 21 landmarks with numeric x and y each."""
    if pose is None:
        return False
    try:
        if len(pose) != NUM_LANDMARKS:
            return False
        return all(
            len(lm) >= 2 and isinstance(lm[0], Real) and isinstance(lm[1], Real)
            for lm in pose
        )
    except TypeError:
        return False


def is_finger_extended(landmarks: HandPose, mcp: int, pip: int, tip: int) -> bool:
    """
    Check whether a non-thumb finger is extended.

    Image y grows downward, so the rise above the knuckle is mcp.y - point.y.
    The tip has to be above the knuckle and rise further than
    EXTENSION_RATIO times the PIP rise, so a slightly curled finger
    still counts as extended.
    """
    tip_rise = landmarks[mcp][1] - landmarks[tip][1]
    pip_rise = landmarks[mcp][1] - landmarks[pip][1]
    return tip_rise > 0 and tip_rise > EXTENSION_RATIO * pip_rise


def is_thumb_extended(landmarks: HandPose) -> bool:
    """Check whether the thumb is held away from the palm (horizontal spread)."""
    tip_spread = abs(landmarks[THUMB_TIP][0] - landmarks[INDEX_MCP][0])
    base_spread = abs(landmarks[THUMB_MCP][0] - landmarks[INDEX_MCP][0])
    return tip_spread > THUMB_SPREAD_RATIO * base_spread


def is_thumb_pointing_up(landmarks: HandPose) -> bool:
    """Thumb tip sits above the thumb MCP joint."""
    return landmarks[THUMB_TIP][1] < landmarks[THUMB_MCP][1]


def finger_states(landmarks: HandPose) -> FingerStates:
    """
    Compute extended/folded flags for all five fingers.

    Args:
        landmarks: List of 21 hand landmarks

    Returns:
        FingerStates for thumb, index, middle, ring and pinky
    """
    return FingerStates(
        thumb=is_thumb_extended(landmarks),
        **{name: is_finger_extended(landmarks, *joints) for name, joints in FINGER_JOINTS.items()}
    )
