"""
Synthetic hand poses for tests.

The hand is upright (fingers point toward y=0) with the thumb on the left.
"""
from typing import List, Tuple

Point = Tuple[float, float, float]

WRIST = (0.5, 0.9, 0.0)
THUMB_CMC = (0.42, 0.82, 0.0)
THUMB_MCP = (0.35, 0.72, 0.0)
MCP_X = {"index": 0.45, "middle": 0.5, "ring": 0.55, "pinky": 0.6}
MCP_Y = 0.6


def _finger(x: float, extended: bool) -> List[Point]:
    """MCP, PIP, DIP, TIP for one finger."""
    if extended:
        return [(x, MCP_Y, 0.0), (x, 0.45, 0.0), (x, 0.37, 0.0), (x, 0.3, 0.0)]
    # curled into the palm, tip below the knuckle
    return [(x, MCP_Y, 0.0), (x, 0.55, 0.0), (x, 0.62, 0.0), (x, 0.68, 0.0)]


def make_pose(thumb: bool = False, index: bool = False, middle: bool = False,
              ring: bool = False, pinky: bool = False, thumb_up: bool = True) -> List[Point]:
    """Build a 21-landmark pose with the given fingers extended."""
    if thumb:
        thumb_y = 0.55 if thumb_up else 0.8
        thumb_ip = (0.27, (0.72 + thumb_y) / 2, 0.0)
        thumb_tip = (0.2, thumb_y, 0.0)
    else:
        # tucked across the palm, next to the index knuckle
        thumb_ip = (0.4, 0.7, 0.0)
        thumb_tip = (0.43, 0.68, 0.0)

    pose = [WRIST, THUMB_CMC, THUMB_MCP, thumb_ip, thumb_tip]
    pose += _finger(MCP_X["index"], index)
    pose += _finger(MCP_X["middle"], middle)
    pose += _finger(MCP_X["ring"], ring)
    pose += _finger(MCP_X["pinky"], pinky)
    return pose


def thumbs_up_pose() -> List[Point]:
    """Fist with the thumb far out to the right (x=0.9) and above its MCP."""
    pose = make_pose()
    pose[1] = (0.55, 0.8, 0.0)
    pose[2] = (0.6, 0.7, 0.0)
    pose[3] = (0.75, 0.6, 0.0)
    pose[4] = (0.9, 0.5, 0.0)
    pose[5] = (0.55, MCP_Y, 0.0)
    return pose
