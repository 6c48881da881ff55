"""
Camera-side helpers: MediaPipe hand tracking and OpenCV overlays.
"""
import cv2
import mediapipe as mp
import numpy as np
from typing import Optional, List

from .landmarks import FINGERTIPS, HAND_CONNECTIONS, WRIST
from .types import HandPose, Landmark


class HandsTracker:
    """Hand landmark tracker using MediaPipe Hands."""

    def __init__(self, max_num_hands: int = 1, min_detection_conf: float = 0.7, min_tracking_conf: float = 0.5):
        """
        Initialize the hands tracker.

        Args:
            max_num_hands: Maximum number of hands to detect
            min_detection_conf: Minimum confidence for hand detection
            min_tracking_conf: Minimum confidence for hand tracking
        """
        self.mp_hands = mp.solutions.hands
        self.hands = self.mp_hands.Hands(
            static_image_mode=False,
            max_num_hands=max_num_hands,
            model_complexity=1,
            min_detection_confidence=min_detection_conf,
            min_tracking_confidence=min_tracking_conf
        )

    def process(self, frame_bgr: np.ndarray) -> Optional[List[Landmark]]:
        """
        Process a frame and return hand landmarks.

        Args:
            frame_bgr: Input frame in BGR format

        Returns:
            List of 21 (x, y, z) coordinates in [0..1] range, or None if no hand detected
        """
        # MediaPipe expects RGB
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)
        results = self.hands.process(frame_rgb)

        if results.multi_hand_landmarks:
            # First detected hand only
            hand_landmarks = results.multi_hand_landmarks[0]
            return [(lm.x, lm.y, lm.z) for lm in hand_landmarks.landmark]

        return None

    def close(self) -> None:
        self.hands.close()


def draw_landmarks(frame: np.ndarray, landmarks: HandPose) -> np.ndarray:
    """
    Draw the hand skeleton on the frame.

    Fingertips are highlighted in orange, the wrist is drawn larger.

    Args:
        frame: Input frame
        landmarks: List of (x, y[, z]) coordinates in [0..1] range

    Returns:
        Frame with landmarks drawn
    """
    height, width = frame.shape[:2]
    points = [(int(lm[0] * width), int(lm[1] * height)) for lm in landmarks]

    for start, end in HAND_CONNECTIONS:
        cv2.line(frame, points[start], points[end], (166, 184, 20), 3, cv2.LINE_AA)

    for i, (px, py) in enumerate(points):
        if i in FINGERTIPS:
            color = (22, 115, 249)
        elif i == WRIST:
            color = (136, 148, 13)
        else:
            color = (191, 212, 45)
        cv2.circle(frame, (px, py), 8 if i == WRIST else 5, color, -1)

    return frame


def draw_stability_bar(frame: np.ndarray, progress: float, origin=(10, 110), size=(200, 12)) -> np.ndarray:
    """Draw a horizontal progress bar for how long the current sign has been held."""
    x, y = origin
    w, h = size
    filled = int(w * max(0.0, min(progress, 1.0)))
    cv2.rectangle(frame, (x, y), (x + w, y + h), (80, 80, 80), -1)
    if filled > 0:
        cv2.rectangle(frame, (x, y), (x + filled, y + h), (166, 184, 20), -1)
    label = "Confirmed!" if progress >= 1.0 else "Hold..."
    cv2.putText(frame, label, (x + w + 10, y + h), cv2.FONT_HERSHEY_SIMPLEX, 0.5, (255, 255, 255), 1)
    return frame
