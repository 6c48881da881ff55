"""
Recognition quality hints shown next to the camera view.
"""
from typing import List, Literal

ConfidenceLevel = Literal["high", "medium", "low"]
LightingQuality = Literal["good", "poor", "unknown"]

HIGH_CONFIDENCE = 0.8
MEDIUM_CONFIDENCE = 0.5


def confidence_level(confidence: float) -> ConfidenceLevel:
    if confidence >= HIGH_CONFIDENCE:
        return "high"
    if confidence >= MEDIUM_CONFIDENCE:
        return "medium"
    return "low"


def recognition_issues(hand_detected: bool, confidence: float,
                       lighting: LightingQuality = "unknown") -> List[str]:
    """List the problems worth telling the user about, empty when all is well."""
    issues = []

    if not hand_detected:
        issues.append("No hand detected in frame")

    if hand_detected and confidence < MEDIUM_CONFIDENCE:
        issues.append("Gesture unclear - try holding steady")

    if lighting == "poor":
        issues.append("Low lighting may affect accuracy")

    return issues
