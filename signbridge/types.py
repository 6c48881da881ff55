"""
Type definitions for the sign language translator.
"""
from dataclasses import dataclass, field, asdict
from typing import List, Literal, Optional, Protocol, Sequence, Tuple, runtime_checkable


# (x, y, z) in normalized image coordinates; z is relative depth
Landmark = Tuple[float, float, float]
HandPose = Sequence[Sequence[float]]

NUM_LANDMARKS = 21

StabilityPhase = Literal["idle", "tracking", "confirmed"]


@dataclass(frozen=True)
class FingerStates:
    """Extended (True) or folded (False) flag for each finger."""
    thumb: bool
    index: bool
    middle: bool
    ring: bool
    pinky: bool

    def as_tuple(self) -> Tuple[bool, bool, bool, bool, bool]:
        return (self.thumb, self.index, self.middle, self.ring, self.pinky)

    def extended_count(self) -> int:
        return sum(self.as_tuple())


@dataclass(frozen=True)
class ClassificationResult:
    """Per-frame classifier output."""
    label: Optional[str]
    confidence: float
    finger_states: FingerStates

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class StabilityState:
    """Mutable state of one stability tracker."""
    last_label: Optional[str] = None
    consecutive_count: int = 0
    confirmed_label: Optional[str] = None


@dataclass
class FrameUpdate:
    """What the translator reports back for one camera frame."""
    hand_detected: bool
    result: Optional[ClassificationResult]
    progress: float
    confirmed: Optional[str] = None
    description: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "hand_detected": self.hand_detected,
            "label": self.result.label if self.result else None,
            "confidence": self.result.confidence if self.result else 0.0,
            "finger_states": asdict(self.result.finger_states) if self.result else None,
            "progress": self.progress,
            "confirmed": self.confirmed,
            "description": self.description,
        }


@dataclass
class GestureSession:
    """A camera session as stored by the persistence backend."""
    id: str
    session_name: Optional[str]
    started_at: str
    ended_at: Optional[str] = None
    total_gestures: Optional[int] = None


@dataclass
class GestureLog:
    """One confirmed gesture as stored by the persistence backend."""
    id: str
    session_id: Optional[str]
    gesture_name: str
    gesture_description: Optional[str]
    confidence: Optional[float]
    detected_at: str


@dataclass
class SpeechTranscript:
    """Spoken text and the letters it was converted to."""
    id: str
    session_id: Optional[str]
    original_text: str
    converted_signs: List[str] = field(default_factory=list)
    created_at: str = ""


@runtime_checkable
class SpeakerProto(Protocol):
    """Anything that can say a phrase out loud."""

    def speak(self, text: str) -> None:
        ...

    def cancel(self) -> None:
        ...


@runtime_checkable
class GestureStoreProto(Protocol):
    """Persistence backend for sessions, gesture logs and transcripts."""

    def start_session(self, session_name: Optional[str] = None) -> GestureSession:
        ...

    def end_session(self, session_id: str, total_gestures: int) -> GestureSession:
        ...

    def log_gesture(self, session_id: str, gesture_name: str,
                    gesture_description: str, confidence: float) -> GestureLog:
        ...

    def save_transcript(self, session_id: Optional[str], original_text: str,
                        converted_signs: List[str]) -> SpeechTranscript:
        ...

    def get_session(self, session_id: str) -> Optional[GestureSession]:
        ...

    def recent_sessions(self, limit: int = 10) -> List[GestureSession]:
        ...

    def recent_logs(self, session_id: Optional[str] = None, limit: int = 100) -> List[GestureLog]:
        ...

    def recent_transcripts(self, limit: int = 50) -> List[SpeechTranscript]:
        ...
