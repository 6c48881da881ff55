"""
Sign-to-speech session: ties classification, stability, speech and logging together.
"""
import logging
from typing import List, Optional

from .classifier import classify
from .history import GestureHistory, HistoryItem
from .phrases import describe, text_to_signs
from .sentence import SentenceBuilder
from .stability import DEFAULT_THRESHOLD, StabilityTracker
from .storage import StorageError
from .types import (
    FrameUpdate,
    GestureSession,
    GestureStoreProto,
    HandPose,
    SpeakerProto,
    SpeechTranscript,
)

logger = logging.getLogger(__name__)


class SignTranslator:
    """
    Main per-camera-session processor.

    Call process() once per video frame with the landmarks the hand tracker
    found (None when no hand). Confirmed signs are described, added to the
    history and the sentence, spoken, and logged to the store.

    Features:
    - One stability tracker per camera session, recreated on start()
    - Store and speaker are optional; without them the translator only classifies
    - Store failures are logged and never interrupt the frame loop
    """

    def __init__(self, store: Optional[GestureStoreProto] = None,
                 speaker: Optional[SpeakerProto] = None,
                 threshold: int = DEFAULT_THRESHOLD,
                 auto_speak: bool = True,
                 history_size: int = 50):
        """Initialize the translator."""
        self.store = store
        self.speaker = speaker
        self.threshold = threshold
        self.auto_speak = auto_speak

        self.tracker = StabilityTracker(threshold)
        self.history = GestureHistory(max_items=history_size)
        self.sentence = SentenceBuilder()

        self.session: Optional[GestureSession] = None
        self.active = False
        self.confirmed_count = 0
        self.last_description = ""

    def start(self, session_name: Optional[str] = None) -> Optional[GestureSession]:
        """Begin a camera session with fresh stability state."""
        if self.active:
            self.stop()

        self.tracker = StabilityTracker(self.threshold)
        self.active = True
        self.confirmed_count = 0

        if self.store is not None:
            try:
                self.session = self.store.start_session(session_name)
                logger.info(f"Started session {self.session.id} ({self.session.session_name})")
            except StorageError as e:
                logger.error(f"Failed to start session: {e}")
                self.session = None
        return self.session

    def stop(self) -> Optional[GestureSession]:
        """End the camera session and close the stored session, if any."""
        self.tracker.reset()
        self.active = False

        ended = None
        if self.store is not None and self.session is not None:
            try:
                ended = self.store.end_session(self.session.id, self.confirmed_count)
                logger.info(f"Session {self.session.id} completed with {self.confirmed_count} gestures")
            except StorageError as e:
                logger.error(f"Failed to end session {self.session.id}: {e}")
        self.session = None
        return ended

    def process(self, pose: Optional[HandPose]) -> FrameUpdate:
        """
        Process one frame.

        Args:
            pose: 21 hand landmarks, or None/empty when no hand was detected

        Returns:
            FrameUpdate with the raw classification, stability progress and,
            on the confirming frame, the confirmed label and its phrase
        """
        result = classify(pose)

        if not self.active:
            return FrameUpdate(hand_detected=result is not None, result=result, progress=0.0)

        confirmed = self.tracker.observe(result)
        update = FrameUpdate(
            hand_detected=result is not None,
            result=result,
            progress=self.tracker.progress,
        )

        if confirmed is not None:
            update.confirmed = confirmed
            update.description = self._on_confirmed(confirmed, result.confidence)

        return update

    def _on_confirmed(self, label: str, confidence: float) -> str:
        description = describe(label)
        self.confirmed_count += 1
        self.last_description = description
        self.history.add(label, description, confidence)
        self.sentence.add(label)
        logger.info(f"Recognized {label}: {description}")

        if self.auto_speak and self.speaker is not None:
            self.speaker.speak(description)

        if self.store is not None and self.session is not None:
            try:
                self.store.log_gesture(self.session.id, label, description, confidence)
            except StorageError as e:
                logger.error(f"Failed to log gesture {label}: {e}")

        return description

    def replay(self, item_id: str) -> Optional[HistoryItem]:
        """Speak a history entry again."""
        item = self.history.find(item_id)
        if item is not None:
            self.last_description = item.description
            if self.speaker is not None:
                self.speaker.speak(item.description)
        return item

    def speak_sentence(self) -> str:
        text = self.sentence.text
        if text.strip() and self.speaker is not None:
            self.speaker.speak(text)
        return text

    def clear_history(self) -> None:
        self.history.clear()
        self.last_description = ""

    def speech_to_sign(self, text: str) -> List[str]:
        """
        Convert spoken text to letter signs, saving a transcript when a store is set.
        """
        signs = text_to_signs(text)
        if self.store is not None and text.strip():
            session_id = self.session.id if self.session else None
            try:
                self.store.save_transcript(session_id, text, signs)
            except StorageError as e:
                logger.error(f"Failed to save transcript: {e}")
        return signs

    def recent_transcripts(self, limit: int = 20) -> List[SpeechTranscript]:
        if self.store is None:
            return []
        return self.store.recent_transcripts(limit=limit)
