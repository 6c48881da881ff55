"""
SignBridge - Sign Language Translator

Reads hand landmarks (from MediaPipe or a browser client), recognizes
fingerspelled letters and common signs, confirms them once they are held
steady, and speaks them aloud.
"""

__version__ = "0.1.0"
__author__ = "SignBridge Team"

from .types import ClassificationResult, FingerStates, FrameUpdate, StabilityState
from .config import load_config, Cfg
from .classifier import classify, GESTURE_PATTERNS, GESTURE_LABELS
from .stability import StabilityTracker
from .phrases import describe, text_to_signs, ASL_ALPHABET
from .storage import InMemoryStore, RestStore, StorageError
from .translator import SignTranslator

__all__ = [
    "ClassificationResult",
    "FingerStates",
    "FrameUpdate",
    "StabilityState",
    "load_config",
    "Cfg",
    "classify",
    "GESTURE_PATTERNS",
    "GESTURE_LABELS",
    "StabilityTracker",
    "describe",
    "text_to_signs",
    "ASL_ALPHABET",
    "InMemoryStore",
    "RestStore",
    "StorageError",
    "SignTranslator",
]
