"""
Human-readable phrases for recognized signs and the ASL alphabet reference chart.
"""
from dataclasses import dataclass
from typing import Dict, List, Literal, Optional


ThumbPosition = Literal["extended", "folded", "across"]
FingerPosition = Literal["extended", "folded", "bent"]


@dataclass(frozen=True)
class SignGesture:
    """Reference description of one fingerspelled letter."""
    name: str
    description: str
    thumb: ThumbPosition
    index: FingerPosition
    middle: FingerPosition
    ring: FingerPosition
    pinky: FingerPosition

    def finger_positions(self) -> Dict[str, str]:
        return {
            "thumb": self.thumb,
            "index": self.index,
            "middle": self.middle,
            "ring": self.ring,
            "pinky": self.pinky,
        }


ASL_ALPHABET: Dict[str, SignGesture] = {
    "A": SignGesture("A", "Fist with thumb on the side", "across", "folded", "folded", "folded", "folded"),
    "B": SignGesture("B", "Flat hand with thumb folded", "folded", "extended", "extended", "extended", "extended"),
    "C": SignGesture("C", "Curved hand forming C shape", "extended", "bent", "bent", "bent", "bent"),
    "D": SignGesture("D", "Index up, others form circle with thumb", "across", "extended", "folded", "folded", "folded"),
    "E": SignGesture("E", "All fingers bent into palm, thumb across", "across", "bent", "bent", "bent", "bent"),
    "F": SignGesture("F", "Index and thumb form circle, others extended", "across", "bent", "extended", "extended", "extended"),
    "G": SignGesture("G", "Index and thumb pointing, others folded", "extended", "extended", "folded", "folded", "folded"),
    "H": SignGesture("H", "Index and middle extended horizontally", "folded", "extended", "extended", "folded", "folded"),
    "I": SignGesture("I", "Pinky extended, others folded", "folded", "folded", "folded", "folded", "extended"),
    "K": SignGesture("K", "Index and middle up in V, thumb between", "extended", "extended", "extended", "folded", "folded"),
    "L": SignGesture("L", "L shape with thumb and index", "extended", "extended", "folded", "folded", "folded"),
    "O": SignGesture("O", "All fingers form O shape", "across", "bent", "bent", "bent", "bent"),
    "V": SignGesture("V", "Peace sign - index and middle extended", "folded", "extended", "extended", "folded", "folded"),
    "W": SignGesture("W", "Three fingers extended", "folded", "extended", "extended", "extended", "folded"),
    "Y": SignGesture("Y", "Thumb and pinky extended (hang loose)", "extended", "folded", "folded", "folded", "extended"),
}

COMMON_PHRASES: Dict[str, str] = {
    "thumbs_up": "Yes / Good / OK",
    "thumbs_down": "No / Bad",
    "wave": "Hello / Goodbye",
    "open_palm": "Stop / Wait",
    "pointing": "Look / There",
    "peace": "Peace / Victory",
    "rock_on": "Rock on / Cool",
    "ok_sign": "OK / Perfect",
    "fist": "Power / Solidarity",
    "clap": "Applause / Great job",
}

# What gets spoken when a sign is confirmed
GESTURE_PHRASES: Dict[str, str] = {
    "THUMBS_UP": "Yes, that's correct!",
    "OPEN_PALM": "Hello! Nice to meet you.",
    "V": "Peace! Victory!",
    "L": "L - Look at this",
    "I_LOVE_YOU": "I love you!",
    "D": "D - Look over there",
    "A": "A - Fist bump!",
    "W": "W - Three, or W",
    "B": "B - Four fingers",
    "Y": "Y - Call me!",
    "I": "I - One, or I",
    "F": "F - Fine, or F",
    "K": "K - Okay, or K",
    "ROCK_ON": "Rock on!",
}


def describe(label: Optional[str]) -> str:
    """Phrase to speak for a label; unknown labels are returned unchanged."""
    if not label:
        return ""
    return GESTURE_PHRASES.get(label, label)


def text_to_signs(text: str) -> List[str]:
    """
    Convert spoken text into the letters that can be shown as signs.

    Non-letters are dropped, as are letters with no entry in ASL_ALPHABET.
    """
    return [ch for ch in text.upper() if "A" <= ch <= "Z" and ch in ASL_ALPHABET]
