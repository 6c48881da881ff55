"""
Spell out words from confirmed letter signs.
"""
from typing import List, Optional


class SentenceBuilder:
    """Accumulates fingerspelled letters into a sentence."""

    def __init__(self):
        self._chars: List[str] = []

    def add(self, label: Optional[str]) -> bool:
        """Append a letter sign. Named gestures like THUMBS_UP are ignored."""
        if label and len(label) == 1:
            self._chars.append(label)
            return True
        return False

    def add_space(self) -> None:
        self._chars.append(" ")

    def backspace(self) -> None:
        if self._chars:
            self._chars.pop()

    def clear(self) -> None:
        self._chars.clear()

    @property
    def text(self) -> str:
        return "".join(self._chars)

    def __len__(self) -> int:
        return len(self._chars)
