"""
Recent confirmed signs, newest first.
"""
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from itertools import count
from typing import List, Optional


@dataclass
class HistoryItem:
    """One confirmed sign as shown in the history list."""
    id: str
    gesture: str
    description: str
    confidence: float
    timestamp: datetime = field(default_factory=datetime.now)


class GestureHistory:
    """Bounded history of confirmed signs; the oldest entries fall off."""

    def __init__(self, max_items: int = 50):
        self.max_items = max_items
        self._items: deque = deque(maxlen=max_items)
        self._ids = count()

    def add(self, gesture: str, description: str, confidence: float = 0.0) -> HistoryItem:
        item = HistoryItem(
            id=f"gesture-{next(self._ids)}",
            gesture=gesture,
            description=description,
            confidence=confidence,
        )
        self._items.appendleft(item)
        return item

    def find(self, item_id: str) -> Optional[HistoryItem]:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def clear(self) -> None:
        self._items.clear()

    def items(self) -> List[HistoryItem]:
        return list(self._items)

    @property
    def latest(self) -> Optional[HistoryItem]:
        return self._items[0] if self._items else None

    def __len__(self) -> int:
        return len(self._items)
