"""Bounded in-memory chat history.

Functions:
- MessageLog.append(message) -> Optional[ChatMessage] (returns the evicted entry, if any)
- MessageLog.snapshot() -> List[ChatMessage] (oldest first)
"""
from __future__ import annotations
from collections import deque
from typing import Deque, List, Optional
from schemas.chat import ChatMessage


class MessageLog:
    def __init__(self, capacity: int = 50) -> None:
        if capacity < 1:
            raise ValueError("MessageLog capacity must be at least 1")
        self.capacity = capacity
        self._messages: Deque[ChatMessage] = deque()

    def append(self, message: ChatMessage) -> Optional[ChatMessage]:
        """Append a message, evicting the oldest once the log exceeds capacity (FIFO)."""
        self._messages.append(message)
        if len(self._messages) > self.capacity:
            return self._messages.popleft()
        return None

    def snapshot(self) -> List[ChatMessage]:
        return list(self._messages)

    def __len__(self) -> int:
        return len(self._messages)
