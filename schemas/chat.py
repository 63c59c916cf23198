from pydantic import BaseModel, ConfigDict
from typing import Any, List, Optional
from enum import Enum
import time


def now_ms() -> int:
    return int(time.time() * 1000)


# Events a client may send
class InboundEvent(str, Enum):
    JOIN = "join"
    SEND_MESSAGE = "sendMessage"
    TYPING = "typing"


# Events the server emits
class OutboundEvent(str, Enum):
    PREVIOUS_MESSAGES = "previousMessages"
    USER_JOINED = "userJoined"
    NEW_MESSAGE = "newMessage"
    USER_TYPING = "userTyping"
    USER_LEFT = "userLeft"
    USER_LIST = "userList"


class ChatMessage(BaseModel):
    user: str
    text: str
    timestamp: int

    model_config = ConfigDict(frozen=True)


class TypingStatus(BaseModel):
    user: str
    isTyping: bool

    model_config = ConfigDict(frozen=True)


class EventEnvelope(BaseModel):
    """Wire frame: ``{"event": <name>, "data": <payload>}``."""
    event: str
    data: Optional[Any] = None


class StatusOut(BaseModel):
    connections: int
    participants: List[str]
    messages: int
