from fastapi import APIRouter, WebSocket, Depends
from pydantic import ValidationError
from services.chat import ChatRoom, get_room
from schemas.chat import EventEnvelope, InboundEvent
from endpoints.logs import log_action, log_error
from typing import Any, Tuple
import json

router = APIRouter()


class MalformedEventError(ValueError):
    def __init__(self, reason: str):
        super().__init__(f"Malformed event: {reason}")
        self.reason = reason


# Expected payload type per inbound event
PAYLOAD_TYPES = {
    InboundEvent.JOIN: str,
    InboundEvent.SEND_MESSAGE: str,
    InboundEvent.TYPING: bool,
}


def parse_event(raw: str) -> Tuple[InboundEvent, Any]:
    """Decode a ``{"event", "data"}`` text frame into (event, payload).

    Raises MalformedEventError for invalid JSON, unknown events, or payloads of the wrong type.
    """
    try:
        envelope = EventEnvelope.model_validate(json.loads(raw))
    except (ValueError, ValidationError) as e:
        # json.JSONDecodeError is a ValueError
        raise MalformedEventError(str(e)) from e
    try:
        event = InboundEvent(envelope.event)
    except ValueError:
        raise MalformedEventError(f"unknown event {envelope.event!r}")
    if not isinstance(envelope.data, PAYLOAD_TYPES[event]):
        raise MalformedEventError(f"{event.value} expects {PAYLOAD_TYPES[event].__name__}")
    return event, envelope.data


async def dispatch(room: ChatRoom, connection_id: str, event: InboundEvent, data: Any) -> None:
    if event is InboundEvent.JOIN:
        await room.join(connection_id, data)
    elif event is InboundEvent.SEND_MESSAGE:
        await room.send_message(connection_id, data)
    elif event is InboundEvent.TYPING:
        await room.typing(connection_id, data)


@router.websocket("/ws")
async def chat_ws(websocket: WebSocket, room: ChatRoom = Depends(get_room)):
    connection_id = await room.connect(websocket)
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            raw = message.get("text")
            if raw is None and message.get("bytes") is not None:
                raw = message["bytes"].decode("utf-8", errors="replace")
            try:
                event, data = parse_event(raw or "")
            except MalformedEventError as e:
                # Malformed frames are dropped without notifying the client
                log_action("Ignored frame", connection_id=connection_id,
                           context={"reason": e.reason}, level="DEBUG")
                continue
            await dispatch(room, connection_id, event, data)
    except Exception as e:
        log_error("WebSocket handler failed", e, connection_id=connection_id)
        raise
    finally:
        await room.disconnect(connection_id)
