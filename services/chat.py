"""Chat room service: session bookkeeping plus broadcast fan-out.

Functions:
- ChatRoom.connect(websocket) -> str (connection id)
- ChatRoom.join(connection_id, username) -> ChatMessage (the system "joined" message)
- ChatRoom.send_message(connection_id, text) -> Optional[ChatMessage] (None when dropped)
- ChatRoom.typing(connection_id, is_typing) -> bool (False when dropped)
- ChatRoom.disconnect(connection_id) -> Optional[str] (the released display name)

Every operation mutates the registry and log, and builds the frames it will
send, before its first await. Mutations from interleaved handlers therefore
never observe each other half-done.
"""
from __future__ import annotations
import asyncio
from typing import Any, Callable, List, Optional
from fastapi import WebSocket
from config import settings
from endpoints.logs import log_action
from realtime import ConnectionManager
from schemas.chat import ChatMessage, OutboundEvent, TypingStatus, now_ms
from services.message_log import MessageLog
from services.sessions import SessionRegistry


def make_event(event: OutboundEvent, data: Any) -> dict:
    return {"event": event.value, "data": data}


class ChatRoom:
    def __init__(
        self,
        manager: Optional[ConnectionManager] = None,
        sessions: Optional[SessionRegistry] = None,
        history: Optional[MessageLog] = None,
        clock: Callable[[], int] = now_ms,
        system_user: str = settings.SYSTEM_USER,
    ) -> None:
        self.manager = manager if manager is not None else ConnectionManager()
        self.sessions = sessions if sessions is not None else SessionRegistry()
        self.history = history if history is not None else MessageLog(settings.MAX_MESSAGE_HISTORY)
        self.clock = clock
        self.system_user = system_user

    def _system_message(self, text: str) -> ChatMessage:
        return ChatMessage(user=self.system_user, text=text, timestamp=self.clock())

    def _user_list_event(self) -> dict:
        return make_event(OutboundEvent.USER_LIST, self.sessions.usernames())

    async def _broadcast_all(self, events: List[dict]) -> None:
        for event in events:
            await self.manager.broadcast(event)

    async def connect(self, websocket: WebSocket) -> str:
        connection_id = await self.manager.connect(websocket)
        log_action("User connected", connection_id=connection_id)
        return connection_id

    async def join(self, connection_id: str, username: str) -> ChatMessage:
        self.sessions.bind(connection_id, username)
        joined = self._system_message(f"{username} has joined the chat!")
        joined_event = make_event(OutboundEvent.USER_JOINED, joined.model_dump())
        previous: List[dict] = [m.model_dump() for m in self.history.snapshot()]
        previous_event = make_event(OutboundEvent.PREVIOUS_MESSAGES, previous)
        user_list_event = self._user_list_event()
        log_action("User joined", connection_id=connection_id, username=username,
                   context={"participants": len(self.sessions)})

        await self.manager.broadcast(joined_event)
        await self.manager.send(connection_id, previous_event)
        await self.manager.broadcast(user_list_event)
        return joined

    async def send_message(self, connection_id: str, text: str) -> Optional[ChatMessage]:
        username = self.sessions.get(connection_id)
        # An empty display name counts as not joined
        if not username:
            return None
        message = ChatMessage(user=username, text=text, timestamp=self.clock())
        self.history.append(message)
        log_action("Message sent", connection_id=connection_id, username=username,
                   context={"length": len(text)}, level="DEBUG")

        await self.manager.broadcast(make_event(OutboundEvent.NEW_MESSAGE, message.model_dump()))
        return message

    async def typing(self, connection_id: str, is_typing: bool) -> bool:
        username = self.sessions.get(connection_id)
        if not username:
            return False
        status = TypingStatus(user=username, isTyping=is_typing)
        await self.manager.broadcast(make_event(OutboundEvent.USER_TYPING, status.model_dump()),
                                     exclude=connection_id)
        return True

    async def disconnect(self, connection_id: str) -> Optional[str]:
        self.manager.disconnect(connection_id)
        username = self.sessions.unbind(connection_id)
        if not username:
            log_action("User disconnected", connection_id=connection_id)
            return None
        left = self._system_message(f"{username} has left the chat")
        left_event = make_event(OutboundEvent.USER_LEFT, left.model_dump())
        user_list_event = self._user_list_event()
        log_action("User left", connection_id=connection_id, username=username,
                   context={"participants": len(self.sessions)})

        # Shielded so a cancelled handler still sends both frames
        await asyncio.shield(self._broadcast_all([left_event, user_list_event]))
        return username


room = ChatRoom()


def get_room() -> ChatRoom:
    return room
