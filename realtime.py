"""WebSocket real-time broadcasting utilities.

In-process only: every connection lives in this process's registry. All
registry mutations happen synchronously between awaits on the single event
loop, so no lock is held.
"""
from __future__ import annotations
from typing import Dict, List, Optional
from fastapi import WebSocket
import logging
import uuid

logger = logging.getLogger(__name__)


def new_connection_id() -> str:
    return uuid.uuid4().hex


class ConnectionManager:
    def __init__(self) -> None:
        # Map connection_id -> websocket
        self._conns: Dict[str, WebSocket] = {}

    async def connect(self, websocket: WebSocket) -> str:
        await websocket.accept()
        connection_id = new_connection_id()
        self._conns[connection_id] = websocket
        return connection_id

    def disconnect(self, connection_id: str) -> bool:
        return self._conns.pop(connection_id, None) is not None

    def __contains__(self, connection_id: str) -> bool:
        return connection_id in self._conns

    def __len__(self) -> int:
        return len(self._conns)

    async def send(self, connection_id: str, message: dict) -> bool:
        websocket = self._conns.get(connection_id)
        if websocket is None:
            return False
        try:
            await websocket.send_json(message)
            return True
        except Exception as e:
            logger.warning("Send to %s failed, dropping connection: %s", connection_id, e)
            self._conns.pop(connection_id, None)
            return False

    async def broadcast(self, message: dict, exclude: Optional[str] = None) -> List[str]:
        """Send to every connection except ``exclude``; returns the ids that were dropped."""
        # Snapshot so sends can't observe registry changes mid-iteration
        targets = [(cid, ws) for cid, ws in self._conns.items() if cid != exclude]
        dead: List[str] = []
        for cid, ws in targets:
            try:
                await ws.send_json(message)
            except Exception as e:
                logger.warning("Broadcast to %s failed, dropping connection: %s", cid, e)
                dead.append(cid)
        for d in dead:
            self._conns.pop(d, None)
        return dead
