"""Test configuration and fixtures.

Every test gets a fresh ChatRoom (empty registry, empty log) injected through
FastAPI's dependency overrides, so process-wide chat state never leaks between
tests.
"""

import asyncio
import os
from typing import Generator, List

# Set env flags BEFORE importing application modules
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from main import app
from services.chat import ChatRoom, get_room


class FakeWebSocket:
    """Records frames the server would have written to a client."""

    def __init__(self, fail: bool = False, yields: bool = False):
        self.accepted = False
        self.sent: List[dict] = []
        self.fail = fail
        # Suspend on every write, like a real socket send
        self.yields = yields

    async def accept(self):
        self.accepted = True

    async def send_json(self, message: dict):
        if self.fail:
            raise RuntimeError("socket closed")
        if self.yields:
            await asyncio.sleep(0)
        self.sent.append(message)

    def events(self) -> List[str]:
        return [m["event"] for m in self.sent]


@pytest.fixture()
def room() -> ChatRoom:
    # Deterministic clock: 1000, 1001, 1002, ...
    ticks = iter(range(1000, 10**9))
    return ChatRoom(clock=lambda: next(ticks))


@pytest.fixture(autouse=True)
def override_room_dependency(room) -> Generator[None, None, None]:
    app.dependency_overrides[get_room] = lambda: room
    yield
    app.dependency_overrides.pop(get_room, None)


@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    # One portal, one event loop shared by every socket a test opens
    with TestClient(app) as c:
        yield c
