from fastapi import APIRouter, Depends
from schemas.chat import StatusOut
from services.chat import ChatRoom, get_room

router = APIRouter()


@router.get("/status", response_model=StatusOut)
async def get_status(room: ChatRoom = Depends(get_room)):
    return StatusOut(
        connections=len(room.manager),
        participants=room.sessions.usernames(),
        messages=len(room.history),
    )
