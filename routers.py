from fastapi import APIRouter
from endpoints.chat_ws import router as chat_ws_router
from endpoints.status import router as status_router

api_router = APIRouter()
api_router.include_router(chat_ws_router, tags=["realtime"])
api_router.include_router(status_router, tags=["status"])
