from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from routers import api_router
from endpoints.chat_ws import router as chat_ws_router
from config import settings
from endpoints.logs import log_action

app = FastAPI(title=settings.PROJECT_NAME)
# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(api_router, prefix=settings.API_V1_STR)
# Chat clients connect at the bare /ws path as well
app.include_router(chat_ws_router, tags=["realtime"])

@app.get("/")
async def root():
    return {
        "message": f"Welcome to {settings.PROJECT_NAME}!",
        "websocket": "/ws",
        "protocol": "JSON text frames {\"event\": <name>, \"data\": <payload>} over a plain WebSocket (not Socket.IO)",
    }

if __name__ == "__main__":
    import uvicorn
    log_action("Server running", context={"host": settings.HOST, "port": settings.PORT})
    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
