# app/routers/chat.py
from fastapi import APIRouter, Depends

from app.config import Settings, get_settings
from app.middleware.rate_limit import rate_limit
from app.models.chat import ChatRequest
from app.services.chat_relay import ChatRelay

router = APIRouter(prefix="/api", tags=["Chat"])


def get_chat_relay(settings: Settings = Depends(get_settings)) -> ChatRelay:
    return ChatRelay(settings)


@router.post("/chat", dependencies=[Depends(rate_limit("chat"))])
async def chat(payload: ChatRequest, relay: ChatRelay = Depends(get_chat_relay)):
    """Proxy a conversation to the completion API; streams text/event-stream by default."""
    return await relay.relay(payload)
