# app/models/chat.py
from typing import Any, Optional
from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    # Left untyped so a non-list payload surfaces as "Invalid messages format"
    # from the truncator rather than a schema error.
    messages: Optional[Any] = None
    temperature: float = 0.8
    maxTokens: int = Field(default=300, ge=1)
    stream: bool = True
