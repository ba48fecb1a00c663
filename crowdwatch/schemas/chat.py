# crowdwatch/schemas/chat.py
from pydantic import BaseModel
from datetime import datetime
from typing import Any, Optional


class ChatRequest(BaseModel):
    message: Optional[str] = None   # checked by the router so a blank message is a 400, not a 422


class ChatMessageOut(BaseModel):
    id: int
    message: str
    response: str
    timestamp: datetime

    class Config:
        from_attributes = True


class ChatReplyOut(ChatMessageOut):
    """Persisted chat message plus the responder's structured answer."""
    category: str
    action_required: bool
    gate_data: Optional[Any] = None
