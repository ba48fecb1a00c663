# crowdwatch/routers/chat.py
"""
Chat assistant endpoint + conversation history.
POST /chat          — answers a question from the current gate snapshot and logs it.
GET  /chat/history  — most recent exchanges first.
"""

from fastapi import APIRouter, Depends, Query
from crowdwatch.config import settings
from crowdwatch.dependencies import get_responder, get_store
from crowdwatch.errors import ValidationError
from crowdwatch.schemas.chat import ChatMessageOut, ChatReplyOut, ChatRequest
from crowdwatch.services.query_responder import QueryResponder
from crowdwatch.services.store import StadiumStore
from crowdwatch.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.post("/chat", response_model=ChatReplyOut, summary="Ask the crowd assistant")
async def chat(body: ChatRequest,
               store: StadiumStore = Depends(get_store),
               responder: QueryResponder = Depends(get_responder)):
    message = (body.message or "").strip()
    if not message:
        raise ValidationError("Message is required")

    reply = responder.respond(message, store.list_gates())
    entry = store.append_chat_message(message, reply.response)
    logger.info(f"[CHAT] {message!r} → {reply.category.value} (action_required={reply.action_required})")

    return ChatReplyOut(
        **entry.model_dump(),
        category=reply.category.value,
        action_required=reply.action_required,
        gate_data=reply.gate_data,
    )


@router.get("/chat/history", response_model=list[ChatMessageOut], summary="Recent chat messages")
async def chat_history(limit: int = Query(settings.CHAT_HISTORY_LIMIT, ge=1, le=200),
                       store: StadiumStore = Depends(get_store)):
    return store.recent_chat_messages(limit)
