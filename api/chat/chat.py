# api/chat/chat.py
import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from models import (
    ChatRequest,
    ChatResponse,
    ConversationCreate,
    ConversationRename,
    ErrorResponse,
    UserMessageCreate,
)
from services.analytics_service import AnalyticsService, get_analytics_service
from services.chat_service import ChatService, get_chat_service
from services.conversation_service import ConversationService, get_conversation_service
from utils.errors import ChatServiceError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_model=ChatResponse, responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}})
async def chat(
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
    analytics_service: AnalyticsService = Depends(get_analytics_service),
):
    """Answer a user message for a conversation and store the reply."""
    try:
        result = await chat_service.handle_message(request.conversationId, request.message)
    except ChatServiceError as e:
        logger.error("[Chat] Error in chat pipeline: %s: %s", type(e).__name__, e)
        return JSONResponse(
            status_code=e.status_code,
            content=ErrorResponse(error=str(e)).model_dump(),
        )
    except Exception as e:
        logger.exception("[Chat] Unexpected error in chat pipeline")
        return JSONResponse(status_code=500, content=ErrorResponse(error=str(e)).model_dump())

    # The reply is already stored; a lost event must not fail the request.
    try:
        await analytics_service.record_message_sent(result.conversation_id, result.intent)
    except ChatServiceError as e:
        logger.warning("[Chat] Could not record message_sent event: %s", e)

    return result.to_response()


@router.post("/conversations")
async def create_conversation(
    data: ConversationCreate,
    conv_service: ConversationService = Depends(get_conversation_service),
):
    """Create a new conversation"""
    conversation_id = await conv_service.create_conversation(data.user_id, data.title)
    return {"conversation_id": conversation_id, "status": "created"}


@router.get("/conversations")
async def list_conversations(
    user_id: str = Query(...),
    conv_service: ConversationService = Depends(get_conversation_service),
):
    conversations = await conv_service.list_conversations(user_id)
    return {"conversations": [c.model_dump(mode="json") for c in conversations]}


@router.patch("/conversations/{conversation_id}")
async def rename_conversation(
    conversation_id: str,
    data: ConversationRename,
    conv_service: ConversationService = Depends(get_conversation_service),
):
    await conv_service.rename_conversation(conversation_id, data.title)
    return {"conversation_id": conversation_id, "status": "updated"}


@router.delete("/conversations/{conversation_id}")
async def delete_conversation(
    conversation_id: str,
    conv_service: ConversationService = Depends(get_conversation_service),
):
    deleted_messages = await conv_service.delete_conversation(conversation_id)
    return {"conversation_id": conversation_id, "status": "deleted", "deleted_messages": deleted_messages}


@router.get("/conversations/{conversation_id}/messages")
async def get_messages(
    conversation_id: str,
    conv_service: ConversationService = Depends(get_conversation_service),
):
    """Message history of a conversation, oldest first"""
    messages = await conv_service.get_messages(conversation_id)
    return {"messages": [m.model_dump(mode="json") for m in messages]}


@router.post("/conversations/{conversation_id}/messages")
async def add_user_message(
    conversation_id: str,
    data: UserMessageCreate,
    conv_service: ConversationService = Depends(get_conversation_service),
):
    """Store the user's turn. Call this before POST /chat."""
    message_id = await conv_service.add_message(
        conversation_id=conversation_id,
        role="user",
        content=data.content,
    )
    return {"conversation_id": conversation_id, "message_id": message_id}
