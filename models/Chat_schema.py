# models/Chat_schema.py
from pydantic import BaseModel
from typing import List, Optional

from models.Intent_schema import IntentCategory


class ChatRequest(BaseModel):
    # Both are required; presence is checked by the pipeline so that a
    # missing field yields the same {success: false} failure as any other.
    conversationId: Optional[str] = None
    message: Optional[str] = None


class ChatResponse(BaseModel):
    success: bool = True
    intent: IntentCategory
    message: str


class ChatResult(BaseModel):
    """Outcome of one pipeline run, before it is shaped into a ChatResponse."""

    conversation_id: str
    message_id: str
    intent: IntentCategory
    reply: str
    sources: List[str]

    def to_response(self) -> ChatResponse:
        return ChatResponse(intent=self.intent, message=self.reply)


class ErrorResponse(BaseModel):
    success: bool = False
    error: str


class ConversationCreate(BaseModel):
    user_id: str
    title: Optional[str] = None


class ConversationRename(BaseModel):
    title: str


class UserMessageCreate(BaseModel):
    content: str
