from models.Intent_schema import IntentCategory
from models.Conversation_schema import Conversation, DEFAULT_CONVERSATION_TITLE
from models.Message_schema import Message
from models.Faq_schema import KnowledgeEntry
from models.Event_schema import AnalyticsEvent, MESSAGE_SENT
from models.Chat_schema import (
    ChatRequest,
    ChatResponse,
    ChatResult,
    ErrorResponse,
    ConversationCreate,
    ConversationRename,
    UserMessageCreate,
)

__all__ = [
    "IntentCategory",
    "Conversation",
    "DEFAULT_CONVERSATION_TITLE",
    "Message",
    "KnowledgeEntry",
    "AnalyticsEvent",
    "MESSAGE_SENT",
    "ChatRequest",
    "ChatResponse",
    "ChatResult",
    "ErrorResponse",
    "ConversationCreate",
    "ConversationRename",
    "UserMessageCreate",
]
