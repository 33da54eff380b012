# models/Conversation_schema.py
from pydantic import BaseModel
from datetime import datetime

DEFAULT_CONVERSATION_TITLE = "New Conversation"


class Conversation(BaseModel):
    conversation_id: str
    user_id: str
    title: str = DEFAULT_CONVERSATION_TITLE
    created_at: datetime
    updated_at: datetime
    message_count: int = 0
