# models/Message_schema.py
from pydantic import BaseModel, Field, model_validator
from datetime import datetime
from typing import List, Literal, Optional

from models.Intent_schema import IntentCategory


class Message(BaseModel):
    message_id: str
    conversation_id: str
    role: Literal["user", "assistant"]
    content: str
    intent: Optional[IntentCategory] = None  # assistant messages only
    sources: List[str] = Field(default_factory=list)
    created_at: datetime

    @model_validator(mode="after")
    def user_messages_carry_no_annotations(self):
        if self.role == "user" and (self.intent is not None or self.sources):
            raise ValueError("user messages cannot carry an intent or sources")
        return self
