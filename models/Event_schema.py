# models/Event_schema.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Any, Dict, Optional

MESSAGE_SENT = "message_sent"


class AnalyticsEvent(BaseModel):
    event_id: str
    user_id: Optional[str] = None
    event_type: str
    event_data: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
