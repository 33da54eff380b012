# services/analytics_service.py
from collections import Counter
from datetime import datetime, timedelta, timezone
import logging
import uuid
from functools import lru_cache
from typing import Dict, List, Optional

from pydantic import BaseModel
from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from models import AnalyticsEvent, IntentCategory, MESSAGE_SENT
from utils.errors import PersistenceError, StorageError
from utils.mongodb_conn import get_database

logger = logging.getLogger(__name__)

ACTIVITY_DAYS = 7
RECENT_ACTIVITY_LIMIT = 10


class DailyActivity(BaseModel):
    date: str
    messages: int


class UserSummary(BaseModel):
    total_conversations: int
    total_messages: int
    avg_messages_per_conversation: float
    intent_distribution: Dict[str, int]
    daily_activity: List[DailyActivity]


class Overview(BaseModel):
    total_messages: int
    total_conversations: int
    intent_breakdown: Dict[str, int]
    recent_activity: List[AnalyticsEvent]


def count_intents(messages: List[dict]) -> Dict[str, int]:
    return dict(Counter(msg["intent"] for msg in messages if msg.get("intent")))


def daily_activity(messages: List[dict], now: datetime, days: int = ACTIVITY_DAYS) -> List[DailyActivity]:
    """Message counts for each of the last `days` days, oldest first."""
    today = now.date()
    window = [today - timedelta(days=days - 1 - i) for i in range(days)]
    counts = Counter(msg["created_at"].date() for msg in messages if msg.get("created_at"))
    return [DailyActivity(date=day.isoformat(), messages=counts.get(day, 0)) for day in window]


class AnalyticsService:
    def __init__(self, db=None):
        self.db = get_database() if db is None else db

    async def user_summary(self, user_id: str, now: Optional[datetime] = None) -> UserSummary:
        now = now or datetime.now(timezone.utc)
        try:
            conversations = await self.db.conversations.find(
                {"user_id": user_id}, {"_id": 0, "conversation_id": 1}
            ).to_list(length=None)
            conversation_ids = [c["conversation_id"] for c in conversations]
            messages = await self.db.messages.find(
                {"conversation_id": {"$in": conversation_ids}},
                {"_id": 0, "intent": 1, "created_at": 1},
            ).to_list(length=None)
        except PyMongoError as e:
            raise StorageError(f"Failed to load analytics: {e}") from e

        total_conversations = len(conversation_ids)
        total_messages = len(messages)
        average = total_messages / total_conversations if total_conversations else 0.0
        return UserSummary(
            total_conversations=total_conversations,
            total_messages=total_messages,
            avg_messages_per_conversation=round(average, 1),
            intent_distribution=count_intents(messages),
            daily_activity=daily_activity(messages, now),
        )

    async def overview(self) -> Overview:
        try:
            total_messages = await self.db.messages.count_documents({})
            total_conversations = await self.db.conversations.count_documents({})
            tagged = await self.db.messages.find(
                {"intent": {"$ne": None}}, {"_id": 0, "intent": 1}
            ).to_list(length=None)
            recent = await self.db.analytics_events.find({}, {"_id": 0}).sort(
                "created_at", DESCENDING
            ).limit(RECENT_ACTIVITY_LIMIT).to_list(length=None)
        except PyMongoError as e:
            raise StorageError(f"Failed to load analytics: {e}") from e
        return Overview(
            total_messages=total_messages,
            total_conversations=total_conversations,
            intent_breakdown=count_intents(tagged),
            recent_activity=[AnalyticsEvent(**doc) for doc in recent],
        )

    async def record_event(self, event_type: str, event_data: dict, user_id: Optional[str] = None) -> str:
        event = AnalyticsEvent(
            event_id=str(uuid.uuid4()),
            user_id=user_id,
            event_type=event_type,
            event_data=event_data,
            created_at=datetime.now(timezone.utc),
        )
        try:
            await self.db.analytics_events.insert_one(event.model_dump())
        except PyMongoError as e:
            raise PersistenceError(f"Failed to record {event_type} event: {e}") from e
        return event.event_id

    async def record_message_sent(self, conversation_id: str, intent: IntentCategory) -> str:
        """Log a `message_sent` event attributed to the conversation's owner."""
        try:
            conversation = await self.db.conversations.find_one({"conversation_id": conversation_id})
        except PyMongoError as e:
            raise StorageError(f"Failed to load conversation owner: {e}") from e
        user_id = conversation["user_id"] if conversation else None
        event_id = await self.record_event(
            MESSAGE_SENT,
            {"conversation_id": conversation_id, "intent": IntentCategory(intent).value},
            user_id=user_id,
        )
        logger.info("[Analytics] Recorded %s for conversation %s", MESSAGE_SENT, conversation_id)
        return event_id


@lru_cache(maxsize=1)
def get_analytics_service() -> AnalyticsService:
    """
    FastAPI dependency factory that returns a singleton AnalyticsService instance.
    """
    return AnalyticsService()
