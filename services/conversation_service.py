# services/conversation_service.py
from datetime import datetime, timezone
import logging
import uuid
from functools import lru_cache
from typing import Dict, List, Optional

from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from models import Conversation, Message, IntentCategory, DEFAULT_CONVERSATION_TITLE
from utils.errors import NotFound, PersistenceError, StorageError
from utils.mongodb_conn import get_database

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _strip_id(doc: dict) -> dict:
    doc = dict(doc)
    doc.pop("_id", None)
    return doc


class ConversationService:
    """
    Conversations and their messages, stored in the `conversations` and
    `messages` collections.
    """

    def __init__(self, db=None):
        self.db = get_database() if db is None else db

    async def create_conversation(self, user_id: str, title: str = None) -> str:
        conversation_id = str(uuid.uuid4())
        now = _now()
        conversation = Conversation(
            conversation_id=conversation_id,
            user_id=user_id,
            title=title or DEFAULT_CONVERSATION_TITLE,
            created_at=now,
            updated_at=now,
            message_count=0,
        )
        try:
            await self.db.conversations.insert_one(conversation.model_dump())
        except PyMongoError as e:
            raise PersistenceError(f"Failed to create conversation: {e}") from e

        logger.info("[ConversationService] Created conversation %s for user %s", conversation_id, user_id)
        return conversation_id

    async def list_conversations(self, user_id: str) -> List[Conversation]:
        try:
            cursor = self.db.conversations.find({"user_id": user_id}).sort("updated_at", DESCENDING)
            docs = await cursor.to_list(length=None)
        except PyMongoError as e:
            raise StorageError(f"Failed to load conversations: {e}") from e
        return [Conversation(**_strip_id(doc)) for doc in docs]

    async def rename_conversation(self, conversation_id: str, title: str) -> None:
        try:
            result = await self.db.conversations.update_one(
                {"conversation_id": conversation_id},
                {"$set": {"title": title, "updated_at": _now()}},
            )
        except PyMongoError as e:
            raise PersistenceError(f"Failed to rename conversation: {e}") from e
        if result.matched_count == 0:
            raise NotFound(f"Conversation {conversation_id} not found")

    async def delete_conversation(self, conversation_id: str) -> int:
        """
        Delete a conversation together with all of its messages.
        Returns the number of messages removed.

        Messages go first: if that step fails the conversation is still
        there and the delete can be retried.
        """
        try:
            existing = await self.db.conversations.find_one({"conversation_id": conversation_id})
            if existing is None:
                raise NotFound(f"Conversation {conversation_id} not found")
            messages = await self.db.messages.delete_many({"conversation_id": conversation_id})
            await self.db.conversations.delete_one({"conversation_id": conversation_id})
        except PyMongoError as e:
            raise PersistenceError(f"Failed to delete conversation: {e}") from e

        logger.info(
            "[ConversationService] Deleted conversation %s and %d messages",
            conversation_id,
            messages.deleted_count,
        )
        return messages.deleted_count

    async def add_message(
        self,
        conversation_id: str,
        role: str,
        content: str,
        intent: Optional[IntentCategory] = None,
        sources: Optional[List[str]] = None,
    ) -> str:
        """
        Append a message to a conversation and refresh the conversation's
        updated_at / message_count. Only assistant messages may carry an
        intent and sources.
        """
        message_id = str(uuid.uuid4())
        timestamp = _now()
        message = Message(
            message_id=message_id,
            conversation_id=conversation_id,
            role=role,
            content=content,
            intent=intent,
            sources=sources or [],
            created_at=timestamp,
        )

        doc = message.model_dump(mode="json")
        doc["created_at"] = timestamp  # keep a BSON date so history sorts chronologically

        try:
            await self.db.messages.insert_one(doc)
            await self.db.conversations.update_one(
                {"conversation_id": conversation_id},
                {"$inc": {"message_count": 1}, "$set": {"updated_at": timestamp}},
            )
        except PyMongoError as e:
            raise PersistenceError(f"Failed to store {role} message: {e}") from e

        return message_id

    async def get_messages(self, conversation_id: str) -> List[Message]:
        try:
            cursor = self.db.messages.find({"conversation_id": conversation_id}).sort("created_at", ASCENDING)
            docs = await cursor.to_list(length=None)
        except PyMongoError as e:
            raise StorageError(f"Failed to load messages: {e}") from e
        return [Message(**_strip_id(doc)) for doc in docs]

    async def get_history(self, conversation_id: str) -> List[Dict[str, str]]:
        """
        Every prior turn of the conversation as {role, content}, oldest first.
        No windowing: long conversations are returned in full. An unknown
        conversation has an empty history.
        """
        try:
            cursor = self.db.messages.find(
                {"conversation_id": conversation_id},
                {"_id": 0, "role": 1, "content": 1},
            ).sort("created_at", ASCENDING)
            docs = await cursor.to_list(length=None)
        except PyMongoError as e:
            raise StorageError(f"Failed to load conversation history: {e}") from e
        return [{"role": doc["role"], "content": doc["content"]} for doc in docs]


@lru_cache(maxsize=1)
def get_conversation_service() -> ConversationService:
    """
    FastAPI dependency factory that returns a singleton ConversationService instance.
    """
    return ConversationService()
