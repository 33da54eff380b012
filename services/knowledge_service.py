# services/knowledge_service.py
from datetime import datetime, timezone
import logging
import re
import uuid
from functools import lru_cache
from typing import Dict, Iterable, List, Optional

from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from models import KnowledgeEntry
from utils.errors import NotFound, PersistenceError, StorageError
from utils.mongodb_conn import get_database

logger = logging.getLogger(__name__)


def build_faq_context(entries: Iterable[KnowledgeEntry]) -> str:
    """Render entries as Q:/A:/Category: blocks separated by a blank line."""
    return "\n\n".join(
        f"Q: {entry.question}\nA: {entry.answer}\nCategory: {entry.category}" for entry in entries
    )


def _to_entry(doc: dict) -> KnowledgeEntry:
    doc = dict(doc)
    doc.pop("_id", None)
    return KnowledgeEntry(**doc)


class KnowledgeService:
    """FAQ knowledge base stored in the `faqs` collection."""

    def __init__(self, db=None):
        self.db = get_database() if db is None else db

    async def get_context_entries(self, limit: int = 20) -> List[KnowledgeEntry]:
        """
        The first `limit` entries in storage order. There is no relevance
        ranking; these are used verbatim as grounding context.
        """
        try:
            docs = await self.db.faqs.find({}).limit(limit).to_list(length=limit)
        except PyMongoError as e:
            raise StorageError(f"Failed to load FAQs: {e}") from e
        return [_to_entry(doc) for doc in docs]

    async def list_entries(self, category: Optional[str] = None, search: Optional[str] = None) -> List[KnowledgeEntry]:
        query: Dict = {}
        if category:
            query["category"] = category
        if search:
            pattern = {"$regex": re.escape(search), "$options": "i"}
            query["$or"] = [{"question": pattern}, {"answer": pattern}]
        try:
            cursor = self.db.faqs.find(query).sort("helpful_count", DESCENDING)
            docs = await cursor.to_list(length=None)
        except PyMongoError as e:
            raise StorageError(f"Failed to load FAQs: {e}") from e
        return [_to_entry(doc) for doc in docs]

    async def categories(self) -> List[str]:
        try:
            values = await self.db.faqs.distinct("category")
        except PyMongoError as e:
            raise StorageError(f"Failed to load FAQ categories: {e}") from e
        return sorted(values)

    async def count(self) -> int:
        try:
            return await self.db.faqs.count_documents({})
        except PyMongoError as e:
            raise StorageError(f"Failed to count FAQs: {e}") from e

    async def insert_many(self, records: List[dict]) -> List[KnowledgeEntry]:
        now = datetime.now(timezone.utc)
        entries = [
            KnowledgeEntry(faq_id=str(uuid.uuid4()), helpful_count=0, created_at=now, **record)
            for record in records
        ]
        if not entries:
            return []
        docs = []
        for entry in entries:
            doc = entry.model_dump(mode="json")
            doc["created_at"] = now
            docs.append(doc)
        try:
            await self.db.faqs.insert_many(docs)
        except PyMongoError as e:
            raise PersistenceError(f"Failed to insert FAQs: {e}") from e
        return entries

    async def increment_helpful(self, faq_id: str) -> KnowledgeEntry:
        try:
            doc = await self.db.faqs.find_one_and_update(
                {"faq_id": faq_id},
                {"$inc": {"helpful_count": 1}},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise PersistenceError(f"Failed to update FAQ: {e}") from e
        if doc is None:
            raise NotFound(f"FAQ {faq_id} not found")
        return _to_entry(doc)


@lru_cache(maxsize=1)
def get_knowledge_service() -> KnowledgeService:
    """
    FastAPI dependency factory that returns a singleton KnowledgeService instance.
    """
    return KnowledgeService()
