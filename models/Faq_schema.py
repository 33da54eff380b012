# models/Faq_schema.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import List, Optional

from models.Intent_schema import IntentCategory


class KnowledgeEntry(BaseModel):
    """One FAQ record of the knowledge base."""

    faq_id: str
    question: str
    answer: str
    category: str
    intent: IntentCategory = IntentCategory.GENERAL
    keywords: List[str] = Field(default_factory=list)
    source_url: Optional[str] = None
    helpful_count: int = 0
    created_at: datetime
