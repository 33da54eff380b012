# api/faqs/faqs.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from models import ErrorResponse
from services.knowledge_service import KnowledgeService, get_knowledge_service
from services.seed_service import seed_faqs
from utils.errors import ChatServiceError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["faqs"])


@router.get("/faqs")
async def list_faqs(
    category: Optional[str] = None,
    search: Optional[str] = None,
    knowledge_service: KnowledgeService = Depends(get_knowledge_service),
):
    """FAQs, most helpful first"""
    entries = await knowledge_service.list_entries(category=category, search=search)
    return {"faqs": [e.model_dump(mode="json") for e in entries]}


@router.get("/faqs/categories")
async def list_categories(knowledge_service: KnowledgeService = Depends(get_knowledge_service)):
    return {"categories": await knowledge_service.categories()}


@router.post("/faqs/{faq_id}/helpful")
async def mark_helpful(
    faq_id: str,
    knowledge_service: KnowledgeService = Depends(get_knowledge_service),
):
    entry = await knowledge_service.increment_helpful(faq_id)
    return {"faq_id": faq_id, "helpful_count": entry.helpful_count}


@router.post("/seed-faqs")
async def seed(knowledge_service: KnowledgeService = Depends(get_knowledge_service)):
    """Populate the knowledge base with the built-in FAQs if it is empty."""
    try:
        result = await seed_faqs(knowledge_service)
    except ChatServiceError as e:
        logger.error("[Seed] Error seeding FAQs: %s", e)
        return JSONResponse(status_code=e.status_code, content=ErrorResponse(error=str(e)).model_dump())
    except Exception as e:
        logger.exception("[Seed] Unexpected error seeding FAQs")
        return JSONResponse(status_code=500, content=ErrorResponse(error=str(e)).model_dump())

    body = {"success": True, "message": result.message}
    if result.inserted:
        body["count"] = result.inserted
    return body
