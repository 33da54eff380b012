# services/chat_service.py
import logging
import time
from functools import lru_cache
from typing import Dict, List, Optional, Protocol

from models import ChatResult, IntentCategory, KnowledgeEntry
from services.conversation_service import get_conversation_service
from services.intent_service import classify_intent
from services.knowledge_service import build_faq_context, get_knowledge_service
from services.llm_service import get_llm_service
from utils.config import get_settings
from utils.errors import InvalidRequest

logger = logging.getLogger(__name__)

FAQ_SOURCE = "FAQ Database"

SYSTEM_PROMPT_TEMPLATE = """You are a professional finance customer service AI assistant. Your knowledge is based on real financial institution FAQs and current market data.

Your capabilities:
1. Answer questions about accounts, loans, fraud protection, investments, and general banking
2. Classify user intents: account_inquiry, loan_inquiry, fraud_report, investment_help, dispute, general, or other
3. Provide accurate information with source citations when possible
4. Be professional, helpful, and clear

FAQ Knowledge Base:
{faq_context}

When responding:
- Be concise but comprehensive
- If you reference FAQ information, cite the category
- If you're unsure, acknowledge it honestly
- Classify the intent of the user's question"""


class ConversationStore(Protocol):
    async def get_history(self, conversation_id: str) -> List[Dict[str, str]]: ...

    async def add_message(
        self,
        conversation_id: str,
        role: str,
        content: str,
        intent: Optional[IntentCategory] = None,
        sources: Optional[List[str]] = None,
    ) -> str: ...


class KnowledgeStore(Protocol):
    async def get_context_entries(self, limit: int = 20) -> List[KnowledgeEntry]: ...


class CompletionClient(Protocol):
    async def generate(self, messages: List[Dict[str, str]]) -> str: ...


def build_system_prompt(faq_context: str) -> str:
    return SYSTEM_PROMPT_TEMPLATE.format(faq_context=faq_context)


class ChatService:
    """
    Answers one user message for a conversation:
    history -> FAQ context -> completion -> intent -> persist.

    Every step runs sequentially and the first failure aborts the request;
    nothing is written unless the completion succeeded.
    """

    def __init__(
        self,
        conversations: ConversationStore,
        knowledge: KnowledgeStore,
        llm: CompletionClient,
        faq_context_limit: int = 20,
    ):
        self.conversations = conversations
        self.knowledge = knowledge
        self.llm = llm
        self.faq_context_limit = faq_context_limit

    def build_messages(
        self,
        system_prompt: str,
        history: List[Dict[str, str]],
        message: str,
    ) -> List[Dict[str, str]]:
        return [
            {"role": "system", "content": system_prompt},
            *history,
            {"role": "user", "content": message},
        ]

    async def handle_message(self, conversation_id: Optional[str], message: Optional[str]) -> ChatResult:
        if not conversation_id or not message:
            raise InvalidRequest("Missing conversationId or message")

        timings = {}

        t0 = time.perf_counter()
        logger.info("[Chat] Fetching conversation history...")
        history = await self.conversations.get_history(conversation_id)
        timings["history"] = (time.perf_counter() - t0) * 1000

        t0 = time.perf_counter()
        logger.info("[Chat] Fetching FAQs for context...")
        entries = await self.knowledge.get_context_entries(limit=self.faq_context_limit)
        faq_context = build_faq_context(entries)
        timings["faq_context"] = (time.perf_counter() - t0) * 1000

        t0 = time.perf_counter()
        messages = self.build_messages(build_system_prompt(faq_context), history, message)
        logger.info("[Chat] Calling completion service with %d messages", len(messages))
        reply = await self.llm.generate(messages)
        timings["completion"] = (time.perf_counter() - t0) * 1000

        # The label describes the user's question but is stored on the reply.
        intent = classify_intent(message)
        logger.info("[Chat] Detected intent: %s", intent.value)

        sources = [FAQ_SOURCE] if faq_context else []

        t0 = time.perf_counter()
        message_id = await self.conversations.add_message(
            conversation_id=conversation_id,
            role="assistant",
            content=reply,
            intent=intent,
            sources=sources,
        )
        timings["persist"] = (time.perf_counter() - t0) * 1000

        logger.info(
            "[Chat] Message %s stored. Timings (ms): %s",
            message_id,
            ", ".join(f"{step}={duration:.2f}" for step, duration in timings.items()),
        )

        return ChatResult(
            conversation_id=conversation_id,
            message_id=message_id,
            intent=intent,
            reply=reply,
            sources=sources,
        )


@lru_cache(maxsize=1)
def get_chat_service() -> ChatService:
    """
    FastAPI dependency factory that returns a singleton ChatService instance.
    """
    return ChatService(
        conversations=get_conversation_service(),
        knowledge=get_knowledge_service(),
        llm=get_llm_service(),
        faq_context_limit=get_settings().faq_context_limit,
    )
