import pytest

from services.chat_service import ChatService
from services.conversation_service import ConversationService
from services.knowledge_service import KnowledgeService
from tests.fakes import FakeDatabase, FakeLLM
from utils.errors import UpstreamError


@pytest.fixture
def db():
    return FakeDatabase()


@pytest.fixture
def conversation_service(db):
    return ConversationService(db=db)


@pytest.fixture
def knowledge_service(db):
    return KnowledgeService(db=db)


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def chat_service(conversation_service, knowledge_service, fake_llm):
    return ChatService(
        conversations=conversation_service,
        knowledge=knowledge_service,
        llm=fake_llm,
    )


@pytest.fixture
def upstream_failure():
    return UpstreamError("AI API error (500): gateway exploded", upstream_status=500, body="gateway exploded")
