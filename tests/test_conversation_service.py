import pytest
from pydantic import ValidationError
from pymongo.errors import ServerSelectionTimeoutError

from models import DEFAULT_CONVERSATION_TITLE, IntentCategory
from services.conversation_service import ConversationService
from tests.fakes import FailingDatabase
from utils.errors import NotFound, PersistenceError, StorageError


async def test_create_and_list(conversation_service):
    first = await conversation_service.create_conversation("user-1")
    second = await conversation_service.create_conversation("user-1", title="Mortgage questions")
    await conversation_service.create_conversation("user-2")

    conversations = await conversation_service.list_conversations("user-1")

    assert {c.conversation_id for c in conversations} == {first, second}
    titles = {c.conversation_id: c.title for c in conversations}
    assert titles[first] == DEFAULT_CONVERSATION_TITLE
    assert titles[second] == "Mortgage questions"


async def test_list_most_recently_updated_first(conversation_service):
    older = await conversation_service.create_conversation("user-1")
    newer = await conversation_service.create_conversation("user-1")
    await conversation_service.add_message(older, "user", "bump")

    conversations = await conversation_service.list_conversations("user-1")

    assert [c.conversation_id for c in conversations] == [older, newer]


async def test_add_message_refreshes_conversation(conversation_service):
    conversation_id = await conversation_service.create_conversation("user-1")
    await conversation_service.add_message(conversation_id, "user", "Hi")
    await conversation_service.add_message(conversation_id, "assistant", "Hello", intent=IntentCategory.GENERAL)

    [conversation] = await conversation_service.list_conversations("user-1")
    assert conversation.message_count == 2
    assert conversation.updated_at >= conversation.created_at


async def test_history_oldest_first_and_unbounded(conversation_service):
    for i in range(60):
        await conversation_service.add_message("c1", "user" if i % 2 == 0 else "assistant", f"turn {i}")

    history = await conversation_service.get_history("c1")

    assert len(history) == 60
    assert history[0] == {"role": "user", "content": "turn 0"}
    assert history[-1] == {"role": "assistant", "content": "turn 59"}


async def test_unknown_conversation_has_empty_history(conversation_service):
    assert await conversation_service.get_history("missing") == []


async def test_user_messages_cannot_carry_intent(conversation_service):
    with pytest.raises(ValidationError):
        await conversation_service.add_message("c1", "user", "hi", intent=IntentCategory.GENERAL)
    with pytest.raises(ValidationError):
        await conversation_service.add_message("c1", "user", "hi", sources=["FAQ Database"])


async def test_assistant_message_round_trip(conversation_service):
    await conversation_service.add_message(
        "c1", "assistant", "Call the hotline", intent=IntentCategory.FRAUD_REPORT, sources=["FAQ Database"]
    )

    [message] = await conversation_service.get_messages("c1")
    assert message.intent == IntentCategory.FRAUD_REPORT
    assert message.sources == ["FAQ Database"]


async def test_rename(conversation_service):
    conversation_id = await conversation_service.create_conversation("user-1")
    await conversation_service.rename_conversation(conversation_id, "Fraud")

    [conversation] = await conversation_service.list_conversations("user-1")
    assert conversation.title == "Fraud"

    with pytest.raises(NotFound):
        await conversation_service.rename_conversation("missing", "x")


async def test_delete_cascades_to_messages(conversation_service):
    keep = await conversation_service.create_conversation("user-1")
    drop = await conversation_service.create_conversation("user-1")
    await conversation_service.add_message(keep, "user", "stay")
    await conversation_service.add_message(drop, "user", "go")
    await conversation_service.add_message(drop, "assistant", "gone")

    deleted = await conversation_service.delete_conversation(drop)

    assert deleted == 2
    assert await conversation_service.get_messages(drop) == []
    assert len(await conversation_service.get_messages(keep)) == 1
    with pytest.raises(NotFound):
        await conversation_service.delete_conversation(drop)


async def test_failed_message_delete_keeps_conversation(db, conversation_service, monkeypatch):
    conversation_id = await conversation_service.create_conversation("user-1")
    await conversation_service.add_message(conversation_id, "user", "hello")

    async def fail(query):
        raise ServerSelectionTimeoutError("mongo unavailable")

    monkeypatch.setattr(db.messages, "delete_many", fail)

    with pytest.raises(PersistenceError):
        await conversation_service.delete_conversation(conversation_id)

    [conversation] = await conversation_service.list_conversations("user-1")
    assert conversation.conversation_id == conversation_id
    assert len(await conversation_service.get_messages(conversation_id)) == 1


async def test_storage_failures_are_translated():
    service = ConversationService(db=FailingDatabase())

    with pytest.raises(StorageError):
        await service.get_history("c1")
    with pytest.raises(PersistenceError):
        await service.add_message("c1", "assistant", "hi")
    with pytest.raises(PersistenceError):
        await service.create_conversation("user-1")
