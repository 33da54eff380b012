from datetime import datetime, timedelta, timezone

import pytest

from models import IntentCategory
from services.analytics_service import AnalyticsService, daily_activity
from tests.fakes import FailingDatabase
from utils.errors import PersistenceError

NOW = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)


async def test_user_summary(db, conversation_service):
    first = await conversation_service.create_conversation("user-1")
    second = await conversation_service.create_conversation("user-1")
    other = await conversation_service.create_conversation("user-2")
    await conversation_service.add_message(first, "user", "balance?")
    await conversation_service.add_message(first, "assistant", "It is $5", intent=IntentCategory.ACCOUNT_INQUIRY)
    await conversation_service.add_message(second, "user", "fraud!")
    await conversation_service.add_message(second, "assistant", "Call us", intent=IntentCategory.FRAUD_REPORT)
    await conversation_service.add_message(second, "assistant", "Anything else?", intent=IntentCategory.FRAUD_REPORT)
    await conversation_service.add_message(other, "assistant", "hi", intent=IntentCategory.GENERAL)

    summary = await AnalyticsService(db=db).user_summary("user-1")

    assert summary.total_conversations == 2
    assert summary.total_messages == 5
    assert summary.avg_messages_per_conversation == 2.5
    assert summary.intent_distribution == {"account_inquiry": 1, "fraud_report": 2}
    assert len(summary.daily_activity) == 7
    assert summary.daily_activity[-1].messages == 5


async def test_user_without_conversations(db):
    summary = await AnalyticsService(db=db).user_summary("nobody", now=NOW)

    assert summary.total_conversations == 0
    assert summary.avg_messages_per_conversation == 0.0
    assert summary.intent_distribution == {}
    assert [d.messages for d in summary.daily_activity] == [0] * 7


def test_daily_activity_window():
    messages = [
        {"created_at": NOW},
        {"created_at": NOW - timedelta(days=1)},
        {"created_at": NOW - timedelta(days=1, hours=2)},
        {"created_at": NOW - timedelta(days=7)},
    ]

    activity = daily_activity(messages, NOW)

    assert activity[0].date == "2025-03-04"
    assert activity[-1].date == "2025-03-10"
    assert [d.messages for d in activity] == [0, 0, 0, 0, 0, 2, 1]


async def test_overview(db, conversation_service):
    conversation_id = await conversation_service.create_conversation("user-1")
    await conversation_service.add_message(conversation_id, "user", "loan?")
    await conversation_service.add_message(conversation_id, "assistant", "Sure", intent=IntentCategory.LOAN_INQUIRY)

    overview = await AnalyticsService(db=db).overview()

    assert overview.total_messages == 2
    assert overview.total_conversations == 1
    assert overview.intent_breakdown == {"loan_inquiry": 1}
    assert overview.recent_activity == []


async def test_record_message_sent(db, conversation_service):
    conversation_id = await conversation_service.create_conversation("user-1")
    analytics = AnalyticsService(db=db)

    await analytics.record_message_sent(conversation_id, IntentCategory.FRAUD_REPORT)
    await analytics.record_message_sent("unknown", IntentCategory.GENERAL)

    owned, orphan = db.analytics_events.docs
    assert owned["event_type"] == "message_sent"
    assert owned["user_id"] == "user-1"
    assert owned["event_data"] == {"conversation_id": conversation_id, "intent": "fraud_report"}
    assert orphan["user_id"] is None


async def test_overview_recent_activity_newest_first(db):
    for i in range(12):
        await db.analytics_events.insert_one({
            "event_id": f"e{i}",
            "user_id": "user-1",
            "event_type": "message_sent",
            "event_data": {"conversation_id": "c1", "intent": "general"},
            "created_at": NOW + timedelta(minutes=i),
        })

    overview = await AnalyticsService(db=db).overview()

    assert [e.event_id for e in overview.recent_activity] == [f"e{i}" for i in range(11, 1, -1)]


async def test_record_event_failure_is_translated():
    with pytest.raises(PersistenceError):
        await AnalyticsService(db=FailingDatabase()).record_event("message_sent", {})
