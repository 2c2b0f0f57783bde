import os
import sys
import random
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "../backend")))
from exceptions import StorageError
from models import db_models
from services import history
from services.chat_pipeline import handle_chat
from services.responder import ResponseSelector
from services.response_table import BUILTIN_TABLE


@pytest.fixture
def db_session():
    engine = create_engine("sqlite:///:memory:", connect_args={"check_same_thread": False})
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db_models.Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        db_models.Base.metadata.drop_all(bind=engine)


@pytest.fixture
def selector():
    return ResponseSelector(BUILTIN_TABLE, random.Random(1))


def test_chat_stores_both_turns(db_session, selector):
    conv_id = history.create_conversation(db_session)

    result = handle_chat(db_session, selector, conv_id, "  Hello   bot ")

    assert result.response in BUILTIN_TABLE.get("greeting").responses
    assert result.processed.processed == "Hello bot"
    assert result.processed.is_question is False

    msgs = history.list_messages(db_session, conv_id)
    assert [(m.sender, m.content) for m in msgs] == [("user", "  Hello   bot "), ("bot", result.response)]


def test_question_flag_is_stored(db_session, selector):
    conv_id = history.create_conversation(db_session)
    handle_chat(db_session, selector, conv_id, "why is the sky blue")

    user_msg = history.list_messages(db_session, conv_id)[0]
    assert user_msg.is_question is True


def test_unknown_conversation_writes_nothing(db_session, selector):
    with pytest.raises(StorageError):
        handle_chat(db_session, selector, "missing", "hello")
    assert history.list_messages(db_session, "missing") == []


def test_failure_keeps_earlier_writes(db_session, selector, monkeypatch):
    """No rollback of completed steps: a failing touch leaves both messages stored."""
    conv_id = history.create_conversation(db_session)

    def broken_touch(db, conv_id):
        raise StorageError("touch failed")

    monkeypatch.setattr(history, "touch_conversation", broken_touch)
    with pytest.raises(StorageError):
        handle_chat(db_session, selector, conv_id, "hello")

    assert [m.sender for m in history.list_messages(db_session, conv_id)] == ["user", "bot"]


def test_failure_stops_later_steps(db_session, selector, monkeypatch):
    conv_id = history.create_conversation(db_session)
    calls = []
    original_append = history.append_message

    def failing_bot_append(db, conv_id, content, sender, is_question=False):
        calls.append(sender)
        if sender == "bot":
            raise StorageError("write failed")
        return original_append(db, conv_id, content, sender, is_question)

    monkeypatch.setattr(history, "append_message", failing_bot_append)
    monkeypatch.setattr(history, "touch_conversation", lambda db, conv_id: calls.append("touch"))

    with pytest.raises(StorageError):
        handle_chat(db_session, selector, conv_id, "hello")

    assert calls == ["user", "bot"]
    assert [m.sender for m in history.list_messages(db_session, conv_id)] == ["user"]
