from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, Text
import uuid
import datetime
from database import Base


def utcnow():
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)


class ConversationDB(Base):
    __tablename__ = "conversations"

    id = Column(String, primary_key=True, default=lambda: uuid.uuid4().hex)
    created_at = Column(DateTime, default=utcnow)
    last_activity = Column(DateTime, default=utcnow)


class MessageDB(Base):
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    content = Column(Text, nullable=False)
    sender = Column(String, nullable=False)
    timestamp = Column(DateTime, default=utcnow)
    conversation_id = Column(String, ForeignKey("conversations.id"), nullable=False, index=True)
    is_question = Column(Boolean, default=False)
