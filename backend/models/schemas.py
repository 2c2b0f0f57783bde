import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Sender(str, Enum):
    USER = "user"
    BOT = "bot"


class CamelModel(BaseModel):
    """Wire models use camelCase keys; Python code uses snake_case attributes."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProcessedMessage(BaseModel):
    processed: str
    is_question: bool = Field(alias="isQuestion")
    timestamp: str

    model_config = ConfigDict(populate_by_name=True)


class ChatRequest(CamelModel):
    message: str
    conversation_id: str


class ChatResponse(BaseModel):
    response: str
    processed: ProcessedMessage


class ConversationCreated(CamelModel):
    conversation_id: str


class ConversationRecord(BaseModel):
    id: str
    created_at: datetime.datetime
    last_activity: datetime.datetime

    model_config = ConfigDict(from_attributes=True)


class MessageRecord(BaseModel):
    id: int
    content: str
    sender: Sender
    timestamp: datetime.datetime
    conversation_id: str
    is_question: bool

    model_config = ConfigDict(from_attributes=True)


class ErrorResponse(BaseModel):
    error: str
