"""Chat request pipeline: normalize, store the user turn, reply, store the bot turn.

Steps run strictly in order::

    Received -> Normalized -> UserMessageStored -> ResponseGenerated
             -> BotMessageStored -> ConversationTouched -> Completed

A StorageError at any step aborts the remaining steps and propagates to the
caller. Writes that already succeeded are kept.
"""
import logging
from enum import Enum

from sqlalchemy.orm import Session

from exceptions import StorageError
from models.schemas import ChatResponse, Sender
from services import history
from services.normalizer import normalize
from services.responder import ResponseSelector

logger = logging.getLogger(__name__)


class ChatState(str, Enum):
    RECEIVED = "received"
    NORMALIZED = "normalized"
    USER_MESSAGE_STORED = "user_message_stored"
    RESPONSE_GENERATED = "response_generated"
    BOT_MESSAGE_STORED = "bot_message_stored"
    CONVERSATION_TOUCHED = "conversation_touched"
    COMPLETED = "completed"
    FAILED = "failed"


def handle_chat(db: Session, selector: ResponseSelector, conv_id: str, message: str) -> ChatResponse:
    state = ChatState.RECEIVED
    try:
        processed = normalize(message)
        state = ChatState.NORMALIZED

        # The raw text is stored; the processed text only drives the reply
        history.append_message(db, conv_id, message, Sender.USER, processed.is_question)
        state = ChatState.USER_MESSAGE_STORED

        reply = selector.select_response(processed.processed)
        state = ChatState.RESPONSE_GENERATED

        history.append_message(db, conv_id, reply, Sender.BOT, False)
        state = ChatState.BOT_MESSAGE_STORED

        history.touch_conversation(db, conv_id)
        state = ChatState.CONVERSATION_TOUCHED
    except StorageError:
        logger.warning("Chat for conversation %s: %s -> %s", conv_id, state.value, ChatState.FAILED.value)
        raise

    logger.debug("Chat for conversation %s %s", conv_id, ChatState.COMPLETED.value)
    return ChatResponse(response=reply, processed=processed)
