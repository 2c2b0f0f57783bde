import logging
from contextlib import contextmanager
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from exceptions import ConversationNotFoundError, StorageError, ValidationError
from models import db_models
from models.schemas import Sender

logger = logging.getLogger(__name__)


@contextmanager
def _storage_errors(db: Session, action: str):
    """Rolls back and re-raises database failures as StorageError."""
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("Storage failure while trying to %s: %s", action, e)
        raise StorageError(f"Failed to {action}: {e}") from e


def _require_conversation(db: Session, conv_id: str) -> db_models.ConversationDB:
    db_conv = db.query(db_models.ConversationDB).filter(db_models.ConversationDB.id == conv_id).first()
    if db_conv is None:
        raise ConversationNotFoundError(conv_id)
    return db_conv


def get_conversation(db: Session, conv_id: str) -> Optional[db_models.ConversationDB]:
    with _storage_errors(db, "read conversation"):
        return db.query(db_models.ConversationDB).filter(db_models.ConversationDB.id == conv_id).first()


def create_conversation(db: Session) -> str:
    with _storage_errors(db, "create conversation"):
        db_conv = db_models.ConversationDB()
        db.add(db_conv)
        db.commit()
        db.refresh(db_conv)
    logger.info("Created conversation %s", db_conv.id)
    return db_conv.id


def append_message(db: Session, conv_id: str, content: str, sender: str, is_question: bool = False) -> db_models.MessageDB:
    try:
        sender = Sender(sender)
    except ValueError:
        raise ValidationError(f"Invalid sender '{sender}', expected 'user' or 'bot'", {"sender": sender})

    with _storage_errors(db, "append message"):
        # SQLite does not enforce the foreign key, so check explicitly
        _require_conversation(db, conv_id)
        db_msg = db_models.MessageDB(
            content=content,
            sender=sender.value,
            conversation_id=conv_id,
            is_question=bool(is_question) and sender == Sender.USER,
        )
        db.add(db_msg)
        db.commit()
        db.refresh(db_msg)
    return db_msg


def touch_conversation(db: Session, conv_id: str):
    with _storage_errors(db, "update conversation"):
        db_conv = _require_conversation(db, conv_id)
        db_conv.last_activity = db_models.utcnow()
        db.commit()


def list_messages(db: Session, conv_id: str) -> List[db_models.MessageDB]:
    with _storage_errors(db, "list messages"):
        return (
            db.query(db_models.MessageDB)
            .filter(db_models.MessageDB.conversation_id == conv_id)
            .order_by(db_models.MessageDB.timestamp, db_models.MessageDB.id)
            .all()
        )
