import re
import datetime

from models.schemas import ProcessedMessage

QUESTION_WORDS = ("what", "when", "where", "who", "how", "why")

_WHITESPACE_RUN = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RUN.sub(" ", text).strip()


def is_question(text: str) -> bool:
    """True when the text starts with one of the interrogative words.

    This is a plain prefix test, so "whatever" and "however" count as questions too.
    """
    return text.strip().lower().startswith(QUESTION_WORDS)


def current_timestamp() -> str:
    """UTC time as ISO 8601 with millisecond precision and a 'Z' suffix."""
    now = datetime.datetime.now(datetime.timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def normalize(raw_text: str) -> ProcessedMessage:
    processed = collapse_whitespace(raw_text or "")
    return ProcessedMessage(
        processed=processed,
        is_question=is_question(processed),
        timestamp=current_timestamp(),
    )
