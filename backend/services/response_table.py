"""Keyword-pattern response table.

The table is an immutable value built once at startup (either the built-in
table below or a JSON document named by ``RESPONSE_TABLE_PATH``) and handed
to the :class:`~services.responder.ResponseSelector` explicitly.

JSON layout::

    {
        "categories": [
            {"name": "greeting", "patterns": ["hello"], "responses": ["Hi!"]}
        ],
        "default": ["I'm not sure I understand."]
    }

Patterns are matched as lowercase substrings and must not be empty.
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ValidationError, field_validator

from exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Category:
    name: str
    patterns: Tuple[str, ...]
    responses: Tuple[str, ...]


@dataclass(frozen=True)
class ResponseTable:
    categories: Tuple[Category, ...]
    default: Tuple[str, ...]

    def category_names(self) -> Tuple[str, ...]:
        return tuple(c.name for c in self.categories)

    def get(self, name: str) -> Optional[Category]:
        for category in self.categories:
            if category.name == name:
                return category
        return None


BUILTIN_TABLE = ResponseTable(
    categories=(
        Category(
            name="greeting",
            patterns=("hello", "hi", "hey", "greetings"),
            responses=("Hello! How can I help you today?", "Hi there! What can I do for you?"),
        ),
        Category(
            name="farewell",
            patterns=("bye", "goodbye", "see you", "thanks"),
            responses=("Goodbye! Have a great day!", "See you later! Take care!"),
        ),
        Category(
            name="about",
            patterns=("who are you", "what are you", "what do you do"),
            responses=(
                "I am a chatbot designed to help answer your questions!",
                "I'm your friendly AI assistant, here to help!",
            ),
        ),
        Category(
            name="help",
            patterns=("help", "support", "assist"),
            responses=("I can help you with general questions, information, and basic tasks. What do you need?",),
        ),
        Category(
            name="weather",
            patterns=("weather", "temperature", "forecast"),
            responses=("I can't check real-time weather, but I can help you find a weather service!",),
        ),
    ),
    default=(
        "I'm not sure I understand. Could you rephrase that?",
        "Interesting question! Could you provide more details?",
        "I'm still learning. Could you try asking in a different way?",
    ),
)


class CategoryConfig(BaseModel):
    name: str
    patterns: List[str] = []
    responses: List[str] = []

    @field_validator("patterns")
    @classmethod
    def patterns_not_empty(cls, patterns: List[str]) -> List[str]:
        # An empty pattern is a substring of every input
        if any(not p for p in patterns):
            raise ValueError("patterns must be non-empty strings")
        # Matching runs on lowercased input
        return [p.lower() for p in patterns]


class ResponseTableConfig(BaseModel):
    categories: List[CategoryConfig] = []
    default: List[str] = []


def parse_response_table(data: Dict[str, Any]) -> ResponseTable:
    try:
        config = ResponseTableConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid response table: {e}", {"errors": e.errors()}) from e

    if not config.default:
        raise ConfigurationError("The default category needs at least one response")

    return ResponseTable(
        categories=tuple(
            Category(name=c.name, patterns=tuple(c.patterns), responses=tuple(c.responses))
            for c in config.categories
        ),
        default=tuple(config.default),
    )


def load_response_table(path: Optional[str] = None) -> ResponseTable:
    """Returns the built-in table, or the table stored as JSON at ``path``."""
    if not path:
        return BUILTIN_TABLE

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Could not read response table from {path}: {e}", {"path": path}) from e

    table = parse_response_table(data)
    logger.info("Loaded %d response categories from %s", len(table.categories), path)
    return table
