"""Error taxonomy for the chatbot backend."""
from typing import Any, Dict, Optional


class ChatbotError(Exception):
    """Base exception for the chatbot backend."""

    def __init__(
        self,
        message: str,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class StorageError(ChatbotError):
    """Raised when a conversation store read or write fails, including unknown conversations."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "STORAGE_ERROR", details)


class ConversationNotFoundError(StorageError):
    """Raised when a conversation identifier does not exist."""

    def __init__(self, conversation_id: str):
        super().__init__(
            f"Conversation with identifier '{conversation_id}' not found",
            {"conversation_id": conversation_id},
        )


class ValidationError(ChatbotError):
    """Raised when a request carries malformed or missing fields."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "VALIDATION_ERROR", details)


class ConfigurationError(ChatbotError):
    """Raised when the response table cannot be loaded."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "CONFIGURATION_ERROR", details)
