"""Content generation: typed study records and the client that produces them."""

from .base import ContentGenerator
from .client import ContentClient, parse_batch, reclassify_chat_failure
from .models import (
    ChatMessage,
    ChatRole,
    ConceptCard,
    ConversationHistory,
    Flashcard,
    FlashcardMode,
    QuizQuestion,
)

__all__ = [
    "ContentGenerator",
    "ContentClient",
    "parse_batch",
    "reclassify_chat_failure",
    "ChatMessage",
    "ChatRole",
    "ConceptCard",
    "ConversationHistory",
    "Flashcard",
    "FlashcardMode",
    "QuizQuestion",
]
