"""Quiz and flashcard study sessions."""

from .catalog import (
    ARCHITECT_TOPICS,
    DEVELOPER_TOPICS,
    Certification,
    TopicMode,
    build_topic_description,
    flashcard_description,
)
from .flashcards import FlashcardDeck, load_deck
from .quiz import QuizSession, QuizSettings, UserAnswer, start_quiz

__all__ = [
    "ARCHITECT_TOPICS",
    "DEVELOPER_TOPICS",
    "Certification",
    "TopicMode",
    "build_topic_description",
    "flashcard_description",
    "FlashcardDeck",
    "load_deck",
    "QuizSession",
    "QuizSettings",
    "UserAnswer",
    "start_quiz",
]
