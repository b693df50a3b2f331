"""certprep: GCP certification study companion.

Generates quizzes and flashcards and hosts a chat assistant, all backed by
a hosted LLM. Each subpackage hides one design decision:
- llm: which generation service is used and how schemas are expressed
- content: prompt wording and the JSON record contract
- chat: topic heuristic, error classification and the turn state machine
- study: quiz scoring and flashcard navigation
"""

__version__ = "0.1.0"

from .chat import ChatTurnController, TopicClassifier, classify_error
from .content import ChatMessage, ContentClient, ContentGenerator, Flashcard, QuizQuestion
from .errors import StudyError

__all__ = [
    "ChatTurnController",
    "TopicClassifier",
    "classify_error",
    "ChatMessage",
    "ContentClient",
    "ContentGenerator",
    "Flashcard",
    "QuizQuestion",
    "StudyError",
]
