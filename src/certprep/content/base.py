from abc import ABC, abstractmethod
from collections.abc import Sequence

from .models import ChatMessage, ConceptCard, Flashcard, FlashcardMode, QuizQuestion


class ContentGenerator(ABC):
    """Study content operations backed by the generation service.

    This is the single dependency handed to chat controllers and study
    sessions, constructed once at startup. Tests substitute a fake.
    """

    @abstractmethod
    async def generate_quiz_questions(
        self,
        topic_description: str,
        count: int
    ) -> list[QuizQuestion]:
        """Generate a batch of multiple-choice questions.

        Raises:
            GenerationFailure: If the service fails or returns malformed JSON
        """

    @abstractmethod
    async def generate_flashcards(
        self,
        topic_description: str,
        count: int,
        mode: FlashcardMode = FlashcardMode.SCENARIO
    ) -> list[Flashcard] | list[ConceptCard]:
        """Generate a batch of flashcards.

        Raises:
            GenerationFailure: If the service fails or returns malformed JSON
        """

    @abstractmethod
    async def send_chat_message(
        self,
        message: str,
        history: Sequence[ChatMessage]
    ) -> str:
        """Get the assistant's reply to ``message`` given prior turns (oldest first).

        Raises:
            StudyError: A classified failure (auth, service, network,
                empty response or generic)
        """

    async def close(self) -> None:
        """Release underlying resources."""
