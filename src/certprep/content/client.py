"""Content Generation Client.

Turns quiz, flashcard and chat requests into generation service calls and
parses the results into typed records.
"""

import json
import logging
from collections.abc import Sequence
from typing import Any

from pydantic import TypeAdapter, ValidationError

from ..config import HISTORY_WINDOW
from ..errors import (
    AuthFailure,
    EmptyResponseFailure,
    GenerationFailure,
    GenericFailure,
    NetworkFailure,
    ParseFailure,
    ServiceFailure,
    StudyError,
    ValidationFailure,
)
from ..llm import GenerationRequest, GenerationService, SchemaNode
from ..prompts import get_chat_system_prompt, render_prompt
from .base import ContentGenerator
from .models import (
    ChatMessage,
    ConceptCard,
    ConversationHistory,
    Flashcard,
    FlashcardMode,
    QuizQuestion,
)
from .schemas import (
    CONCEPT_FLASHCARD_SCHEMA,
    QUIZ_QUESTION_SCHEMA,
    SCENARIO_FLASHCARD_SCHEMA,
    array_of,
)

logger = logging.getLogger(__name__)

QUIZ_FAILURE_MESSAGE = (
    "Failed to generate quiz questions. "
    "The API may be unavailable or the request was malformed."
)
FLASHCARD_FAILURE_MESSAGE = (
    "Failed to generate flashcards. "
    "The API may be unavailable or the request was malformed."
)

AUTH_FAILURE_MESSAGE = "Invalid API key. Please check your configuration."
QUOTA_FAILURE_MESSAGE = "API quota exceeded or rate limit reached. Please wait a moment and try again."
NETWORK_FAILURE_MESSAGE = "Network error. Please check your internet connection and try again."
UNAVAILABLE_FAILURE_MESSAGE = "The assistant is temporarily unavailable. Please try again in a moment."
EMPTY_RESPONSE_MESSAGE = "The assistant returned an empty response. Please try again."

_FLASHCARD_MODES: dict[FlashcardMode, tuple[str, SchemaNode, type]] = {
    FlashcardMode.SCENARIO: ("flashcards_scenario", SCENARIO_FLASHCARD_SCHEMA, Flashcard),
    FlashcardMode.CONCEPT: ("flashcards_concept", CONCEPT_FLASHCARD_SCHEMA, ConceptCard),
}


def reclassify_chat_failure(exc: BaseException) -> StudyError:
    """Map a provider exception onto the chat failure taxonomy."""
    if isinstance(exc, StudyError):
        return exc

    text = str(exc).lower()
    if "api key" in text:
        return AuthFailure(AUTH_FAILURE_MESSAGE)
    if "quota" in text or "rate limit" in text:
        return ServiceFailure(QUOTA_FAILURE_MESSAGE)
    if "network" in text or "fetch" in text or isinstance(exc, (ConnectionError, TimeoutError)):
        return NetworkFailure(NETWORK_FAILURE_MESSAGE)
    return GenericFailure(UNAVAILABLE_FAILURE_MESSAGE)


def parse_batch(text: str, record_type: type, failure_message: str) -> list[Any]:
    """Parse a JSON array response into a list of ``record_type``.

    Raises:
        ParseFailure: If the text is not JSON or an item does not match the record shape
    """
    try:
        payload = json.loads(text.strip())
    except json.JSONDecodeError as exc:
        logger.error("Response was not valid JSON: %s", exc)
        raise ParseFailure(failure_message) from exc

    if not isinstance(payload, list):
        logger.error("Expected a JSON array, got %s", type(payload).__name__)
        raise ParseFailure(failure_message)

    try:
        return TypeAdapter(list[record_type]).validate_python(payload)
    except ValidationError as exc:
        logger.error("Response did not match the %s shape: %s", record_type.__name__, exc)
        raise ParseFailure(failure_message) from exc


def _normalize_description(topic_description: str) -> str:
    description = topic_description.strip()
    if description and not description.endswith("."):
        description += "."
    return description


class ContentClient(ContentGenerator):
    """ContentGenerator backed by a GenerationService.

    Hidden design decisions:
    - Prompt wording and the JSON schema contract
    - Size of the chat context window
    - Translation of provider errors into StudyError subclasses
    """

    def __init__(
        self,
        service: GenerationService,
        model: str | None = None,
        history_window: int = HISTORY_WINDOW
    ):
        """Initialize the client.

        Args:
            service: Generation service used for every call
            model: Model override passed on each request (None uses the service default)
            history_window: Maximum number of prior turns included in chat prompts
        """
        self._service = service
        self._model = model
        self._history_window = history_window

    @property
    def history_window(self) -> int:
        return self._history_window

    async def generate_quiz_questions(
        self,
        topic_description: str,
        count: int
    ) -> list[QuizQuestion]:
        """Generate ``count`` multiple-choice questions for a topic description."""
        prompt = render_prompt(
            "quiz",
            count=_require_positive(count),
            topic_description=_normalize_description(topic_description),
        )
        return await self._generate_batch(
            prompt,
            array_of(QUIZ_QUESTION_SCHEMA),
            QuizQuestion,
            QUIZ_FAILURE_MESSAGE,
        )

    async def generate_flashcards(
        self,
        topic_description: str,
        count: int,
        mode: FlashcardMode = FlashcardMode.SCENARIO
    ) -> list[Flashcard] | list[ConceptCard]:
        """Generate ``count`` flashcards; ``mode`` selects scenario or concept cards."""
        prompt_name, schema, record_type = _FLASHCARD_MODES[mode]
        prompt = render_prompt(
            prompt_name,
            count=_require_positive(count),
            topic_description=_normalize_description(topic_description),
        )
        return await self._generate_batch(
            prompt,
            array_of(schema),
            record_type,
            FLASHCARD_FAILURE_MESSAGE,
        )

    def build_chat_prompt(self, message: str, history: Sequence[ChatMessage]) -> str:
        """Assemble the chat prompt: system instruction, recent turns, new message."""
        sections = [get_chat_system_prompt()]

        recent = ConversationHistory(messages=list(history)).window(self._history_window)
        if recent:
            transcript = "\n".join(turn.render() for turn in recent)
            sections.append(f"Conversation history:\n{transcript}")

        sections.append(f"User: {message}")
        return "\n\n".join(sections)

    async def send_chat_message(
        self,
        message: str,
        history: Sequence[ChatMessage]
    ) -> str:
        """Send a chat message with prior turns as context and return the reply."""
        request = GenerationRequest(
            prompt=self.build_chat_prompt(message, history),
            model=self._model,
        )

        try:
            response = await self._service.generate(request)
        except Exception as exc:
            failure = reclassify_chat_failure(exc)
            logger.error("Error sending chat message: %s", exc)
            raise failure from exc

        reply = response.text.strip()
        if not reply:
            logger.warning("Generation service returned an empty chat reply")
            raise EmptyResponseFailure(EMPTY_RESPONSE_MESSAGE)
        return reply

    async def close(self) -> None:
        await self._service.close()

    async def _generate_batch(
        self,
        prompt: str,
        schema: SchemaNode,
        record_type: type,
        failure_message: str
    ) -> list[Any]:
        request = GenerationRequest(
            prompt=prompt,
            model=self._model,
            response_schema=schema,
        )

        try:
            response = await self._service.generate(request)
        except Exception as exc:
            logger.error("Error generating %s batch: %s", record_type.__name__, exc)
            raise GenerationFailure(failure_message) from exc

        records = parse_batch(response.text, record_type, failure_message)
        logger.info("Generated %d %s records", len(records), record_type.__name__)
        return records


def _require_positive(count: int) -> int:
    if count < 1:
        raise ValidationFailure(f"Count must be a positive integer, got {count}")
    return count
