"""Pytest configuration and shared fixtures."""
import json
import os
from collections.abc import Sequence

import pytest

from certprep.content import ChatMessage, ContentGenerator, Flashcard, FlashcardMode, QuizQuestion
from certprep.llm import GenerationRequest, GenerationResponse, GenerationService


class FakeGenerationService(GenerationService):
    """Generation service returning queued payloads and recording requests.

    Queue entries are either response text or an exception to raise.
    """

    def __init__(self, *outcomes: str | Exception):
        self.outcomes = list(outcomes)
        self.requests: list[GenerationRequest] = []
        self.closed = False

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        self.requests.append(request)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return GenerationResponse(text=outcome, model="fake-model")

    async def close(self) -> None:
        self.closed = True


class FakeContentGenerator(ContentGenerator):
    """Content generator double with scripted chat replies.

    ``calls`` records ``(message, history)`` for every chat call, with the
    history copied at call time.
    """

    def __init__(self, *replies: str | Exception, questions=None, cards=None):
        self.replies = list(replies)
        self.calls: list[tuple[str, list[ChatMessage]]] = []
        self.questions = questions or []
        self.cards = cards or []
        self.quiz_calls: list[tuple[str, int]] = []
        self.flashcard_calls: list[tuple[str, int, FlashcardMode]] = []
        self.closed = False

    async def generate_quiz_questions(self, topic_description: str, count: int) -> list[QuizQuestion]:
        self.quiz_calls.append((topic_description, count))
        return list(self.questions)

    async def generate_flashcards(
        self,
        topic_description: str,
        count: int,
        mode: FlashcardMode = FlashcardMode.SCENARIO
    ):
        self.flashcard_calls.append((topic_description, count, mode))
        return list(self.cards)

    async def send_chat_message(self, message: str, history: Sequence[ChatMessage]) -> str:
        self.calls.append((message, list(history)))
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def close(self) -> None:
        self.closed = True


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "gemini": os.getenv("GEMINI_API_KEY"),
        "openai": os.getenv("OPENAI_API_KEY"),
    }


@pytest.fixture
def make_service():
    """Factory for FakeGenerationService instances."""
    return FakeGenerationService


@pytest.fixture
def make_generator():
    """Factory for FakeContentGenerator instances."""
    return FakeContentGenerator


@pytest.fixture
def sample_question_payload():
    """Return one quiz question as the generation service emits it."""
    return {
        "question": "Which service runs stateless containers without managing servers?",
        "options": ["Compute Engine", "Cloud Run", "Bigtable", "Cloud CDN"],
        "correctAnswerIndex": 1,
        "explanation": "Cloud Run is a managed platform for stateless containers.",
        "topic": "Cloud Run",
    }


@pytest.fixture
def sample_questions(sample_question_payload):
    """Return three parsed quiz questions across two topics."""
    second = dict(sample_question_payload, correctAnswerIndex=0, topic="Compute Engine",
                  question="Which service provides virtual machines?")
    third = dict(sample_question_payload, question="Which service hosts container images?",
                 options=["Artifact Registry", "Cloud Run", "Cloud SQL", "Workflows"],
                 correctAnswerIndex=0, topic="Cloud Run")
    return [QuizQuestion.model_validate(p) for p in (sample_question_payload, second, third)]


@pytest.fixture
def sample_cards():
    """Return three scenario flashcards."""
    return [
        Flashcard(scenario=f"Scenario {i}", solution=f"Solution {i}")
        for i in range(1, 4)
    ]


@pytest.fixture
def quiz_json(sample_question_payload):
    """Return a JSON array response with two questions."""
    return json.dumps([sample_question_payload, sample_question_payload])
