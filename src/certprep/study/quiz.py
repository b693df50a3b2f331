"""Quiz sessions: settings, scoring and review."""

import logging
from collections import Counter

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..config import DEFAULT_QUESTION_COUNT, QUESTION_COUNTS
from ..content import ContentGenerator, QuizQuestion
from ..errors import GenerationFailure, ValidationFailure
from .catalog import Certification, TopicMode, build_topic_description

logger = logging.getLogger(__name__)


class QuizSettings(BaseModel):
    """What to generate for one quiz."""

    model_config = ConfigDict(frozen=True)

    certification: Certification = Certification.DEVELOPER
    mode: TopicMode = TopicMode.SPECIFIC
    topic: str | None = Field(default=None, description="Topic for specific mode (default: first topic)")
    count: int = Field(default=DEFAULT_QUESTION_COUNT, description="Number of questions")

    @field_validator("count")
    @classmethod
    def validate_count(cls, v: int) -> int:
        if v not in QUESTION_COUNTS:
            raise ValueError(f"count must be one of {QUESTION_COUNTS}")
        return v

    @model_validator(mode="after")
    def validate_topic(self) -> "QuizSettings":
        if self.topic is not None and self.topic not in self.certification.topics:
            raise ValueError(f"Unknown topic for {self.certification.display_name}: {self.topic}")
        return self

    @property
    def selected_topic(self) -> str:
        return self.topic or self.certification.topics[0]

    def topic_description(self) -> str:
        return build_topic_description(self.certification, self.mode, self.selected_topic)


class UserAnswer(BaseModel):
    model_config = ConfigDict(frozen=True)

    question_index: int
    selected_answer_index: int
    is_correct: bool


class QuizSession(BaseModel):
    """Progress through one generated batch of questions.

    Each question accepts a single answer; later selections are ignored.
    """

    settings: QuizSettings = Field(default_factory=QuizSettings)
    questions: list[QuizQuestion] = Field(default_factory=list)
    current_index: int = 0
    selected_answer: int | None = None
    score: int = 0
    answers: list[UserAnswer] = Field(default_factory=list)
    finished: bool = False

    @property
    def current_question(self) -> QuizQuestion | None:
        if self.finished or not self.questions:
            return None
        return self.questions[self.current_index]

    @property
    def is_last_question(self) -> bool:
        return self.current_index >= len(self.questions) - 1

    @property
    def percentage(self) -> int:
        """Score as a whole-number percentage, rounding halves up."""
        if not self.questions:
            return 0
        return int(self.score * 100 / len(self.questions) + 0.5)

    def select_answer(self, answer_index: int) -> UserAnswer | None:
        """Record an answer for the current question.

        Returns:
            The recorded answer, or None if the question was already answered

        Raises:
            ValidationFailure: If ``answer_index`` is not a valid option
        """
        question = self.current_question
        if question is None or self.selected_answer is not None:
            return None
        if not 0 <= answer_index < len(question.options):
            raise ValidationFailure(
                f"Answer must be between 1 and {len(question.options)}"
            )

        self.selected_answer = answer_index
        correct = question.is_correct(answer_index)
        if correct:
            self.score += 1

        answer = UserAnswer(
            question_index=self.current_index,
            selected_answer_index=answer_index,
            is_correct=correct,
        )
        self.answers.append(answer)
        return answer

    def next_question(self) -> None:
        """Advance to the next question, or finish after the last one."""
        if self.finished:
            return
        if self.current_index < len(self.questions) - 1:
            self.current_index += 1
            self.selected_answer = None
        else:
            self.finished = True

    def topic_breakdown(self) -> dict[str, int]:
        """Number of questions per topic, in order of first appearance."""
        return dict(Counter(question.topic for question in self.questions))

    def missed(self) -> list[tuple[QuizQuestion, UserAnswer]]:
        """Questions answered incorrectly, with the answer given."""
        return [
            (self.questions[answer.question_index], answer)
            for answer in self.answers
            if not answer.is_correct
        ]


async def start_quiz(generator: ContentGenerator, settings: QuizSettings) -> QuizSession:
    """Generate a fresh batch of questions and open a session over it.

    Raises:
        GenerationFailure: If generation fails or yields no questions
    """
    logger.info(
        "Generating %d questions for %s (%s)",
        settings.count,
        settings.certification.value,
        settings.mode.value,
    )
    questions = await generator.generate_quiz_questions(settings.topic_description(), settings.count)
    if not questions:
        raise GenerationFailure("Failed to generate quiz questions. The API returned an empty set.")
    return QuizSession(settings=settings, questions=questions)
