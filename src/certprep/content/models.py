"""Typed records produced by the content client and kept by chat sessions."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from uuid_extensions import uuid7


class ChatRole(str, Enum):
    """Sender of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"

    @property
    def label(self) -> str:
        """Display label used when rendering transcripts."""
        return self.value.capitalize()


class ChatMessage(BaseModel):
    """One turn of a chat conversation.

    Identifiers are uuid7 strings, so sorting by id follows creation order.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid7()))
    content: str = Field(description="Message text")
    role: ChatRole = Field(description="Sender of the message")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        """Reject blank content."""
        if not v.strip():
            raise ValueError("content must not be empty")
        return v

    @classmethod
    def user(cls, content: str) -> "ChatMessage":
        return cls(content=content, role=ChatRole.USER)

    @classmethod
    def assistant(cls, content: str) -> "ChatMessage":
        return cls(content=content, role=ChatRole.ASSISTANT)

    def render(self) -> str:
        """Render as a ``"<Role>: <content>"`` transcript line."""
        return f"{self.role.label}: {self.content}"


class ConversationHistory(BaseModel):
    """Ordered chat transcript.

    Grows by appending only; insertion order defines both the transcript
    and the context window sent to the model.
    """

    messages: list[ChatMessage] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.messages)

    def append(self, message: ChatMessage) -> None:
        """Add a message to the end of the transcript."""
        self.messages.append(message)

    def snapshot(self) -> list[ChatMessage]:
        """Copy of the transcript as it stands now."""
        return list(self.messages)

    def last_user_message(self) -> ChatMessage | None:
        """Most recent message sent by the user, if any."""
        for message in reversed(self.messages):
            if message.role == ChatRole.USER:
                return message
        return None

    def before(self, message: ChatMessage) -> list[ChatMessage]:
        """Messages strictly preceding ``message`` (matched by id)."""
        for index in range(len(self.messages) - 1, -1, -1):
            if self.messages[index].id == message.id:
                return self.messages[:index]
        raise ValueError(f"Message {message.id} is not part of this conversation")

    def window(self, limit: int) -> list[ChatMessage]:
        """The trailing ``limit`` messages, oldest first."""
        if limit <= 0:
            return []
        return self.messages[-limit:]


class QuizQuestion(BaseModel):
    """A multiple-choice exam question with exactly four options."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    question: str = Field(description="The question text")
    options: list[str] = Field(min_length=4, max_length=4, description="Exactly 4 possible answers")
    correct_answer_index: int = Field(
        alias="correctAnswerIndex",
        ge=0,
        le=3,
        description="0-based index of the correct answer in options"
    )
    explanation: str = Field(description="Why the correct answer is right")
    topic: str = Field(description="The GCP topic this question covers")

    @property
    def correct_answer(self) -> str:
        return self.options[self.correct_answer_index]

    def is_correct(self, answer_index: int) -> bool:
        return answer_index == self.correct_answer_index


class FlashcardMode(str, Enum):
    """Flashcard flavours the client can request."""

    SCENARIO = "scenario"  # scenario -> best GCP solution
    CONCEPT = "concept"  # topic -> short explanation


class Flashcard(BaseModel):
    """Scenario-first flashcard: a requirement and the GCP service that meets it."""

    model_config = ConfigDict(frozen=True)

    scenario: str
    solution: str

    @property
    def front(self) -> str:
        return self.scenario

    @property
    def back(self) -> str:
        return self.solution


class ConceptCard(BaseModel):
    """Concept flashcard: a GCP topic and its explanation."""

    model_config = ConfigDict(frozen=True)

    topic: str
    content: str

    @property
    def front(self) -> str:
        return self.topic

    @property
    def back(self) -> str:
        return self.content
