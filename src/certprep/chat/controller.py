"""Chat Turn Controller.

Owns one conversation: validates input, runs the topic heuristic, calls
the content generator with prior turns and records the outcome in a
single session state record. Rendering is a projection of that record.

State machine:
    idle --submit--> sending --ok--> idle
                             --failure--> error --retry--> sending
    idle-with-suggestion is idle with an advisory suggestion on display.
"""

import logging
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ..config import MAX_MESSAGE_LENGTH
from ..content import ChatMessage, ContentGenerator, ConversationHistory
from ..content.client import EMPTY_RESPONSE_MESSAGE
from ..errors import EmptyResponseFailure
from .errors import ErrorCategory, ErrorInfo, classify_chat_error
from .topic import TopicClassifier

logger = logging.getLogger(__name__)

EMPTY_MESSAGE_ERROR = "Please enter a message before sending."
TOO_LONG_MESSAGE_TEMPLATE = "Message is too long. Please keep it under {limit} characters."
TOO_LONG_MESSAGE_ERROR = TOO_LONG_MESSAGE_TEMPLATE.format(limit=MAX_MESSAGE_LENGTH)


class ChatStatus(str, Enum):
    IDLE = "idle"
    SENDING = "sending"
    ERROR = "error"


class ChatSessionState(BaseModel):
    """Everything a chat view needs to render, in one record.

    Only ChatTurnController transitions mutate it.
    """

    history: ConversationHistory = Field(default_factory=ConversationHistory)
    status: ChatStatus = ChatStatus.IDLE
    error: ErrorInfo | None = None
    suggestion: str | None = None

    @property
    def is_sending(self) -> bool:
        return self.status == ChatStatus.SENDING

    @property
    def phase(self) -> str:
        """Named state: idle, sending, error or idle-with-suggestion."""
        if self.status == ChatStatus.IDLE and self.suggestion:
            return "idle-with-suggestion"
        return self.status.value


class TurnResult(BaseModel):
    """Outcome of a submit or retry."""

    model_config = ConfigDict(frozen=True)

    ok: bool
    reply: ChatMessage | None = None
    error: ErrorInfo | None = None
    ignored: bool = False

    @classmethod
    def success(cls, reply: ChatMessage) -> "TurnResult":
        return cls(ok=True, reply=reply)

    @classmethod
    def failure(cls, error: ErrorInfo) -> "TurnResult":
        return cls(ok=False, error=error)

    @classmethod
    def skipped(cls) -> "TurnResult":
        return cls(ok=False, ignored=True)


class ChatTurnController:
    """Runs chat turns for a single conversation.

    At most one request is outstanding at a time: while a turn is in
    flight, ``submit`` and ``retry`` are ignored.
    """

    def __init__(
        self,
        generator: ContentGenerator,
        classifier: TopicClassifier | None = None,
        max_message_length: int = MAX_MESSAGE_LENGTH
    ):
        """Initialize the controller.

        Args:
            generator: Content generator used for chat replies
            classifier: Topic heuristic (default policy when omitted)
            max_message_length: Longest accepted message after trimming
        """
        self._generator = generator
        self._classifier = classifier or TopicClassifier()
        self._max_message_length = max_message_length
        self._state = ChatSessionState()

    @property
    def state(self) -> ChatSessionState:
        return self._state

    @property
    def history(self) -> list[ChatMessage]:
        return self._state.history.snapshot()

    def can_send(self, text: str) -> bool:
        """Whether a send affordance for ``text`` should be enabled."""
        return bool(text.strip()) and not self._state.is_sending

    async def submit(self, text: str) -> TurnResult:
        """Validate and send a user message.

        Args:
            text: Raw user input (trimmed before use)

        Returns:
            TurnResult describing the reply, the classified error, or that
            the call was ignored because a turn is already in flight
        """
        if self._state.is_sending:
            logger.debug("Ignoring submit while a turn is in flight")
            return TurnResult.skipped()

        message_text = text.strip()
        if not message_text:
            return self._reject(EMPTY_MESSAGE_ERROR)
        if len(message_text) > self._max_message_length:
            return self._reject(TOO_LONG_MESSAGE_TEMPLATE.format(limit=self._max_message_length))

        classification = self._classifier.classify(message_text)
        self._state.suggestion = classification.suggestion
        if classification.suggestion:
            logger.info("Off-topic message detected; showing suggestion")

        context = self._state.history.snapshot()
        self._state.history.append(ChatMessage.user(message_text))
        self._state.error = None

        return await self._exchange(message_text, context)

    async def retry(self) -> TurnResult:
        """Re-send the most recent user message.

        The message is not appended again; the context is the history
        strictly before it. Does nothing when no user message exists.
        """
        if self._state.is_sending:
            logger.debug("Ignoring retry while a turn is in flight")
            return TurnResult.skipped()

        last_user = self._state.history.last_user_message()
        if last_user is None:
            return TurnResult.skipped()

        self._state.error = None
        context = self._state.history.before(last_user)
        logger.info("Retrying last user message (%d prior turns)", len(context))
        return await self._exchange(last_user.content, context)

    def dismiss_error(self) -> None:
        self._state.error = None
        if self._state.status == ChatStatus.ERROR:
            self._state.status = ChatStatus.IDLE

    def dismiss_suggestion(self) -> None:
        self._state.suggestion = None

    def reset(self) -> None:
        """Start a new, empty conversation."""
        if self._state.is_sending:
            logger.debug("Ignoring reset while a turn is in flight")
            return
        self._state = ChatSessionState()

    def _reject(self, message: str) -> TurnResult:
        error = ErrorInfo(category=ErrorCategory.VALIDATION, message=message)
        self._state.error = error
        self._state.status = ChatStatus.ERROR
        return TurnResult.failure(error)

    async def _exchange(self, text: str, context: list[ChatMessage]) -> TurnResult:
        self._state.status = ChatStatus.SENDING

        try:
            try:
                reply_text = await self._generator.send_chat_message(text, context)
                if not reply_text or not reply_text.strip():
                    raise EmptyResponseFailure(EMPTY_RESPONSE_MESSAGE)
            except Exception as exc:
                error = classify_chat_error(exc)
                logger.error("Chat turn failed [%s]: %s", error.category.value, exc)
                self._state.error = error
                self._state.status = ChatStatus.ERROR
                return TurnResult.failure(error)

            reply = ChatMessage.assistant(reply_text)
            self._state.history.append(reply)
            self._state.status = ChatStatus.IDLE
            return TurnResult.success(reply)
        finally:
            # A cancelled turn must not leave the session locked
            if self._state.status == ChatStatus.SENDING:
                logger.warning("Chat turn ended without a result; returning to idle")
                self._state.status = ChatStatus.IDLE
