"""Error Classifier.

Maps a caught failure onto a stable display category. The chat flow and
the quiz/flashcard generation flow use separate rule sets with the same
structure.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class ErrorCategory(str, Enum):
    NETWORK = "network"
    API = "api"
    VALIDATION = "validation"
    GENERAL = "general"


class ErrorInfo(BaseModel):
    """A classified failure ready for display."""

    model_config = ConfigDict(frozen=True)

    category: ErrorCategory
    message: str

    @property
    def retryable(self) -> bool:
        """Validation failures have nothing to resubmit."""
        return self.category != ErrorCategory.VALIDATION


class ErrorRules(BaseModel):
    """Keywords and display messages for one flow.

    Categories are tested in the order network, api, validation against
    the lowercased failure message.
    """

    model_config = ConfigDict(frozen=True)

    network_keywords: tuple[str, ...]
    api_keywords: tuple[str, ...]
    validation_keywords: tuple[str, ...]
    network_message: str
    api_message: str
    validation_message: str
    unexpected_message: str = "An unexpected error occurred. Please try again."


CHAT_ERROR_RULES = ErrorRules(
    network_keywords=("network", "fetch", "connection"),
    api_keywords=("api", "quota", "rate limit"),
    validation_keywords=("invalid", "validation"),
    network_message="Network connection failed. Please check your internet connection and try again.",
    api_message="API service is temporarily unavailable. Please wait a moment and try again.",
    validation_message="Your message couldn't be processed. Please try rephrasing your question.",
)

GENERATION_ERROR_RULES = ErrorRules(
    network_keywords=("network", "fetch", "connection", "timeout"),
    api_keywords=("api", "quota", "rate limit", "unavailable"),
    validation_keywords=("invalid", "validation", "malformed"),
    network_message="Could not reach the study content generator. Check your connection and try again.",
    api_message="The study content generator is temporarily unavailable. Please try again in a moment.",
    validation_message="The generated study set could not be read. Please try again.",
)


def classify_error(failure: object, rules: ErrorRules = CHAT_ERROR_RULES) -> ErrorInfo:
    """Classify a caught failure.

    Args:
        failure: The caught exception (any other value is treated as unexpected)
        rules: Keyword rules of the flow the failure came from

    Returns:
        ErrorInfo; ``general`` failures keep the original message text
    """
    if not isinstance(failure, BaseException):
        return ErrorInfo(category=ErrorCategory.GENERAL, message=rules.unexpected_message)

    text = str(failure)
    lowered = text.lower()

    if any(keyword in lowered for keyword in rules.network_keywords):
        return ErrorInfo(category=ErrorCategory.NETWORK, message=rules.network_message)
    if any(keyword in lowered for keyword in rules.api_keywords):
        return ErrorInfo(category=ErrorCategory.API, message=rules.api_message)
    if any(keyword in lowered for keyword in rules.validation_keywords):
        return ErrorInfo(category=ErrorCategory.VALIDATION, message=rules.validation_message)

    return ErrorInfo(category=ErrorCategory.GENERAL, message=text or rules.unexpected_message)


def classify_chat_error(failure: object) -> ErrorInfo:
    return classify_error(failure, CHAT_ERROR_RULES)


def classify_generation_error(failure: object) -> ErrorInfo:
    return classify_error(failure, GENERATION_ERROR_RULES)
