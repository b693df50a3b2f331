"""Chat assistant: topic heuristic, error classification and turn controller."""

from .controller import ChatSessionState, ChatStatus, ChatTurnController, TurnResult
from .errors import (
    CHAT_ERROR_RULES,
    GENERATION_ERROR_RULES,
    ErrorCategory,
    ErrorInfo,
    ErrorRules,
    classify_chat_error,
    classify_error,
    classify_generation_error,
)
from .topic import ClassificationResult, RedirectRule, TopicClassifier, TopicPolicy

__all__ = [
    "ChatSessionState",
    "ChatStatus",
    "ChatTurnController",
    "TurnResult",
    "CHAT_ERROR_RULES",
    "GENERATION_ERROR_RULES",
    "ErrorCategory",
    "ErrorInfo",
    "ErrorRules",
    "classify_chat_error",
    "classify_error",
    "classify_generation_error",
    "ClassificationResult",
    "RedirectRule",
    "TopicClassifier",
    "TopicPolicy",
]
