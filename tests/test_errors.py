"""Unit tests for error classification."""
import pytest
from hypothesis import given
from hypothesis import strategies as st

from certprep.chat import ErrorCategory, ErrorInfo, classify_error
from certprep.chat.errors import (
    CHAT_ERROR_RULES,
    GENERATION_ERROR_RULES,
    classify_chat_error,
    classify_generation_error,
)
from certprep.errors import AuthFailure, NetworkFailure, ServiceFailure, StudyError


class TestClassifyChatError:
    """Tests for the chat rule set."""

    @pytest.mark.parametrize("text", [
        "Network request failed",
        "Failed to fetch",
        "connection reset by peer",
    ])
    def test_network(self, text: str):
        """Test network keywords."""
        info = classify_chat_error(RuntimeError(text))

        assert info.category == ErrorCategory.NETWORK
        assert info.message == CHAT_ERROR_RULES.network_message

    @pytest.mark.parametrize("text", [
        "429 rate limit exceeded",
        "Quota exhausted",
        "API error 500",
    ])
    def test_api(self, text: str):
        """Test api keywords."""
        info = classify_chat_error(RuntimeError(text))

        assert info.category == ErrorCategory.API
        assert info.message == CHAT_ERROR_RULES.api_message
        assert info.retryable

    def test_validation(self):
        """Test validation keywords."""
        info = classify_chat_error(ValueError("Invalid request body"))

        assert info.category == ErrorCategory.VALIDATION
        assert info.message == CHAT_ERROR_RULES.validation_message
        assert not info.retryable

    def test_network_checked_before_api(self):
        """Test a message matching both categories is classified as network."""
        info = classify_chat_error(RuntimeError("network error talking to api"))

        assert info.category == ErrorCategory.NETWORK

    def test_general_keeps_original_message(self):
        """Test unmatched failures keep their text."""
        info = classify_chat_error(RuntimeError("Something odd happened"))

        assert info.category == ErrorCategory.GENERAL
        assert info.message == "Something odd happened"
        assert info.retryable

    def test_general_with_empty_message(self):
        """Test an exception with no text gets the unexpected message."""
        info = classify_chat_error(RuntimeError())

        assert info.message == CHAT_ERROR_RULES.unexpected_message

    @pytest.mark.parametrize("value", ["a plain string", 42, None, {"error": "network"}])
    def test_non_exception_is_unexpected(self, value):
        """Test values that are not exceptions."""
        info = classify_error(value)

        assert info == ErrorInfo(
            category=ErrorCategory.GENERAL,
            message="An unexpected error occurred. Please try again.",
        )

    def test_client_failures_map_to_categories(self):
        """Test the content client's failure messages land in the expected categories."""
        assert classify_chat_error(
            ServiceFailure("API quota exceeded or rate limit reached. Please wait a moment and try again.")
        ).category == ErrorCategory.API
        assert classify_chat_error(
            AuthFailure("Invalid API key. Please check your configuration.")
        ).category == ErrorCategory.API
        assert classify_chat_error(
            NetworkFailure("Network error. Please check your internet connection and try again.")
        ).category == ErrorCategory.NETWORK


class TestClassifyGenerationError:
    """Tests for the quiz and flashcard rule set."""

    def test_timeout_is_network(self):
        """Test the extra network keyword."""
        info = classify_generation_error(TimeoutError("Read timeout"))

        assert info.category == ErrorCategory.NETWORK
        assert info.message == GENERATION_ERROR_RULES.network_message

    def test_quiz_failure_message_is_api(self):
        """Test the generic generation failure message."""
        failure = StudyError("Failed to generate quiz questions. The API may be unavailable or the request was malformed.")

        assert classify_generation_error(failure).category == ErrorCategory.API

    def test_malformed_is_validation(self):
        """Test the extra validation keyword."""
        info = classify_generation_error(ValueError("malformed response"))

        assert info.category == ErrorCategory.VALIDATION


@given(st.text(max_size=80))
def test_classification_is_total(text: str):
    """Property test: every exception is classified with a non-empty message."""
    info = classify_chat_error(RuntimeError(text))

    assert info.category in ErrorCategory
    assert info.message
