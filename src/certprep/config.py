"""Configuration constants and environment-driven settings.

Centralizes magic numbers and the values read from the process
environment at startup.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Chat input limits
MAX_MESSAGE_LENGTH = 2000  # Characters allowed in a single user message
HISTORY_WINDOW = 10  # Prior turns sent to the model as context

# Quiz and flashcard sizes
QUESTION_COUNTS = (5, 10, 15, 20)
DEFAULT_QUESTION_COUNT = 5
DEFAULT_FLASHCARD_COUNT = 10

# Generation service defaults
DEFAULT_PROVIDER = "gemini"
DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_OPENAI_MODEL = "gpt-4o-mini"


class Settings(BaseModel):
    """Runtime settings resolved once at process start."""

    provider: str = Field(default=DEFAULT_PROVIDER, description="Generation service provider")
    gemini_api_key: str | None = Field(default=None, description="Google AI API key")
    gemini_model: str = Field(default=DEFAULT_MODEL)
    openai_api_key: str | None = Field(default=None, description="OpenAI API key")
    openai_model: str = Field(default=DEFAULT_OPENAI_MODEL)
    history_window: int = Field(
        default=HISTORY_WINDOW,
        ge=0,
        description="Number of prior chat turns included as context"
    )

    @property
    def api_key(self) -> str | None:
        """API key for the selected provider."""
        if self.provider.lower() == "openai":
            return self.openai_api_key
        return self.gemini_api_key

    @property
    def model(self) -> str:
        """Model for the selected provider."""
        if self.provider.lower() == "openai":
            return self.openai_model
        return self.gemini_model


def load_settings() -> Settings:
    """Build settings from environment variables.

    Environment variables:
        CERTPREP_PROVIDER: gemini or openai (default: gemini)
        GEMINI_API_KEY: Gemini API key (API_KEY is accepted as a fallback)
        GEMINI_MODEL: Gemini model (default: gemini-2.5-flash)
        OPENAI_API_KEY: OpenAI API key
        OPENAI_MODEL: OpenAI model (default: gpt-4o-mini)
        CERTPREP_HISTORY_WINDOW: chat context window (default: 10)
    """
    load_dotenv()

    return Settings(
        provider=os.getenv("CERTPREP_PROVIDER", DEFAULT_PROVIDER).lower(),
        gemini_api_key=os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY"),
        gemini_model=os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
        openai_api_key=os.getenv("OPENAI_API_KEY"),
        openai_model=os.getenv("OPENAI_MODEL", DEFAULT_OPENAI_MODEL),
        history_window=int(os.getenv("CERTPREP_HISTORY_WINDOW", str(HISTORY_WINDOW))),
    )
