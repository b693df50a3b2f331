from .gemini import GeminiGenerationService
from .openai import OpenAIGenerationService

__all__ = ["GeminiGenerationService", "OpenAIGenerationService"]
