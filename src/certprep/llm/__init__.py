from .base import GenerationService
from .factory import create_generation_service
from .models import GenerationRequest, GenerationResponse, SchemaNode, SchemaType
from .providers import GeminiGenerationService, OpenAIGenerationService

__all__ = [
    "GenerationService",
    "create_generation_service",
    "GenerationRequest",
    "GenerationResponse",
    "SchemaNode",
    "SchemaType",
    "GeminiGenerationService",
    "OpenAIGenerationService",
]
