"""Google Gemini generation service.

Uses the official Google GenAI SDK for async generation.
Reference: https://github.com/googleapis/python-genai

Schema-constrained requests use Gemini's native ``response_schema`` with
``application/json`` output, so the returned text is the JSON payload.
"""

import logging
from typing import Any

from google import genai
from google.genai import types

from ..base import GenerationService
from ..models import GenerationRequest, GenerationResponse, SchemaNode

logger = logging.getLogger(__name__)


def to_gemini_schema(node: SchemaNode) -> types.Schema:
    """Convert a SchemaNode tree into a Gemini ``types.Schema``."""
    schema = types.Schema(
        type=types.Type(node.type.value.upper()),
        description=node.description,
    )
    if node.properties:
        schema.properties = {
            name: to_gemini_schema(child) for name, child in node.properties.items()
        }
    if node.required:
        schema.required = list(node.required)
    if node.items is not None:
        schema.items = to_gemini_schema(node.items)
    return schema


class GeminiGenerationService(GenerationService):
    """Google Gemini generation service.

    Hidden design decisions:
    - Google GenAI client initialization
    - Schema conversion to the Gemini type system
    - Text extraction from candidates
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        **client_kwargs: Any
    ):
        """Initialize Gemini service.

        Args:
            api_key: Google AI API key
            model: Default model (gemini-2.5-flash, gemini-2.5-pro)
            **client_kwargs: Additional kwargs for Client
        """
        self._model = model
        self._client = genai.Client(api_key=api_key, **client_kwargs)

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    def _build_config(self, request: GenerationRequest) -> types.GenerateContentConfig:
        config = types.GenerateContentConfig(
            temperature=request.temperature,
            system_instruction=request.system_instruction,
        )
        if request.response_schema is not None:
            config.response_mime_type = "application/json"
            config.response_schema = to_gemini_schema(request.response_schema)
        return config

    def _extract_content(self, response) -> str:
        """Extract text content from a Gemini response.

        Args:
            response: Gemini GenerateContentResponse

        Returns:
            Text content or empty string
        """
        if response.candidates:
            candidate = response.candidates[0]
            if candidate.content and candidate.content.parts:
                texts = [part.text for part in candidate.content.parts if getattr(part, "text", None)]
                if texts:
                    return "".join(texts)

        # Fallback to response.text (may raise or return None)
        try:
            return response.text or ""
        except (ValueError, AttributeError):
            return ""

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        """Generate content using Google Gemini.

        Args:
            request: Generation request

        Returns:
            GenerationResponse with the text payload
        """
        model_to_use = request.model or self._model
        logger.debug(
            "Gemini request model=%s structured=%s",
            model_to_use,
            request.response_schema is not None,
        )

        response = await self._client.aio.models.generate_content(
            model=model_to_use,
            contents=request.prompt,
            config=self._build_config(request),
        )

        usage = None
        if response.usage_metadata:
            usage = {
                "prompt_tokens": response.usage_metadata.prompt_token_count or 0,
                "completion_tokens": response.usage_metadata.candidates_token_count or 0,
                "total_tokens": response.usage_metadata.total_token_count or 0
            }

        return GenerationResponse(
            text=self._extract_content(response),
            model=model_to_use,
            usage=usage
        )

    async def close(self) -> None:
        """Close the Gemini client.

        Note: The Google GenAI client doesn't require explicit closing,
        but we implement this for interface consistency.
        """
        pass
