import json
import logging
from typing import Any

from openai import AsyncOpenAI

from ..base import GenerationService
from ..models import GenerationRequest, GenerationResponse, SchemaNode, SchemaType

logger = logging.getLogger(__name__)

# Strict structured outputs require an object at the top level
ARRAY_WRAPPER_KEY = "items"


def to_response_format(node: SchemaNode, name: str = "structured_response") -> dict[str, Any]:
    """Build an OpenAI ``response_format`` from a SchemaNode.

    Top-level arrays are wrapped in an object under ``ARRAY_WRAPPER_KEY``.
    """
    schema = node.to_json_schema()
    if node.type != SchemaType.OBJECT:
        schema = {
            "type": "object",
            "properties": {ARRAY_WRAPPER_KEY: schema},
            "required": [ARRAY_WRAPPER_KEY],
            "additionalProperties": False,
        }
    return {
        "type": "json_schema",
        "json_schema": {"name": name, "strict": True, "schema": schema},
    }


def unwrap_array(text: str) -> str:
    """Undo the top-level array wrapping applied by ``to_response_format``.

    Text that is not a wrapped payload is returned untouched so the caller's
    parser reports the problem.
    """
    try:
        payload = json.loads(text)
    except json.JSONDecodeError:
        return text
    if isinstance(payload, dict) and ARRAY_WRAPPER_KEY in payload:
        return json.dumps(payload[ARRAY_WRAPPER_KEY])
    return text


class OpenAIGenerationService(GenerationService):
    """OpenAI generation service.

    Hidden design decisions:
    - OpenAI API client initialization
    - Mapping of the schema descriptor onto strict structured outputs
    - Authentication mechanism
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str | None = None,
        organization: str | None = None,
        **client_kwargs: Any
    ):
        """Initialize OpenAI service.

        Args:
            api_key: OpenAI API key
            model: Default model to use
            base_url: Optional custom API base URL
            organization: Optional organization ID
            **client_kwargs: Additional kwargs for AsyncOpenAI client
        """
        self._model = model
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            organization=organization,
            **client_kwargs
        )

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        """Generate content using OpenAI Chat Completions.

        Args:
            request: Generation request

        Returns:
            GenerationResponse with the text payload
        """
        model_to_use = request.model or self._model

        messages = []
        if request.system_instruction:
            messages.append({"role": "system", "content": request.system_instruction})
        messages.append({"role": "user", "content": request.prompt})

        request_params: dict[str, Any] = {
            "model": model_to_use,
            "messages": messages,
            "temperature": request.temperature,
        }
        if request.response_schema is not None:
            request_params["response_format"] = to_response_format(request.response_schema)

        logger.debug(
            "OpenAI request model=%s structured=%s",
            model_to_use,
            request.response_schema is not None,
        )
        completion = await self._client.chat.completions.create(**request_params)

        usage = None
        if completion.usage:
            usage = {
                "prompt_tokens": completion.usage.prompt_tokens,
                "completion_tokens": completion.usage.completion_tokens,
                "total_tokens": completion.usage.total_tokens
            }

        text = completion.choices[0].message.content or ""
        if request.response_schema is not None and request.response_schema.type != SchemaType.OBJECT:
            text = unwrap_array(text)

        return GenerationResponse(
            text=text,
            model=completion.model,
            usage=usage
        )

    async def close(self) -> None:
        """Close the OpenAI client."""
        await self._client.close()
