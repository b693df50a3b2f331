from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SchemaType(str, Enum):
    """Field types a structured response may declare."""

    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    INTEGER = "integer"


class SchemaNode(BaseModel):
    """Provider-neutral description of a schema-constrained response.

    Each provider converts this tree into its own format (Gemini
    ``types.Schema``, OpenAI strict JSON Schema).
    """

    model_config = ConfigDict(frozen=True)

    type: SchemaType
    description: str | None = None
    properties: dict[str, "SchemaNode"] = Field(default_factory=dict)
    items: "SchemaNode | None" = None
    required: list[str] = Field(default_factory=list)

    def to_json_schema(self) -> dict[str, Any]:
        """Render as a plain JSON Schema dictionary."""
        schema: dict[str, Any] = {"type": self.type.value}
        if self.description:
            schema["description"] = self.description
        if self.type == SchemaType.OBJECT:
            schema["properties"] = {
                name: node.to_json_schema() for name, node in self.properties.items()
            }
            schema["required"] = list(self.required)
            schema["additionalProperties"] = False
        if self.type == SchemaType.ARRAY and self.items is not None:
            schema["items"] = self.items.to_json_schema()
        return schema


SchemaNode.model_rebuild()


class GenerationRequest(BaseModel):
    """A single call to the generation service."""

    model_config = ConfigDict(frozen=True)

    prompt: str = Field(description="Natural-language instruction")
    model: str | None = Field(default=None, description="Model override (None uses provider default)")
    system_instruction: str | None = Field(default=None)
    response_schema: SchemaNode | None = Field(
        default=None,
        description="When set, the response must be JSON matching this schema"
    )
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)


class GenerationResponse(BaseModel):
    """Text payload returned by the generation service."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(description="Generated text; JSON when a schema was supplied")
    model: str = Field(description="Model that generated the response")
    usage: dict[str, int] | None = Field(
        default=None,
        description="Token usage information"
    )
