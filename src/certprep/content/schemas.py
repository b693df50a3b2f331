"""Output schemas requested from the generation service."""

from ..llm.models import SchemaNode, SchemaType

_STRING = SchemaType.STRING

QUIZ_QUESTION_SCHEMA = SchemaNode(
    type=SchemaType.OBJECT,
    properties={
        "question": SchemaNode(type=_STRING, description="The question text."),
        "options": SchemaNode(
            type=SchemaType.ARRAY,
            items=SchemaNode(type=_STRING),
            description="An array of 4 possible answers.",
        ),
        "correctAnswerIndex": SchemaNode(
            type=SchemaType.INTEGER,
            description="The 0-based index of the correct answer in the options array.",
        ),
        "explanation": SchemaNode(
            type=_STRING,
            description="A brief explanation of why the correct answer is right.",
        ),
        "topic": SchemaNode(
            type=_STRING,
            description="The specific GCP topic this question covers (e.g., 'Cloud Storage', 'IAM').",
        ),
    },
    required=["question", "options", "correctAnswerIndex", "explanation", "topic"],
)

SCENARIO_FLASHCARD_SCHEMA = SchemaNode(
    type=SchemaType.OBJECT,
    properties={
        "scenario": SchemaNode(
            type=_STRING,
            description=(
                "A real-world scenario or use case that describes a specific "
                "business or technical requirement."
            ),
        ),
        "solution": SchemaNode(
            type=_STRING,
            description=(
                "The GCP service or combination of services that best addresses "
                "the scenario, with brief explanation of why."
            ),
        ),
    },
    required=["scenario", "solution"],
)

CONCEPT_FLASHCARD_SCHEMA = SchemaNode(
    type=SchemaType.OBJECT,
    properties={
        "topic": SchemaNode(type=_STRING, description="The GCP service or concept name."),
        "content": SchemaNode(
            type=_STRING,
            description="A concise explanation of the concept for exam revision.",
        ),
    },
    required=["topic", "content"],
)


def array_of(item: SchemaNode) -> SchemaNode:
    """Wrap an item schema in a top-level array."""
    return SchemaNode(type=SchemaType.ARRAY, items=item)
