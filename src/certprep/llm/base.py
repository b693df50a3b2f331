from abc import ABC, abstractmethod
from typing import Any

from .models import GenerationRequest, GenerationResponse


class GenerationService(ABC):
    """Abstract base class for generation service providers.

    This module hides the design decision of which hosted model produces
    quiz questions, flashcards and chat replies. Implementations handle:
    - API client setup and authentication
    - Conversion of the provider-neutral schema descriptor
    - Extraction of the text payload from provider responses

    Supports async context manager protocol for proper resource cleanup:
        async with service:
            response = await service.generate(request)
    """

    @abstractmethod
    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        """Generate text, or schema-constrained JSON when the request carries a schema.

        Args:
            request: Prompt, optional system instruction and optional schema

        Returns:
            GenerationResponse with the text payload

        Raises:
            Exception: Provider-specific errors during generation
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""
        pass

    async def __aenter__(self) -> "GenerationService":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
