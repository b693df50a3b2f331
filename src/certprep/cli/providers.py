"""Provider factory functions for CLI.

Centralizes creation of the generation service and content client from
environment variables. Hides configuration details from command
implementations.
"""

import typer
from rich.console import Console

from ..config import Settings, load_settings
from ..content import ContentClient, ContentGenerator
from ..llm import create_generation_service

# Default console for output
_console = Console()


def get_settings() -> Settings:
    return load_settings()


def get_generator(console: Console | None = None, settings: Settings | None = None) -> ContentGenerator:
    """Create the content client from environment variables.

    Args:
        console: Optional Rich console for output
        settings: Pre-loaded settings (loaded from the environment when omitted)

    Returns:
        ContentClient over the configured generation service

    Raises:
        typer.Exit: If the provider is unknown or its API key is not set

    Environment variables:
        CERTPREP_PROVIDER: gemini or openai (default: gemini)
        GEMINI_API_KEY / API_KEY: Gemini API key (for gemini provider)
        OPENAI_API_KEY: OpenAI API key (for openai provider)
    """
    con = console or _console
    settings = settings or get_settings()

    if not settings.api_key:
        key_name = "OPENAI_API_KEY" if settings.provider == "openai" else "GEMINI_API_KEY"
        con.print(f"[red]Error: {key_name} not set in environment[/red]")
        raise typer.Exit(code=1)

    try:
        service = create_generation_service(
            settings.provider,
            api_key=settings.api_key,
            model=settings.model,
        )
    except ValueError as e:
        con.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    return ContentClient(service, history_window=settings.history_window)
