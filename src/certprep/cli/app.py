"""Main CLI application using Typer."""
import asyncio
import logging

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from ..chat import ChatTurnController, ErrorCategory, ErrorInfo, classify_generation_error
from ..config import DEFAULT_FLASHCARD_COUNT, DEFAULT_QUESTION_COUNT, QUESTION_COUNTS
from ..content import FlashcardMode
from ..errors import StudyError
from ..study import (
    Certification,
    FlashcardDeck,
    QuizSession,
    QuizSettings,
    TopicMode,
    load_deck,
    start_quiz,
)
from .providers import get_generator, get_settings

EXIT_WORDS = ("exit", "quit", "q")

app = typer.Typer(
    name="certprep",
    help="Study for the GCP Professional certifications with generated quizzes, flashcards and chat",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()


@app.callback()
def main_options(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging"
    )
):
    """Configure logging for every command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


def _show_error(error: ErrorInfo, retry_hint: str | None = None) -> None:
    hint = f"\n[dim]{retry_hint}[/dim]" if retry_hint and error.retryable else ""
    console.print(Panel(
        f"{error.message}{hint}",
        title=f"Error ({error.category.value})",
        border_style="yellow" if error.category == ErrorCategory.API else "red",
    ))


@app.command()
def topics(
    cert: Certification = typer.Option(
        Certification.DEVELOPER,
        "--cert",
        "-c",
        help="Certification exam"
    )
):
    """List the exam topics available for specific-topic quizzes."""
    table = Table(show_header=True, header_style="bold cyan", title=cert.display_name)
    table.add_column("#", style="dim", width=4)
    table.add_column("Topic")

    for i, topic in enumerate(cert.topics, 1):
        table.add_row(str(i), topic)

    console.print(table)


@app.command()
def quiz(
    cert: Certification = typer.Option(
        Certification.DEVELOPER,
        "--cert",
        "-c",
        help="Certification exam"
    ),
    mode: TopicMode = typer.Option(
        TopicMode.SPECIFIC,
        "--mode",
        "-m",
        help="Topic mode: specific, random, or all"
    ),
    topic: str | None = typer.Option(
        None,
        "--topic",
        "-t",
        help="Topic for specific mode (see 'certprep topics')"
    ),
    count: int = typer.Option(
        DEFAULT_QUESTION_COUNT,
        "--count",
        "-n",
        help=f"Number of questions: {', '.join(str(c) for c in QUESTION_COUNTS)}"
    ),
):
    """Take a generated multiple-choice quiz."""
    try:
        settings = QuizSettings(certification=cert, mode=mode, topic=topic, count=count)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    async def _quiz():
        generator = get_generator(console)
        try:
            while True:
                console.print(
                    f"[dim]Generating your {settings.count}-question quiz for the "
                    f"{cert.display_name} exam...[/dim]"
                )
                try:
                    session = await start_quiz(generator, settings)
                except StudyError as e:
                    _show_error(classify_generation_error(e))
                    if typer.confirm("Try again?", default=True):
                        continue
                    raise typer.Exit(code=1)

                _run_quiz(session)
                if not typer.confirm("Start a new quiz with the same settings?", default=False):
                    break
        finally:
            await generator.close()

    asyncio.run(_quiz())


def _run_quiz(session: QuizSession) -> None:
    total = len(session.questions)

    while (question := session.current_question) is not None:
        console.print(
            f"\n[bold cyan]Question {session.current_index + 1} of {total}[/bold cyan] "
            f"[dim]({question.topic})[/dim]"
        )
        console.print(question.question)
        for i, option in enumerate(question.options, 1):
            console.print(f"  [bold]{i}.[/bold] {option}")

        answer = None
        while answer is None:
            raw = console.input("[bold yellow]Your answer (1-4):[/bold yellow] ").strip()
            if raw.lower() in EXIT_WORDS:
                session.finished = True
                break
            try:
                answer = session.select_answer(int(raw) - 1)
            except (ValueError, StudyError):
                console.print("[red]Please enter a number between 1 and 4.[/red]")

        if answer is None:
            break

        if answer.is_correct:
            console.print("[green]Correct![/green]")
        else:
            console.print(f"[red]Incorrect.[/red] The answer is: {question.correct_answer}")
        console.print(f"[dim]{question.explanation}[/dim]")
        session.next_question()

    _show_results(session)


def _show_results(session: QuizSession) -> None:
    console.print(Panel(
        f"You scored [bold]{session.score}[/bold] out of {len(session.questions)} "
        f"([bold]{session.percentage}%[/bold])",
        title="Quiz complete",
        border_style="green" if session.percentage >= 70 else "yellow",
    ))

    breakdown = Table(show_header=True, header_style="bold cyan", title="Topics covered")
    breakdown.add_column("Topic")
    breakdown.add_column("Questions", justify="right")
    for topic, n in session.topic_breakdown().items():
        breakdown.add_row(topic, str(n))
    console.print(breakdown)

    for question, answer in session.missed():
        console.print(Panel(
            f"{question.question}\n\n"
            f"[red]Your answer:[/red] {question.options[answer.selected_answer_index]}\n"
            f"[green]Correct answer:[/green] {question.correct_answer}\n\n"
            f"[dim]{question.explanation}[/dim]",
            title=f"Review: {question.topic}",
            border_style="dim",
        ))


@app.command()
def flashcards(
    cert: Certification = typer.Option(
        Certification.DEVELOPER,
        "--cert",
        "-c",
        help="Certification exam"
    ),
    count: int = typer.Option(
        DEFAULT_FLASHCARD_COUNT,
        "--count",
        "-n",
        min=1,
        help="Number of flashcards"
    ),
    concept: bool = typer.Option(
        False,
        "--concept",
        help="Concept cards (topic and explanation) instead of scenarios"
    ),
):
    """Review generated flashcards."""
    mode = FlashcardMode.CONCEPT if concept else FlashcardMode.SCENARIO

    async def _flashcards():
        generator = get_generator(console)
        try:
            while True:
                console.print(f"[dim]Generating your flashcards for the {cert.display_name} exam...[/dim]")
                try:
                    deck = await load_deck(generator, cert, count, mode)
                except StudyError as e:
                    _show_error(classify_generation_error(e))
                    if typer.confirm("Try again?", default=True):
                        continue
                    raise typer.Exit(code=1)

                if not _run_deck(deck):
                    break
        finally:
            await generator.close()

    asyncio.run(_flashcards())


def _run_deck(deck: FlashcardDeck) -> bool:
    """Browse a deck. Returns True when the user asks for a new set."""
    console.print("[dim]Enter: flip  n: next  p: previous  r: new set  q: quit[/dim]")

    while True:
        card = deck.current
        if deck.flipped:
            console.print(Panel(card.back, title=f"Solution {deck.position}", border_style="green"))
        else:
            console.print(Panel(card.front, title=f"Card {deck.position}", border_style="cyan"))

        command = console.input("[bold yellow]>[/bold yellow] ").strip().lower()
        if command in EXIT_WORDS:
            return False
        if command == "r":
            return True
        if command == "n":
            deck.next()
        elif command == "p":
            deck.previous()
        else:
            deck.flip()


@app.command()
def chat():
    """Interactive chat with the GCP study assistant."""
    async def _chat():
        generator = get_generator(console)
        controller = ChatTurnController(generator)

        console.print("[bold cyan]GCP Chat Assistant[/bold cyan]")
        console.print("[dim]Ask me anything about Google Cloud Platform services and certification topics![/dim]")
        console.print("[dim]Commands: /retry  /new  exit[/dim]\n")

        try:
            while True:
                try:
                    user_input = console.input("[bold yellow]You:[/bold yellow] ")
                except (KeyboardInterrupt, EOFError):
                    console.print("\n[dim]Goodbye![/dim]")
                    break

                command = user_input.strip().lower()
                if command in EXIT_WORDS:
                    console.print("[dim]Goodbye![/dim]")
                    break
                if command == "/new":
                    controller.reset()
                    console.print("[dim]Started a new conversation.[/dim]")
                    continue

                controller.dismiss_error()
                if command == "/retry":
                    result = await controller.retry()
                    if result.ignored:
                        console.print("[dim]Nothing to retry.[/dim]")
                        continue
                else:
                    result = await controller.submit(user_input)

                state = controller.state
                if state.suggestion:
                    console.print(Panel(state.suggestion, title="GCP Focus Suggestion", border_style="blue"))
                    controller.dismiss_suggestion()

                if result.ok and result.reply:
                    console.print("[bold green]Assistant:[/bold green]")
                    console.print(Markdown(result.reply.content))
                    console.print()
                elif result.error:
                    _show_error(result.error, "Type /retry to try again.")
        finally:
            await generator.close()

    asyncio.run(_chat())


@app.command()
def health():
    """Check generation service configuration."""
    settings = get_settings()

    console.print(f"[green]+[/green] Provider: {settings.provider}")
    console.print(f"[green]+[/green] Model: {settings.model}")

    if settings.api_key:
        console.print("[green]+[/green] API key: SET")
    else:
        console.print("[yellow]![/yellow] API key: NOT SET")
        raise typer.Exit(code=1)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
