"""Flashcard decks."""

import logging

from pydantic import BaseModel, Field

from ..config import DEFAULT_FLASHCARD_COUNT
from ..content import ConceptCard, ContentGenerator, Flashcard, FlashcardMode
from ..errors import GenerationFailure
from .catalog import Certification, flashcard_description

logger = logging.getLogger(__name__)


class FlashcardDeck(BaseModel):
    """A batch of flashcards with a cursor that wraps around both ends."""

    cards: list[Flashcard | ConceptCard] = Field(default_factory=list)
    index: int = 0
    flipped: bool = False

    @property
    def current(self) -> Flashcard | ConceptCard | None:
        if not self.cards:
            return None
        return self.cards[self.index]

    @property
    def position(self) -> str:
        """Human-readable ``"n / total"`` position."""
        if not self.cards:
            return "0 / 0"
        return f"{self.index + 1} / {len(self.cards)}"

    def flip(self) -> None:
        self.flipped = not self.flipped

    def next(self) -> None:
        if not self.cards:
            return
        self.index = (self.index + 1) % len(self.cards)
        self.flipped = False

    def previous(self) -> None:
        if not self.cards:
            return
        self.index = (self.index - 1 + len(self.cards)) % len(self.cards)
        self.flipped = False


async def load_deck(
    generator: ContentGenerator,
    certification: Certification = Certification.DEVELOPER,
    count: int = DEFAULT_FLASHCARD_COUNT,
    mode: FlashcardMode = FlashcardMode.SCENARIO
) -> FlashcardDeck:
    """Generate a fresh deck for a certification.

    Raises:
        GenerationFailure: If generation fails or yields no cards
    """
    logger.info("Generating %d %s flashcards for %s", count, mode.value, certification.value)
    cards = await generator.generate_flashcards(flashcard_description(certification), count, mode)
    if not cards:
        raise GenerationFailure("Failed to generate flashcards. The API returned an empty set.")
    return FlashcardDeck(cards=list(cards))
