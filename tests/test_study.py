"""Unit tests for quiz sessions and flashcard decks."""
import pytest
from hypothesis import given
from hypothesis import strategies as st
from pydantic import ValidationError

from certprep.content import ConceptCard, FlashcardMode
from certprep.errors import GenerationFailure, ValidationFailure
from certprep.study import (
    ARCHITECT_TOPICS,
    DEVELOPER_TOPICS,
    Certification,
    FlashcardDeck,
    QuizSession,
    QuizSettings,
    TopicMode,
    build_topic_description,
    flashcard_description,
    load_deck,
    start_quiz,
)


class TestCatalog:
    """Tests for certification topics and descriptions."""

    def test_topic_lists(self):
        """Test each certification exposes its topics."""
        assert Certification.DEVELOPER.topics == DEVELOPER_TOPICS
        assert Certification.ARCHITECT.topics == ARCHITECT_TOPICS
        assert len(DEVELOPER_TOPICS) == 30
        assert len(ARCHITECT_TOPICS) == 6

    def test_specific_description(self):
        """Test a specific-topic description."""
        description = build_topic_description(Certification.DEVELOPER, TopicMode.SPECIFIC, "Cloud Run")

        assert description == (
            "GCP Professional Cloud Developer certification exam. Focus on the topic: Cloud Run."
        )

    def test_random_and_all_descriptions(self):
        """Test the mixed-topic descriptions."""
        assert build_topic_description(Certification.ARCHITECT, TopicMode.RANDOM, None).endswith(
            "Cover a random mixture of GCP topics."
        )
        assert build_topic_description(Certification.ARCHITECT, TopicMode.ALL, None).startswith(
            "GCP Professional Cloud Architect certification exam."
        )

    def test_flashcard_description(self):
        """Test the flashcard description has no trailing period."""
        assert flashcard_description(Certification.DEVELOPER) == "GCP Professional Cloud Developer certification exam"


class TestQuizSettings:
    """Tests for QuizSettings validation."""

    def test_defaults(self):
        """Test default settings."""
        settings = QuizSettings()

        assert settings.count == 5
        assert settings.selected_topic == DEVELOPER_TOPICS[0]

    @given(st.sampled_from([5, 10, 15, 20]))
    def test_allowed_counts(self, count: int):
        """Property test: the offered question counts are accepted."""
        assert QuizSettings(count=count).count == count

    @pytest.mark.parametrize("count", [0, 3, 7, 25])
    def test_other_counts_rejected(self, count: int):
        """Test counts outside the offered choices fail."""
        with pytest.raises(ValidationError):
            QuizSettings(count=count)

    def test_topic_must_belong_to_certification(self):
        """Test an architect topic is rejected for the developer exam."""
        with pytest.raises(ValidationError):
            QuizSettings(certification=Certification.DEVELOPER, topic=ARCHITECT_TOPICS[0])

    def test_topic_description(self):
        """Test the settings build the matching description."""
        settings = QuizSettings(topic="Cloud Run")

        assert settings.topic_description().endswith("Focus on the topic: Cloud Run.")


class TestQuizSession:
    """Tests for answering and scoring."""

    def test_correct_answer_scores(self, sample_questions):
        """Test a correct answer increments the score."""
        session = QuizSession(questions=sample_questions)

        answer = session.select_answer(1)

        assert answer.is_correct
        assert session.score == 1

    def test_second_selection_ignored(self, sample_questions):
        """Test a question accepts only one answer."""
        session = QuizSession(questions=sample_questions)
        session.select_answer(0)

        assert session.select_answer(1) is None
        assert session.score == 0
        assert len(session.answers) == 1

    def test_out_of_range_answer(self, sample_questions):
        """Test an invalid option index raises."""
        session = QuizSession(questions=sample_questions)

        with pytest.raises(ValidationFailure):
            session.select_answer(4)

    def test_full_run(self, sample_questions):
        """Test answering every question, results and review."""
        session = QuizSession(questions=sample_questions)

        for choice in (1, 2, 0):
            session.select_answer(choice)
            session.next_question()

        assert session.finished
        assert session.current_question is None
        assert session.score == 2
        assert session.percentage == 67
        assert session.topic_breakdown() == {"Cloud Run": 2, "Compute Engine": 1}
        [(question, answer)] = session.missed()
        assert question.topic == "Compute Engine"
        assert answer.selected_answer_index == 2

    def test_next_resets_selection(self, sample_questions):
        """Test moving on allows a new answer."""
        session = QuizSession(questions=sample_questions)
        session.select_answer(1)
        session.next_question()

        assert session.current_index == 1
        assert session.selected_answer is None
        assert not session.is_last_question

    def test_empty_session(self):
        """Test a session without questions."""
        session = QuizSession()

        assert session.current_question is None
        assert session.percentage == 0

    @pytest.mark.asyncio
    async def test_start_quiz(self, make_generator, sample_questions):
        """Test starting a quiz requests the configured batch."""
        generator = make_generator(questions=sample_questions)
        settings = QuizSettings(mode=TopicMode.ALL, count=10)

        session = await start_quiz(generator, settings)

        assert session.questions == sample_questions
        assert generator.quiz_calls == [(settings.topic_description(), 10)]

    @pytest.mark.asyncio
    async def test_start_quiz_with_no_questions(self, make_generator):
        """Test an empty batch is a generation failure."""
        with pytest.raises(GenerationFailure):
            await start_quiz(make_generator(), QuizSettings())


class TestFlashcardDeck:
    """Tests for deck navigation."""

    def test_flip_and_navigate(self, sample_cards):
        """Test flipping and moving through the deck."""
        deck = FlashcardDeck(cards=sample_cards)

        deck.flip()
        assert deck.flipped
        deck.next()

        assert not deck.flipped
        assert deck.position == "2 / 3"
        assert deck.current.front == "Scenario 2"

    def test_wraps_both_ways(self, sample_cards):
        """Test navigation wraps around the ends."""
        deck = FlashcardDeck(cards=sample_cards)

        deck.previous()
        assert deck.position == "3 / 3"
        deck.next()
        assert deck.position == "1 / 3"

    def test_empty_deck(self):
        """Test an empty deck is inert."""
        deck = FlashcardDeck()
        deck.next()

        assert deck.current is None
        assert deck.position == "0 / 0"

    @given(st.integers(min_value=1, max_value=8), st.lists(st.booleans(), max_size=30))
    def test_index_stays_in_range(self, size: int, moves: list[bool]):
        """Property test: any sequence of moves keeps the cursor in range."""
        deck = FlashcardDeck(cards=[ConceptCard(topic=f"t{i}", content="c") for i in range(size)])

        for forward in moves:
            if forward:
                deck.next()
            else:
                deck.previous()

        assert 0 <= deck.index < size
        assert deck.index == (moves.count(True) - moves.count(False)) % size

    @pytest.mark.asyncio
    async def test_load_deck(self, make_generator, sample_cards):
        """Test loading a deck for a certification."""
        generator = make_generator(cards=sample_cards)

        deck = await load_deck(generator, Certification.ARCHITECT, 3, FlashcardMode.SCENARIO)

        assert deck.cards == sample_cards
        assert generator.flashcard_calls == [
            ("GCP Professional Cloud Architect certification exam", 3, FlashcardMode.SCENARIO)
        ]

    @pytest.mark.asyncio
    async def test_load_empty_deck(self, make_generator):
        """Test an empty batch is a generation failure."""
        with pytest.raises(GenerationFailure):
            await load_deck(make_generator())
