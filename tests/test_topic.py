"""Unit tests for the topic focus heuristic."""
from hypothesis import given
from hypothesis import strategies as st

from certprep.chat import TopicClassifier, TopicPolicy
from certprep.chat.topic import (
    AWS_SUGGESTION,
    AZURE_SUGGESTION,
    BE_SPECIFIC_SUGGESTION,
    CONTAINER_SUGGESTION,
    DATABASE_SUGGESTION,
    GCP_KEYWORDS,
    GENERIC_SUGGESTION,
    OFF_TOPIC_KEYWORDS,
    RedirectRule,
)


class TestRedirection:
    """Tests for off-topic messages."""

    def test_aws_question_gets_aws_redirect(self):
        """Test that an AWS question is redirected to GCP equivalents."""
        result = TopicClassifier().classify("How do I configure AWS Lambda?")

        assert result.suggestion == AWS_SUGGESTION
        assert not result.on_topic

    def test_azure_is_case_insensitive(self):
        """Test that keyword matching ignores case."""
        result = TopicClassifier().classify("Tell me about MICROSOFT AZURE pricing tiers")

        assert result.suggestion == AZURE_SUGGESTION

    def test_container_redirect(self):
        """Test docker and k8s questions get the container redirect."""
        classifier = TopicClassifier()

        assert classifier.classify("How do I write a good Dockerfile for docker builds?").suggestion == CONTAINER_SUGGESTION
        assert classifier.classify("what is a k8s operator exactly").suggestion == CONTAINER_SUGGESTION

    def test_database_redirect(self):
        """Test database questions get the database redirect."""
        result = TopicClassifier().classify("How should I tune postgresql for heavy writes?")

        assert result.suggestion == DATABASE_SUGGESTION

    def test_other_off_topic_gets_generic_redirect(self):
        """Test off-topic keywords without a tailored rule."""
        result = TopicClassifier().classify("What is a good pasta recipe for tonight?")

        assert result.suggestion == GENERIC_SUGGESTION

    def test_mongodb_is_not_a_database_rule_keyword(self):
        """Test that mongodb falls through to the generic redirect."""
        result = TopicClassifier().classify("How do mongodb replica sets elect a primary?")

        assert result.suggestion == GENERIC_SUGGESTION

    def test_first_matching_rule_wins(self):
        """Test redirect rules are checked in order aws, azure, containers, databases."""
        classifier = TopicClassifier()

        assert classifier.classify("compare azure and aws for hosting").suggestion == AWS_SUGGESTION
        assert classifier.classify("running mysql inside docker containers").suggestion == CONTAINER_SUGGESTION


class TestOnTopic:
    """Tests for messages that stay on Google Cloud."""

    def test_gcp_question_has_no_suggestion(self):
        """Test a short but in-domain question."""
        result = TopicClassifier().classify("What is GCP?")

        assert result.suggestion is None
        assert result.on_topic

    def test_in_domain_keyword_suppresses_redirect(self):
        """Test that a GCP keyword wins over an off-topic keyword."""
        result = TopicClassifier().classify("How does GKE compare to running kubernetes on AWS?")

        assert result.on_topic

    def test_long_neutral_message_is_on_topic(self):
        """Test a message with no keywords and more than three words."""
        result = TopicClassifier().classify("Explain how regional load balancers distribute traffic")

        assert result.on_topic

    def test_keywords_match_as_substrings(self):
        """Test that 'exam' matches inside 'example'."""
        result = TopicClassifier().classify("Give an example")

        assert result.on_topic


class TestShortMessages:
    """Tests for the be-specific nudge."""

    def test_single_word_gets_nudge(self):
        """Test a one-word message."""
        assert TopicClassifier().classify("hello").suggestion == BE_SPECIFIC_SUGGESTION

    def test_three_words_get_nudge(self):
        """Test the three word boundary."""
        assert TopicClassifier().classify("Tell me more").suggestion == BE_SPECIFIC_SUGGESTION

    def test_four_words_pass(self):
        """Test four words are not considered short."""
        assert TopicClassifier().classify("Tell me more please").on_topic

    def test_policy_can_disable_nudge(self):
        """Test a custom policy with no short-message threshold."""
        classifier = TopicClassifier(TopicPolicy(short_message_words=0))

        assert classifier.classify("hello").on_topic

    def test_policy_custom_rules(self):
        """Test a policy with its own redirect rule."""
        policy = TopicPolicy(
            off_domain=("oracle",),
            redirect_rules=(RedirectRule(name="oracle", keywords=("oracle",), suggestion="Try Cloud SQL."),),
        )
        result = TopicClassifier(policy).classify("How do I license an oracle cluster?")

        assert result.suggestion == "Try Cloud SQL."


# Digits and spaces cannot form any keyword
_neutral_text = st.text(alphabet="0123456789 ", max_size=30)


@given(st.sampled_from(OFF_TOPIC_KEYWORDS), _neutral_text, _neutral_text)
def test_off_topic_without_gcp_always_suggests(keyword: str, prefix: str, suffix: str):
    """Property test: an off-topic keyword with no GCP keyword always yields a suggestion."""
    result = TopicClassifier().classify(f"{prefix} {keyword} {suffix}")

    assert result.suggestion is not None


@given(
    st.sampled_from(GCP_KEYWORDS),
    st.lists(st.sampled_from(OFF_TOPIC_KEYWORDS), max_size=3),
    _neutral_text,
)
def test_gcp_keyword_always_on_topic(keyword: str, off_topic: list[str], filler: str):
    """Property test: a GCP keyword means no suggestion, whatever else appears."""
    message = " ".join([filler, *off_topic, keyword])

    assert TopicClassifier().classify(message).on_topic
