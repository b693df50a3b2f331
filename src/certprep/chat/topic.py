"""Topic focus heuristic for chat messages.

Flags messages that drift away from Google Cloud and proposes a canned
redirection. Matching is case-folded substring containment only; the
result is advisory and never prevents a message from being sent.
"""

from pydantic import BaseModel, ConfigDict, Field

GCP_KEYWORDS = (
    "gcp",
    "google cloud",
    "cloud platform",
    "compute engine",
    "app engine",
    "cloud storage",
    "bigquery",
    "cloud sql",
    "firestore",
    "datastore",
    "cloud functions",
    "cloud run",
    "kubernetes engine",
    "gke",
    "cloud pub/sub",
    "cloud dataflow",
    "cloud dataproc",
    "cloud composer",
    "cloud iam",
    "cloud security",
    "vpc",
    "cloud load balancing",
    "cloud cdn",
    "cloud dns",
    "cloud monitoring",
    "cloud logging",
    "cloud build",
    "cloud source repositories",
    "cloud deployment manager",
    "professional cloud developer",
    "certification",
    "exam",
)

OFF_TOPIC_KEYWORDS = (
    "aws",
    "amazon web services",
    "azure",
    "microsoft azure",
    "docker",
    "kubernetes",
    "k8s",
    "terraform",
    "ansible",
    "python",
    "javascript",
    "java",
    "node.js",
    "react",
    "angular",
    "database",
    "mysql",
    "postgresql",
    "mongodb",
    "weather",
    "recipe",
    "cooking",
    "cook",
    "pasta",
    "food",
    "travel",
    "movie",
    "music",
    "personal",
    "relationship",
    "health",
    "medical",
    "politics",
    "news",
    "sports",
    "entertainment",
)

AWS_SUGGESTION = (
    "I see you're asking about AWS. I specialize in Google Cloud Platform! "
    "Would you like to know about GCP equivalents like Compute Engine (vs EC2), "
    "Cloud Storage (vs S3), or BigQuery (vs Redshift)?"
)
AZURE_SUGGESTION = (
    "I notice you mentioned Azure. Let me help you with Google Cloud Platform instead! "
    "Are you interested in GCP services like App Engine, Cloud Functions, "
    "or GCP's AI/ML offerings?"
)
CONTAINER_SUGGESTION = (
    "Great question about containerization! In GCP context, would you like to learn "
    "about Google Kubernetes Engine (GKE), Cloud Run for containerized apps, "
    "or how to deploy containers on Compute Engine?"
)
DATABASE_SUGGESTION = (
    "Database questions are perfect for GCP! Would you like to learn about Cloud SQL, "
    "Firestore, Cloud Spanner, or BigQuery for your data storage needs?"
)
GENERIC_SUGGESTION = (
    "I specialize in Google Cloud Platform topics! Let me help you with GCP services, "
    "architecture patterns, or certification preparation. What GCP topic interests you most?"
)
BE_SPECIFIC_SUGGESTION = (
    "To provide the best GCP guidance, could you be more specific? For example, ask about "
    "specific GCP services, architecture patterns, or certification topics you'd like to explore."
)


class RedirectRule(BaseModel):
    """Tailored redirection used when any of ``keywords`` appears."""

    model_config = ConfigDict(frozen=True)

    name: str
    keywords: tuple[str, ...]
    suggestion: str


DEFAULT_REDIRECT_RULES = (
    RedirectRule(name="aws", keywords=("aws", "amazon web services"), suggestion=AWS_SUGGESTION),
    RedirectRule(name="azure", keywords=("azure", "microsoft azure"), suggestion=AZURE_SUGGESTION),
    RedirectRule(
        name="containers",
        keywords=("docker", "kubernetes", "k8s"),
        suggestion=CONTAINER_SUGGESTION,
    ),
    RedirectRule(
        name="databases",
        keywords=("database", "mysql", "postgresql"),
        suggestion=DATABASE_SUGGESTION,
    ),
)


class TopicPolicy(BaseModel):
    """Keyword lists and templates driving the classifier.

    Defaults reproduce the built-in behaviour; override fields to tune it.
    Redirect rules are evaluated in order and the first match wins.
    """

    model_config = ConfigDict(frozen=True)

    in_domain: tuple[str, ...] = GCP_KEYWORDS
    off_domain: tuple[str, ...] = OFF_TOPIC_KEYWORDS
    redirect_rules: tuple[RedirectRule, ...] = DEFAULT_REDIRECT_RULES
    generic_suggestion: str = GENERIC_SUGGESTION
    short_message_suggestion: str = BE_SPECIFIC_SUGGESTION
    short_message_words: int = Field(default=3, ge=0)


class ClassificationResult(BaseModel):
    """Outcome of classifying one message."""

    model_config = ConfigDict(frozen=True)

    suggestion: str | None = None

    @property
    def on_topic(self) -> bool:
        return self.suggestion is None


class TopicClassifier:
    """Keyword-based on-topic/off-topic check for chat messages."""

    def __init__(self, policy: TopicPolicy | None = None):
        self._policy = policy or TopicPolicy()

    @property
    def policy(self) -> TopicPolicy:
        return self._policy

    def classify(self, message: str) -> ClassificationResult:
        """Classify ``message`` and pick a redirection when it looks off-topic."""
        policy = self._policy
        lowered = message.lower()

        has_gcp = _contains_any(lowered, policy.in_domain)
        has_off_topic = _contains_any(lowered, policy.off_domain)

        if has_off_topic and not has_gcp:
            for rule in policy.redirect_rules:
                if _contains_any(lowered, rule.keywords):
                    return ClassificationResult(suggestion=rule.suggestion)
            return ClassificationResult(suggestion=policy.generic_suggestion)

        # Split on single spaces so runs of spaces count as extra words
        if len(message.strip().split(" ")) <= policy.short_message_words and not has_gcp:
            return ClassificationResult(suggestion=policy.short_message_suggestion)

        return ClassificationResult()


def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)
