"""Certification exams, their topic lists and quiz topic modes."""

from enum import Enum

DEVELOPER_TOPICS = (
    "App Engine",
    "Artifact Registry",
    "Cloud Build",
    "Cloud Code",
    "Cloud Deploy",
    "Cloud Functions",
    "Cloud Run",
    "Cloud Source Repositories",
    "Compute Engine",
    "Google Kubernetes Engine (GKE)",
    "Cloud Storage",
    "Cloud SQL",
    "Firestore",
    "Cloud Spanner",
    "Bigtable",
    "IAM",
    "Secret Manager",
    "Identity Platform",
    "VPC",
    "Cloud Load Balancing",
    "Cloud CDN",
    "Cloud Logging",
    "Cloud Monitoring",
    "Cloud Trace",
    "Cloud Profiler",
    "Pub/Sub",
    "Eventarc",
    "Workflows",
    "API Gateway",
    "Apigee",
)

ARCHITECT_TOPICS = (
    "Designing and planning a cloud solution architecture",
    "Managing and provisioning a cloud solution infrastructure",
    "Designing for security and compliance",
    "Analyzing and optimizing technical and business processes",
    "Managing implementation",
    "Ensuring solution and operations reliability",
)


class Certification(str, Enum):
    DEVELOPER = "developer"
    ARCHITECT = "architect"

    @property
    def display_name(self) -> str:
        if self == Certification.ARCHITECT:
            return "GCP Professional Cloud Architect"
        return "GCP Professional Cloud Developer"

    @property
    def topics(self) -> tuple[str, ...]:
        if self == Certification.ARCHITECT:
            return ARCHITECT_TOPICS
        return DEVELOPER_TOPICS


class TopicMode(str, Enum):
    SPECIFIC = "specific"  # one chosen topic
    RANDOM = "random"  # random mixture
    ALL = "all"  # every major topic


def build_topic_description(
    certification: Certification,
    mode: TopicMode = TopicMode.SPECIFIC,
    topic: str | None = None
) -> str:
    """Describe what a quiz should cover, for embedding in a generation prompt.

    >>> build_topic_description(Certification.DEVELOPER, TopicMode.SPECIFIC, "Cloud Run")
    'GCP Professional Cloud Developer certification exam. Focus on the topic: Cloud Run.'
    """
    if mode == TopicMode.SPECIFIC:
        focus = f"Focus on the topic: {topic or certification.topics[0]}."
    elif mode == TopicMode.RANDOM:
        focus = "Cover a random mixture of GCP topics."
    else:
        focus = "Cover all major GCP topics comprehensively."
    return f"{certification.display_name} certification exam. {focus}"


def flashcard_description(certification: Certification) -> str:
    return f"{certification.display_name} certification exam"
