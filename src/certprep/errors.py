"""Failure taxonomy shared by the content client, controller and study sessions.

Every failure raised by certprep derives from StudyError and carries a
message that is safe to show to the user.
"""


class StudyError(Exception):
    """Base class for all certprep failures."""

    @property
    def message(self) -> str:
        """User-facing message."""
        return str(self)


class ValidationFailure(StudyError):
    """Input rejected before reaching the generation service."""


class GenerationFailure(StudyError):
    """Quiz or flashcard generation failed."""


class ParseFailure(GenerationFailure):
    """Response was not valid JSON matching the expected shape."""


class NetworkFailure(StudyError):
    """The generation service could not be reached."""


class ServiceFailure(StudyError):
    """The generation service refused the request (quota, rate limit)."""


class AuthFailure(StudyError):
    """The configured credential was rejected."""


class EmptyResponseFailure(StudyError):
    """The generation service returned no usable text."""


class GenericFailure(StudyError):
    """Fallback for failures that match no other category."""
