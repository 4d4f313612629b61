"""Error taxonomy for the tutor pipeline.

Every failure a caller can observe is a subclass of ``TutorError`` so the HTTP
layer (or any other caller) can branch on the concrete type instead of
inspecting message text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


class TutorError(Exception):
    """Base class for all pipeline failures."""

    stage: str = "pipeline"

    @property
    def public_message(self) -> str:
        """Message that is safe to return to an HTTP caller."""
        return f"The {self.stage} stage failed."


@dataclass
class ValidationError(TutorError):
    errors: list[dict[str, Any]] = field(default_factory=list)

    stage = "validation"

    def __str__(self) -> str:
        fields = ", ".join(str(err.get("loc", ["?"])[-1]) for err in self.errors)
        return f"Invalid request fields: {fields}" if fields else "Invalid request"

    @property
    def public_message(self) -> str:
        return str(self)


@dataclass
class ProviderError(TutorError):
    status_code: int | None
    body: str
    message: str

    stage = "provider"

    def __str__(self) -> str:
        return self.message


@dataclass
class GradingParseError(TutorError):
    raw_text: str
    reason: str

    stage = "grading"

    def __str__(self) -> str:
        return f"Could not parse grading output ({self.reason}): {self.raw_text!r}"


class ContentRejected(TutorError):
    stage = "moderation"

    def __init__(self, message: str = "Generated feedback contains inappropriate content.") -> None:
        super().__init__(message)

    @property
    def public_message(self) -> str:
        return str(self)


class GradingFailed(TutorError):
    stage = "grading"


class FeedbackFailed(TutorError):
    stage = "feedback"


class PromptRenderError(Exception):
    """A template could not be rendered with the supplied variables."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(f"Missing prompt variables: {', '.join(missing)}")
