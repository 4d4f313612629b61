"""Tutor pipeline: grade -> feedback -> moderation."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

from app.ai.base import CompletionOptions, TextCompletionClient
from app.errors import (
    ContentRejected,
    FeedbackFailed,
    GradingFailed,
    GradingParseError,
    ProviderError,
    ValidationError,
)
from app.pipeline.feedback import FeedbackStage
from app.pipeline.grading import GradingStage
from app.pipeline.moderation import ModerationStage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    mark: int
    feedback: str


def _blank_fields(**fields: str) -> list[dict[str, object]]:
    errors: list[dict[str, object]] = []
    for name, value in fields.items():
        if not isinstance(value, str) or not value.strip():
            errors.append({"type": "missing", "loc": ["body", name], "msg": f"{name.capitalize()} must be a non-empty string."})
    return errors


class TutorPipeline:
    """Runs the three stages strictly in sequence for one learner answer.

    Holds no per-request state, so a single instance may serve concurrent
    requests.
    """

    def __init__(self, grading: GradingStage, feedback: FeedbackStage, moderation: ModerationStage) -> None:
        self.grading = grading
        self.feedback = feedback
        self.moderation = moderation

    @classmethod
    def from_client(cls, client: TextCompletionClient, options: CompletionOptions) -> "TutorPipeline":
        return cls(
            grading=GradingStage(client, options),
            feedback=FeedbackStage(client, options),
            moderation=ModerationStage(client, options),
        )

    def process(self, language: str, answer: str, request_id: str | None = None) -> PipelineResult:
        request_id = request_id or str(uuid.uuid4())
        errors = _blank_fields(language=language, answer=answer)
        if errors:
            raise ValidationError(errors=errors)

        stage = "grading"
        logger.info("tutor pipeline begin", extra={"request_id": request_id, "stage": stage, "language": language})
        try:
            grade = self.grading.grade(language, answer, request_id=request_id)
        except (ProviderError, GradingParseError) as exc:
            logger.warning("tutor pipeline grading failed: %s", exc, extra={"request_id": request_id, "stage": stage})
            raise GradingFailed(f"Grading failed: {exc}") from exc

        stage = "feedback"
        try:
            feedback = self.feedback.feedback(language, grade, request_id=request_id)
        except ProviderError as exc:
            logger.warning("tutor pipeline feedback failed: %s", exc, extra={"request_id": request_id, "stage": stage})
            raise FeedbackFailed(f"Feedback generation failed: {exc}") from exc

        stage = "moderation"
        if not self.moderation.moderate(language, feedback, request_id=request_id):
            logger.info("tutor pipeline rejected content", extra={"request_id": request_id, "stage": stage})
            raise ContentRejected()

        logger.info("tutor pipeline completed", extra={"request_id": request_id, "stage": "done", "mark": grade.mark})
        return PipelineResult(mark=grade.mark, feedback=feedback)
