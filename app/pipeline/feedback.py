"""Feedback stage: turn a grade into prose for the learner."""

from __future__ import annotations

import json
import logging

from app.pipeline.base import Stage
from app.pipeline.grading import Grade
from app.pipeline.prompts import FEEDBACK_PROMPT

logger = logging.getLogger(__name__)

NO_FEEDBACK = "No feedback available."


class FeedbackStage(Stage):
    name = "feedback"

    def feedback(self, language: str, grade: Grade, request_id: str | None = None) -> str:
        prompt = FEEDBACK_PROMPT.format(
            language=language,
            mark=grade.mark,
            mistakes=json.dumps(list(grade.mistakes), ensure_ascii=False),
        )
        text = self._complete(prompt, request_id=request_id).strip()
        if not text:
            logger.info("feedback empty, using fallback", extra={"request_id": request_id, "stage": self.name})
            return NO_FEEDBACK
        return text
