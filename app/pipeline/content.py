"""Single-call tutor content: lessons, exercises and free-form answer reviews."""

from __future__ import annotations

import logging

from app.pipeline.base import Stage
from app.pipeline.prompts import ANSWER_REVIEW_PROMPT, EXERCISE_PROMPT, LESSON_PROMPT, PromptTemplate

logger = logging.getLogger(__name__)


class TutorContent(Stage):
    name = "content"

    def _generate(self, kind: str, template: PromptTemplate, fallback: str, request_id: str | None, **variables: str) -> str:
        prompt = template.format(**variables)
        text = self._complete(prompt, request_id=request_id).strip()
        logger.info("content generated", extra={"request_id": request_id, "stage": kind, "chars": len(text)})
        return text or fallback

    def generate_lesson(self, language: str, topic: str, request_id: str | None = None) -> str:
        return self._generate("lesson", LESSON_PROMPT, "No lesson available.", request_id, language=language, topic=topic)

    def generate_exercise(self, language: str, topic: str, request_id: str | None = None) -> str:
        return self._generate("exercise", EXERCISE_PROMPT, "No exercise available.", request_id, language=language, topic=topic)

    def review_answer(self, language: str, answer: str, request_id: str | None = None) -> str:
        return self._generate("answer_review", ANSWER_REVIEW_PROMPT, "No feedback available.", request_id, language=language, answer=answer)
