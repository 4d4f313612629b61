"""Grading stage: score a learner's answer and list its mistakes."""

from __future__ import annotations

import logging
import re
from dataclasses import replace

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as SchemaValidationError

from app.ai.base import CompletionOptions, TextCompletionClient
from app.errors import GradingParseError
from app.pipeline.base import Stage
from app.pipeline.prompts import GRADING_PROMPT

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"^```[a-zA-Z0-9_-]*\s*\n(?P<body>.*)\n?```$", re.DOTALL)


class Grade(BaseModel):
    model_config = ConfigDict(frozen=True, strict=True, extra="ignore")

    mark: int = Field(ge=1, le=10)
    mistakes: tuple[str, ...]


def _strip_code_fence(text: str) -> str:
    match = _CODE_FENCE.match(text)
    if match:
        return match.group("body").strip()
    return text


def parse_grade(raw_text: str) -> Grade:
    candidate = _strip_code_fence(raw_text.strip())
    if not candidate:
        raise GradingParseError(raw_text=raw_text, reason="empty response")
    try:
        return Grade.model_validate_json(candidate)
    except SchemaValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ())) or "response"
        raise GradingParseError(raw_text=raw_text, reason=f"{location}: {first.get('msg', 'invalid')}") from exc


class GradingStage(Stage):
    name = "grading"

    def __init__(self, client: TextCompletionClient, options: CompletionOptions) -> None:
        super().__init__(client, options)
        if not options.json_output:
            self.options = replace(options, json_output=True)

    def grade(self, language: str, answer: str, request_id: str | None = None) -> Grade:
        prompt = GRADING_PROMPT.format(language=language, answer=answer)
        raw_text = self._complete(prompt, request_id=request_id)
        grade = parse_grade(raw_text)
        logger.info(
            "grading complete",
            extra={"request_id": request_id, "stage": self.name, "mark": grade.mark, "mistakes": len(grade.mistakes)},
        )
        return grade
