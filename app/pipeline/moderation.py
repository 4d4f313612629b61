"""Moderation stage: screen generated feedback before it reaches the learner."""

from __future__ import annotations

import logging
from dataclasses import replace

from app.ai.base import CompletionOptions, TextCompletionClient
from app.pipeline.base import Stage
from app.pipeline.prompts import MODERATION_PROMPT

logger = logging.getLogger(__name__)

CLEAN_TOKEN = "clean"


class ModerationStage(Stage):
    """Classify feedback as clean or flagged.

    The stage fails open: when the provider call fails for any reason the
    feedback is treated as clean so a moderation outage never blocks a
    response.
    """

    name = "moderation"

    def __init__(self, client: TextCompletionClient, options: CompletionOptions) -> None:
        super().__init__(client, replace(options, temperature=0.0, json_output=False))

    def moderate(self, language: str, feedback: str, request_id: str | None = None) -> bool:
        prompt = MODERATION_PROMPT.format(language=language, feedback=feedback)
        try:
            verdict = self._complete(prompt, request_id=request_id)
        except Exception:
            logger.warning(
                "moderation call failed, treating feedback as clean",
                extra={"request_id": request_id, "stage": self.name},
                exc_info=True,
            )
            return True

        verdict = (verdict or "").strip()
        is_clean = verdict.lower() == CLEAN_TOKEN
        if not is_clean:
            logger.info(
                "moderation flagged feedback",
                extra={"request_id": request_id, "stage": self.name, "verdict": verdict[:50]},
            )
        return is_clean
