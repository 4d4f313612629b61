"""Shared plumbing for pipeline stages."""

from __future__ import annotations

import logging

from app.ai.base import CompletionOptions, TextCompletionClient
from app.errors import ProviderError

logger = logging.getLogger(__name__)


class Stage:
    """One prompt -> completion step of the tutor pipeline."""

    name: str = "stage"

    def __init__(self, client: TextCompletionClient, options: CompletionOptions) -> None:
        self.client = client
        self.options = options

    def _complete(self, prompt: str, request_id: str | None = None) -> str:
        try:
            return self.client.complete(prompt, self.options)
        except ProviderError:
            raise
        except Exception as exc:
            logger.warning(
                "completion client raised unexpected error",
                extra={"request_id": request_id, "stage": self.name, "error_type": type(exc).__name__},
            )
            raise ProviderError(status_code=None, body=str(exc), message=f"Completion failed: {exc}") from exc
