"""Text completion provider interfaces."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class CompletionOptions:
    model: str
    temperature: float = 0.7
    max_tokens: int | None = None
    json_output: bool = False


class TextCompletionClient(Protocol):
    """Completion provider protocol.

    Implementations raise ``app.errors.ProviderError`` when the backend cannot
    produce text (transport, auth or timeout failures).
    """

    def complete(self, prompt: str, options: CompletionOptions) -> str:
        """Return generated text for a rendered prompt."""
