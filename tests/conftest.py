from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.ai.base import CompletionOptions  # noqa: E402


class ScriptedCompletionClient:
    """Returns queued responses in call order; queued exceptions are raised."""

    def __init__(self, *responses: str | Exception) -> None:
        self._responses = list(responses)
        self.prompts: list[str] = []
        self.options: list[CompletionOptions] = []

    def complete(self, prompt: str, options: CompletionOptions) -> str:
        self.prompts.append(prompt)
        self.options.append(options)
        if not self._responses:
            raise AssertionError(f"Unexpected completion call: {prompt[:80]}")
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def options() -> CompletionOptions:
    return CompletionOptions(model="gpt-4o-mini", temperature=0.7)


@pytest.fixture
def scripted():
    return ScriptedCompletionClient


@pytest.fixture(autouse=True)
def _reset_dependency_overrides():
    from app.main import app

    app.dependency_overrides.clear()
    yield
    app.dependency_overrides.clear()
