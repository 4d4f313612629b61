from __future__ import annotations

import pytest

from app.errors import ProviderError
from app.pipeline.content import TutorContent


def test_generate_lesson_trims_text(scripted, options) -> None:
    client = scripted("  Lesson on the passé composé.  ")

    text = TutorContent(client, options).generate_lesson("French", "past tense")

    assert text == "Lesson on the passé composé."
    assert 'brief lesson on "past tense"' in client.prompts[0]


@pytest.mark.parametrize(
    ("method", "expected"),
    [
        ("generate_lesson", "No lesson available."),
        ("generate_exercise", "No exercise available."),
        ("review_answer", "No feedback available."),
    ],
)
def test_empty_output_uses_fallback(scripted, options, method: str, expected: str) -> None:
    client = scripted("")

    text = getattr(TutorContent(client, options), method)("French", "greetings")

    assert text == expected


def test_review_answer_raises_provider_error(scripted, options) -> None:
    client = scripted(OSError("network down"))

    with pytest.raises(ProviderError):
        TutorContent(client, options).review_answer("French", "Bonjour")
