from __future__ import annotations

import pytest

from app.errors import (
    ContentRejected,
    FeedbackFailed,
    GradingFailed,
    GradingParseError,
    ProviderError,
    TutorError,
    ValidationError,
)
from app.pipeline.feedback import FeedbackStage
from app.pipeline.grading import GradingStage
from app.pipeline.moderation import ModerationStage
from app.pipeline.tutor import PipelineResult, TutorPipeline

GRADE_JSON = '{"mark": 8, "mistakes": ["minor tense issue"]}'
FEEDBACK_TEXT = "Good job, minor tense issue noted."


def test_process_returns_mark_and_feedback(scripted, options) -> None:
    client = scripted(GRADE_JSON, FEEDBACK_TEXT, "Clean")
    pipeline = TutorPipeline.from_client(client, options)

    result = pipeline.process("French", "Je suis allé au magasin")

    assert result == PipelineResult(mark=8, feedback="Good job, minor tense issue noted.")
    assert len(client.prompts) == 3
    assert "minor tense issue" in client.prompts[1]
    assert FEEDBACK_TEXT in client.prompts[2]


def test_process_rejects_flagged_feedback(scripted, options) -> None:
    client = scripted(GRADE_JSON, FEEDBACK_TEXT, "Flagged")
    pipeline = TutorPipeline.from_client(client, options)

    with pytest.raises(ContentRejected):
        pipeline.process("French", "Je suis allé au magasin")


def test_process_completes_when_moderation_backend_throws(scripted, options) -> None:
    shared = scripted(GRADE_JSON, FEEDBACK_TEXT)
    moderation_backend = scripted(ProviderError(status_code=None, body="down", message="OpenAI request failed"))
    pipeline = TutorPipeline(
        grading=GradingStage(shared, options),
        feedback=FeedbackStage(shared, options),
        moderation=ModerationStage(moderation_backend, options),
    )

    result = pipeline.process("French", "Je suis allé au magasin")

    assert result.mark == 8
    assert result.feedback == FEEDBACK_TEXT


def test_process_wraps_unparseable_grade(scripted, options) -> None:
    client = scripted("I would give this an eight.")
    pipeline = TutorPipeline.from_client(client, options)

    with pytest.raises(GradingFailed) as exc_info:
        pipeline.process("French", "Bonjour")

    assert isinstance(exc_info.value.__cause__, GradingParseError)
    assert len(client.prompts) == 1


def test_process_wraps_grading_provider_failure(scripted, options) -> None:
    client = scripted(ProviderError(status_code=504, body="timeout", message="OpenAI request failed: timeout"))
    pipeline = TutorPipeline.from_client(client, options)

    with pytest.raises(GradingFailed) as exc_info:
        pipeline.process("French", "Bonjour")

    assert isinstance(exc_info.value.__cause__, ProviderError)


def test_process_wraps_feedback_failure(scripted, options) -> None:
    client = scripted(GRADE_JSON, ConnectionError("reset"))
    pipeline = TutorPipeline.from_client(client, options)

    with pytest.raises(FeedbackFailed) as exc_info:
        pipeline.process("French", "Bonjour")

    assert isinstance(exc_info.value.__cause__, ProviderError)
    assert len(client.prompts) == 2


@pytest.mark.parametrize(("language", "answer"), [("", "Bonjour"), ("French", "   "), (" ", "")])
def test_process_validates_before_calling_provider(scripted, options, language: str, answer: str) -> None:
    client = scripted()
    pipeline = TutorPipeline.from_client(client, options)

    with pytest.raises(ValidationError) as exc_info:
        pipeline.process(language, answer)

    assert exc_info.value.errors
    assert client.prompts == []


def test_public_messages_do_not_leak_provider_text(scripted, options) -> None:
    client = scripted(ProviderError(status_code=401, body="sk-secret invalid", message="OpenAI request failed: sk-secret"))
    pipeline = TutorPipeline.from_client(client, options)

    with pytest.raises(TutorError) as exc_info:
        pipeline.process("French", "Bonjour")

    assert "sk-secret" not in exc_info.value.public_message
    assert "grading" in exc_info.value.public_message


def test_perfect_mark_result_shape(scripted, options) -> None:
    client = scripted('{"mark": 10, "mistakes": []}', "Perfect, well done!", "clean")
    pipeline = TutorPipeline.from_client(client, options)

    result = pipeline.process("Spanish", "Me llamo Ana.")

    assert isinstance(result.mark, int)
    assert 1 <= result.mark <= 10
    assert isinstance(result.feedback, str) and result.feedback
    assert "praise" in client.prompts[1]
