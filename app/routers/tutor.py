"""Tutor endpoints: graded chat feedback plus lesson/exercise generation."""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.ai.base import CompletionOptions, TextCompletionClient
from app.ai.openai_completion import get_completion_client
from app.errors import ContentRejected, ProviderError, TutorError, ValidationError
from app.pipeline.content import TutorContent
from app.pipeline.tutor import TutorPipeline
from app.schemas import (
    AnswerFeedbackRequest,
    ChatRequest,
    ChatResponse,
    ErrorResponse,
    ExerciseResponse,
    FeedbackResponse,
    LessonResponse,
    TopicRequest,
)
from app.settings import settings

router = APIRouter(prefix="/api", tags=["tutor"])
logger = logging.getLogger(__name__)

_ERROR_RESPONSES = {500: {"model": ErrorResponse}}


def get_completion_options() -> CompletionOptions:
    return CompletionOptions(
        model=settings.openai_model,
        temperature=settings.openai_temperature,
        max_tokens=settings.openai_max_tokens,
    )


def get_tutor_client() -> TextCompletionClient:
    try:
        return get_completion_client()
    except RuntimeError as exc:
        raise ProviderError(status_code=None, body=str(exc), message=f"Completion client unavailable: {exc}") from exc


def get_tutor_pipeline(
    client: TextCompletionClient = Depends(get_tutor_client),
    options: CompletionOptions = Depends(get_completion_options),
) -> TutorPipeline:
    return TutorPipeline.from_client(client, options)


def get_tutor_content(
    client: TextCompletionClient = Depends(get_tutor_client),
    options: CompletionOptions = Depends(get_completion_options),
) -> TutorContent:
    return TutorContent(client, options)


def _err(status_code: int, error: str, request_id: str | None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "request_id": request_id})


@router.post("/chat", response_model=ChatResponse, responses=_ERROR_RESPONSES)
def chat(payload: ChatRequest, pipeline: TutorPipeline = Depends(get_tutor_pipeline)):
    request_id = str(uuid.uuid4())
    try:
        result = pipeline.process(payload.language, payload.answer, request_id=request_id)
    except ValidationError as exc:
        return JSONResponse(status_code=400, content={"errors": exc.errors})
    except ContentRejected as exc:
        return _err(500, exc.public_message, request_id)
    except TutorError as exc:
        logger.error("chat failed", extra={"request_id": request_id, "stage": exc.stage})
        return _err(500, f"Failed to process chat. {exc.public_message}", request_id)
    return ChatResponse(mark=result.mark, feedback=result.feedback)


@router.post("/lesson", response_model=LessonResponse, responses=_ERROR_RESPONSES)
def lesson(payload: TopicRequest, content: TutorContent = Depends(get_tutor_content)):
    request_id = str(uuid.uuid4())
    try:
        text = content.generate_lesson(payload.language, payload.topic, request_id=request_id)
    except ProviderError:
        logger.exception("lesson generation failed", extra={"request_id": request_id, "stage": "lesson"})
        return _err(500, "Failed to generate lesson.", request_id)
    return LessonResponse(lesson=text)


@router.post("/exercise", response_model=ExerciseResponse, responses=_ERROR_RESPONSES)
def exercise(payload: TopicRequest, content: TutorContent = Depends(get_tutor_content)):
    request_id = str(uuid.uuid4())
    try:
        text = content.generate_exercise(payload.language, payload.topic, request_id=request_id)
    except ProviderError:
        logger.exception("exercise generation failed", extra={"request_id": request_id, "stage": "exercise"})
        return _err(500, "Failed to generate exercise.", request_id)
    return ExerciseResponse(exercise=text)


@router.post("/feedback", response_model=FeedbackResponse, responses=_ERROR_RESPONSES)
def feedback(payload: AnswerFeedbackRequest, content: TutorContent = Depends(get_tutor_content)):
    request_id = str(uuid.uuid4())
    try:
        text = content.review_answer(payload.language, payload.answer, request_id=request_id)
    except ProviderError:
        logger.exception("answer review failed", extra={"request_id": request_id, "stage": "answer_review"})
        return _err(500, "Failed to provide feedback.", request_id)
    return FeedbackResponse(feedback=text)
