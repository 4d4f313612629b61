"""Request and response schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _TutorRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    language: str = Field(min_length=1, max_length=64)


class ChatRequest(_TutorRequest):
    answer: str = Field(min_length=1, max_length=8000)


class TopicRequest(_TutorRequest):
    topic: str = Field(min_length=1, max_length=500)


class AnswerFeedbackRequest(_TutorRequest):
    answer: str = Field(min_length=1, max_length=8000)


class ChatResponse(BaseModel):
    mark: int
    feedback: str


class LessonResponse(BaseModel):
    lesson: str


class ExerciseResponse(BaseModel):
    exercise: str


class FeedbackResponse(BaseModel):
    feedback: str


class ErrorResponse(BaseModel):
    error: str
    request_id: str | None = None
