"""OpenAI text completion client."""

from __future__ import annotations

import json
import logging
import os
import time

import httpx
import openai

from app.ai.base import CompletionOptions, TextCompletionClient
from app.errors import ProviderError
from app.settings import settings

logger = logging.getLogger(__name__)


def build_completion_request(prompt: str, options: CompletionOptions) -> dict[str, object]:
    request: dict[str, object] = {
        "model": options.model,
        "input": [{"role": "user", "content": [{"type": "input_text", "text": prompt}]}],
        "temperature": options.temperature,
    }
    if options.max_tokens is not None:
        request["max_output_tokens"] = options.max_tokens
    if options.json_output:
        request["text"] = {"format": {"type": "json_object"}}
    return request


def provider_error_from_exception(exc: Exception) -> ProviderError:
    status_code = getattr(exc, "status_code", None)
    if isinstance(exc, (httpx.TimeoutException, TimeoutError, openai.APITimeoutError)):
        status_code = 504
    response_obj = getattr(exc, "response", None)
    body_text = ""
    if response_obj is not None:
        body_text = getattr(response_obj, "text", "") or ""
    if not body_text:
        body_text = str(exc)
    return ProviderError(status_code=status_code, body=body_text, message=f"OpenAI request failed: {exc}")


class OpenAICompletionClient:
    def __init__(self, timeout_seconds: float | None = None) -> None:
        api_key = os.getenv("OPENAI_API_KEY", "").strip()
        if not api_key:
            raise RuntimeError("OPENAI_API_KEY is not set")

        # Single attempt per call.
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds if timeout_seconds is not None else settings.openai_timeout_seconds,
            max_retries=0,
        )

    def complete(self, prompt: str, options: CompletionOptions) -> str:
        request_payload = build_completion_request(prompt, options)
        started = time.perf_counter()
        try:
            response = self._client.responses.create(**request_payload)
        except Exception as exc:
            error = provider_error_from_exception(exc)
            logger.warning(
                "openai completion failed",
                extra={"stage": "call_openai", "model": options.model, "status_code": error.status_code},
            )
            raise error from exc

        logger.info(
            "openai completion timing",
            extra={
                "stage": "call_openai",
                "model": options.model,
                "prompt_chars": len(prompt),
                "openai_ms": int((time.perf_counter() - started) * 1000),
            },
        )
        return response.output_text or ""


class MockCompletionClient:
    """Canned responses for offline runs; shapes match what each prompt asks for."""

    def complete(self, prompt: str, options: CompletionOptions) -> str:
        if options.json_output:
            return json.dumps({"mark": 8, "mistakes": ["Check the agreement of the past participle."]})
        if "Clean" in prompt and "Flagged" in prompt:
            return "Clean"
        return "Nice work. Your sentence is clear; review past participle agreement to make it perfect."


def get_completion_client() -> TextCompletionClient:
    if os.getenv("OPENAI_MOCK", "").strip() == "1":
        return MockCompletionClient()
    return OpenAICompletionClient()
