"""FastAPI application entrypoint."""

import logging
import os
import uuid

from fastapi import FastAPI
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.errors import TutorError, ValidationError
from app.logging_config import configure_logging
from app.routers.tutor import router as tutor_router
from app.settings import settings

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

_PUBLIC_PATHS = {
    "/health",
    "/docs",
    "/openapi.json",
    "/redoc",
    "/favicon.ico",
}


@app.middleware("http")
async def enforce_api_key(request: Request, call_next):
    if request.method == "OPTIONS":
        return await call_next(request)

    if request.url.path in _PUBLIC_PATHS:
        return await call_next(request)

    expected_api_key = os.getenv("BACKEND_API_KEY", "").strip()
    if expected_api_key:
        received_api_key = request.headers.get("X-API-Key", "")
        if received_api_key != expected_api_key:
            return JSONResponse(status_code=401, content={"detail": "Unauthorized"})

    return await call_next(request)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"type": err.get("type"), "loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg")}
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"errors": errors})


@app.exception_handler(TutorError)
async def tutor_error_handler(request: Request, exc: TutorError) -> JSONResponse:
    if isinstance(exc, ValidationError):
        return JSONResponse(status_code=400, content={"errors": exc.errors})
    request_id = str(uuid.uuid4())
    logger.error(
        "request failed: %s",
        exc,
        extra={"request_id": request_id, "stage": exc.stage, "path": request.url.path},
    )
    return JSONResponse(status_code=500, content={"error": exc.public_message, "request_id": request_id})


app.include_router(tutor_router)


@app.on_event("startup")
def on_startup() -> None:
    configure_logging(settings.log_level)


@app.get("/health", tags=["meta"])
def health() -> dict[str, bool | str]:
    openai_api_key = os.getenv("OPENAI_API_KEY", "")
    return {
        "ok": True,
        "openai_configured": bool(openai_api_key.strip()),
        "model": settings.openai_model,
        "mock": os.getenv("OPENAI_MOCK", "").strip() == "1",
    }
