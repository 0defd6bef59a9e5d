from __future__ import annotations

import logging
import time
import traceback
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from resume_ai.core.config import settings
from resume_ai.core.errors import ResumeAIError
from resume_ai.schemas.resume import AnalyzeResponse, ApiError, ResponseMetadata

logger = logging.getLogger(__name__)


def _elapsed_ms(request: Request) -> int:
    started = getattr(request.state, "started_at", None)
    if started is None:
        return 0
    return int((time.perf_counter() - started) * 1000)


def error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: str | None = None,
) -> JSONResponse:
    body = AnalyzeResponse(
        success=False,
        error=ApiError(code=code, message=message, details=details),
        metadata=ResponseMetadata(processing_time_ms=_elapsed_ms(request), timestamp=datetime.now(timezone.utc)),
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
    )


async def resume_ai_error_handler(request: Request, exc: ResumeAIError) -> JSONResponse:
    logger.info("request_rejected code=%s path=%s: %s", exc.code, request.url.path, exc)
    return error_response(request, exc.status_code, exc.code, str(exc))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = None if settings.is_production else str(exc.errors())
    return error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "INVALID_REQUEST",
        "Request body is missing or malformed",
        details,
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ResumeAIError, resume_ai_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    @app.middleware("http")
    async def internal_error_guard(request: Request, call_next):
        request.state.started_at = time.perf_counter()
        try:
            return await call_next(request)
        except Exception as exc:  # noqa: BLE001 - last-resort envelope
            logger.exception("request_failed path=%s", request.url.path)
            message = "An error occurred during analysis"
            details = None
            if not settings.is_production:
                message = str(exc) or message
                details = "".join(traceback.format_exception(exc))
            return error_response(
                request,
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "INTERNAL_ERROR",
                message,
                details,
            )
