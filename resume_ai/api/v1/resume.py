import asyncio
import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Header, Request

from resume_ai.ai.types import GenerativeClient
from resume_ai.core.rate_limit import rate_limit
from resume_ai.core.security import check_api_key
from resume_ai.schemas.resume import AnalyzeRequest, AnalyzeResponse, ResponseMetadata
from resume_ai.services.resume_service import run_resume_analysis

router = APIRouter()
logger = logging.getLogger(__name__)


def get_generative_client(request: Request) -> GenerativeClient | None:
    return getattr(request.app.state, "generative_client", None)


def _auth(x_api_key: str | None = Header(default=None, alias="X-API-Key")) -> None:
    check_api_key(x_api_key)


@router.post(
    "/resume/analyze",
    response_model=AnalyzeResponse,
    response_model_exclude_none=True,
    summary="Analyze a resume",
    description="Score a resume against ATS heuristics and suggest improved bullet points.",
)
@rate_limit()
async def analyze_resume_endpoint(
    request: Request,
    payload: AnalyzeRequest,
    client: GenerativeClient | None = Depends(get_generative_client),
    _: None = Depends(_auth),
):
    started = time.perf_counter()
    data = await asyncio.to_thread(run_resume_analysis, payload, client)
    return AnalyzeResponse(
        success=True,
        data=data,
        metadata=ResponseMetadata(
            processing_time_ms=int((time.perf_counter() - started) * 1000),
            timestamp=datetime.now(timezone.utc),
        ),
    )
