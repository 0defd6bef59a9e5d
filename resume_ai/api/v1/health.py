from datetime import datetime, timezone

from fastapi import APIRouter

from resume_ai.core.config import settings
from resume_ai.schemas.resume import HealthResponse

router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Check the health status of the application.",
)
async def health_check():
    return HealthResponse(status="healthy", timestamp=datetime.now(timezone.utc), version=settings.app_version)
