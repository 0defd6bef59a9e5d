from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field

from resume_ai.schemas.analysis import (
    AIImprovementResult,
    CamelModel,
    ImprovementSource,
    ScoreResult,
)


class ResumeFile(CamelModel):
    file_name: str = Field(min_length=1, max_length=255)
    file_type: str | None = Field(default=None, max_length=20)
    # base64 text, or raw byte values as sent by browser clients
    content: str | list[int]


class AnalyzeRequest(CamelModel):
    resume_text: str | None = None
    resume_file: ResumeFile | None = None
    job_role: str | None = Field(default=None, max_length=200)
    company: str | None = Field(default=None, max_length=200)
    job_description: str | None = None


class ParsedResume(CamelModel):
    text: str
    file_name: str = "resume"
    file_type: str = "text"
    characters: int = Field(default=0, ge=0)


class AnalysisSummary(CamelModel):
    current_score: int = Field(ge=0, le=100)
    potential_score: int = Field(ge=0, le=100)
    top_issues: list[str] = Field(default_factory=list, max_length=3)
    quick_wins: list[str] = Field(default_factory=list, max_length=3)


class AnalysisData(CamelModel):
    parsed_resume: ParsedResume
    ats_analysis: ScoreResult
    ai_improvements: AIImprovementResult
    ai_improvement_source: ImprovementSource
    ai_fallback_reason: str | None = None
    summary: AnalysisSummary


class ApiError(CamelModel):
    code: str
    message: str
    details: str | None = None


class ResponseMetadata(CamelModel):
    processing_time_ms: int = Field(default=0, ge=0)
    timestamp: datetime


class AnalyzeResponse(CamelModel):
    success: bool
    data: AnalysisData | None = None
    error: ApiError | None = None
    metadata: ResponseMetadata


class HealthResponse(CamelModel):
    status: Literal["healthy"]
    timestamp: datetime
    version: str
