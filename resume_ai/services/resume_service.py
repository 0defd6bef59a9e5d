from __future__ import annotations

import logging

from resume_ai.ai.types import GenerativeClient
from resume_ai.ats.scorer import ATSScorer
from resume_ai.core.config import settings
from resume_ai.core.errors import MissingFieldsError, NoResumeError
from resume_ai.schemas.resume import AnalysisData, AnalyzeRequest, ParsedResume
from resume_ai.services.ai_improve import AIImprover
from resume_ai.services.assembler import assemble_analysis
from resume_ai.services.ats_analysis import analyze_resume
from resume_ai.services.file_extraction import (
    decode_file_content,
    extract_resume_text,
    resolve_file_type,
    validate_resume_filename,
)
from resume_ai.taxonomy import KeywordTable, get_default_keyword_table

logger = logging.getLogger(__name__)


def load_resume(payload: AnalyzeRequest, max_upload_bytes: int) -> ParsedResume:
    if payload.resume_file is not None:
        upload = payload.resume_file
        validate_resume_filename(upload.file_name)
        file_type = resolve_file_type(upload.file_name, upload.file_type)
        content = decode_file_content(upload.content, max_upload_bytes)
        text = extract_resume_text(content, file_type)
        return ParsedResume(
            text=text,
            file_name=upload.file_name,
            file_type=file_type,
            characters=len(text),
        )

    if payload.resume_text:
        return ParsedResume(text=payload.resume_text, characters=len(payload.resume_text))

    raise NoResumeError("Either resumeFile or resumeText is required")


def run_resume_analysis(
    payload: AnalyzeRequest,
    client: GenerativeClient | None,
    *,
    keyword_table: KeywordTable | None = None,
    prefer_model_review: bool | None = None,
    max_upload_bytes: int | None = None,
) -> AnalysisData:
    job_role = (payload.job_role or "").strip()
    company = (payload.company or "").strip()
    if not job_role or not company:
        raise MissingFieldsError("jobRole and company are required")

    parsed = load_resume(payload, max_upload_bytes or settings.max_upload_bytes)
    table = keyword_table or get_default_keyword_table()

    score = analyze_resume(
        ATSScorer(table),
        parsed.text,
        job_role,
        company,
        payload.job_description,
        client=client,
        prefer_model=settings.ats_model_analysis_enabled if prefer_model_review is None else prefer_model_review,
    )
    outcome = AIImprover(client, table).improve(parsed.text, job_role, company, payload.job_description)
    logger.info(
        "resume_analysis_done score=%s source=%s improvements=%s words=%s",
        score.ats_score,
        score.analysis_source,
        outcome.source,
        score.formatting.length.words,
    )
    return assemble_analysis(parsed, score, outcome)
