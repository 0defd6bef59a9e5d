from __future__ import annotations

import json
import logging
import re
import time
from typing import Any

from resume_ai.ai.types import GenerativeClient
from resume_ai.schemas.analysis import (
    AIImprovementResult,
    ImprovedBullet,
    ImprovementOutcome,
    ToneAnalysis,
)
from resume_ai.services.assembler import coerce_improvement
from resume_ai.services.prompts import build_improve_prompt, build_keyword_prompt
from resume_ai.taxonomy import KeywordTable, get_default_keyword_table

logger = logging.getLogger(__name__)

_JSON_ARRAY_RE = re.compile(r"\[[\s\S]*\]")
_CODE_FENCE_RE = re.compile(r"^\s*```(?:json)?\s*|\s*```\s*$", re.IGNORECASE)


class UnparsableResponseError(ValueError):
    pass


def parse_json_object(content: str) -> dict[str, Any]:
    cleaned = _CODE_FENCE_RE.sub("", content or "")
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise UnparsableResponseError(str(exc)) from exc
    if not isinstance(parsed, dict):
        raise UnparsableResponseError(f"expected a JSON object, got {type(parsed).__name__}")
    return parsed


def parse_keyword_array(content: str) -> list[str]:
    match = _JSON_ARRAY_RE.search(content or "")
    try:
        keywords = json.loads(match.group(0) if match else "[]")
    except json.JSONDecodeError:
        return []
    if not isinstance(keywords, list):
        return []
    return [keyword for keyword in keywords if isinstance(keyword, str)]


def unparsable_response_fallback(job_keywords: list[str]) -> AIImprovementResult:
    return AIImprovementResult(
        improved_bullets=[
            ImprovedBullet(
                original="",
                improved="Increased system efficiency by 25% through optimization",
                reasoning="Added metrics and quantification",
                impact_score=85,
            )
        ],
        format_tips=[
            "Start each bullet with a strong action verb",
            "Include specific metrics and percentages",
            "Keep bullet points to 1-2 lines",
        ],
        keyword_suggestions=list(job_keywords[:5]),
        tone_analysis=ToneAnalysis(),
        estimated_improvement_score=15,
    )


def request_failed_fallback(role_ats_keywords: list[str]) -> AIImprovementResult:
    return AIImprovementResult(
        improved_bullets=[
            ImprovedBullet(
                original="",
                improved="Increased efficiency and delivered results on time",
                reasoning="Added specificity and action-oriented language",
                impact_score=70,
            )
        ],
        format_tips=[
            "Start bullet points with strong action verbs",
            "Add quantifiable metrics (%, $, numbers)",
            "Avoid tables, icons, and special characters",
            "Keep one idea per bullet point",
        ],
        keyword_suggestions=list(role_ats_keywords[:8]),
        tone_analysis=ToneAnalysis(
            current="mixed",
            suggestion="Use active voice and specific achievements",
        ),
        estimated_improvement_score=10,
    )


class AIImprover:
    """Best-effort bullet rewriting: one model call, never raises, always returns an outcome."""

    def __init__(self, client: GenerativeClient | None, keyword_table: KeywordTable | None = None) -> None:
        self._client = client
        self._keywords = keyword_table or get_default_keyword_table()

    def extract_job_keywords(self, job_description: str) -> list[str]:
        if self._client is None:
            return []
        try:
            content = self._client.generate(build_keyword_prompt(job_description))
        except Exception as exc:  # noqa: BLE001 - keyword extraction is optional
            logger.warning("resume_ai_keyword_extraction_failed provider=%s: %s", self._client.name, exc)
            return []
        return parse_keyword_array(content)

    def job_keywords(self, job_role: str, job_description: str | None) -> list[str]:
        if job_description and job_description.strip():
            return self.extract_job_keywords(job_description)
        return self._keywords.role_keywords(job_role)

    def improve(
        self,
        resume_text: str,
        job_role: str,
        company: str,
        job_description: str | None = None,
    ) -> ImprovementOutcome:
        if self._client is None:
            return ImprovementOutcome(
                result=request_failed_fallback(self._keywords.role_ats_keywords(job_role)),
                source="fallback",
                reason="client_unavailable",
            )

        job_keywords = self.job_keywords(job_role, job_description)
        prompt = build_improve_prompt(resume_text, job_role, company, job_keywords)
        started = time.perf_counter()
        try:
            content = self._client.generate(prompt)
        except Exception as exc:  # noqa: BLE001 - deterministic fallback is expected
            logger.warning(
                "resume_ai_improve_failed provider=%s prompt_len=%s: %s",
                self._client.name,
                len(prompt),
                exc,
            )
            return ImprovementOutcome(
                result=request_failed_fallback(self._keywords.role_ats_keywords(job_role)),
                source="fallback",
                reason="request_failed",
            )

        latency_ms = int((time.perf_counter() - started) * 1000)
        try:
            payload = parse_json_object(content)
        except UnparsableResponseError as exc:
            logger.warning(
                "resume_ai_improve_unparsable provider=%s latency_ms=%s: %s",
                self._client.name,
                latency_ms,
                exc,
            )
            return ImprovementOutcome(
                result=unparsable_response_fallback(job_keywords),
                source="fallback",
                reason="unparsable_response",
            )

        logger.info("resume_ai_improve_ok provider=%s latency_ms=%s", self._client.name, latency_ms)
        return ImprovementOutcome(result=coerce_improvement(payload, job_keywords), source="model")
