from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from resume_ai.ai.types import GenerativeClient
from resume_ai.ats.scorer import ATSScorer, clamp_score, confidence_for
from resume_ai.schemas.analysis import FormattingReport, Issue, ScoreResult
from resume_ai.services.ai_improve import UnparsableResponseError, parse_json_object
from resume_ai.services.prompts import build_ats_review_prompt

logger = logging.getLogger(__name__)

_KEYWORD_LIMIT = 10


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)][:_KEYWORD_LIMIT]


def _issues(value: Any) -> list[Issue]:
    if not isinstance(value, list):
        return []
    issues: list[Issue] = []
    for item in value:
        try:
            issues.append(Issue.model_validate(item))
        except ValidationError:
            continue
    return issues


def coerce_model_review(raw: dict[str, Any], heuristic: ScoreResult) -> ScoreResult:
    """Turn a model-produced review into a ScoreResult, borrowing heuristic values for anything unusable."""
    raw_score = raw.get("atsScore")
    if isinstance(raw_score, (int, float)) and not isinstance(raw_score, bool):
        score = clamp_score(int(raw_score))
    else:
        score = heuristic.ats_score

    formatting = heuristic.formatting
    if isinstance(raw.get("formatting"), dict):
        try:
            formatting = FormattingReport.model_validate(raw["formatting"])
        except ValidationError:
            formatting = heuristic.formatting

    level = raw.get("confidenceLevel")
    recommendation = raw.get("recommendation")
    return ScoreResult(
        ats_score=score,
        raw_score=None,
        issues=_issues(raw.get("issues")),
        missing_keywords=_string_list(raw.get("missingKeywords")),
        matched_keywords=_string_list(raw.get("matchedKeywords")),
        formatting=formatting,
        recommendation=recommendation if isinstance(recommendation, str) else "",
        confidence_level=level if level in {"high", "medium", "low"} else confidence_for(score),
        evidence=heuristic.evidence,
        analysis_source="model",
    )


def analyze_resume(
    scorer: ATSScorer,
    resume_text: str,
    job_role: str,
    company: str,
    job_description: str | None = None,
    *,
    client: GenerativeClient | None = None,
    prefer_model: bool = False,
) -> ScoreResult:
    heuristic = scorer.score(resume_text, job_role, company, job_description)
    if not prefer_model or client is None:
        return heuristic

    try:
        content = client.generate(build_ats_review_prompt(resume_text, job_role, company, job_description))
        return coerce_model_review(parse_json_object(content), heuristic)
    except UnparsableResponseError as exc:
        logger.warning("resume_ai_ats_review_unparsable provider=%s: %s", client.name, exc)
    except Exception as exc:  # noqa: BLE001 - heuristic result stands in
        logger.warning("resume_ai_ats_review_failed provider=%s: %s", client.name, exc)
    return heuristic
