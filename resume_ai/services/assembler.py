from __future__ import annotations

from typing import Any, Sequence

from resume_ai.schemas.analysis import (
    AIImprovementResult,
    ImprovedBullet,
    ImprovementOutcome,
    ScoreResult,
    ToneAnalysis,
)
from resume_ai.schemas.resume import AnalysisData, AnalysisSummary, ParsedResume

POTENTIAL_SCORE_GAIN = 20
SUMMARY_ITEM_LIMIT = 3

DEFAULT_FORMAT_TIPS = (
    "Use action verbs at the start of each bullet point",
    "Add numbers to show quantifiable impact",
    "Avoid tables, images, and special characters",
    "Keep consistent formatting throughout",
)
DEFAULT_ESTIMATED_IMPROVEMENT = 15
DEFAULT_IMPACT_SCORE = 75
DEFAULT_BULLET_REASONING = "Improved for ATS compatibility"


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _string_items(value: Any) -> list[str] | None:
    if not isinstance(value, list):
        return None
    return [item for item in value if isinstance(item, str)]


def _positive_int(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    number = int(value)
    return number if number > 0 else None


def _coerce_bullet(raw: Any) -> ImprovedBullet | None:
    if not isinstance(raw, dict):
        return None
    return ImprovedBullet(
        original=_text(raw.get("original")),
        improved=_text(raw.get("improved")),
        reasoning=_text(raw.get("reasoning")) or DEFAULT_BULLET_REASONING,
        impact_score=_positive_int(raw.get("impactScore")) or DEFAULT_IMPACT_SCORE,
    )


def coerce_improvement(raw: Any, job_keywords: Sequence[str]) -> AIImprovementResult:
    """Map an untrusted model payload onto AIImprovementResult, filling defaults for absent or mistyped fields."""
    payload = raw if isinstance(raw, dict) else {}

    bullets_raw = payload.get("improvedBullets")
    bullets = [
        bullet
        for bullet in (_coerce_bullet(item) for item in (bullets_raw if isinstance(bullets_raw, list) else []))
        if bullet is not None
    ]

    format_tips = _string_items(payload.get("formatTips"))
    keyword_suggestions = _string_items(payload.get("missingKeywords"))

    return AIImprovementResult(
        improved_bullets=bullets,
        format_tips=format_tips if format_tips else list(DEFAULT_FORMAT_TIPS),
        keyword_suggestions=keyword_suggestions if keyword_suggestions else list(job_keywords[:5]),
        tone_analysis=ToneAnalysis(),
        estimated_improvement_score=(
            _positive_int(payload.get("estimatedImprovement")) or DEFAULT_ESTIMATED_IMPROVEMENT
        ),
    )


def potential_score(ats_score: int) -> int:
    return min(100, ats_score + POTENTIAL_SCORE_GAIN)


def build_summary(score: ScoreResult, improvement: AIImprovementResult) -> AnalysisSummary:
    tips = improvement.format_tips or list(DEFAULT_FORMAT_TIPS)
    return AnalysisSummary(
        current_score=score.ats_score,
        potential_score=potential_score(score.ats_score),
        # detection order, not severity order
        top_issues=[issue.message for issue in score.issues[:SUMMARY_ITEM_LIMIT]],
        quick_wins=tips[:SUMMARY_ITEM_LIMIT],
    )


def assemble_analysis(
    parsed_resume: ParsedResume,
    score: ScoreResult,
    outcome: ImprovementOutcome,
) -> AnalysisData:
    return AnalysisData(
        parsed_resume=parsed_resume,
        ats_analysis=score,
        ai_improvements=outcome.result,
        ai_improvement_source=outcome.source,
        ai_fallback_reason=outcome.reason,
        summary=build_summary(score, outcome.result),
    )
