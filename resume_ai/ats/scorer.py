from __future__ import annotations

import math
from dataclasses import dataclass, field

from resume_ai.ats import patterns
from resume_ai.ats.text_positions import (
    extract_lines,
    find_unparsable_characters,
    find_weak_action_verbs,
)
from resume_ai.core.scoring import get_scoring_value
from resume_ai.schemas.analysis import (
    ConfidenceLevel,
    FormattingReport,
    Issue,
    LengthReport,
    ReadabilityReport,
    ScoreResult,
    StructureReport,
    TextEvidence,
)
from resume_ai.taxonomy import KeywordTable, get_default_keyword_table


def _rule(path: str, default):
    return get_scoring_value(path, default)


def clamp_score(value: int) -> int:
    return max(0, min(100, value))


def confidence_for(score: int) -> ConfidenceLevel:
    if score > _rule("confidence.high_above", 80):
        return "high"
    if score > _rule("confidence.medium_above", 60):
        return "medium"
    return "low"


def recommendation_for(score: int, missing_keywords: list[str]) -> str:
    hint = ", ".join(missing_keywords[: _rule("recommendation.keyword_hint_count", 3)])
    if score >= _rule("recommendation.great_min_score", 80):
        return f"Great! Your resume scores {score}/100. Focus on adding more keywords: {hint}"
    if score >= _rule("recommendation.good_min_score", 60):
        return f"Good foundation! Your resume scores {score}/100. Address issues above and add: {hint}"
    return f"Your resume needs attention ({score}/100). Follow recommendations above"


@dataclass
class _ScoringPass:
    """Running state for one scoring call. The score is left unclamped until the end."""

    score: int
    issues: list[Issue] = field(default_factory=list)

    def penalize(self, rule: str, *, kind: str, code: str, message: str, fix: str) -> None:
        self.issues.append(
            Issue(
                type=kind,
                message=message,
                severity=_rule(f"{rule}.severity", 3),
                fix_suggestion=fix,
                code=code,
            )
        )
        self.score -= _rule(f"{rule}.penalty", 0)


class ATSScorer:
    def __init__(self, keyword_table: KeywordTable | None = None) -> None:
        self._keywords = keyword_table or get_default_keyword_table()

    def keyword_pool(self, job_role: str, company: str) -> list[str]:
        return [
            *self._keywords.role_keywords(job_role),
            *self._keywords.role_ats_keywords(job_role),
            *self._keywords.company_keywords(company),
        ]

    def score(
        self,
        resume_text: str,
        job_role: str,
        company: str,
        job_description: str | None = None,
    ) -> ScoreResult:
        # job_description feeds the improvement prompt, not the heuristic pool
        text = resume_text or ""
        lowered = text.lower()
        state = _ScoringPass(score=_rule("base_score", 100))

        words = patterns.word_count(text)
        min_words = _rule("length.min_words", 200)
        max_words = _rule("length.max_words", 1500)
        if words < min_words:
            state.penalize(
                "length.too_short",
                kind="error",
                code="too-short",
                message="Resume too short - may lack detail needed by ATS",
                fix="Add more descriptions and achievements",
            )
        if words > max_words:
            state.penalize(
                "length.too_long",
                kind="warning",
                code="too-long",
                message=f"Resume is {words} words - exceeds optimal 1-2 page length",
                fix="Reduce content to 1-1.5 pages",
            )

        required_sections = list(_rule("sections.required", ["experience", "education", "skills"]))
        found_sections = [section for section in required_sections if section in lowered]
        if len(found_sections) < len(required_sections):
            missing_sections = [section for section in required_sections if section not in found_sections]
            state.penalize(
                "sections.missing",
                kind="error",
                code="missing-sections",
                message=f"Missing key sections: {', '.join(missing_sections)}",
                fix="Add missing sections: Experience, Education, Skills",
            )

        lines = extract_lines(text)
        has_header = bool(lines) and patterns.looks_like_name(
            lines[0].strip(),
            _rule("contact.name_line_min_chars", 5),
            _rule("contact.name_line_max_chars", 50),
        )
        if not patterns.has_email(text):
            state.penalize(
                "contact.no_email",
                kind="error",
                code="no-email",
                message="No email address found in resume",
                fix="Add your email address at the top of the resume",
            )
        if not patterns.has_phone(text):
            state.penalize(
                "contact.no_phone",
                kind="error",
                code="no-phone",
                message="No phone number found in resume",
                fix="Add your phone number in contact information",
            )

        matched: list[str] = []
        missing: list[str] = []
        for keyword in self.keyword_pool(job_role, company):
            (matched if keyword.lower() in lowered else missing).append(keyword)
        if len(matched) < _rule("keywords.min_matches", 5):
            state.penalize(
                "keywords.weak",
                kind="warning",
                code="weak-keywords",
                message=f"Only {len(matched)} key job-related keywords found",
                fix=f"Add more keywords: {', '.join(missing[:5])}",
            )
        else:
            state.score += len(matched) * _rule("keywords.per_match_bonus", 2)

        if patterns.has_action_verb(text, _rule("action_verbs.verbs", [])):
            state.score += _rule("action_verbs.bonus", 10)
        else:
            state.penalize(
                "action_verbs.missing",
                kind="warning",
                code="no-action-verbs",
                message="No strong action verbs detected in resume",
                fix="Start bullet points with action verbs: Led, Developed, Implemented, etc.",
            )

        if patterns.has_metrics(text):
            state.score += _rule("metrics.bonus", 15)
        else:
            state.penalize(
                "metrics.missing",
                kind="warning",
                code="no-metrics",
                message="No quantified achievements found (metrics, percentages, numbers)",
                fix="Add specific metrics: '30% improvement', '$100K saved', etc.",
            )

        final_score = clamp_score(state.score)
        limit = _rule("keywords.report_limit", 10)
        return ScoreResult(
            ats_score=final_score,
            raw_score=state.score,
            issues=state.issues,
            missing_keywords=missing[:limit],
            matched_keywords=matched[:limit],
            formatting=build_formatting_report(
                text,
                words=words,
                has_header=has_header,
                sections_found=len(found_sections),
                sections_required=len(required_sections),
            ),
            recommendation=recommendation_for(final_score, missing),
            confidence_level=confidence_for(final_score),
            evidence=TextEvidence(
                weak_action_verbs=find_weak_action_verbs(text),
                unparsable_characters=find_unparsable_characters(text),
            ),
            analysis_source="heuristic",
        )


def build_formatting_report(
    text: str,
    *,
    words: int,
    has_header: bool,
    sections_found: int,
    sections_required: int,
) -> FormattingReport:
    min_words = _rule("length.min_words", 200)
    max_words = _rule("length.max_words", 1500)
    pages = math.ceil(words / _rule("length.words_per_page", 250))
    if words < min_words:
        length_label = "too short"
    elif words > max_words:
        length_label = "too long"
    else:
        length_label = "optimal"

    complex_words = patterns.count_complex_words(text, _rule("readability.complex_word_min_chars", 12))
    readable = complex_words < words * _rule("readability.max_complex_ratio", 0.1)
    return FormattingReport(
        length=LengthReport(
            pages=pages,
            words=words,
            optimal=min_words <= words <= max_words,
            feedback=f"{words} words ({pages} pages) - {length_label}",
        ),
        structure=StructureReport(
            has_header=has_header,
            has_sections=sections_found >= sections_required,
            bullet_points=patterns.count_bullet_points(text),
            feedback=f"{sections_found}/{sections_required} required sections found",
        ),
        readability=ReadabilityReport(
            complex_words=complex_words,
            avg_word_length=patterns.average_word_length(text),
            optimal=readable,
            feedback=f"Readability: {'Good' if readable else 'Could be improved'}",
        ),
    )


def score_resume(
    resume_text: str,
    job_role: str,
    company: str,
    job_description: str | None = None,
) -> ScoreResult:
    return ATSScorer().score(resume_text, job_role, company, job_description)
