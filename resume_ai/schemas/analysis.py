from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

IssueType = Literal["error", "warning"]
ConfidenceLevel = Literal["high", "medium", "low"]
AnalysisSource = Literal["heuristic", "model"]
ImprovementSource = Literal["model", "fallback"]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Issue(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    type: IssueType
    message: str
    severity: int = Field(ge=1, le=5)
    fix_suggestion: str
    code: str = ""


class TextPosition(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    phrase: str
    start_index: int = Field(ge=0)
    end_index: int = Field(ge=0)
    line_number: int = Field(ge=1)
    confidence: float = Field(ge=0.0, le=1.0)


class LengthReport(CamelModel):
    pages: int = 0
    words: int = 0
    optimal: bool = False
    feedback: str = ""


class StructureReport(CamelModel):
    has_header: bool = False
    has_sections: bool = False
    bullet_points: int = 0
    feedback: str = ""


class ReadabilityReport(CamelModel):
    complex_words: int = 0
    avg_word_length: float = 0.0
    optimal: bool = False
    feedback: str = ""


class FormattingReport(CamelModel):
    length: LengthReport = Field(default_factory=LengthReport)
    structure: StructureReport = Field(default_factory=StructureReport)
    readability: ReadabilityReport = Field(default_factory=ReadabilityReport)


class TextEvidence(CamelModel):
    weak_action_verbs: list[TextPosition] = Field(default_factory=list)
    unparsable_characters: list[TextPosition] = Field(default_factory=list)


class ScoreResult(CamelModel):
    ats_score: int = Field(ge=0, le=100)
    # running total before the final clamp
    raw_score: int | None = None
    issues: list[Issue] = Field(default_factory=list)
    missing_keywords: list[str] = Field(default_factory=list, max_length=10)
    matched_keywords: list[str] = Field(default_factory=list, max_length=10)
    formatting: FormattingReport = Field(default_factory=FormattingReport)
    recommendation: str = ""
    confidence_level: ConfidenceLevel = "low"
    evidence: TextEvidence = Field(default_factory=TextEvidence)
    analysis_source: AnalysisSource = "heuristic"


class ImprovedBullet(CamelModel):
    original: str = ""
    improved: str = ""
    reasoning: str = "Improved for ATS compatibility"
    impact_score: int = 75


class ToneAnalysis(CamelModel):
    current: str = "mixed"
    suggestion: str = "Use more active voice and specific metrics"


class AIImprovementResult(CamelModel):
    improved_bullets: list[ImprovedBullet] = Field(default_factory=list)
    format_tips: list[str] = Field(default_factory=list)
    keyword_suggestions: list[str] = Field(default_factory=list)
    tone_analysis: ToneAnalysis = Field(default_factory=ToneAnalysis)
    estimated_improvement_score: int = 15


class ImprovementOutcome(CamelModel):
    """AI suggestions plus where they came from, so defaults are never mistaken for model output."""

    result: AIImprovementResult
    source: ImprovementSource
    reason: str | None = None

    @property
    def is_fallback(self) -> bool:
        return self.source == "fallback"
