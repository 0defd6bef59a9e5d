from .analysis import (
    AIImprovementResult,
    FormattingReport,
    ImprovedBullet,
    ImprovementOutcome,
    Issue,
    LengthReport,
    ReadabilityReport,
    ScoreResult,
    StructureReport,
    TextEvidence,
    TextPosition,
    ToneAnalysis,
)
from .resume import (
    AnalysisData,
    AnalysisSummary,
    AnalyzeRequest,
    AnalyzeResponse,
    ApiError,
    HealthResponse,
    ParsedResume,
    ResponseMetadata,
    ResumeFile,
)

__all__ = [
    "AIImprovementResult",
    "AnalysisData",
    "AnalysisSummary",
    "AnalyzeRequest",
    "AnalyzeResponse",
    "ApiError",
    "FormattingReport",
    "HealthResponse",
    "ImprovedBullet",
    "ImprovementOutcome",
    "Issue",
    "LengthReport",
    "ParsedResume",
    "ReadabilityReport",
    "ResponseMetadata",
    "ResumeFile",
    "ScoreResult",
    "StructureReport",
    "TextEvidence",
    "TextPosition",
    "ToneAnalysis",
]
