"""
Models package for the legal document analysis engine.

Pydantic schemas for engine results and data validation.
"""

from .schemas import (
    RiskLevel,
    Severity,
    DocumentType,
    ClauseSpan,
    Clause,
    Issue,
    RiskFactor,
    AnalysisResult,
    RiskScoreResult,
    Template,
    TemplateInfo,
    TemplateListResult,
    CompileResult,
    ErrorResponse,
)

__all__ = [
    "RiskLevel",
    "Severity",
    "DocumentType",
    "ClauseSpan",
    "Clause",
    "Issue",
    "RiskFactor",
    "AnalysisResult",
    "RiskScoreResult",
    "Template",
    "TemplateInfo",
    "TemplateListResult",
    "CompileResult",
    "ErrorResponse",
]
