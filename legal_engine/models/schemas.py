"""
Pydantic schemas for the legal document analysis engine.

These models define the results returned by the engine facade: analyzed
clauses, structural issues, risk breakdowns, templates and compile results.
They are created fresh per request and never shared between requests.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# Inclusive lower bounds, highest first.
RISK_LEVEL_THRESHOLDS: Tuple[Tuple[float, str], ...] = (
    (0.7, "critical"),
    (0.5, "high"),
    (0.3, "medium"),
)


class RiskLevel(str, Enum):
    """Risk severity levels for clauses and documents."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @classmethod
    def from_score(cls, score: float) -> "RiskLevel":
        """Map a score in [0, 1] onto its level using the fixed thresholds."""
        for lower_bound, level in RISK_LEVEL_THRESHOLDS:
            if score >= lower_bound:
                return cls(level)
        return cls.LOW


class Severity(str, Enum):
    """Severity assigned to an issue by the rule that raised it."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class DocumentType(str, Enum):
    """Document categories understood by the issue detector."""
    CONTRACT = "contract"
    NDA = "nda"
    TERMS = "terms"
    PRIVACY_POLICY = "privacy_policy"
    LICENSE = "license"
    OTHER = "other"


class ClauseSpan(BaseModel):
    """End-exclusive character offsets into the normalized document text."""
    start: int = Field(..., ge=0, description="Offset of the first character")
    end: int = Field(..., ge=0, description="Offset one past the last character")

    @model_validator(mode="after")
    def check_order(self) -> "ClauseSpan":
        if self.end < self.start:
            raise ValueError("span end must not precede span start")
        return self


class Clause(BaseModel):
    """A contiguous, classified unit of document text."""
    id: str = Field(..., description="Request-scoped id, e.g. clause-001")
    text: str = Field(..., description="Clause text as it appears in the normalized document")
    clause_type: str = Field(..., description="Detected clause type (e.g. Liability)")
    risk_level: RiskLevel = Field(..., description="Level derived from risk_score")
    risk_score: float = Field(..., ge=0, le=1, description="Clause risk score (0-1)")
    span: ClauseSpan = Field(..., description="Position in the normalized text")
    section: Optional[str] = Field(None, description="Nearest section heading")

    @model_validator(mode="before")
    @classmethod
    def derive_risk_level(cls, data: Any) -> Any:
        """Fill risk_level from risk_score, rejecting inconsistent pairs."""
        if not isinstance(data, dict) or data.get("risk_score") is None:
            return data
        expected = RiskLevel.from_score(float(data["risk_score"]))
        given = data.get("risk_level")
        if given is None:
            return {**data, "risk_level": expected}
        if RiskLevel(given) is not expected:
            raise ValueError(
                f"risk_level {RiskLevel(given).value!r} is inconsistent with "
                f"risk_score {data['risk_score']} (expected {expected.value!r})"
            )
        return data


class Issue(BaseModel):
    """A structural finding about the document."""
    id: str = Field(..., description="Request-scoped id, e.g. issue-001")
    description: str = Field(..., description="Human-readable description")
    severity: Severity = Field(..., description="Severity assigned by the detecting rule")
    location: str = Field(..., description="Section reference, clause ordinal or 'document'")


class RiskFactor(BaseModel):
    """One weighted category of the aggregate risk breakdown."""
    factor_name: str = Field(..., description="Factor category (e.g. Liability)")
    weight: float = Field(..., ge=0, le=1, description="Configured weight of the factor")
    score: float = Field(..., ge=0, le=1, description="Highest clause score mapped to the factor")
    description: str = Field(..., description="What the factor measures")


class AnalysisResult(BaseModel):
    """Full clause-level analysis of a document."""
    risk_score: float = Field(..., ge=0, le=1, description="Document risk score (0-1)")
    risk_level: RiskLevel = Field(..., description="Level derived from risk_score")
    clauses: List[Clause] = Field(default_factory=list, description="Clauses in document order")
    issues: List[Issue] = Field(default_factory=list, description="Structural issues")
    language: str = Field(..., description="Language code used for analysis")
    word_count: int = Field(..., ge=0, description="Whitespace-delimited token count")
    page_count: int = Field(..., ge=1, description="Estimated page count")
    document_type: DocumentType = Field(..., description="Declared or inferred document type")

    @model_validator(mode="after")
    def check_risk_level(self) -> "AnalysisResult":
        if self.risk_level is not RiskLevel.from_score(self.risk_score):
            raise ValueError("risk_level is inconsistent with risk_score")
        return self


class RiskScoreResult(BaseModel):
    """Aggregate risk breakdown without clause or issue detail."""
    overall_score: float = Field(..., ge=0, le=1, description="Weighted sum of factor scores")
    risk_level: RiskLevel = Field(..., description="Level derived from overall_score")
    risk_factors: List[RiskFactor] = Field(default_factory=list, description="Weighted factors")
    recommendations: List[str] = Field(default_factory=list, description="Recommended actions")
    language: str = Field(..., description="Language code used for scoring")


class Template(BaseModel):
    """A parameterized document body with named placeholders."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Template identifier")
    name: str = Field(..., description="Display name")
    description: str = Field(..., description="Short description")
    body: str = Field(..., description="Body with {{placeholder}} markers")
    required_variables: Tuple[str, ...] = Field(
        default_factory=tuple,
        description="Required variables in declaration order"
    )
    language_support: Tuple[str, ...] = Field(
        default_factory=tuple,
        description="Language codes the template is offered in"
    )

    @field_validator("required_variables")
    @classmethod
    def validate_required_variables(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        """Reject duplicated required variables."""
        if len(set(v)) != len(v):
            raise ValueError("required_variables must be unique")
        return v

    def info(self) -> "TemplateInfo":
        return TemplateInfo(
            id=self.id,
            name=self.name,
            description=self.description,
            required_variables=list(self.required_variables),
            language_support=list(self.language_support),
        )


class TemplateInfo(BaseModel):
    """Catalog entry for a template (body omitted)."""
    id: str
    name: str
    description: str
    required_variables: List[str] = Field(default_factory=list)
    language_support: List[str] = Field(default_factory=list)


class TemplateListResult(BaseModel):
    """Ordered template catalog."""
    templates: List[TemplateInfo] = Field(default_factory=list)
    count: int = Field(..., ge=0, description="Number of templates listed")


class CompileResult(BaseModel):
    """Result of compiling a template with variable bindings."""
    template_id: str = Field(..., description="Compiled template")
    compiled_document: str = Field(..., description="Body after substitution")
    variables_applied: int = Field(..., ge=0, description="Placeholders substituted")
    missing_variables: List[str] = Field(
        default_factory=list,
        description="Required variables absent from the input, in declaration order"
    )


class ErrorResponse(BaseModel):
    """Standard error format handed to the external API layer."""
    error: str = Field(..., description="Error type or code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(
        None,
        description="Additional error details"
    )
