"""
Engine configuration.

All scoring coefficients, thresholds and factor weights live here so they can
be reviewed and tuned without touching the analysis code. Environment
variables override the operational settings (log level, page estimate,
clause length).
"""

import math
import os
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


WEIGHT_TOLERANCE = 1e-6


class PreprocessingConfig(BaseModel):
    """Normalization and size estimation settings."""
    model_config = ConfigDict(frozen=True)

    words_per_page: int = Field(default=500, ge=1)
    chars_per_page: int = Field(default=1200, ge=1)
    # Opening characters inspected when inferring the document type
    title_window: int = Field(default=300, ge=1)


class SegmentationConfig(BaseModel):
    """Clause segmentation settings."""
    model_config = ConfigDict(frozen=True)

    max_clause_chars: int = Field(default=800, ge=50)


class ScoringConfig(BaseModel):
    """Coefficients of the per-clause linear risk model."""
    model_config = ConfigDict(frozen=True)

    base_weights: Dict[str, float] = Field(default_factory=lambda: {
        "Indemnification": 0.45,
        "Liability": 0.45,
        "Intellectual Property": 0.40,
        "Termination": 0.30,
        "Data Protection": 0.30,
        "Confidentiality": 0.25,
        "Warranty": 0.25,
        "Payment": 0.20,
        "Jurisdiction": 0.15,
        "Force Majeure": 0.15,
        "Definitions": 0.05,
        "Other": 0.10,
    })
    unlimited_liability_weight: float = 0.35
    missing_cap_weight: float = 0.15
    cap_present_credit: float = 0.10
    ambiguity_weight: float = 0.05
    max_ambiguity_hits: int = Field(default=3, ge=0)
    unilateral_weight: float = 0.10
    cap_sensitive_types: Tuple[str, ...] = ("Liability", "Indemnification")

    @field_validator("base_weights")
    @classmethod
    def validate_base_weights(cls, v: Dict[str, float]) -> Dict[str, float]:
        """Base weights must be in [0, 1] and cover the fallback type."""
        if "Other" not in v:
            raise ValueError("base_weights must define 'Other'")
        for clause_type, weight in v.items():
            if not 0.0 <= weight <= 1.0:
                raise ValueError(f"base weight for {clause_type} must be in [0, 1]")
        return v


class FactorConfig(BaseModel):
    """A named risk factor of the aggregate breakdown."""
    model_config = ConfigDict(frozen=True)

    name: str
    weight: float = Field(..., ge=0, le=1)
    clause_types: Tuple[str, ...]
    description: str
    recommendation: str


def _default_factors() -> List[FactorConfig]:
    return [
        FactorConfig(
            name="Liability",
            weight=0.30,
            clause_types=("Liability", "Warranty"),
            description="Provisions limiting or expanding liability exposure.",
            recommendation="Negotiate liability cap to a fixed monetary amount.",
        ),
        FactorConfig(
            name="Indemnification",
            weight=0.25,
            clause_types=("Indemnification",),
            description="Obligations to compensate for losses or damages.",
            recommendation="Request mutual indemnification rather than one-sided obligation.",
        ),
        FactorConfig(
            name="Termination",
            weight=0.20,
            clause_types=("Termination",),
            description="Conditions and notice requirements for contract termination.",
            recommendation="Ensure termination notice periods are reasonable.",
        ),
        FactorConfig(
            name="IP Assignment",
            weight=0.15,
            clause_types=("Intellectual Property",),
            description="Transfer or licensing of intellectual property rights.",
            recommendation="Clarify IP ownership provisions.",
        ),
        FactorConfig(
            name="Confidentiality",
            weight=0.05,
            clause_types=("Confidentiality", "Data Protection"),
            description="Protection of confidential information and personal data.",
            recommendation="Confirm data retention periods meet regulatory requirements.",
        ),
        FactorConfig(
            name="Jurisdiction",
            weight=0.05,
            clause_types=("Jurisdiction",),
            description="Governing law, venue and dispute resolution forum.",
            recommendation="Verify jurisdiction and governing law aligns with your location.",
        ),
    ]


class AggregationConfig(BaseModel):
    """Document scoring and risk breakdown settings."""
    model_config = ConfigDict(frozen=True)

    factors: List[FactorConfig] = Field(default_factory=_default_factors)
    recommendation_threshold: float = Field(default=0.5, ge=0, le=1)
    critical_floor: float = Field(default=0.7, ge=0, le=1)
    low_risk_recommendation: str = "Document appears low risk. Standard review recommended."
    closing_recommendation: str = (
        "Engage qualified legal counsel before signing; this assessment is not legal advice."
    )

    @model_validator(mode="after")
    def check_factor_weights(self) -> "AggregationConfig":
        """Factor weights must sum to 1.0 and factor names must be unique."""
        total = math.fsum(factor.weight for factor in self.factors)
        if abs(total - 1.0) > WEIGHT_TOLERANCE:
            raise ValueError(f"factor weights must sum to 1.0, got {total}")
        names = [factor.name for factor in self.factors]
        if len(set(names)) != len(names):
            raise ValueError("factor names must be unique")
        return self


class EngineSettings(BaseModel):
    """Top-level engine settings."""
    model_config = ConfigDict(frozen=True)

    log_level: str = "INFO"
    log_json: bool = True
    preprocessing: PreprocessingConfig = Field(default_factory=PreprocessingConfig)
    segmentation: SegmentationConfig = Field(default_factory=SegmentationConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    aggregation: AggregationConfig = Field(default_factory=AggregationConfig)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return v.upper()

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "EngineSettings":
        """
        Build settings from environment variables.

        Reads LEGAL_ENGINE_LOG_LEVEL, LEGAL_ENGINE_LOG_JSON,
        LEGAL_ENGINE_WORDS_PER_PAGE and LEGAL_ENGINE_MAX_CLAUSE_CHARS.
        Unset variables keep their defaults. Numeric values are coerced and
        validated by pydantic.

        Raises:
            ValidationError: a variable holds an invalid value
        """
        if environ is None:
            getenv = os.getenv
        else:
            getenv = environ.get

        preprocessing = PreprocessingConfig(
            words_per_page=getenv("LEGAL_ENGINE_WORDS_PER_PAGE", "500")
        )
        segmentation = SegmentationConfig(
            max_clause_chars=getenv("LEGAL_ENGINE_MAX_CLAUSE_CHARS", "800")
        )
        log_json = getenv("LEGAL_ENGINE_LOG_JSON", "true").lower() in ("1", "true", "yes")

        return cls(
            log_level=getenv("LEGAL_ENGINE_LOG_LEVEL", "INFO"),
            log_json=log_json,
            preprocessing=preprocessing,
            segmentation=segmentation,
        )
