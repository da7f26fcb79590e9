"""
Clause classification and per-clause risk scoring.

Each clause is matched against its language profile's ordered clause rules
(first rule reaching its threshold wins, otherwise "Other"), then scored by
a bounded linear model: the clause type's base weight plus local signals for
unlimited liability, missing or present caps, vague qualifiers and one-sided
language, clamped to [0, 1].
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from legal_engine.config import ScoringConfig
from legal_engine.models.schemas import Clause, ClauseSpan, RiskLevel
from legal_engine.services.clause_segmenter import ClauseCandidate
from legal_engine.services.language_profiles import LanguageProfile, OTHER_CLAUSE_TYPE

logger = logging.getLogger(__name__)

SCORE_PRECISION = 4


@dataclass
class ClauseSignals:
    """Local risk signals found in one clause."""
    unlimited_liability: List[str] = field(default_factory=list)
    liability_cap: List[str] = field(default_factory=list)
    ambiguous_terms: List[str] = field(default_factory=list)
    unilateral_terms: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "unlimited_liability": self.unlimited_liability,
            "liability_cap": self.liability_cap,
            "ambiguous_terms": self.ambiguous_terms,
            "unilateral_terms": self.unilateral_terms,
        }


@dataclass
class ScoredClause:
    """A clause candidate with its type, signals and risk score."""
    candidate: ClauseCandidate
    clause_type: str
    confidence: float
    signals: ClauseSignals
    risk_score: float

    @property
    def risk_level(self) -> RiskLevel:
        return RiskLevel.from_score(self.risk_score)

    @property
    def clause_id(self) -> str:
        return f"clause-{self.candidate.ordinal:03d}"

    def to_clause(self) -> Clause:
        return Clause(
            id=self.clause_id,
            text=self.candidate.text,
            clause_type=self.clause_type,
            risk_score=self.risk_score,
            span=ClauseSpan(start=self.candidate.start, end=self.candidate.end),
            section=self.candidate.heading,
        )


def clamp(value: float, lower: float = 0.0, upper: float = 1.0) -> float:
    return max(lower, min(upper, value))


class ClauseClassifier:
    """Rule-based clause classifier and risk scorer."""

    def __init__(self, config: ScoringConfig):
        self.config = config

    def detect_signals(self, text: str, profile: LanguageProfile) -> ClauseSignals:
        return ClauseSignals(
            unlimited_liability=profile.find_terms(profile.unlimited_liability, text),
            liability_cap=profile.find_terms(profile.liability_cap, text),
            ambiguous_terms=profile.find_terms(profile.ambiguous_terms, text),
            unilateral_terms=profile.find_terms(profile.unilateral_terms, text),
        )

    def score(self, clause_type: str, signals: ClauseSignals) -> float:
        """
        Combine the clause type's base weight with its local signals.

        Returns:
            Risk score in [0, 1], rounded to SCORE_PRECISION decimals
        """
        config = self.config
        base = config.base_weights.get(clause_type, config.base_weights[OTHER_CLAUSE_TYPE])

        adjustment = 0.0
        if signals.unlimited_liability:
            adjustment += config.unlimited_liability_weight
        if clause_type in config.cap_sensitive_types:
            if signals.liability_cap:
                adjustment -= config.cap_present_credit
            elif not signals.unlimited_liability:
                adjustment += config.missing_cap_weight
        ambiguity_hits = min(len(signals.ambiguous_terms), config.max_ambiguity_hits)
        adjustment += config.ambiguity_weight * ambiguity_hits
        if signals.unilateral_terms:
            adjustment += config.unilateral_weight

        return round(clamp(base + adjustment), SCORE_PRECISION)

    def classify(self, candidate: ClauseCandidate, profile: LanguageProfile) -> ScoredClause:
        clause_type, confidence = profile.classify(candidate.text)
        signals = self.detect_signals(candidate.text, profile)
        return ScoredClause(
            candidate=candidate,
            clause_type=clause_type,
            confidence=confidence,
            signals=signals,
            risk_score=self.score(clause_type, signals),
        )

    def classify_all(
        self,
        candidates: List[ClauseCandidate],
        profile: LanguageProfile
    ) -> List[ScoredClause]:
        """
        Classify and score every clause candidate, preserving order.

        Args:
            candidates: Segmented clauses in document order
            profile: Language profile supplying rules and signal patterns

        Returns:
            List of ScoredClause objects in the same order
        """
        scored = [self.classify(candidate, profile) for candidate in candidates]
        logger.debug(
            f"Classified {len(scored)} clauses: "
            f"{sum(1 for s in scored if s.clause_type != OTHER_CLAUSE_TYPE)} typed"
        )
        return scored
