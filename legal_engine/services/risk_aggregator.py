"""
Risk aggregation.

Two aggregate views of the same clause scores:

* the document risk score reported with an analysis: a length-weighted mean
  of clause scores, raised to a floor when any clause is critical so one
  dangerous clause cannot be diluted by boilerplate;
* the risk-factor breakdown: each configured factor takes the highest score
  among the clauses mapped to it, and the overall score is the weighted sum.
"""

import logging
from typing import Dict, List, Sequence

from legal_engine.config import AggregationConfig
from legal_engine.models.schemas import RiskFactor, RiskLevel, RiskScoreResult
from legal_engine.services.clause_classifier import SCORE_PRECISION, ScoredClause, clamp

logger = logging.getLogger(__name__)


class RiskAggregator:
    """Combines clause scores into document-level scores."""

    def __init__(self, config: AggregationConfig):
        self.config = config
        self._factor_by_type: Dict[str, str] = {
            clause_type: factor.name
            for factor in config.factors
            for clause_type in factor.clause_types
        }

    def document_score(self, clauses: Sequence[ScoredClause]) -> float:
        """
        Document risk score for an analysis.

        Returns:
            max(length-weighted mean, critical floor), in [0, 1]
        """
        if not clauses:
            return 0.0

        total_length = sum(max(1, len(c.candidate.text)) for c in clauses)
        weighted = sum(max(1, len(c.candidate.text)) * c.risk_score for c in clauses)
        mean = weighted / total_length

        floor = 0.0
        if any(c.risk_level is RiskLevel.CRITICAL for c in clauses):
            floor = self.config.critical_floor

        return round(clamp(max(mean, floor)), SCORE_PRECISION)

    def factor_scores(self, clauses: Sequence[ScoredClause]) -> Dict[str, float]:
        """Highest clause score per factor; 0.0 for factors with no clause."""
        scores = {factor.name: 0.0 for factor in self.config.factors}
        for clause in clauses:
            factor_name = self._factor_by_type.get(clause.clause_type)
            if factor_name is not None:
                scores[factor_name] = max(scores[factor_name], clause.risk_score)
        return scores

    def recommendations(self, scores: Dict[str, float]) -> List[str]:
        """
        Templated recommendations for factors at or above the trigger threshold.

        Ordered by descending factor weight; the closing counsel disclaimer is
        always last.
        """
        triggered = [
            factor for factor in self.config.factors
            if scores[factor.name] >= self.config.recommendation_threshold
        ]
        # sorted() is stable, so equal weights keep configuration order
        triggered = sorted(triggered, key=lambda factor: factor.weight, reverse=True)

        recommendations = [
            f"{factor.name} (score {scores[factor.name]:.2f}): {factor.recommendation}"
            for factor in triggered
        ]
        if not recommendations:
            recommendations.append(self.config.low_risk_recommendation)
        recommendations.append(self.config.closing_recommendation)
        return recommendations

    def breakdown(self, clauses: Sequence[ScoredClause], language: str) -> RiskScoreResult:
        """
        Build the weighted risk-factor breakdown.

        Args:
            clauses: Classified clauses of one document
            language: Language code used for scoring

        Returns:
            RiskScoreResult with factors in configuration order
        """
        scores = self.factor_scores(clauses)
        risk_factors = [
            RiskFactor(
                factor_name=factor.name,
                weight=factor.weight,
                score=scores[factor.name],
                description=factor.description,
            )
            for factor in self.config.factors
        ]
        overall = round(
            clamp(sum(factor.weight * factor.score for factor in risk_factors)),
            SCORE_PRECISION
        )

        logger.debug(f"Risk breakdown: overall={overall} factors={scores}")

        return RiskScoreResult(
            overall_score=overall,
            risk_level=RiskLevel.from_score(overall),
            risk_factors=risk_factors,
            recommendations=self.recommendations(scores),
            language=language,
        )
