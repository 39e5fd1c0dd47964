"""Aggregation of channel tiers into a bounded risk score."""

from icu_monitor.domain.models import ClassificationResult, RiskAssessment, Tier

TIER_CONTRIBUTION: dict[Tier, int] = {
    Tier.CRITICAL: 30,
    Tier.ABNORMAL: 15,
    Tier.NORMAL: 0,
}

MAX_RISK_SCORE = 100
BASE_CONFIDENCE = 0.75
CONFIDENCE_PER_CRITICAL = 0.05
MAX_CONFIDENCE = 0.99


def aggregate_risk(classification: ClassificationResult) -> RiskAssessment:
    """
    Sum channel contributions and derive a confidence value.

    Confidence grows with the number of critical channels and is capped
    below certainty.
    """
    tiers = list(classification.values())
    critical_count = tiers.count(Tier.CRITICAL)
    abnormal_count = tiers.count(Tier.ABNORMAL)
    total_score = sum(TIER_CONTRIBUTION[tier] for tier in tiers)

    return RiskAssessment(
        total_score=total_score,
        risk_score=min(total_score, MAX_RISK_SCORE),
        critical_count=critical_count,
        abnormal_count=abnormal_count,
        confidence=min(BASE_CONFIDENCE + CONFIDENCE_PER_CRITICAL * critical_count, MAX_CONFIDENCE),
    )
