"""
Rule-based prediction synthesis.

A prediction starts as generic deterioration with checklist-style
recommendations. An ordered set of clinical patterns may then replace both
the category and the recommendation text; the first matching pattern wins.
"""

from collections.abc import Callable
from dataclasses import dataclass

import structlog

from icu_monitor.domain.models import (
    ClassificationResult,
    Prediction,
    PredictionType,
    RiskAssessment,
    Tier,
    VitalChannel,
    VitalsSnapshot,
)

logger = structlog.get_logger(__name__)

DEFAULT_RECOMMENDATION = "Continue current monitoring protocol"

# Checked in this order; each non-normal channel contributes one fragment
RECOMMENDATION_CHECKLIST: tuple[tuple[VitalChannel, str], ...] = (
    (VitalChannel.OXYGEN_SATURATION, "Increase oxygen supplementation"),
    (VitalChannel.HEART_RATE, "Monitor cardiac function closely"),
    (VitalChannel.TEMPERATURE, "Implement temperature management protocol"),
    (VitalChannel.BLOOD_PRESSURE_SYSTOLIC, "Adjust fluid and vasopressor management"),
)

_OUT_OF_RANGE = frozenset({Tier.ABNORMAL, Tier.CRITICAL})


@dataclass(frozen=True)
class PredictionRule:
    """A clinical pattern that overrides the generic deterioration prediction."""

    prediction_type: PredictionType
    recommendations: str
    matches: Callable[[VitalsSnapshot], bool]


def _below(value: float | None, bound: float) -> bool:
    return value is not None and value < bound


def _above(value: float | None, bound: float) -> bool:
    return value is not None and value > bound


# A channel missing from the reading never satisfies a condition
PREDICTION_RULES: tuple[PredictionRule, ...] = (
    PredictionRule(
        prediction_type=PredictionType.RESPIRATORY_DISTRESS,
        recommendations="Immediate oxygen therapy recommended. Consider respiratory support.",
        matches=lambda v: _below(v.oxygen_saturation, 90) and _above(v.heart_rate, 110),
    ),
    PredictionRule(
        prediction_type=PredictionType.SEPSIS_RISK,
        recommendations="Monitor for sepsis indicators. Blood cultures recommended.",
        matches=lambda v: _above(v.temperature, 38.5) and _above(v.heart_rate, 100),
    ),
    PredictionRule(
        prediction_type=PredictionType.HYPOTENSION,
        recommendations="Monitor fluid balance. Consider vasopressor support.",
        matches=lambda v: _below(v.blood_pressure_systolic, 90),
    ),
)


def compose_recommendations(classification: ClassificationResult) -> str:
    """Build the generic recommendation text from channel tiers."""
    fragments = [
        fragment
        for channel, fragment in RECOMMENDATION_CHECKLIST
        if classification.get(channel) in _OUT_OF_RANGE
    ]
    if not fragments:
        fragments.append(DEFAULT_RECOMMENDATION)
    return ". ".join(fragments) + "."


def match_rule(
    snapshot: VitalsSnapshot, rules: tuple[PredictionRule, ...] = PREDICTION_RULES
) -> PredictionRule | None:
    """Return the first rule whose pattern the snapshot matches."""
    return next((rule for rule in rules if rule.matches(snapshot)), None)


def synthesize_prediction(
    snapshot: VitalsSnapshot,
    classification: ClassificationResult,
    risk: RiskAssessment,
) -> Prediction | None:
    """
    Produce at most one prediction for a snapshot.

    Returns None when no channel contributed any risk.
    """
    if not risk.has_risk:
        return None

    prediction_type = PredictionType.DETERIORATION
    recommendations = compose_recommendations(classification)

    rule = match_rule(snapshot)
    if rule is not None:
        prediction_type = rule.prediction_type
        recommendations = rule.recommendations

    logger.debug(
        "prediction_synthesized",
        prediction_type=prediction_type.value,
        risk_score=risk.risk_score,
        confidence=risk.confidence,
        rule_matched=rule is not None,
    )

    return Prediction(
        prediction_type=prediction_type,
        risk_score=risk.risk_score,
        confidence=risk.confidence,
        recommendations=recommendations,
        factors=dict(classification),
    )
