"""
Tests for recommendation composition and prediction synthesis in
`icu_monitor/services/prediction.py`.

Covers:
- Checklist ordering and the fallback sentence
- Rule precedence (first match wins)
- No prediction without risk
"""

import pytest

from icu_monitor.domain.models import PredictionType, Tier, VitalChannel, VitalsSnapshot
from icu_monitor.services.classifier import classify_snapshot
from icu_monitor.services.prediction import (
    PREDICTION_RULES,
    compose_recommendations,
    match_rule,
    synthesize_prediction,
)
from icu_monitor.services.risk import aggregate_risk


def _snapshot(**overrides: float) -> VitalsSnapshot:
    values = {
        "heart_rate": 75,
        "blood_pressure_systolic": 120,
        "blood_pressure_diastolic": 80,
        "oxygen_saturation": 98,
        "temperature": 37,
        "respiratory_rate": 16,
    }
    values.update(overrides)
    return VitalsSnapshot(**values)


def _predict(snapshot: VitalsSnapshot):
    classification = classify_snapshot(snapshot)
    return synthesize_prediction(snapshot, classification, aggregate_risk(classification))


class TestComposeRecommendations:
    def test_all_four_fragments_in_fixed_order(self) -> None:
        text = compose_recommendations(
            {
                VitalChannel.BLOOD_PRESSURE_SYSTOLIC: Tier.ABNORMAL,
                VitalChannel.TEMPERATURE: Tier.CRITICAL,
                VitalChannel.HEART_RATE: Tier.ABNORMAL,
                VitalChannel.OXYGEN_SATURATION: Tier.CRITICAL,
            }
        )

        assert text == (
            "Increase oxygen supplementation. "
            "Monitor cardiac function closely. "
            "Implement temperature management protocol. "
            "Adjust fluid and vasopressor management."
        )

    def test_fallback_when_no_checklist_channel_is_out_of_range(self) -> None:
        text = compose_recommendations(
            {
                VitalChannel.HEART_RATE: Tier.NORMAL,
                VitalChannel.BLOOD_PRESSURE_DIASTOLIC: Tier.CRITICAL,
                VitalChannel.RESPIRATORY_RATE: Tier.ABNORMAL,
            }
        )
        assert text == "Continue current monitoring protocol."

    def test_single_fragment(self) -> None:
        assert (
            compose_recommendations({VitalChannel.HEART_RATE: Tier.CRITICAL})
            == "Monitor cardiac function closely."
        )


class TestRules:
    def test_rules_are_ordered(self) -> None:
        assert [r.prediction_type for r in PREDICTION_RULES] == [
            PredictionType.RESPIRATORY_DISTRESS,
            PredictionType.SEPSIS_RISK,
            PredictionType.HYPOTENSION,
        ]

    def test_first_matching_rule_wins(self) -> None:
        snapshot = _snapshot(
            oxygen_saturation=85, heart_rate=115, temperature=39, blood_pressure_systolic=85
        )

        rule = match_rule(snapshot)

        assert rule is not None
        assert rule.prediction_type == PredictionType.RESPIRATORY_DISTRESS

    def test_no_rule_for_normal_snapshot(self) -> None:
        assert match_rule(_snapshot()) is None

    @pytest.mark.parametrize(
        "overrides",
        [
            {"oxygen_saturation": 90, "heart_rate": 115},  # SpO2 must be below 90
            {"oxygen_saturation": 85, "heart_rate": 110},  # HR must exceed 110
            {"temperature": 38.5, "heart_rate": 105},  # temperature must exceed 38.5
            {"blood_pressure_systolic": 90},
        ],
    )
    def test_rule_thresholds_are_strict(self, overrides: dict[str, float]) -> None:
        assert match_rule(_snapshot(**overrides)) is None


class TestSynthesizePrediction:
    def test_no_prediction_without_risk(self) -> None:
        assert _predict(_snapshot()) is None

    def test_respiratory_distress(self) -> None:
        prediction = _predict(
            _snapshot(
                oxygen_saturation=85, heart_rate=115, temperature=39, blood_pressure_systolic=85
            )
        )

        assert prediction is not None
        assert prediction.prediction_type == PredictionType.RESPIRATORY_DISTRESS
        assert prediction.recommendations == (
            "Immediate oxygen therapy recommended. Consider respiratory support."
        )

    def test_sepsis_risk(self) -> None:
        prediction = _predict(_snapshot(temperature=38.8, heart_rate=105))

        assert prediction is not None
        assert prediction.prediction_type == PredictionType.SEPSIS_RISK
        assert prediction.recommendations == (
            "Monitor for sepsis indicators. Blood cultures recommended."
        )
        assert prediction.risk_score == 30
        assert prediction.confidence == pytest.approx(0.75)

    def test_hypotension(self) -> None:
        prediction = _predict(_snapshot(blood_pressure_systolic=85))

        assert prediction is not None
        assert prediction.prediction_type == PredictionType.HYPOTENSION
        assert prediction.recommendations == "Monitor fluid balance. Consider vasopressor support."

    def test_deterioration_uses_composed_recommendations(self) -> None:
        prediction = _predict(_snapshot(oxygen_saturation=93, temperature=38.0))

        assert prediction is not None
        assert prediction.prediction_type == PredictionType.DETERIORATION
        assert prediction.recommendations == (
            "Increase oxygen supplementation. Implement temperature management protocol."
        )

    def test_deterioration_with_fallback_text(self) -> None:
        prediction = _predict(_snapshot(respiratory_rate=24))

        assert prediction is not None
        assert prediction.prediction_type == PredictionType.DETERIORATION
        assert prediction.recommendations == "Continue current monitoring protocol."
        assert prediction.risk_score == 15

    def test_factors_include_normal_channels(self) -> None:
        prediction = _predict(_snapshot(heart_rate=130))

        assert prediction is not None
        assert len(prediction.factors) == 6
        assert prediction.factors[VitalChannel.HEART_RATE] == Tier.CRITICAL
        assert prediction.factors[VitalChannel.TEMPERATURE] == Tier.NORMAL
