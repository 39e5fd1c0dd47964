"""
Vital-signs analysis engine.

Pipeline for one snapshot:
1. Classify each channel against its bands
2. Raise an alert for every abnormal or critical channel
3. Aggregate tiers into a risk score and confidence
4. Synthesize at most one prediction

The engine holds nothing but a read-only range table, so one instance can be
shared freely between callers.
"""

from collections.abc import Mapping

import structlog

from icu_monitor.domain.models import VitalsAnalysis, VitalsSnapshot
from icu_monitor.domain.ranges import DEFAULT_RANGE_TABLE, RangeTable
from icu_monitor.services.alerts import generate_alerts
from icu_monitor.services.classifier import classify_snapshot
from icu_monitor.services.prediction import synthesize_prediction
from icu_monitor.services.risk import aggregate_risk

logger = structlog.get_logger(__name__)


class VitalsAnalysisEngine:
    """Turns a vitals snapshot into alerts and an optional prediction."""

    def __init__(self, range_table: RangeTable = DEFAULT_RANGE_TABLE) -> None:
        self.range_table = range_table
        self.logger = logger.bind(component="vitals_analysis_engine")

    def analyze(self, vitals: VitalsSnapshot | Mapping[str, float]) -> VitalsAnalysis:
        """
        Analyze one reading.

        Mappings are validated into a VitalsSnapshot first. Unknown keys are
        ignored and missing channels are skipped; non-finite readings raise a
        ValidationError.
        """
        snapshot = (
            vitals if isinstance(vitals, VitalsSnapshot) else VitalsSnapshot.model_validate(vitals)
        )

        classification = classify_snapshot(snapshot, self.range_table)
        alerts = generate_alerts(snapshot, classification)
        risk = aggregate_risk(classification)
        prediction = synthesize_prediction(snapshot, classification, risk)

        self.logger.debug(
            "vitals_analyzed",
            alert_count=len(alerts),
            critical_count=risk.critical_count,
            abnormal_count=risk.abnormal_count,
            risk_score=risk.risk_score,
            prediction_type=prediction.prediction_type.value if prediction else None,
        )

        return VitalsAnalysis(alerts=alerts, prediction=prediction, factors=classification)


default_engine = VitalsAnalysisEngine()


def analyze_vital_signs(vitals: VitalsSnapshot | Mapping[str, float]) -> VitalsAnalysis:
    """Analyze a reading with the shared default engine."""
    return default_engine.analyze(vitals)
