"""
Tests for domain models in `icu_monitor/domain/models.py`.

Covers:
- VitalsSnapshot validation: missing, non-finite, extra and out-of-domain values
- Immutability of snapshots and alerts
- Channel ordering
"""

import math

import pytest
from hypothesis import given
from hypothesis import strategies as st
from pydantic import ValidationError

from icu_monitor.domain.models import (
    CHANNEL_ORDER,
    Alert,
    AlertSeverity,
    AlertType,
    VitalChannel,
    VitalsAnalysis,
    VitalsSnapshot,
)

NORMAL_VITALS = {
    "heart_rate": 75,
    "blood_pressure_systolic": 120,
    "blood_pressure_diastolic": 80,
    "oxygen_saturation": 98,
    "temperature": 37,
    "respiratory_rate": 16,
}


def test_channel_order_is_declared_order() -> None:
    assert [c.value for c in CHANNEL_ORDER] == [
        "heart_rate",
        "blood_pressure_systolic",
        "blood_pressure_diastolic",
        "oxygen_saturation",
        "temperature",
        "respiratory_rate",
    ]


def test_channel_values_follow_channel_order() -> None:
    reordered = dict(reversed(list(NORMAL_VITALS.items())))
    snapshot = VitalsSnapshot.model_validate(reordered)

    assert list(snapshot.channel_values()) == list(CHANNEL_ORDER)
    assert snapshot.value(VitalChannel.TEMPERATURE) == 37.0


@given(value=st.floats(allow_nan=False, allow_infinity=False))
def test_any_finite_value_is_accepted(value: float) -> None:
    """Out-of-domain readings (negative, huge) are classified later, not rejected."""
    snapshot = VitalsSnapshot.model_validate({**NORMAL_VITALS, "heart_rate": value})
    assert snapshot.heart_rate == value


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_non_finite_values_are_rejected(bad: float) -> None:
    with pytest.raises(ValidationError):
        VitalsSnapshot.model_validate({**NORMAL_VITALS, "oxygen_saturation": bad})


def test_missing_channel_is_none_and_left_out_of_channel_values() -> None:
    partial = {k: v for k, v in NORMAL_VITALS.items() if k != "respiratory_rate"}

    snapshot = VitalsSnapshot.model_validate(partial)

    assert snapshot.respiratory_rate is None
    assert snapshot.value(VitalChannel.RESPIRATORY_RATE) is None
    assert VitalChannel.RESPIRATORY_RATE not in snapshot.channel_values()
    assert len(snapshot.channel_values()) == 5


def test_unknown_channels_are_ignored() -> None:
    snapshot = VitalsSnapshot.model_validate({**NORMAL_VITALS, "blood_glucose": 300})
    assert not hasattr(snapshot, "blood_glucose")


def test_snapshot_immutability() -> None:
    snapshot = VitalsSnapshot.model_validate(NORMAL_VITALS)
    with pytest.raises(ValueError, match="frozen"):
        snapshot.heart_rate = 130  # type: ignore[misc]


def test_alert_immutability() -> None:
    alert = Alert(
        alert_type=AlertType.WARNING,
        severity=AlertSeverity.MEDIUM,
        title="Abnormal Heart Rate",
        message="Heart Rate is outside normal range: 105 BPM",
    )
    with pytest.raises(ValueError, match="frozen"):
        alert.title = "changed"  # type: ignore[misc]


def test_requires_attention_only_for_critical_alerts() -> None:
    warning = Alert(
        alert_type=AlertType.WARNING,
        severity=AlertSeverity.MEDIUM,
        title="Abnormal Heart Rate",
        message="Heart Rate is outside normal range: 105 BPM",
    )
    critical = Alert(
        alert_type=AlertType.CRITICAL,
        severity=AlertSeverity.HIGH,
        title="Critical Heart Rate",
        message="Heart Rate is at critical level: 130 BPM",
    )

    assert VitalsAnalysis().requires_attention is False
    assert VitalsAnalysis(alerts=[warning]).requires_attention is False
    assert VitalsAnalysis(alerts=[warning, critical]).requires_attention is True
