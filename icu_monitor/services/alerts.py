"""Conversion of non-normal classifications into dashboard alerts."""

from icu_monitor.domain.models import (
    CHANNEL_ORDER,
    Alert,
    AlertSeverity,
    AlertType,
    ClassificationResult,
    Tier,
    VitalChannel,
    VitalsSnapshot,
)
from icu_monitor.domain.ranges import display_name, format_reading, unit_for


def build_alert(channel: VitalChannel, value: float, tier: Tier) -> Alert | None:
    """Build the alert for one channel; normal readings produce none."""
    name = display_name(channel)
    reading = f"{format_reading(value)}{unit_for(channel)}"

    if tier == Tier.CRITICAL:
        return Alert(
            alert_type=AlertType.CRITICAL,
            severity=AlertSeverity.HIGH,
            title=f"Critical {name}",
            message=f"{name} is at critical level: {reading}",
        )
    if tier == Tier.ABNORMAL:
        return Alert(
            alert_type=AlertType.WARNING,
            severity=AlertSeverity.MEDIUM,
            title=f"Abnormal {name}",
            message=f"{name} is outside normal range: {reading}",
        )
    return None


def generate_alerts(snapshot: VitalsSnapshot, classification: ClassificationResult) -> list[Alert]:
    """
    One alert per abnormal or critical channel.

    Order follows CHANNEL_ORDER regardless of how the classification was built.
    """
    alerts: list[Alert] = []
    for channel in CHANNEL_ORDER:
        tier = classification.get(channel)
        value = snapshot.value(channel)
        if tier is None or value is None:
            continue
        alert = build_alert(channel, value, tier)
        if alert is not None:
            alerts.append(alert)
    return alerts
