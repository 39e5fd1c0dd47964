"""Per-channel severity classification against reference bands."""

import math

from icu_monitor.domain.models import (
    CHANNEL_ORDER,
    ClassificationResult,
    Tier,
    VitalChannel,
    VitalsSnapshot,
)
from icu_monitor.domain.ranges import DEFAULT_RANGE_TABLE, RangeSpec, RangeTable


def classify(channel: VitalChannel | str, value: float, range_spec: RangeSpec) -> Tier:
    """
    Classify a single reading.

    Comparisons are strict, so a value sitting exactly on a bound belongs to
    the less severe tier.
    """
    if not math.isfinite(value):
        name = channel.value if isinstance(channel, VitalChannel) else channel
        raise ValueError(f"{name} reading must be a finite number, got {value!r}")

    if value < range_spec.critical_min or value > range_spec.critical_max:
        return Tier.CRITICAL
    if value < range_spec.normal_min or value > range_spec.normal_max:
        return Tier.ABNORMAL
    return Tier.NORMAL


def classify_snapshot(
    snapshot: VitalsSnapshot, range_table: RangeTable = DEFAULT_RANGE_TABLE
) -> ClassificationResult:
    """Classify every channel that is both present and covered by the table, in reporting order."""
    result: ClassificationResult = {}
    for channel in CHANNEL_ORDER:
        range_spec = range_table.lookup(channel)
        value = snapshot.value(channel)
        if range_spec is None or value is None:
            continue
        result[channel] = classify(channel, value, range_spec)
    return result
