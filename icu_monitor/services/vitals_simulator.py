"""
Synthetic vitals generation for the demo dashboard.

Each reading is the previous one (or a default baseline) nudged by a bounded
uniform perturbation. The random source is injected so tests can pin the
sequence.
"""

import math
import random
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Protocol

import structlog

from icu_monitor.domain.models import CHANNEL_ORDER, VitalChannel, VitalsSnapshot

logger = structlog.get_logger(__name__)


class RandomSource(Protocol):
    """Anything producing uniform floats in [0, 1), e.g. random.Random."""

    def random(self) -> float: ...


DEFAULT_BASELINE: Mapping[VitalChannel, float] = MappingProxyType(
    {
        VitalChannel.HEART_RATE: 75,
        VitalChannel.BLOOD_PRESSURE_SYSTOLIC: 120,
        VitalChannel.BLOOD_PRESSURE_DIASTOLIC: 80,
        VitalChannel.OXYGEN_SATURATION: 98,
        VitalChannel.TEMPERATURE: 37,
        VitalChannel.RESPIRATORY_RATE: 16,
    }
)

# Full width of the perturbation; a reading moves at most spread / 2 either way
CHANNEL_SPREAD: Mapping[VitalChannel, float] = MappingProxyType(
    {
        VitalChannel.HEART_RATE: 15,
        VitalChannel.BLOOD_PRESSURE_SYSTOLIC: 15,
        VitalChannel.BLOOD_PRESSURE_DIASTOLIC: 10,
        VitalChannel.OXYGEN_SATURATION: 2,
        VitalChannel.TEMPERATURE: 0.5,
        VitalChannel.RESPIRATORY_RATE: 4,
    }
)

ONE_DECIMAL_CHANNELS = frozenset({VitalChannel.OXYGEN_SATURATION, VitalChannel.TEMPERATURE})

Baseline = VitalsSnapshot | Mapping[VitalChannel | str, float | None]


def round_half_up(value: float, decimals: int = 0) -> float:
    """Round halves toward +inf (2.5 -> 3, -2.5 -> -2), unlike round()."""
    factor = 10**decimals
    return math.floor(value * factor + 0.5) / factor


def resolve_baseline(baseline: Baseline | None) -> dict[VitalChannel, float]:
    """Fill channels missing from a partial baseline with the defaults."""
    if baseline is None:
        return dict(DEFAULT_BASELINE)
    if isinstance(baseline, VitalsSnapshot):
        baseline = baseline.channel_values()

    provided: dict[VitalChannel, float] = {}
    for key, value in baseline.items():
        try:
            channel = VitalChannel(key)
        except ValueError:
            continue  # unknown channels carry no baseline
        if value is None:
            continue
        if not math.isfinite(value):
            raise ValueError(f"Baseline {channel.value} must be a finite number, got {value!r}")
        provided[channel] = value

    return {channel: provided.get(channel, DEFAULT_BASELINE[channel]) for channel in CHANNEL_ORDER}


class VitalsSimulator:
    """Generates plausible next readings from a baseline."""

    def __init__(self, random_source: RandomSource | None = None, seed: int | None = None) -> None:
        if random_source is not None and seed is not None:
            raise ValueError("Pass either random_source or seed, not both")
        self.random_source: RandomSource = random_source or random.Random(seed)
        self.logger = logger.bind(component="vitals_simulator")

    def generate(self, baseline: Baseline | None = None) -> VitalsSnapshot:
        """
        Produce one reading.

        One uniform draw is taken per channel, in reporting order.
        """
        bases = resolve_baseline(baseline)
        values: dict[str, float] = {}

        for channel in CHANNEL_ORDER:
            drift = (self.random_source.random() - 0.5) * CHANNEL_SPREAD[channel]
            decimals = 1 if channel in ONE_DECIMAL_CHANNELS else 0
            values[channel.value] = round_half_up(bases[channel] + drift, decimals)

        snapshot = VitalsSnapshot(**values)
        self.logger.debug("vitals_generated", **values)
        return snapshot

    def stream(
        self, baseline: Baseline | None = None, count: int | None = None
    ) -> Iterator[VitalsSnapshot]:
        """
        Yield successive readings, each one the baseline for the next.

        Runs forever when count is None; the caller decides the cadence.
        """
        if count is not None and count < 0:
            raise ValueError(f"count must be non-negative, got {count}")

        current = baseline
        produced = 0
        while count is None or produced < count:
            snapshot = self.generate(current)
            yield snapshot
            current = snapshot
            produced += 1
