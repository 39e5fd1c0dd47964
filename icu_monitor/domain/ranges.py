"""
Reference bands for vital-sign classification.

Key concepts:
- Normal band: inclusive range considered physiologically unremarkable
- Critical band: values strictly outside it need immediate attention
- Anything between the two bands is abnormal

The default table is validated when this module is imported, so a malformed
band fails at startup rather than on the first analysis call.
"""

import math
from collections.abc import Iterator, Mapping
from decimal import Decimal
from types import MappingProxyType

import structlog
from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from icu_monitor.domain.models import VitalChannel

logger = structlog.get_logger(__name__)


class RangeTableError(ValueError):
    """Raised when a range table is malformed. This is a configuration defect."""


class RangeSpec(BaseModel):
    """Normal and critical bands for one channel."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    normal_min: float
    normal_max: float
    critical_min: float
    critical_max: float

    @model_validator(mode="after")
    def bands_are_nested(self) -> "RangeSpec":
        """Ensure critical_min <= normal_min <= normal_max <= critical_max."""
        if not (self.critical_min <= self.normal_min <= self.normal_max <= self.critical_max):
            raise ValueError(
                "bands must satisfy critical_min <= normal_min <= normal_max <= critical_max, "
                f"got critical=({self.critical_min}, {self.critical_max}) "
                f"normal=({self.normal_min}, {self.normal_max})"
            )
        return self


class RangeTable:
    """
    Read-only mapping from channel to its bands.

    Channels missing from the table are not classified at all.
    """

    def __init__(
        self, ranges: Mapping[VitalChannel | str, RangeSpec | Mapping[str, float]]
    ) -> None:
        specs: dict[VitalChannel, RangeSpec] = {}
        for key, raw in ranges.items():
            try:
                channel = VitalChannel(key)
            except ValueError as e:
                raise RangeTableError(f"Unknown vital-sign channel in range table: {key!r}") from e

            try:
                spec = raw if isinstance(raw, RangeSpec) else RangeSpec.model_validate(raw)
            except ValidationError as e:
                raise RangeTableError(f"Invalid range for {channel.value}: {e}") from e

            specs[channel] = spec

        self._specs = MappingProxyType(specs)
        logger.debug("range_table_loaded", channels=[c.value for c in specs])

    def lookup(self, channel: VitalChannel | str) -> RangeSpec | None:
        """Return the bands for a channel, or None when it is not covered."""
        try:
            return self._specs.get(VitalChannel(channel))
        except ValueError:
            return None

    def __contains__(self, channel: object) -> bool:
        return self.lookup(channel) is not None  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[VitalChannel]:
        return iter(self._specs)

    def __len__(self) -> int:
        return len(self._specs)

    def as_dict(self) -> dict[str, dict[str, float]]:
        return {channel.value: spec.model_dump() for channel, spec in self._specs.items()}


DEFAULT_RANGES: Mapping[VitalChannel, Mapping[str, float]] = MappingProxyType(
    {
        VitalChannel.HEART_RATE: {
            "normal_min": 60,
            "normal_max": 100,
            "critical_min": 40,
            "critical_max": 120,
        },
        VitalChannel.BLOOD_PRESSURE_SYSTOLIC: {
            "normal_min": 90,
            "normal_max": 140,
            "critical_min": 80,
            "critical_max": 180,
        },
        VitalChannel.BLOOD_PRESSURE_DIASTOLIC: {
            "normal_min": 60,
            "normal_max": 90,
            "critical_min": 50,
            "critical_max": 110,
        },
        # SpO2 has no separate high critical bound
        VitalChannel.OXYGEN_SATURATION: {
            "normal_min": 95,
            "normal_max": 100,
            "critical_min": 90,
            "critical_max": 100,
        },
        VitalChannel.TEMPERATURE: {
            "normal_min": 36.5,
            "normal_max": 37.5,
            "critical_min": 35,
            "critical_max": 39,
        },
        VitalChannel.RESPIRATORY_RATE: {
            "normal_min": 12,
            "normal_max": 20,
            "critical_min": 8,
            "critical_max": 30,
        },
    }
)

DEFAULT_RANGE_TABLE = RangeTable(DEFAULT_RANGES)

CHANNEL_UNITS: Mapping[VitalChannel, str] = MappingProxyType(
    {
        VitalChannel.HEART_RATE: " BPM",
        VitalChannel.BLOOD_PRESSURE_SYSTOLIC: " mmHg",
        VitalChannel.BLOOD_PRESSURE_DIASTOLIC: " mmHg",
        VitalChannel.OXYGEN_SATURATION: "%",
        VitalChannel.TEMPERATURE: "°C",
        VitalChannel.RESPIRATORY_RATE: " breaths/min",
    }
)


def lookup(channel: VitalChannel | str) -> RangeSpec | None:
    """Look up a channel in the default table."""
    return DEFAULT_RANGE_TABLE.lookup(channel)


def display_name(channel: VitalChannel | str) -> str:
    """Human-readable channel name, e.g. "heart_rate" -> "Heart Rate"."""
    key = channel.value if isinstance(channel, VitalChannel) else channel
    return " ".join(word[:1].upper() + word[1:] for word in key.split("_"))


def unit_for(channel: VitalChannel | str) -> str:
    try:
        return CHANNEL_UNITS.get(VitalChannel(channel), "")
    except ValueError:
        return ""


def format_reading(value: float) -> str:
    """
    Render a reading the way the dashboard prints numbers.

    Shortest round-trip digits, positional between 1e-6 and 1e21 and
    exponential outside it: 130.0 -> "130", 1e-07 -> "1e-7", 1e21 -> "1e+21".
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    number = Decimal(repr(abs(value)))
    digits = "".join(map(str, number.as_tuple().digits)).strip("0")
    # Decimal point position relative to the first significant digit
    point = number.adjusted() + 1
    sign = "-" if value < 0 else ""

    if len(digits) <= point <= 21:
        return sign + digits + "0" * (point - len(digits))
    if 0 < point <= 21:
        return f"{sign}{digits[:point]}.{digits[point:]}"
    if -6 < point <= 0:
        return f"{sign}0.{'0' * -point}{digits}"

    exponent = point - 1
    mantissa = digits[0] + (f".{digits[1:]}" if len(digits) > 1 else "")
    return f"{sign}{mantissa}e{'+' if exponent > 0 else '-'}{abs(exponent)}"
