"""
Domain models for ICU vital-signs monitoring.

These models represent the core clinical concepts and are framework-agnostic.
They use Pydantic for validation but could be swapped to dataclasses if needed.
"""

from datetime import UTC, datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field


class VitalChannel(str, Enum):
    """Vital-sign channels, declared in the order alerts are reported."""

    HEART_RATE = "heart_rate"
    BLOOD_PRESSURE_SYSTOLIC = "blood_pressure_systolic"
    BLOOD_PRESSURE_DIASTOLIC = "blood_pressure_diastolic"
    OXYGEN_SATURATION = "oxygen_saturation"
    TEMPERATURE = "temperature"
    RESPIRATORY_RATE = "respiratory_rate"


# Enum iteration follows declaration order
CHANNEL_ORDER: tuple[VitalChannel, ...] = tuple(VitalChannel)


class Tier(str, Enum):
    """Severity classification of a single channel value."""

    NORMAL = "normal"
    ABNORMAL = "abnormal"
    CRITICAL = "critical"


class AlertType(str, Enum):
    WARNING = "warning"
    CRITICAL = "critical"


class AlertSeverity(str, Enum):
    """Alert severity levels as shown on the dashboard."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class PredictionType(str, Enum):
    """Categories of heuristic risk prediction."""

    DETERIORATION = "deterioration"
    RESPIRATORY_DISTRESS = "respiratory_distress"
    SEPSIS_RISK = "sepsis_risk"
    HYPOTENSION = "hypotension"


ClassificationResult = dict[VitalChannel, Tier]


class VitalsSnapshot(BaseModel):
    """
    Channel readings taken at one point in time.

    A channel left out of the reading is None and is not classified.
    """

    # Immutable, and NaN/inf are rejected instead of silently misclassified
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    heart_rate: float | None = Field(default=None, description="Beats per minute")
    blood_pressure_systolic: float | None = Field(default=None, description="mmHg")
    blood_pressure_diastolic: float | None = Field(default=None, description="mmHg")
    oxygen_saturation: float | None = Field(default=None, description="SpO2 percent")
    temperature: float | None = Field(default=None, description="Degrees Celsius")
    respiratory_rate: float | None = Field(default=None, description="Breaths per minute")

    def value(self, channel: VitalChannel) -> float | None:
        return getattr(self, channel.value)

    def channel_values(self) -> dict[VitalChannel, float]:
        """Readings present in this snapshot, in reporting order."""
        return {
            channel: value
            for channel in CHANNEL_ORDER
            if (value := self.value(channel)) is not None
        }


class Alert(BaseModel):
    """
    Alert raised for a single out-of-range channel.

    Identity, timestamp and acknowledgement state belong to whoever stores it.
    """

    model_config = ConfigDict(frozen=True)

    alert_type: AlertType
    severity: AlertSeverity
    title: str = Field(min_length=1)
    message: str = Field(min_length=1)


class RiskAssessment(BaseModel):
    """Aggregated per-channel severity for one snapshot."""

    model_config = ConfigDict(frozen=True)

    total_score: int = Field(ge=0, description="Uncapped sum of channel contributions")
    risk_score: int = Field(ge=0, le=100)
    critical_count: int = Field(ge=0)
    abnormal_count: int = Field(ge=0)
    confidence: float = Field(ge=0.0, le=0.99)

    @computed_field(return_type=bool)
    def has_risk(self) -> bool:
        return self.total_score > 0


class Prediction(BaseModel):
    """Heuristic risk prediction derived from a single snapshot."""

    model_config = ConfigDict(frozen=True)

    prediction_type: PredictionType
    risk_score: int = Field(ge=0, le=100)
    confidence: float = Field(ge=0.0, le=0.99)
    recommendations: str = Field(min_length=1)
    factors: ClassificationResult = Field(description="Tier of every classified channel")


class VitalsAnalysis(BaseModel):
    """Everything the engine derives from one snapshot."""

    model_config = ConfigDict(frozen=True)

    alerts: list[Alert] = Field(default_factory=list)
    prediction: Prediction | None = None
    factors: ClassificationResult = Field(default_factory=dict)

    @computed_field(return_type=bool)
    def requires_attention(self) -> bool:
        """Check if any channel reached the critical tier."""
        return any(alert.alert_type == AlertType.CRITICAL for alert in self.alerts)


class PatientProfile(BaseModel):
    """ICU patient as registered on the dashboard."""

    model_config = ConfigDict(frozen=True)

    patient_code: str = Field(min_length=1, description="e.g. ICU-001")
    name: str
    age: int = Field(ge=0, le=130)
    gender: str
    blood_type: str
    room_number: str
    diagnosis: str
    doctor_name: str
    status: Literal["active", "discharged"] = "active"


class MonitorReading(BaseModel):
    """Result of one bedside monitor tick."""

    patient_code: str
    vitals: VitalsSnapshot
    analysis: VitalsAnalysis
    recorded_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
