"""
Bedside monitor: one patient's simulated feed.

Each tick mirrors what the dashboard does every few seconds:
1. Take the last reading (or the default baseline) as the baseline
2. Generate the next reading
3. Analyze it
4. Keep bounded histories and hand alerts to registered handlers

Scheduling ticks and storing rows are the caller's job.
"""

from collections import deque
from collections.abc import Callable

import structlog

from icu_monitor.config import AppConfig
from icu_monitor.domain.models import (
    Alert,
    MonitorReading,
    PatientProfile,
    Prediction,
    VitalsSnapshot,
)
from icu_monitor.services.vitals_analysis import VitalsAnalysisEngine, default_engine
from icu_monitor.services.vitals_simulator import VitalsSimulator

logger = structlog.get_logger(__name__)

AlertHandler = Callable[[PatientProfile, Alert], None]


class BedsideMonitor:
    """Simulated vitals feed and recent history for a single patient."""

    def __init__(
        self,
        patient: PatientProfile,
        simulator: VitalsSimulator | None = None,
        engine: VitalsAnalysisEngine | None = None,
        history_size: int = 20,
        alert_history_size: int = 10,
        prediction_history_size: int = 5,
    ) -> None:
        if min(history_size, alert_history_size, prediction_history_size) <= 0:
            raise ValueError("History sizes must be positive")

        self.patient = patient
        self.simulator = simulator or VitalsSimulator()
        self.engine = engine or default_engine
        self.vitals_history: deque[VitalsSnapshot] = deque(maxlen=history_size)
        # Alerts and predictions are kept newest first, as the dashboard lists them
        self.alert_history: deque[Alert] = deque(maxlen=alert_history_size)
        self.prediction_history: deque[Prediction] = deque(maxlen=prediction_history_size)
        self.handlers: list[AlertHandler] = []
        self.logger = logger.bind(component="bedside_monitor", patient_code=patient.patient_code)

    @classmethod
    def from_config(
        cls,
        patient: PatientProfile,
        config: AppConfig,
        simulator: VitalsSimulator | None = None,
        engine: VitalsAnalysisEngine | None = None,
    ) -> "BedsideMonitor":
        """Build a monitor sized (and, without a simulator, seeded) from settings."""
        return cls(
            patient,
            simulator=simulator or VitalsSimulator(seed=config.simulator.seed),
            engine=engine,
            history_size=config.monitor.vitals_history_size,
            alert_history_size=config.monitor.alert_history_size,
            prediction_history_size=config.monitor.prediction_history_size,
        )

    @property
    def current_vitals(self) -> VitalsSnapshot | None:
        return self.vitals_history[-1] if self.vitals_history else None

    @property
    def latest_prediction(self) -> Prediction | None:
        return self.prediction_history[0] if self.prediction_history else None

    def add_handler(self, handler: AlertHandler) -> None:
        self.handlers.append(handler)

    def record(self, vitals: VitalsSnapshot) -> MonitorReading:
        """Analyze an externally supplied reading and update the histories."""
        analysis = self.engine.analyze(vitals)

        self.vitals_history.append(vitals)
        self.alert_history.extendleft(reversed(analysis.alerts))
        if analysis.prediction is not None:
            self.prediction_history.appendleft(analysis.prediction)

        self.logger.info(
            "vitals_recorded",
            alert_count=len(analysis.alerts),
            risk_score=analysis.prediction.risk_score if analysis.prediction else 0,
        )

        self.dispatch_alerts(analysis.alerts)
        return MonitorReading(
            patient_code=self.patient.patient_code, vitals=vitals, analysis=analysis
        )

    def tick(self) -> MonitorReading:
        """Generate the next reading from the current one and record it."""
        return self.record(self.simulator.generate(self.current_vitals))

    def dispatch_alerts(self, alerts: list[Alert]) -> None:
        """Hand each alert to every handler; a failing handler does not stop the rest."""
        for alert in alerts:
            for handler in self.handlers:
                try:
                    handler(self.patient, alert)
                except Exception as e:
                    self.logger.error(
                        "alert_dispatch_failed", error=str(e), alert_title=alert.title
                    )
