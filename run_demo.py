"""
Demo run of the ICU vitals pipeline.

This script shows:
1. Configuration loading and range-table validation
2. Simulated bedside feeds for the demo patients
3. Alerts and predictions for each tick
4. Fixed clinical scenarios run through the analysis engine

Run with: uv run python run_demo.py [ticks]
"""

import sys

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from icu_monitor.config import (
    AppConfig,
    configure_logging,
    print_config_summary,
    validate_config,
)
from icu_monitor.domain.models import Alert, AlertType, PatientProfile, VitalsSnapshot
from icu_monitor.domain.patients import DEMO_PATIENTS
from icu_monitor.domain.ranges import display_name, format_reading, unit_for
from icu_monitor.services import BedsideMonitor, VitalsSimulator, analyze_vital_signs

console = Console()

SCENARIOS: dict[str, VitalsSnapshot] = {
    "Stable": VitalsSnapshot(
        heart_rate=75,
        blood_pressure_systolic=120,
        blood_pressure_diastolic=80,
        oxygen_saturation=98,
        temperature=37,
        respiratory_rate=16,
    ),
    "Hypoxic tachycardia": VitalsSnapshot(
        heart_rate=115,
        blood_pressure_systolic=85,
        blood_pressure_diastolic=55,
        oxygen_saturation=85,
        temperature=39.2,
        respiratory_rate=28,
    ),
    "Febrile": VitalsSnapshot(
        heart_rate=108,
        blood_pressure_systolic=118,
        blood_pressure_diastolic=76,
        oxygen_saturation=96,
        temperature=38.8,
        respiratory_rate=22,
    ),
}


def console_alert_handler(patient: PatientProfile, alert: Alert) -> None:
    style = "red" if alert.alert_type == AlertType.CRITICAL else "yellow"
    console.print(f"  [{patient.room_number}] {alert.title}: {alert.message}", style=style)


def vitals_table(title: str, vitals: VitalsSnapshot) -> Table:
    table = Table(title=title)
    table.add_column("Vital", style="cyan")
    table.add_column("Reading", style="green")

    for channel, value in vitals.channel_values().items():
        table.add_row(display_name(channel), f"{format_reading(value)}{unit_for(channel)}")
    return table


def run_bedside_feeds(ticks: int, config: AppConfig) -> None:
    console.print(Panel("Bedside feeds", style="blue"))

    for offset, patient in enumerate(DEMO_PATIENTS):
        seed = config.simulator.seed
        simulator = VitalsSimulator(seed=None if seed is None else seed + offset)
        monitor = BedsideMonitor.from_config(patient, config, simulator=simulator)
        monitor.add_handler(console_alert_handler)

        heading = f"\n{patient.patient_code} {patient.name} - {patient.diagnosis}"
        console.print(heading, style="bold")
        for _ in range(ticks):
            monitor.tick()

        if monitor.current_vitals is not None:
            console.print(vitals_table("Latest reading", monitor.current_vitals))

        prediction = monitor.latest_prediction
        if prediction is not None:
            console.print(
                f"Prediction: {prediction.prediction_type.value} "
                f"(risk {prediction.risk_score}, confidence {prediction.confidence:.0%})"
            )
            console.print(f"  {prediction.recommendations}")
        else:
            console.print("No risk prediction", style="green")


def run_scenarios() -> None:
    console.print(Panel("Clinical scenarios", style="blue"))

    summary_table = Table(title="Scenario Summary")
    summary_table.add_column("Scenario", style="cyan")
    summary_table.add_column("Alerts", style="white")
    summary_table.add_column("Prediction", style="magenta")
    summary_table.add_column("Risk", style="red")
    summary_table.add_column("Recommendations", style="white")

    for name, vitals in SCENARIOS.items():
        analysis = analyze_vital_signs(vitals)
        prediction = analysis.prediction
        summary_table.add_row(
            name,
            str(len(analysis.alerts)),
            prediction.prediction_type.value if prediction else "-",
            str(prediction.risk_score) if prediction else "0",
            prediction.recommendations if prediction else "-",
        )

    console.print(summary_table)


def main(ticks: int = 3) -> None:
    config = validate_config()
    configure_logging(config.logging)
    print_config_summary()

    run_bedside_feeds(ticks, config)
    run_scenarios()


if __name__ == "__main__":
    try:
        main(int(sys.argv[1]) if len(sys.argv) > 1 else 3)
    except KeyboardInterrupt:
        console.print("\nDemo stopped by user", style="yellow")
