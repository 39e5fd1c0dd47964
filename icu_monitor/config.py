"""
Configuration management with environment variable support and validation.

Design principles:
- Environment-specific configs (dev, staging, prod)
- Validation at startup (fail fast), including the clinical range table
- Type safety with Pydantic
"""

import logging
import os
from functools import lru_cache
from typing import Literal, cast

import structlog
from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

from icu_monitor.domain.models import CHANNEL_ORDER
from icu_monitor.domain.ranges import DEFAULT_RANGE_TABLE

# Load environment variables from .env file
load_dotenv()

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class SimulatorConfig(BaseModel):
    """Synthetic vitals generation settings."""

    seed: int | None = Field(
        default=None, description="Seed for reproducible demo runs; None draws from the OS"
    )


class MonitorConfig(BaseModel):
    """Bedside monitor history limits."""

    vitals_history_size: int = Field(default=20, gt=0, description="Readings kept per patient")
    alert_history_size: int = Field(default=10, gt=0, description="Alerts kept per patient")
    prediction_history_size: int = Field(
        default=5, gt=0, description="Predictions kept per patient"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(default="INFO", description="Logging level")
    format: Literal["json", "console"] = Field(default="json", description="Logging format")


class AppConfig(BaseModel):
    """Main application configuration combining all subsystems."""

    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Environment"
    )
    debug: bool = Field(default=False, description="Enable debug mode")

    simulator: SimulatorConfig = Field(default_factory=SimulatorConfig)
    monitor: MonitorConfig = Field(default_factory=MonitorConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def debug_only_in_dev(self) -> "AppConfig":
        """Ensure debug mode is only allowed in development environment."""
        if self.debug and self.environment != "development":
            raise ValueError("debug mode is only allowed in development environment")
        return self


def _env_to_literal(val: str) -> Literal["development", "staging", "production"]:
    v = val.strip().lower()
    if v in {"dev", "development"}:
        return "development"
    if v in {"stage", "staging"}:
        return "staging"
    return "production"


def _level_to_literal(val: str) -> LogLevel:
    v = val.strip().upper()
    return cast(LogLevel, v if v in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} else "INFO")


def _parse_optional_int(val: str | None) -> int | None:
    if val is None or not val.strip():
        return None
    return int(val)


def load_config_from_env() -> AppConfig:
    """Load configuration from environment variables with validation."""
    environment = _env_to_literal(os.getenv("ENVIRONMENT", "development"))
    debug = environment == "development"

    simulator_config = SimulatorConfig(
        seed=_parse_optional_int(os.getenv("SIMULATOR_SEED")),
    )

    monitor_config = MonitorConfig(
        vitals_history_size=int(os.getenv("VITALS_HISTORY_SIZE", "20")),
        alert_history_size=int(os.getenv("ALERT_HISTORY_SIZE", "10")),
        prediction_history_size=int(os.getenv("PREDICTION_HISTORY_SIZE", "5")),
    )

    log_format = os.getenv("LOG_FORMAT", "").strip().lower()
    logging_config = LoggingConfig(
        level=_level_to_literal(os.getenv("LOG_LEVEL", "INFO")),
        format="console" if log_format == "console" or (not log_format and debug) else "json",
    )

    return AppConfig(
        environment=environment,
        debug=debug,
        simulator=simulator_config,
        monitor=monitor_config,
        logging=logging_config,
    )


@lru_cache
def get_config() -> AppConfig:
    """Get cached application configuration."""
    return load_config_from_env()


def configure_logging(config: LoggingConfig) -> None:
    """Configure structlog once for the whole process."""
    logging.basicConfig(format="%(message)s", level=config.level)

    renderer = (
        structlog.dev.ConsoleRenderer()
        if config.format == "console"
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def validate_config() -> AppConfig:
    """Validate configuration and reference data at startup."""
    try:
        config = get_config()
        # Importing ranges validated every band; here only coverage is checked
        missing = [channel.value for channel in CHANNEL_ORDER if channel not in DEFAULT_RANGE_TABLE]
        if missing:
            raise ValueError(f"Clinical range table has no bands for: {', '.join(missing)}")
    except Exception as e:
        print(f"Configuration validation failed: {e}")
        raise

    print(f"Configuration loaded for {config.environment} environment")
    return config


def print_config_summary() -> None:
    """Print configuration summary for debugging."""
    config = get_config()

    print("\nCONFIGURATION SUMMARY")
    print(f"Environment: {config.environment}")
    print(f"Debug Mode: {config.debug}")
    print(f"Log Level: {config.logging.level} ({config.logging.format})")

    print("\nSIMULATOR")
    print(f"Seed: {config.simulator.seed if config.simulator.seed is not None else 'random'}")

    print("\nMONITOR")
    print(f"Vitals History: {config.monitor.vitals_history_size} readings")
    print(f"Alert History: {config.monitor.alert_history_size} alerts")
    print(f"Prediction History: {config.monitor.prediction_history_size} predictions")


if __name__ == "__main__":
    validate_config()
    print_config_summary()
