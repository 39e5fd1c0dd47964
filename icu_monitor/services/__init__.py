"""
Core services for the application.

This package contains the vital-signs analysis pipeline, the synthetic
vitals generator and the bedside monitor that ties them together.
"""

from .bedside_monitor import BedsideMonitor
from .vitals_analysis import VitalsAnalysisEngine, analyze_vital_signs, default_engine
from .vitals_simulator import RandomSource, VitalsSimulator

__all__ = [
    "BedsideMonitor",
    "RandomSource",
    "VitalsAnalysisEngine",
    "VitalsSimulator",
    "analyze_vital_signs",
    "default_engine",
]
