"""Vital-signs analysis for a simulated ICU monitoring dashboard.

This package contains the analysis engine and domain models,
isolated from storage and UI concerns for easy testing and reasoning.
"""
