"""
Configuration management for facility location optimization.

This module provides configuration management for the discrete PSO
optimizer: algorithm parameters, monitoring options, result export and
coefficient parameter sweeps.
"""

from .config_manager import (
    SWEEP_VALUES,
    MonitoringConfig,
    OptimizationConfigManager,
    OutputConfig,
    PSOConfig,
    SweepConfig,
)

__all__ = [
    "SWEEP_VALUES",
    "PSOConfig",
    "SweepConfig",
    "MonitoringConfig",
    "OutputConfig",
    "OptimizationConfigManager",
]
