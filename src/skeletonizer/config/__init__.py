"""Configuration management for skeletonizer.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- ToleranceConfig: Floating point tolerance policy
- SolverConfig: Step cap and collision options
- LoggingConfig: Logging settings
- SkeletonizerSettings: Main application settings
"""

from skeletonizer.config.settings import (
    LoggingConfig,
    SkeletonizerSettings,
    SolverConfig,
    ToleranceConfig,
    get_default_settings,
)

__all__ = [
    "LoggingConfig",
    "SkeletonizerSettings",
    "SolverConfig",
    "ToleranceConfig",
    "get_default_settings",
]
