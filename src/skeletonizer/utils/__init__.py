"""Utility functions for skeletonizer.

This module provides:

- Logging setup and configuration
- Solver progress logging and statistics
"""

from skeletonizer.utils.logging import (
    SolverLogger,
    SolverStats,
    configure_logging,
    get_logger,
)

__all__ = [
    "SolverLogger",
    "SolverStats",
    "configure_logging",
    "get_logger",
]
