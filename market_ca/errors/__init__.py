"""
Error classification for the market automaton.

This module provides a structured exception hierarchy separating bad input
data (recoverable by the caller correcting it) from contract violations
that indicate a programming error in the embedding driver.
"""

from .data_quality import (
    DataQualityError,
    MissingDataError,
    MalformedDataError,
    InvalidPositionError,
)
from .system_failures import (
    SystemFailureError,
    RuleContractError,
    ConfigurationError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MissingDataError",
    "MalformedDataError",
    "InvalidPositionError",
    # System Failures
    "SystemFailureError",
    "RuleContractError",
    "ConfigurationError",
]
