"""
Data quality error classifications.

These exceptions cover market data and participant state that is missing
or inconsistent. They are raised at construction or ingestion time so that
the transition rule only ever sees well-formed inputs.
"""

from typing import Optional, Dict, Any


class DataQualityError(Exception):
    """Base class for data quality issues the caller can correct."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class MissingDataError(DataQualityError):
    """Required data is completely missing."""

    def __init__(self, message: str, data_type: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.data_type = data_type


class MalformedDataError(DataQualityError):
    """Data exists but is in incorrect format."""

    def __init__(self, message: str, raw_data: Optional[str] = None,
                 expected_format: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_data = raw_data
        self.expected_format = expected_format


class InvalidPositionError(DataQualityError):
    """Participant holds shares without a usable entry position size."""

    def __init__(self, message: str, shares_held: Optional[int] = None,
                 position_size: Optional[float] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.shares_held = shares_held
        self.position_size = position_size
