"""
System failure error classifications.

These exceptions represent contract violations by the embedding driver.
They are not retried; the only recovery is fixing the caller.
"""

from typing import Optional, Dict, Any


class SystemFailureError(Exception):
    """Base class for unrecoverable failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class RuleContractError(SystemFailureError):
    """Transition rule invoked with arguments it does not support."""

    def __init__(self, message: str, argument: Optional[str] = None,
                 received_type: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.argument = argument
        self.received_type = received_type


class ConfigurationError(SystemFailureError):
    """Loaded configuration failed validation."""

    def __init__(self, message: str, errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
