"""
Centralized logging configuration for the market automaton.

This module provides standardized logging configuration using structlog
for all components. The transition rule and the simulation engine log
through these helpers so that every decision carries the same fields.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
    )
    logging.getLogger().setLevel(log_level)

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                       structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_rule_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound for transition rule decisions.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for rule decisions
    """
    # Unbound lazy proxy: resolves against configure_logging() at first use
    return structlog.get_logger(
        name,
        subsystem="transition_rule",
        audit_trail=True
    )


def get_engine_logger(name: str) -> FilteringBoundLogger:
    """Get a logger bound for simulation stepping."""
    return structlog.get_logger(name, subsystem="simulation")


def log_rule_decision(
    logger: FilteringBoundLogger,
    x: int,
    y: int,
    from_action: str,
    to_action: str,
    reason: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a single cell decision with standardized format.

    Args:
        logger: Structlog logger instance
        x: Cell column
        y: Cell row
        from_action: Action the cell currently holds
        to_action: Action produced by the rule
        reason: Which branch of the rule decided
        context: Additional context data (neighbour counts, P/L)
    """
    bound_logger = logger.bind(
        x=x,
        y=y,
        from_action=from_action,
        to_action=to_action,
        reason=reason,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.debug("Rule decision")
