"""Configuration validation utilities."""

from dataclasses import dataclass, fields
from typing import Any

from .defaults import GridParams, PriceHistoryParams, RuleParams

MAX_NEIGHBORS = 8


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _unknown_fields(params: dict[str, Any], schema: type) -> list[ValidationError]:
    known = {f.name for f in fields(schema)}
    return [
        ValidationError(field=key, message="Unknown parameter", value=value)
        for key, value in params.items()
        if key not in known
    ]


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_rule_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate transition rule thresholds."""
        errors = _unknown_fields(params, RuleParams)

        # Neighbour count thresholds
        for name in ("moderate_min", "contrarian_min", "reversal_min"):
            if name in params:
                value = params[name]
                if not _is_int(value) or value < 0 or value > MAX_NEIGHBORS:
                    errors.append(ValidationError(
                        field=name,
                        message=f"Must be an integer between 0 and {MAX_NEIGHBORS}",
                        value=value
                    ))

        # Exclusive upper bound may sit one past the last count
        if "moderate_max" in params:
            value = params["moderate_max"]
            if not _is_int(value) or value < 1 or value > MAX_NEIGHBORS + 1:
                errors.append(ValidationError(
                    field="moderate_max",
                    message=f"Must be an integer between 1 and {MAX_NEIGHBORS + 1}",
                    value=value
                ))

        low = params.get("moderate_min", RuleParams.moderate_min)
        high = params.get("moderate_max", RuleParams.moderate_max)
        if _is_int(low) and _is_int(high) and low >= high:
            errors.append(ValidationError(
                field="moderate_max",
                message="Must be greater than moderate_min",
                value=high
            ))

        # Contrarian tier must sit above the momentum band
        contrarian = params.get("contrarian_min", RuleParams.contrarian_min)
        if _is_int(contrarian) and _is_int(high) and contrarian < high:
            errors.append(ValidationError(
                field="contrarian_min",
                message="Must be greater than or equal to moderate_max",
                value=contrarian
            ))

        # Profit/loss tiers
        for name in ("take_profit_pct", "exit_pct"):
            if name in params:
                value = params[name]
                if not _is_number(value):
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a number",
                        value=value
                    ))

        take_profit = params.get("take_profit_pct", RuleParams.take_profit_pct)
        exit_pct = params.get("exit_pct", RuleParams.exit_pct)
        if _is_number(take_profit) and _is_number(exit_pct) and take_profit < exit_pct:
            errors.append(ValidationError(
                field="take_profit_pct",
                message="Must be greater than or equal to exit_pct",
                value=take_profit
            ))

        return errors

    @staticmethod
    def validate_grid_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate grid dimensions."""
        errors = _unknown_fields(params, GridParams)

        for name in ("width", "height"):
            if name in params:
                value = params[name]
                if not _is_int(value) or value <= 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a positive integer",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_price_history_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate rolling price window parameters."""
        errors = _unknown_fields(params, PriceHistoryParams)

        if "window_size" in params:
            value = params["window_size"]
            if not _is_int(value) or value <= 0:
                errors.append(ValidationError(
                    field="window_size",
                    message="Must be a positive integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []
        sections = {
            "rule": ConfigValidator.validate_rule_params,
            "grid": ConfigValidator.validate_grid_params,
            "price_history": ConfigValidator.validate_price_history_params,
        }

        for section, validate in sections.items():
            if section not in config:
                continue
            params = config[section]
            if not isinstance(params, dict):
                errors.append(ValidationError(
                    field=section,
                    message="Must be a mapping",
                    value=params
                ))
                continue
            errors.extend(validate(params))

        return errors
