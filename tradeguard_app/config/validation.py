"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _positive_number(params: dict[str, Any], name: str) -> Optional[ValidationError]:
    if name in params:
        value = params[name]
        if not _is_number(value) or value <= 0:
            return ValidationError(field=name, message="Must be a positive number", value=value)
    return None


def _ratio(params: dict[str, Any], name: str) -> Optional[ValidationError]:
    if name in params:
        value = params[name]
        if not _is_number(value) or value <= 0 or value > 1:
            return ValidationError(
                field=name,
                message="Must be a positive number between 0 and 1",
                value=value
            )
    return None


def _positive_int(params: dict[str, Any], name: str) -> Optional[ValidationError]:
    if name in params:
        value = params[name]
        if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
            return ValidationError(field=name, message="Must be a positive integer", value=value)
    return None


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_sizing_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate position sizing parameters."""
        errors = [
            _positive_number(params, "min_lot_size"),
            _positive_number(params, "max_lot_size"),
            _positive_number(params, "default_pip_value"),
            _positive_int(params, "default_pip_digits"),
            _positive_int(params, "standard_lot_units"),
            _positive_number(params, "spec_lookup_timeout"),
        ]

        # Risk cap cannot exceed the hard 10% ceiling
        if "max_risk_percent" in params:
            value = params["max_risk_percent"]
            if not _is_number(value) or value <= 0 or value > 10:
                errors.append(ValidationError(
                    field="max_risk_percent",
                    message="Must be a positive number no greater than 10",
                    value=value
                ))

        min_lot = params.get("min_lot_size")
        max_lot = params.get("max_lot_size")
        if _is_number(min_lot) and _is_number(max_lot) and min_lot >= max_lot:
            errors.append(ValidationError(
                field="min_lot_size",
                message="Must be smaller than max_lot_size",
                value=min_lot
            ))

        return [e for e in errors if e is not None]

    @staticmethod
    def validate_exposure_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate currency exposure parameters."""
        errors = [
            _positive_number(params, "max_currency_exposure"),
            _ratio(params, "warning_ratio"),
            _positive_int(params, "max_positions_per_currency"),
            _positive_number(params, "max_combined_risk"),
        ]
        return [e for e in errors if e is not None]

    @staticmethod
    def validate_prop_firm_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate prop-firm thresholds."""
        errors = [
            _ratio(params, "limit_warning_ratio"),
            _positive_number(params, "profit_target_proximity"),
            _ratio(params, "safety_buffer"),
            _positive_number(params, "risk_step"),
        ]
        return [e for e in errors if e is not None]

    @staticmethod
    def validate_validation_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate orchestrator advisory thresholds."""
        errors = [
            _positive_number(params, "min_reward_risk"),
            _positive_number(params, "high_risk_percent"),
            _positive_number(params, "wide_stop_pips"),
            _positive_number(params, "portfolio_risk_advisory"),
            _positive_number(params, "daily_loss_remaining_advisory"),
            _positive_number(params, "total_drawdown_remaining_advisory"),
        ]
        return [e for e in errors if e is not None]

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "sizing" in config:
            errors.extend(ConfigValidator.validate_sizing_params(config["sizing"]))

        if "exposure" in config:
            errors.extend(ConfigValidator.validate_exposure_params(config["exposure"]))

        if "prop_firm" in config:
            errors.extend(ConfigValidator.validate_prop_firm_params(config["prop_firm"]))

        if "validation" in config:
            errors.extend(ConfigValidator.validate_validation_params(config["validation"]))

        return errors
