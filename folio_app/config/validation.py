"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_lookback_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate lookback windows (positive whole days)."""
        errors = []

        for name in ("one_month", "three_months", "six_months", "one_year"):
            if name in params:
                value = params[name]
                if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a positive whole number of days",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_percent_thresholds(params: dict[str, Any]) -> list[ValidationError]:
        """Validate percentage thresholds used by the fund classifier."""
        errors = []

        for name, value in params.items():
            if not _is_number(value) or value < 0 or value > 100:
                errors.append(ValidationError(
                    field=name,
                    message="Must be a percentage between 0 and 100",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_risk_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate risk metric parameters."""
        errors = []

        if "trading_days" in params:
            value = params["trading_days"]
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                errors.append(ValidationError(
                    field="trading_days",
                    message="Must be a positive integer",
                    value=value
                ))

        if "risk_free_rate" in params:
            value = params["risk_free_rate"]
            if not _is_number(value) or value < -1 or value > 1:
                errors.append(ValidationError(
                    field="risk_free_rate",
                    message="Must be an annual rate expressed as a fraction",
                    value=value
                ))

        if "min_overlap" in params:
            value = params["min_overlap"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 3:
                errors.append(ValidationError(
                    field="min_overlap",
                    message="Must be an integer of at least 3",
                    value=value
                ))

        if "days_per_year" in params:
            value = params["days_per_year"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="days_per_year",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_history_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate chart history parameters."""
        errors = []

        for name in ("recent_points", "one_year_days"):
            if name in params:
                value = params[name]
                if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a positive integer",
                        value=value
                    ))

        return errors

    @classmethod
    def validate_config(cls, config: dict[str, Any]) -> list[ValidationError]:
        """Validate a complete merged configuration."""
        errors = []
        validators = {
            "lookback": cls.validate_lookback_params,
            "asset_class": cls.validate_percent_thresholds,
            "region": cls.validate_percent_thresholds,
            "risk": cls.validate_risk_params,
            "history": cls.validate_history_params,
        }

        for section, validate in validators.items():
            params = config.get(section) or {}
            if not isinstance(params, dict):
                errors.append(ValidationError(
                    field=section,
                    message="Must be a mapping",
                    value=params
                ))
                continue
            errors.extend(validate(params))

        return errors
