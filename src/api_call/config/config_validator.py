"""
Configuration Validator
Validates api-call configuration with clear error messages
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from api_call.config.api_call_config import ApiCallConfig, LOG_LEVELS


@dataclass
class ValidationErrorDetail:
    """Validation error detail"""
    field: str
    message: str
    value: Optional[Any] = None


@dataclass
class ValidationResult:
    """Validation result"""
    valid: bool
    errors: List[ValidationErrorDetail] = field(default_factory=list)


class ConfigValidator:
    """
    ConfigValidator class
    Validates a raw configuration dictionary before it is resolved
    """

    BOOLEAN_FIELDS = ("print_diagnostics", "enable_audit_log")

    def __init__(self) -> None:
        self._errors: List[ValidationErrorDetail] = []

    def validate(self, config: Dict[str, Any]) -> ValidationResult:
        """
        Validate the entire configuration dictionary

        Args:
            config: Configuration dictionary to validate

        Returns:
            ValidationResult with any errors
        """
        self._errors = []

        self._validate_unknown_fields(config)
        self._validate_content_type(config)
        self._validate_booleans(config)
        self._validate_log_level(config)

        return ValidationResult(
            valid=len(self._errors) == 0,
            errors=self._errors.copy()
        )

    def validate_or_raise(self, config: Dict[str, Any]) -> None:
        """
        Validate and raise if invalid

        Args:
            config: Configuration dictionary to validate

        Raises:
            ValidationError: If configuration is invalid
        """
        from api_call.exceptions import ValidationError

        result = self.validate(config)
        if not result.valid:
            error_messages = "; ".join(
                f"{e.field}: {e.message}" for e in result.errors
            )
            raise ValidationError(
                f"Configuration validation failed: {error_messages}",
                field=result.errors[0].field,
            )

    def _validate_unknown_fields(self, config: Dict[str, Any]) -> None:
        """Reject keys that are not configuration fields"""
        for key in config:
            if key not in ApiCallConfig.model_fields:
                self._errors.append(ValidationErrorDetail(
                    field=key,
                    message=f"unknown configuration field '{key}'",
                    value=config[key]
                ))

    def _validate_content_type(self, config: Dict[str, Any]) -> None:
        """Validate default content type format"""
        content_type = config.get("default_content_type")
        if content_type is None:
            return

        if not isinstance(content_type, str) or content_type.strip() == "":
            self._errors.append(ValidationErrorDetail(
                field="default_content_type",
                message="default_content_type cannot be empty",
                value=content_type
            ))
            return

        media_type = content_type.split(";", 1)[0].strip()
        if "/" not in media_type or media_type.startswith("/") or media_type.endswith("/"):
            self._errors.append(ValidationErrorDetail(
                field="default_content_type",
                message="default_content_type must look like 'type/subtype'",
                value=content_type
            ))

    def _validate_booleans(self, config: Dict[str, Any]) -> None:
        """Validate boolean flags"""
        for flag in self.BOOLEAN_FIELDS:
            value = config.get(flag)
            if value is not None and not isinstance(value, bool):
                self._errors.append(ValidationErrorDetail(
                    field=flag,
                    message=f"{flag} must be a boolean",
                    value=value
                ))

    def _validate_log_level(self, config: Dict[str, Any]) -> None:
        """Validate logging level name"""
        log_level = config.get("log_level")
        if log_level is None:
            return

        if not isinstance(log_level, str) or log_level.upper() not in LOG_LEVELS:
            self._errors.append(ValidationErrorDetail(
                field="log_level",
                message=f"log_level must be one of: {', '.join(LOG_LEVELS)}",
                value=log_level
            ))
