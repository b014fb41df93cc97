"""
Configuration module
"""

from api_call.config.api_call_config import (
    ApiCallConfig,
    ENV_VAR_MAPPING,
    LOG_LEVELS,
    ConfigDefaults,
)
from api_call.config.config_loader import ConfigLoader
from api_call.config.config_validator import (
    ConfigValidator,
    ValidationResult,
    ValidationErrorDetail,
)

__all__ = [
    "ApiCallConfig",
    "ENV_VAR_MAPPING",
    "LOG_LEVELS",
    "ConfigDefaults",
    "ConfigLoader",
    "ConfigValidator",
    "ValidationResult",
    "ValidationErrorDetail",
]
