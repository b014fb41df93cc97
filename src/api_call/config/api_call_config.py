"""
api-call Configuration Types
Type-safe configuration for request execution
"""

from pydantic import BaseModel, Field, field_validator


class ConfigDefaults:
    """Default configuration values"""
    DEFAULT_CONTENT_TYPE = "text/plain"
    PRINT_DIAGNOSTICS = True
    ENABLE_AUDIT_LOG = False
    LOG_LEVEL = "WARNING"


# Level names accepted for log_level
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


# Environment variable mapping
ENV_VAR_MAPPING = {
    "API_CALL_DEFAULT_CONTENT_TYPE": "default_content_type",
    "API_CALL_PRINT_DIAGNOSTICS": "print_diagnostics",
    "API_CALL_ENABLE_AUDIT_LOG": "enable_audit_log",
    "API_CALL_LOG_LEVEL": "log_level",
}


class ApiCallConfig(BaseModel):
    """
    Execution settings shared by request handles

    A handle created without an explicit config uses ``ApiCallConfig()``,
    so nothing is read from the environment unless the caller asks
    ConfigLoader for it.
    """

    default_content_type: str = Field(
        default=ConfigDefaults.DEFAULT_CONTENT_TYPE,
        description="Content type sent with a body when no Content-Type header is set",
        min_length=3,
    )
    print_diagnostics: bool = Field(
        default=ConfigDefaults.PRINT_DIAGNOSTICS,
        description="Print the response block to stdout after each request",
    )
    enable_audit_log: bool = Field(
        default=ConfigDefaults.ENABLE_AUDIT_LOG,
        description="Produce an audit entry for each request",
    )
    log_level: str = Field(
        default=ConfigDefaults.LOG_LEVEL,
        description="Level name for configure_logging, e.g. configure_logging(config.log_level)",
    )

    model_config = {
        "str_strip_whitespace": True,
        "validate_assignment": True,
    }

    @field_validator("default_content_type")
    @classmethod
    def validate_content_type(cls, v: str) -> str:
        """Validate content type has a type/subtype form"""
        media_type = v.split(";", 1)[0].strip()
        if "/" not in media_type or media_type.startswith("/") or media_type.endswith("/"):
            raise ValueError("default_content_type must look like 'type/subtype'")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the logging level name"""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of: {', '.join(LOG_LEVELS)}")
        return level

