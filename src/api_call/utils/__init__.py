"""Utilities module initialization"""

from api_call.utils.logger import configure_logging
from api_call.utils.redact import redact_sensitive_data, SENSITIVE_FIELDS

__all__ = ["configure_logging", "redact_sensitive_data", "SENSITIVE_FIELDS"]
