"""
api-call: fluent HTTP request builder

Main entry point for the package
"""

from api_call.client import (
    ApiCall,
    CallDetails,
    CallDetailsWithBody,
    HttpMethod,
    AuthType,
    AuditEntry,
    get,
    post,
    put,
    delete,
    patch,
    head,
    options,
)
from api_call.exceptions import (
    ApiCallError,
    ApiCallErrorCategory,
    ValidationError,
    ConfigurationError,
    TransportError,
)

# Configuration
from api_call.config import (
    ApiCallConfig,
    ConfigLoader,
    ConfigValidator,
    ConfigDefaults,
    ENV_VAR_MAPPING,
)

# Models
from api_call.models import Response

from api_call.utils import configure_logging

__version__ = "0.1.0"

__all__ = [
    # Builder
    "ApiCall",
    "CallDetails",
    "CallDetailsWithBody",
    "HttpMethod",
    "AuthType",
    "AuditEntry",
    "get",
    "post",
    "put",
    "delete",
    "patch",
    "head",
    "options",
    # Exceptions
    "ApiCallError",
    "ApiCallErrorCategory",
    "ValidationError",
    "ConfigurationError",
    "TransportError",
    # Configuration
    "ApiCallConfig",
    "ConfigLoader",
    "ConfigValidator",
    "ConfigDefaults",
    "ENV_VAR_MAPPING",
    # Models
    "Response",
    # Logging
    "configure_logging",
]
