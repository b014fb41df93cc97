"""Exception classes for the api-call package"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


class ApiCallErrorCategory(str, Enum):
    """Error category codes"""
    CONFIG = "CONFIG"
    VALIDATION = "VAL"
    NETWORK = "NET"
    UNKNOWN = "UNKNOWN"


class ApiCallError(Exception):
    """
    Base exception for api-call errors

    All errors raised by the package extend from this class.
    HTTP error statuses are not errors: they come back as ordinary responses.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.status_code = status_code
        self.cause = cause
        self.details = details
        self.timestamp = datetime.now(timezone.utc)
        self.category = self._determine_category(code)

    def _determine_category(self, code: Optional[str]) -> ApiCallErrorCategory:
        """Determine error category from code"""
        if not code:
            return ApiCallErrorCategory.UNKNOWN

        if code.startswith("CONFIG"):
            return ApiCallErrorCategory.CONFIG
        if code.startswith("VAL"):
            return ApiCallErrorCategory.VALIDATION
        if code.startswith("NET"):
            return ApiCallErrorCategory.NETWORK

        return ApiCallErrorCategory.UNKNOWN

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary"""
        return {
            "name": self.__class__.__name__,
            "message": str(self),
            "code": self.code,
            "status_code": self.status_code,
            "category": self.category.value,
            "timestamp": self.timestamp.isoformat(),
            "details": self.details,
        }

    def has_code(self, code: str) -> bool:
        """Check if error has a specific code"""
        return self.code == code

    def is_category(self, category: ApiCallErrorCategory) -> bool:
        """Check if error belongs to a category"""
        return self.category == category

    def get_description(self) -> str:
        """Get human-readable error description"""
        parts = [str(self)]

        if self.code:
            parts.insert(0, f"[{self.code}]")

        if self.status_code:
            parts.append(f"(HTTP {self.status_code})")

        return " ".join(parts)


class ValidationError(ApiCallError):
    """Validation error"""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code="VALIDATION_ERROR", details=details)
        self.field = field


class ConfigurationError(ApiCallError):
    """
    Misuse of a configuration handle

    Raised before any request is sent, e.g. when a token request is
    attempted without OAuth2 parameters or a handle is executed twice.
    """

    def __init__(
        self,
        message: str,
        code: str = "CONFIG01",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code=code, details=details)


class TransportError(ApiCallError):
    """
    Transport layer failure

    Wraps connection, DNS, TLS and URL construction failures reported
    by the underlying HTTP library. Never retried.
    """

    def __init__(
        self,
        message: str,
        network_code: str = "NET10",
        cause: Optional[Exception] = None,
    ) -> None:
        super().__init__(message, code=network_code, cause=cause)
        self.network_code = network_code

    @classmethod
    def timeout(
        cls, message: str = "Request timed out", cause: Optional[Exception] = None
    ) -> "TransportError":
        """Create a timeout error"""
        return cls(message, network_code="NET01", cause=cause)

    @classmethod
    def connection_failed(
        cls, message: str = "Connection failed", cause: Optional[Exception] = None
    ) -> "TransportError":
        """Create a connection error"""
        return cls(message, network_code="NET02", cause=cause)

    @classmethod
    def invalid_url(
        cls, message: str = "Invalid URL", cause: Optional[Exception] = None
    ) -> "TransportError":
        """Create an invalid URL error"""
        return cls(message, network_code="NET03", cause=cause)

    @classmethod
    def ssl_error(
        cls, message: str = "SSL/TLS error", cause: Optional[Exception] = None
    ) -> "TransportError":
        """Create an SSL error"""
        return cls(message, network_code="NET04", cause=cause)

    @classmethod
    def invalid_request(
        cls, message: str = "Invalid request", cause: Optional[Exception] = None
    ) -> "TransportError":
        """Create an error for a request the transport cannot encode"""
        return cls(message, network_code="NET05", cause=cause)
