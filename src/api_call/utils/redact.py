"""Redaction of secrets before they reach logs or audit entries"""

from typing import Any, Iterable, Optional


# Sensitive fields that should be redacted in logs
SENSITIVE_FIELDS = [
    "authorization",
    "x-api-key",
    "api_key",
    "apikey",
    "password",
    "client_secret",
    "access_token",
    "refresh_token",
]

REDACTED = "[REDACTED]"


def redact_sensitive_data(obj: Any, extra_fields: Optional[Iterable[str]] = None) -> Any:
    """
    Redact sensitive data from object for logging

    Args:
        obj: Value to redact; dicts and lists are walked recursively
        extra_fields: Additional key names to treat as sensitive, such as
            a custom API key header

    Returns:
        Copy of obj with sensitive values replaced
    """
    fields = list(SENSITIVE_FIELDS)
    if extra_fields:
        fields.extend(f.lower() for f in extra_fields)
    return _redact(obj, fields)


def _redact(obj: Any, fields: list) -> Any:
    if isinstance(obj, list):
        return [_redact(item, fields) for item in obj]

    if isinstance(obj, dict):
        redacted = {}
        for key, value in obj.items():
            lower_key = str(key).lower()
            if any(field in lower_key for field in fields):
                redacted[key] = REDACTED
            elif isinstance(value, (dict, list)):
                redacted[key] = _redact(value, fields)
            else:
                redacted[key] = value
        return redacted

    return obj
