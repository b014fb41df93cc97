"""
Request builder module
"""

from api_call.client.api_call import (
    ApiCall,
    CallDetails,
    CallDetailsWithBody,
    HttpMethod,
    AuditEntry,
    AuditLogCallback,
    BODY_METHODS,
    get,
    post,
    put,
    delete,
    patch,
    head,
    options,
)
from api_call.client.auth import (
    AuthType,
    AuthSettings,
    FORM_CONTENT_TYPE,
    apply_auth,
    build_oauth2_form,
)

__all__ = [
    "ApiCall",
    "CallDetails",
    "CallDetailsWithBody",
    "HttpMethod",
    "AuditEntry",
    "AuditLogCallback",
    "BODY_METHODS",
    "AuthType",
    "AuthSettings",
    "FORM_CONTENT_TYPE",
    "apply_auth",
    "build_oauth2_form",
    "get",
    "post",
    "put",
    "delete",
    "patch",
    "head",
    "options",
]
