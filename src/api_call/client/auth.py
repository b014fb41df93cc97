"""
Authentication derivation
Turns the active auth settings of a request into headers, session
credentials or an OAuth2 form body
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, MutableMapping, Optional, Tuple
from urllib.parse import urlencode

import requests
from requests.auth import AuthBase, HTTPBasicAuth


logger = logging.getLogger(__name__)


FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class HeadersOnlyAuth(AuthBase):
    """
    Leaves the prepared request untouched

    Set as the request auth so requests does not fall back to netrc
    credentials when the headers already carry the chosen auth.
    """

    def __call__(self, r: requests.PreparedRequest) -> requests.PreparedRequest:
        return r


class AuthType(str, Enum):
    """Authentication strategies, mutually exclusive per request"""
    NONE = "NONE"
    BASIC = "BASIC"
    BEARER = "BEARER"
    OAUTH2 = "OAUTH2"
    API_KEY = "API_KEY"


@dataclass
class AuthSettings:
    """
    Authentication state of one request

    Only the fields of ``auth_type`` are read at execution time; values
    left behind by an earlier auth call are ignored.
    """
    auth_type: AuthType = AuthType.NONE
    username: Optional[str] = None
    password: Optional[str] = None
    token: Optional[str] = None
    api_key: Optional[str] = None
    api_key_header_name: Optional[str] = None
    oauth2_params: Dict[str, str] = field(default_factory=dict)


def build_oauth2_form(
    params: Dict[str, str],
    default_grant_type: Optional[str] = None,
) -> List[Tuple[str, str]]:
    """
    Build the OAuth2 form fields from the configured parameters

    Fields are emitted in a fixed order: grant_type, client_id,
    client_secret, username and password (only as a pair), scope.
    Anything else in ``params`` (e.g. token_url) is not sent.

    Args:
        params: OAuth2 parameters
        default_grant_type: grant_type to use when params has none

    Returns:
        Ordered list of form fields
    """
    form: List[Tuple[str, str]] = []

    grant_type = params.get("grant_type", default_grant_type)
    if grant_type is not None:
        form.append(("grant_type", grant_type))

    for key in ("client_id", "client_secret"):
        if key in params:
            form.append((key, params[key]))

    if "username" in params and "password" in params:
        form.append(("username", params["username"]))
        form.append(("password", params["password"]))

    if "scope" in params:
        form.append(("scope", params["scope"]))

    return form


def apply_auth(
    auth: AuthSettings,
    session: requests.Session,
    headers: MutableMapping[str, str],
    allow_body: bool,
) -> Optional[str]:
    """
    Apply the active authentication to an outgoing request

    Args:
        auth: Authentication settings of the request
        session: Session the request will be sent through
        headers: Request headers, updated in place
        allow_body: Whether the request method may carry a body

    Returns:
        The URL-encoded OAuth2 form that replaces the request body, or
        None when the body is left alone
    """
    if auth.auth_type == AuthType.BASIC:
        # Credentials apply to any host and port the session talks to
        session.auth = HTTPBasicAuth(auth.username or "", auth.password or "")

    elif auth.auth_type == AuthType.BEARER:
        headers["Authorization"] = f"Bearer {auth.token}"

    elif auth.auth_type == AuthType.API_KEY:
        headers[auth.api_key_header_name or "X-API-Key"] = auth.api_key or ""

    elif auth.auth_type == AuthType.OAUTH2:
        access_token = auth.oauth2_params.get("access_token")
        if access_token is not None:
            headers["Authorization"] = f"Bearer {access_token}"

        if not allow_body:
            logger.warning("OAuth2 form parameters dropped: request method has no body")
            return None
        headers["Content-Type"] = FORM_CONTENT_TYPE
        return urlencode(build_oauth2_form(auth.oauth2_params))

    return None
