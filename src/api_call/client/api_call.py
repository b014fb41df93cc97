"""
Fluent request builder and executor
Accumulates request settings through chained calls and sends them as
one synchronous request through a requests session
"""

import sys
import time
import uuid
import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import (
    Callable,
    Dict,
    Optional,
    TypeVar,
)
from urllib.parse import urlencode

import requests
from requests.structures import CaseInsensitiveDict

from api_call.client.auth import (
    FORM_CONTENT_TYPE,
    AuthSettings,
    AuthType,
    HeadersOnlyAuth,
    apply_auth,
    build_oauth2_form,
)
from api_call.config.api_call_config import ApiCallConfig
from api_call.exceptions import ConfigurationError, TransportError
from api_call.models.response import Response
from api_call.utils.redact import redact_sensitive_data


# Logger for this module
logger = logging.getLogger(__name__)


class HttpMethod(str, Enum):
    """HTTP method types supported"""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


# Methods that carry a request body
BODY_METHODS = frozenset({HttpMethod.POST, HttpMethod.PUT, HttpMethod.PATCH})


@dataclass
class AuditEntry:
    """Audit log entry for one executed request"""
    timestamp: str
    request_id: str
    method: str
    url: str
    headers: Dict[str, str]
    status_code: Optional[int] = None
    duration: int = 0  # milliseconds
    success: bool = False
    error: Optional[str] = None


# Audit log callback type
AuditLogCallback = Callable[[AuditEntry], None]


class ApiCall:
    """
    Configuration of a single HTTP request

    Created through one of the per-method factories, mutated through the
    returned handle and consumed by exactly one terminal call.

    Example:
        >>> response = (
        ...     ApiCall.get("https://jsonplaceholder.typicode.com/posts")
        ...     .header("Accept", "application/json")
        ...     .query_param("userId", "1")
        ...     .execute()
        ... )
        >>> response.is_success
        True
    """

    def __init__(
        self,
        base_url: str,
        method: HttpMethod,
        config: Optional[ApiCallConfig] = None,
    ) -> None:
        """
        Create a new request configuration

        Args:
            base_url: Target URL, query parameters are appended to it
            method: HTTP method
            config: Execution settings, defaults to ApiCallConfig()
        """
        self._base_url = base_url
        self.method = HttpMethod(method)
        self.config = config or ApiCallConfig()

        self.headers: Dict[str, str] = {}
        self.query_params: Dict[str, str] = {}
        self.request_body: Optional[str] = None
        self.auth = AuthSettings()

        self._audit_log_callback: Optional[AuditLogCallback] = None
        self._executed = False

    @property
    def base_url(self) -> str:
        """Get base URL"""
        return self._base_url

    @property
    def executed(self) -> bool:
        """Whether a terminal call has consumed this configuration"""
        return self._executed

    # -- Factories ---------------------------------------------------------

    @classmethod
    def get(cls, url: str, config: Optional[ApiCallConfig] = None) -> "CallDetails":
        """Start a GET request"""
        return CallDetails(cls(url, HttpMethod.GET, config))

    @classmethod
    def post(cls, url: str, config: Optional[ApiCallConfig] = None) -> "CallDetailsWithBody":
        """Start a POST request"""
        return CallDetailsWithBody(cls(url, HttpMethod.POST, config))

    @classmethod
    def put(cls, url: str, config: Optional[ApiCallConfig] = None) -> "CallDetailsWithBody":
        """Start a PUT request"""
        return CallDetailsWithBody(cls(url, HttpMethod.PUT, config))

    @classmethod
    def delete(cls, url: str, config: Optional[ApiCallConfig] = None) -> "CallDetails":
        """Start a DELETE request"""
        return CallDetails(cls(url, HttpMethod.DELETE, config))

    @classmethod
    def patch(cls, url: str, config: Optional[ApiCallConfig] = None) -> "CallDetailsWithBody":
        """Start a PATCH request"""
        return CallDetailsWithBody(cls(url, HttpMethod.PATCH, config))

    @classmethod
    def head(cls, url: str, config: Optional[ApiCallConfig] = None) -> "CallDetails":
        """Start a HEAD request"""
        return CallDetails(cls(url, HttpMethod.HEAD, config))

    @classmethod
    def options(cls, url: str, config: Optional[ApiCallConfig] = None) -> "CallDetails":
        """Start an OPTIONS request"""
        return CallDetails(cls(url, HttpMethod.OPTIONS, config))

    # -- Terminal operations -----------------------------------------------

    def execute(self) -> Response:
        """
        Send the configured request and wait for the response

        Returns:
            The normalized response, whatever its status code

        Raises:
            ConfigurationError: If this configuration was already executed
            TransportError: If the request could not be sent or the URL is malformed
        """
        self._consume()

        with self._create_session() as session:
            allow_body = self.method in BODY_METHODS
            headers: CaseInsensitiveDict = CaseInsensitiveDict(self.headers)

            form_body = apply_auth(self.auth, session, headers, allow_body)
            data = self._resolve_body(headers, form_body, allow_body)

            request = requests.Request(
                method=self.method.value,
                url=self._base_url,
                headers=headers,
                params=self.query_params,
                data=data,
                auth=None if self.auth.auth_type == AuthType.BASIC else HeadersOnlyAuth(),
            )
            return self._send(session, request, self.method)

    def execute_oauth2_token_request(self) -> Response:
        """
        POST the OAuth2 form to the configured token_url

        The token response is returned as-is; nothing is forwarded to
        another request.

        Returns:
            The raw token endpoint response

        Raises:
            ConfigurationError: If OAuth2 is not the active auth type or no
                token_url was given
            TransportError: If the token request could not be sent
        """
        params = self.auth.oauth2_params
        if self.auth.auth_type != AuthType.OAUTH2 or "token_url" not in params:
            raise ConfigurationError(
                "OAuth2 not properly configured",
                code="CONFIG_OAUTH2",
                details={"auth_type": self.auth.auth_type.value},
            )

        self._consume()

        form = build_oauth2_form(params, default_grant_type="client_credentials")
        with self._create_session() as session:
            request = requests.Request(
                method=HttpMethod.POST.value,
                url=params["token_url"],
                headers={"Content-Type": FORM_CONTENT_TYPE},
                data=urlencode(form).encode("utf-8"),
                auth=HeadersOnlyAuth(),
            )
            return self._send(session, request, HttpMethod.POST)

    def set_audit_log_callback(self, callback: AuditLogCallback) -> None:
        """Set audit log callback"""
        self._audit_log_callback = callback

    # -- Internals ---------------------------------------------------------

    def _consume(self) -> None:
        """Mark the configuration as used, rejecting a second execution"""
        if self._executed:
            raise ConfigurationError(
                "Request has already been executed",
                code="CONFIG_ALREADY_EXECUTED",
            )
        self._executed = True

    def _create_session(self) -> requests.Session:
        """Create the session scoped to one execution"""
        return requests.Session()

    def _resolve_body(
        self,
        headers: CaseInsensitiveDict,
        form_body: Optional[str],
        allow_body: bool,
    ) -> Optional[bytes]:
        """Pick the payload to attach and make sure it has a content type"""
        if form_body is not None:
            return form_body.encode("utf-8")

        if self.request_body is None:
            return None

        if not allow_body:
            logger.debug("Body dropped: %s requests carry no body", self.method.value)
            return None

        if headers.get("Content-Type") is None:
            headers["Content-Type"] = self.config.default_content_type

        return self.request_body.encode("utf-8")

    def _send(
        self,
        session: requests.Session,
        request: requests.Request,
        method: HttpMethod,
    ) -> Response:
        """Prepare, send and normalize one request"""
        request_id = self._generate_request_id()
        start_time = time.time()
        prepared: Optional[requests.PreparedRequest] = None

        try:
            prepared = session.prepare_request(request)
            settings = session.merge_environment_settings(
                prepared.url, {}, None, None, None
            )
            logger.debug("Sending %s %s [%s]", prepared.method, prepared.url, request_id)

            raw = session.send(prepared, **settings)
            response = Response.from_requests(raw)

        except (requests.exceptions.RequestException, ValueError) as e:
            # ValueError covers UnicodeEncodeError from non latin-1 header values
            error = self._normalize_error(e)
            logger.error("Request %s %s failed: %s", method.value, request.url, e)
            print(f"Error executing request: {e}", file=sys.stderr)
            self._log_audit(
                self._create_audit_entry(
                    request_id, method, request, prepared, start_time, error=error
                )
            )
            raise error from e

        logger.info(
            "%s %s -> %d (%dms)",
            method.value,
            prepared.url,
            response.status_code,
            int((time.time() - start_time) * 1000),
        )
        self._log_audit(
            self._create_audit_entry(
                request_id, method, request, prepared, start_time, response=response
            )
        )
        self._print_response(method, response)
        return response

    def _normalize_error(self, error: Exception) -> TransportError:
        """Map a transport exception onto TransportError"""
        message = str(error)

        if isinstance(error, requests.exceptions.Timeout):
            return TransportError.timeout(f"Request timed out: {message}", cause=error)

        if isinstance(error, requests.exceptions.SSLError):
            return TransportError.ssl_error(f"SSL error: {message}", cause=error)

        if isinstance(error, requests.exceptions.ConnectionError):
            return TransportError.connection_failed(f"Connection error: {message}", cause=error)

        if isinstance(error, requests.exceptions.InvalidHeader):
            return TransportError.invalid_request(f"Invalid header: {message}", cause=error)

        if isinstance(
            error,
            (
                requests.exceptions.MissingSchema,
                requests.exceptions.InvalidSchema,
                requests.exceptions.InvalidURL,
                requests.exceptions.URLRequired,
            ),
        ):
            return TransportError.invalid_url(f"Invalid URL: {message}", cause=error)

        if not isinstance(error, requests.exceptions.RequestException):
            return TransportError.invalid_request(f"Invalid request: {message}", cause=error)

        return TransportError(f"Request error: {message}", cause=error)

    def _print_response(self, method: HttpMethod, response: Response) -> None:
        """Print the diagnostic block for a response"""
        if not self.config.print_diagnostics:
            return

        title = f"=== {method.value} Response ==="
        print(title)
        print(response)
        print("=" * len(title))
        print()
        print("Request was successful!" if response.is_success else "Request failed!")

    def _generate_request_id(self) -> str:
        """Generate unique request ID for traceability"""
        timestamp = hex(int(time.time() * 1000))[2:]
        unique_id = uuid.uuid4().hex[:8]
        return f"api-{timestamp}-{unique_id}"

    def _create_audit_entry(
        self,
        request_id: str,
        method: HttpMethod,
        request: requests.Request,
        prepared: Optional[requests.PreparedRequest],
        start_time: float,
        response: Optional[Response] = None,
        error: Optional[Exception] = None,
    ) -> AuditEntry:
        """Create audit log entry"""
        duration = int((time.time() - start_time) * 1000)

        if prepared is not None:
            url = prepared.url or request.url
            headers = dict(prepared.headers)
        else:
            url = request.url
            headers = dict(request.headers or {})

        extra_fields = []
        if self.auth.auth_type == AuthType.API_KEY and self.auth.api_key_header_name:
            extra_fields.append(self.auth.api_key_header_name)

        return AuditEntry(
            timestamp=datetime.now(timezone.utc).isoformat(),
            request_id=request_id,
            method=method.value,
            url=url,
            headers=redact_sensitive_data(headers, extra_fields=extra_fields),
            status_code=response.status_code if response is not None else None,
            duration=duration,
            success=error is None,
            error=str(error) if error else None,
        )

    def _log_audit(self, entry: AuditEntry) -> None:
        """Log audit entry"""
        if not self.config.enable_audit_log:
            return

        if self._audit_log_callback:
            try:
                self._audit_log_callback(entry)
            except Exception:
                logger.exception("Audit log callback failed for %s", entry.request_id)
        else:
            logger.info("Audit entry: %s", asdict(entry))


# Handle type returned by the chaining methods
T = TypeVar("T", bound="CallDetails")


class CallDetails:
    """
    Configuration handle for methods without a request body

    Every chaining method mutates the underlying ApiCall and returns the
    same handle.
    """

    def __init__(self, call: ApiCall) -> None:
        self._call = call

    @property
    def call(self) -> ApiCall:
        """Get the underlying request configuration"""
        return self._call

    def header(self: T, name: str, value: str) -> T:
        """Set a header, replacing an earlier value under the same name"""
        self._call.headers[name] = value
        return self

    def query_param(self: T, name: str, value: str) -> T:
        """Set a query parameter, replacing an earlier value under the same name"""
        self._call.query_params[name] = value
        return self

    def basic_auth(self: T, username: str, password: str) -> T:
        """Use HTTP Basic authentication"""
        auth = self._call.auth
        auth.auth_type = AuthType.BASIC
        auth.username = username
        auth.password = password
        return self

    def bearer_auth(self: T, token: str) -> T:
        """Send ``Authorization: Bearer <token>``"""
        auth = self._call.auth
        auth.auth_type = AuthType.BEARER
        auth.token = token
        return self

    def api_key_auth(self: T, header_name: str, key: str) -> T:
        """Send the API key in the named header"""
        auth = self._call.auth
        auth.auth_type = AuthType.API_KEY
        auth.api_key_header_name = header_name
        auth.api_key = key
        return self

    def oauth2(self: T, params: Dict[str, str]) -> T:
        """
        Use OAuth2 form parameters

        On ``execute()`` the request itself becomes the token request: its
        body is replaced by the form-encoded parameters. Include a
        ``token_url`` entry to use ``execute_oauth2_token_request()``
        instead.
        """
        auth = self._call.auth
        auth.auth_type = AuthType.OAUTH2
        auth.oauth2_params = dict(params)
        return self

    def audit_log(self: T, callback: AuditLogCallback) -> T:
        """Receive the audit entry when audit logging is enabled"""
        self._call.set_audit_log_callback(callback)
        return self

    def execute(self) -> Response:
        """Send the request; see ApiCall.execute"""
        return self._call.execute()

    def execute_oauth2_token_request(self) -> Response:
        """Fetch an OAuth2 token; see ApiCall.execute_oauth2_token_request"""
        return self._call.execute_oauth2_token_request()


class CallDetailsWithBody(CallDetails):
    """Configuration handle for POST, PUT and PATCH"""

    def body(self, text: str) -> "CallDetailsWithBody":
        """Set the request body"""
        self._call.request_body = text
        return self


def get(url: str, config: Optional[ApiCallConfig] = None) -> CallDetails:
    """Start a GET request"""
    return ApiCall.get(url, config)


def post(url: str, config: Optional[ApiCallConfig] = None) -> CallDetailsWithBody:
    """Start a POST request"""
    return ApiCall.post(url, config)


def put(url: str, config: Optional[ApiCallConfig] = None) -> CallDetailsWithBody:
    """Start a PUT request"""
    return ApiCall.put(url, config)


def delete(url: str, config: Optional[ApiCallConfig] = None) -> CallDetails:
    """Start a DELETE request"""
    return ApiCall.delete(url, config)


def patch(url: str, config: Optional[ApiCallConfig] = None) -> CallDetailsWithBody:
    """Start a PATCH request"""
    return ApiCall.patch(url, config)


def head(url: str, config: Optional[ApiCallConfig] = None) -> CallDetails:
    """Start a HEAD request"""
    return ApiCall.head(url, config)


def options(url: str, config: Optional[ApiCallConfig] = None) -> CallDetails:
    """Start an OPTIONS request"""
    return ApiCall.options(url, config)
