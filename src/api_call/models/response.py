"""Normalized HTTP response"""

from typing import Any, Dict, NoReturn, Optional

import requests
from pydantic import BaseModel, Field, field_validator


class FrozenHeaders(dict):
    """Read-only header mapping held by a Response"""

    def _readonly(self, *args: Any, **kwargs: Any) -> NoReturn:
        raise TypeError("Response headers are read-only")

    __setitem__ = _readonly
    __delitem__ = _readonly
    __ior__ = _readonly
    clear = _readonly
    pop = _readonly
    popitem = _readonly
    setdefault = _readonly
    update = _readonly

    def __reduce__(self):
        return (self.__class__, (dict(self),))


class Response(BaseModel):
    """
    Immutable result of one executed request

    Every status code is delivered as a Response; ``is_success`` is the
    only signal separating 2xx from the rest.
    """

    status_code: int = Field(..., description="HTTP status code")
    headers: Dict[str, str] = Field(
        default_factory=dict, validate_default=True, description="Response headers"
    )
    body: Optional[str] = Field(None, description="Response payload as text")

    model_config = {
        "frozen": True,
    }

    @field_validator("headers", mode="after")
    @classmethod
    def freeze_headers(cls, v: Dict[str, str]) -> Dict[str, str]:
        """Wrap headers in a read-only mapping"""
        return FrozenHeaders(v)

    @classmethod
    def from_requests(cls, response: requests.Response) -> "Response":
        """
        Build a Response from a raw requests response

        Each occurrence of a repeated header name overwrites the previous
        one, so the last value received wins. The body is None when no
        payload bytes were received.

        Args:
            response: Response returned by the transport

        Returns:
            Normalized Response
        """
        raw_headers = getattr(response.raw, "headers", None)
        if raw_headers is not None and hasattr(raw_headers, "iteritems"):
            # urllib3 yields every occurrence separately, requests joins them
            pairs = raw_headers.iteritems()
        else:
            pairs = response.headers.items()

        headers: Dict[str, str] = {}
        for name, value in pairs:
            headers[name] = value

        body = response.text if response.content else None
        return cls(status_code=response.status_code, headers=headers, body=body)

    @property
    def is_success(self) -> bool:
        """True for 2xx status codes"""
        return 200 <= self.status_code < 300

    def __str__(self) -> str:
        lines = [f"Status Code: {self.status_code}", "", "Headers:"]
        for name, value in self.headers.items():
            lines.append(f"{name}: {value}")
        lines.extend(["", "Body:", self.body if self.body is not None else ""])
        return "\n".join(lines)
