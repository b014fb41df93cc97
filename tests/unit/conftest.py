"""
Shared fixtures for unit tests

The transport is replaced by patching requests.Session.send, so every
request is prepared by requests exactly as in production but never
leaves the process.
"""

from typing import Dict, List, Optional

import pytest
import requests
from requests.structures import CaseInsensitiveDict


def make_response(
    status_code: int = 200,
    body: bytes = b"",
    headers: Optional[Dict[str, str]] = None,
) -> requests.Response:
    """Build a raw requests response"""
    response = requests.Response()
    response.status_code = status_code
    response._content = body
    response.headers = CaseInsensitiveDict(headers or {})
    response.encoding = "utf-8"
    return response


class FakeTransport:
    """Records prepared requests and answers with a canned response"""

    def __init__(self) -> None:
        self.requests: List[requests.PreparedRequest] = []
        self.sessions: List[requests.Session] = []
        self.closed_sessions: List[requests.Session] = []
        self.response = make_response(
            200, b'{"ok": true}', {"Content-Type": "application/json"}
        )
        self.error: Optional[Exception] = None

    @property
    def last_request(self) -> requests.PreparedRequest:
        return self.requests[-1]

    def send(self, session, request, **kwargs):
        self.sessions.append(session)
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def transport(monkeypatch) -> FakeTransport:
    fake = FakeTransport()
    original_close = requests.Session.close

    def send(session, request, **kwargs):
        return fake.send(session, request, **kwargs)

    def close(session):
        fake.closed_sessions.append(session)
        original_close(session)

    monkeypatch.setattr(requests.Session, "send", send)
    monkeypatch.setattr(requests.Session, "close", close)
    return fake
