"""
Shared fixtures for the Purview helper tests.

The transport is a MagicMock standing in for ``requests.Session``; responses
are real ``requests.Response`` objects so status and header handling match
what the library returns.
"""
import json
from unittest.mock import MagicMock

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from purview_wrapper.config import Settings


def make_response(status_code=200, body="", headers=None):
    """Build a requests.Response with the given status, body (str or JSON-able) and headers."""
    response = requests.Response()
    response.status_code = status_code
    if not isinstance(body, (str, bytes)):
        body = json.dumps(body)
    response._content = body.encode("utf-8") if isinstance(body, str) else body
    response.encoding = "utf-8"
    response.headers = CaseInsensitiveDict(headers or {})
    return response


@pytest.fixture
def settings():
    return Settings(purview_base_url="https://purview.example.com/beta/", graph_base_url="https://graph.example.com/v1.0")


@pytest.fixture
def session():
    mock_session = MagicMock(spec=requests.Session)
    mock_session.request.return_value = make_response(200, "{}")
    return mock_session


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep host environment variables out of config loading."""
    for name in ("PURVIEW_BASE_URL", "GRAPH_BASE_URL", "REQUEST_TIMEOUT",
                 "CLIENT_ID", "CLIENT_SECRET", "TENANT_ID", "AUTHORITY", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
