"""Shared request plumbing for the Graph / Purview clients."""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Iterator, Optional

import requests

from .config import Settings
from .exceptions import ApiError, ConfigurationError


class ResponseHeaders(Mapping):
    """Read-only, ordered view of response headers keyed by lower-cased name."""

    def __init__(self, items=()):
        self._items = {}
        pairs = items.items() if hasattr(items, "items") else items
        for name, value in pairs:
            self._items[name.lower()] = value

    @classmethod
    def from_response(cls, response: requests.Response) -> "ResponseHeaders":
        return cls(response.headers)

    def __getitem__(self, name: str) -> str:
        return self._items[name.lower()]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"ResponseHeaders({self._items!r})"

    @property
    def etag(self) -> Optional[str]:
        return self._items.get("etag")


def join_url(base_url: str, path: str) -> str:
    """Join with exactly one slash between base and path."""
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def require_purview_base_url(purview_base_url: Optional[str]) -> str:
    if not purview_base_url:
        raise ConfigurationError("PURVIEW_BASE_URL (Settings.purview_base_url) is not configured.")
    return purview_base_url


class BaseClient:
    """Holds settings, session and logger, and issues one bearer-authenticated request."""

    error_prefix = "API call failed with status"

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None,
                 logger: Optional[logging.Logger] = None):
        self.settings = settings
        self.session = session or requests.Session()
        self.logger = logger or logging.getLogger(type(self).__module__)

    def _headers(self, access_token: str, extra: Optional[dict] = None) -> dict:
        headers = {"Authorization": f"Bearer {access_token}"}
        if extra:
            headers.update(extra)
        return headers

    def _send(self, method: str, url: str, access_token: str, *,
              headers: Optional[dict] = None, json_body=None) -> requests.Response:
        """Send the request; any status outside 2xx raises ``ApiError``."""
        kwargs = {"headers": self._headers(access_token, headers), "timeout": self.settings.timeout}
        if json_body is not None:
            kwargs["json"] = json_body
        response = self.session.request(method, url, **kwargs)
        if not 200 <= response.status_code < 300:
            raise ApiError(response.status_code, response.text, url=url, prefix=self.error_prefix)
        return response
