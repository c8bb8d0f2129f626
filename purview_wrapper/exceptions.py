"""Exceptions raised by the Purview helpers.

Transport failures are not wrapped: they surface as the
``requests.RequestException`` raised by the session.
"""


class PurviewError(Exception):
    """Base class for errors raised by this package."""


class ConfigurationError(PurviewError):
    """A required setting (e.g. PURVIEW_BASE_URL) is missing."""


class ApiError(PurviewError):
    """The service answered with a non-success HTTP status."""

    def __init__(self, status_code: int, body: str, url: str = "", prefix: str = "API call failed with status"):
        self.status_code = status_code
        self.body = body
        self.url = url
        super().__init__(f"{prefix} {status_code}: {body}")
