"""Protection scope lookup (``/me/dataSecurityAndGovernance/protectionScopes/compute``)."""
from typing import Any, NamedTuple, Optional

from .http import BaseClient, join_url, require_purview_base_url

PROTECTION_SCOPE_PATH = "me/dataSecurityAndGovernance/protectionScopes/compute"


class ProtectionScopeResult(NamedTuple):
    body: Any
    etag: Optional[str]


class ProtectionScopeClient(BaseClient):

    def compute_protection_scope(self, access_token: str) -> ProtectionScopeResult:
        """POST an empty body and return the parsed JSON plus the response ``etag``.

        A missing etag comes back as ``None``; whether that is usable for a later
        processContent call is up to the caller.
        """
        try:
            url = join_url(require_purview_base_url(self.settings.purview_base_url), PROTECTION_SCOPE_PATH)
            self.logger.info("compute_protection_scope: %s", url)
            response = self._send("POST", url, access_token,
                                  headers={"Content-Type": "application/json"}, json_body={})
            etag = response.headers.get("etag")
            body = response.json()
        except Exception:
            self.logger.exception("Error invoking protection scope API (%s)", PROTECTION_SCOPE_PATH)
            raise
        self.logger.debug("Protection scope etag: %s", etag)
        return ProtectionScopeResult(body=body, etag=etag)
