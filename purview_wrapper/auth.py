"""
Token acquisition with MSAL for the command line.

The Purview clients take a bearer token from their caller; this module is the
caller-side helper that obtains one, either app-only (client secret present)
or delegated (public client, silent then interactive).
"""
import logging
import os
from typing import List, Optional

import msal
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

GRAPH_DEFAULT_SCOPE = "https://graph.microsoft.com/.default"
DELEGATED_SCOPES = [
    "https://graph.microsoft.com/ProtectionScopes.Compute.User",
    "https://graph.microsoft.com/Content.Process.User",
    "https://graph.microsoft.com/SensitivityLabel.Read",
]


class AuthManager:
    """Wraps a confidential or public MSAL client with a file-backed token cache.

    - CLIENT_SECRET present: ConfidentialClientApplication, client credentials flow.
    - Otherwise: PublicClientApplication, silent with optional interactive fallback.
    """

    def __init__(self, config: Optional[dict] = None, cache_path: str = "token_cache.bin"):
        load_dotenv()
        config = config or {}

        client_id = os.getenv("CLIENT_ID") or config.get("client_id")
        client_secret = os.getenv("CLIENT_SECRET") or config.get("client_secret")
        tenant_id = os.getenv("TENANT_ID") or config.get("tenant_id")
        authority = os.getenv("AUTHORITY") or config.get("authority")
        if not authority:
            authority = f"https://login.microsoftonline.com/{tenant_id or 'common'}"

        if not client_id:
            raise ValueError("CLIENT_ID must be set via environment or config.json")

        self.cache_path = cache_path
        self.token_cache = msal.SerializableTokenCache()
        if os.path.exists(self.cache_path):
            with open(self.cache_path, "r", encoding="utf-8") as fh:
                data = fh.read()
            if data:
                self.token_cache.deserialize(data)

        if client_secret:
            self.app = msal.ConfidentialClientApplication(
                client_id,
                client_credential=client_secret,
                authority=authority,
                token_cache=self.token_cache,
            )
            self.client_mode = "confidential"
        else:
            self.app = msal.PublicClientApplication(
                client_id,
                authority=authority,
                token_cache=self.token_cache,
            )
            self.client_mode = "public"

    def _save_cache(self) -> None:
        if not self.token_cache.has_state_changed:
            return
        try:
            with open(self.cache_path, "w", encoding="utf-8") as fh:
                fh.write(self.token_cache.serialize())
        except OSError as exc:
            logger.warning("Could not persist token cache to %s: %s", self.cache_path, exc)

    def _silent(self, scopes: List[str]) -> Optional[dict]:
        accounts = self.app.get_accounts()
        if not accounts:
            return None
        return self.app.acquire_token_silent(scopes, account=accounts[0])

    def get_token(self, scopes: Optional[List[str]] = None, interactive: bool = False) -> Optional[str]:
        """Return an access token, or None when none could be obtained silently
        and ``interactive`` is False."""
        if self.client_mode == "confidential":
            result = self.app.acquire_token_for_client(scopes=scopes or [GRAPH_DEFAULT_SCOPE])
        else:
            scopes = scopes or DELEGATED_SCOPES
            result = self._silent(scopes)
            if (not result or "access_token" not in result) and interactive:
                result = self.app.acquire_token_interactive(scopes=scopes)

        if result and "access_token" in result:
            self._save_cache()
            return result["access_token"]

        logger.error("Token acquisition failed (%s): %s", self.client_mode,
                     result.get("error_description") if result else "no result")
        return None
