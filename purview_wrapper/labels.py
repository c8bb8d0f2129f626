"""
Sensitivity label reads against Microsoft Graph.

The fetch methods return the response body as text; ``decode_label_response``
is the separate, fallible step that parses it.
"""
import json
from typing import Any, Iterable
from urllib.parse import quote

from .http import BaseClient, join_url

LABELS_PATH = "security/dataSecurityAndGovernance/sensitivityLabels"


def _encode_label_id(label_id: str) -> str:
    # unreserved characters (GUIDs) pass through unchanged
    return quote(str(label_id), safe="")


def decode_label_response(text: str) -> Any:
    """Parse a label response body. Raises ``json.JSONDecodeError`` on bad input."""
    return json.loads(text)


class LabelClient(BaseClient):
    error_prefix = "LabelInfo call failed -"

    def _get_text(self, operation: str, url: str, access_token: str) -> str:
        self.logger.info("%s: %s", operation, url)
        try:
            response = self._send("GET", url, access_token, headers={
                "Accept": "application/json",
                "User-Agent": self.settings.user_agent,
            })
        except Exception:
            self.logger.exception("Error retrieving label info: %s", url)
            raise
        body = response.text
        self.logger.debug("%s response: %s", operation, body)
        return body

    def fetch_sensitivity_labels(self, access_token: str) -> str:
        """All labels visible to the user, expanded with rights and sublabels."""
        url = join_url(self.settings.graph_base_url, f"{LABELS_PATH}?$expand=rights,sublabels")
        return self._get_text("fetch_sensitivity_labels", url, access_token)

    def fetch_sub_label_rights(self, access_token: str, label_id: str) -> str:
        url = join_url(self.settings.graph_base_url, f"{LABELS_PATH}/{_encode_label_id(label_id)}/rights")
        return self._get_text("fetch_sub_label_rights", url, access_token)

    def compute_label_inheritance(self, access_token: str, label_ids: Iterable[str]) -> str:
        """Label a derived file would inherit from ``label_ids`` (en-US, File format)."""
        ids_segment = ",".join(f'"{_encode_label_id(label_id)}"' for label_id in label_ids)
        path = (f"{LABELS_PATH}/computeInheritance(labelIds=[{ids_segment}],"
                f"locale='en-US',contentFormats=[\"File\"])")
        url = join_url(self.settings.graph_base_url, path)
        return self._get_text("compute_label_inheritance", url, access_token)
