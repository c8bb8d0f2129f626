"""
Content submission to ``/me/dataSecurityAndGovernance/processContent``.

``enqueue_offline_tasks`` submits the prompt and/or the response of one
conversation turn, in that order, when their mode is ``evaluateOffline``.
"""
import json
from typing import Any, Dict, NamedTuple, Optional

from .http import BaseClient, ResponseHeaders, join_url, require_purview_base_url
from .payloads import construct_process_content_request_body

PROCESS_CONTENT_PATH = "me/dataSecurityAndGovernance/processContent"
EVALUATE_OFFLINE = "evaluateOffline"
UPLOAD_TEXT = "uploadText"
DOWNLOAD_TEXT = "downloadText"


class ProcessContentResult(NamedTuple):
    body: str
    headers: ResponseHeaders


class ContentProcessingClient(BaseClient):

    def process_content(self, access_token: str, etag: Optional[str],
                        request_body: Dict[str, Any]) -> ProcessContentResult:
        """POST ``request_body`` with ``If-None-Match: etag``.

        The header is always sent; a missing etag is sent as an empty string.
        """
        try:
            url = join_url(require_purview_base_url(self.settings.purview_base_url), PROCESS_CONTENT_PATH)
            self.logger.info("process_content: %s", url)
            response = self._send("POST", url, access_token, headers={
                "Content-Type": "application/json",
                "If-None-Match": etag or "",
            }, json_body=request_body)
        except Exception:
            self.logger.exception("Error invoking Process Content API (%s)", PROCESS_CONTENT_PATH)
            raise
        return ProcessContentResult(body=response.text, headers=ResponseHeaders.from_response(response))


def _submit(client: ContentProcessingClient, access_token: str, etag: Optional[str],
            request_body: Dict[str, Any], label: str) -> None:
    client.logger.debug("ProcessContent request body for %s: %s", label, json.dumps(request_body))
    result = client.process_content(access_token, etag, request_body)
    client.logger.debug("Process Content API response body for %s: %s", label, result.body)
    client.logger.debug("Process Content API response headers for %s: %s", label, json.dumps(dict(result.headers)))


def enqueue_offline_tasks(client: ContentProcessingClient, access_token: str, etag: Optional[str],
                          name: str, application_id: str, upload_text_mode: str,
                          download_text_mode: str, prompt: str, response: str,
                          session_id: str, sequence_no: int) -> str:
    """Submit the prompt (``uploadText``, ``sequence_no``) and/or the response
    (``downloadText``, ``sequence_no + 1``) for offline evaluation.

    Submissions run one after the other; the first failure propagates and
    nothing further is sent. Returns ``"OK"`` otherwise, including when
    neither mode asks for offline evaluation.
    """
    try:
        if upload_text_mode == EVALUATE_OFFLINE:
            client.logger.info("Handling evaluateOffline logic for uploadText...")
            body = construct_process_content_request_body(
                prompt, name, sequence_no, session_id, UPLOAD_TEXT, application_id)
            _submit(client, access_token, etag, body, "prompt")

        if download_text_mode == EVALUATE_OFFLINE:
            client.logger.info("Handling evaluateOffline logic for downloadText...")
            body = construct_process_content_request_body(
                response, name, sequence_no + 1, session_id, DOWNLOAD_TEXT, application_id)
            _submit(client, access_token, etag, body, "response")
    except Exception:
        client.logger.error("Error invoking ProcessContent API for session %s", session_id)
        raise

    return "OK"
