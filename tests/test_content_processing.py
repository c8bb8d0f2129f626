"""Tests for ContentProcessingClient and enqueue_offline_tasks."""
import logging
from unittest.mock import MagicMock, patch

import pytest
import requests

from purview_wrapper.config import Settings
from purview_wrapper.content_processing import ContentProcessingClient, enqueue_offline_tasks
from purview_wrapper.exceptions import ApiError, ConfigurationError
from purview_wrapper.http import ResponseHeaders

from conftest import make_response

PROCESS_URL = "https://purview.example.com/beta/me/dataSecurityAndGovernance/processContent"


class TestProcessContent:

    def test_posts_body_with_etag(self, settings, session):
        body = {"contentToProcess": {}}

        ContentProcessingClient(settings, session).process_content("tok", '"v7"', body)

        args, kwargs = session.request.call_args
        assert args == ("POST", PROCESS_URL)
        assert kwargs["json"] == body
        assert kwargs["headers"]["If-None-Match"] == '"v7"'
        assert kwargs["headers"]["Authorization"] == "Bearer tok"

    @pytest.mark.parametrize("etag", ["", None])
    def test_missing_etag_sends_empty_header(self, settings, session, etag):
        ContentProcessingClient(settings, session).process_content("tok", etag, {})

        headers = session.request.call_args[1]["headers"]
        assert "If-None-Match" in headers
        assert headers["If-None-Match"] == ""

    def test_returns_text_and_headers(self, settings, session):
        session.request.return_value = make_response(
            202, '{"policyActions": []}', {"Content-Type": "application/json", "X-Protection-Scope-State": "notModified"})

        result = ContentProcessingClient(settings, session).process_content("tok", "e", {})

        assert result.body == '{"policyActions": []}'
        assert isinstance(result.headers, ResponseHeaders)
        assert result.headers["x-protection-scope-state"] == "notModified"
        assert list(result.headers) == ["content-type", "x-protection-scope-state"]

    def test_non_success_raises(self, settings, session):
        session.request.return_value = make_response(412, "precondition failed")

        with pytest.raises(ApiError) as excinfo:
            ContentProcessingClient(settings, session).process_content("tok", "stale", {})

        assert excinfo.value.status_code == 412
        assert excinfo.value.url == PROCESS_URL

    def test_missing_base_url(self, session):
        with pytest.raises(ConfigurationError):
            ContentProcessingClient(Settings(), session).process_content("tok", "e", {})

        session.request.assert_not_called()

    def test_missing_base_url_is_logged(self, session, caplog):
        with caplog.at_level(logging.ERROR, logger="purview_wrapper"):
            with pytest.raises(ConfigurationError):
                ContentProcessingClient(Settings(), session).process_content("tok", "e", {})

        assert "Process Content API" in caplog.text
        assert "PURVIEW_BASE_URL" in caplog.text


def _submitted(session):
    """(activity, sequenceNumber, data) for each processContent call, in order."""
    calls = []
    for call in session.request.call_args_list:
        payload = call[1]["json"]["contentToProcess"]
        entry = payload["contentEntries"][0]
        calls.append((payload["activityMetadata"]["activity"], entry["sequenceNumber"], entry["content"]["data"]))
    return calls


def _enqueue(client, upload="evaluateOffline", download="evaluateOffline", sequence_no=5):
    return enqueue_offline_tasks(client, "tok", "etag-1", "app", "app-id", upload, download,
                                 "the prompt", "the response", "sess-1", sequence_no)


class TestEnqueueOfflineTasks:

    def test_upload_only(self, settings, session):
        result = _enqueue(ContentProcessingClient(settings, session), download="skip")

        assert result == "OK"
        assert _submitted(session) == [("uploadText", 5, "the prompt")]

    def test_download_only_uses_next_sequence(self, settings, session):
        result = _enqueue(ContentProcessingClient(settings, session), upload="evaluateInline")

        assert result == "OK"
        assert _submitted(session) == [("downloadText", 6, "the response")]

    def test_both_in_order(self, settings, session):
        result = _enqueue(ContentProcessingClient(settings, session))

        assert result == "OK"
        assert _submitted(session) == [
            ("uploadText", 5, "the prompt"),
            ("downloadText", 6, "the response"),
        ]

    def test_same_etag_and_session_for_both(self, settings, session):
        _enqueue(ContentProcessingClient(settings, session))

        for call in session.request.call_args_list:
            assert call[1]["headers"]["If-None-Match"] == "etag-1"
            entry = call[1]["json"]["contentToProcess"]["contentEntries"][0]
            assert entry["correlationId"] == "sess-1"
            assert entry["name"] == "app"

    def test_neither_mode_makes_no_call(self, settings, session):
        assert _enqueue(ContentProcessingClient(settings, session), upload="none", download="none") == "OK"

        session.request.assert_not_called()

    def test_first_failure_stops_second(self, settings, session):
        session.request.return_value = make_response(500, "server error")

        with pytest.raises(ApiError, match="500"):
            _enqueue(ContentProcessingClient(settings, session))

        assert session.request.call_count == 1

    def test_second_failure_propagates(self, settings, session):
        session.request.side_effect = [make_response(200, "{}"), make_response(429, "throttled")]

        with pytest.raises(ApiError) as excinfo:
            _enqueue(ContentProcessingClient(settings, session))

        assert excinfo.value.status_code == 429
        assert session.request.call_count == 2

    def test_transport_error_propagates(self, settings, session):
        session.request.side_effect = requests.Timeout("read timed out")

        with pytest.raises(requests.Timeout):
            _enqueue(ContentProcessingClient(settings, session))

    def test_order_through_process_content(self, settings, session):
        client = ContentProcessingClient(settings, session)
        recorded = []

        def fake_process(token, etag, body):
            recorded.append(body["contentToProcess"]["activityMetadata"]["activity"])
            return MagicMock(body="{}", headers=ResponseHeaders())

        with patch.object(client, "process_content", side_effect=fake_process):
            _enqueue(client)

        assert recorded == ["uploadText", "downloadText"]
