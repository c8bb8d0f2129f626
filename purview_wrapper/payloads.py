"""
Request bodies for the processContent endpoint.

Field names and ``@odata.type`` strings must match the Graph schema exactly.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict

from .identifiers import generate_guid

APP_VERSION = "1.0"
DEVICE_METADATA = {
    "deviceType": "managed",
    "operatingSystemSpecifications": {
        "operatingSystemPlatform": "Windows 11",
        "operatingSystemVersion": "10.0.26100.0",
    },
}


def _utc_timestamp() -> str:
    """ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


@dataclass
class ContentEntry:
    """One prompt or response submitted for evaluation."""

    data: str
    name: str
    correlation_id: str
    sequence_number: int
    identifier: str = field(default_factory=generate_guid)
    is_truncated: bool = False
    created_date_time: str = ""
    modified_date_time: str = ""

    def __post_init__(self):
        if not self.created_date_time:
            self.created_date_time = _utc_timestamp()
        if not self.modified_date_time:
            self.modified_date_time = self.created_date_time

    def to_dict(self) -> Dict[str, Any]:
        return {
            "@odata.type": "microsoft.graph.processConversationMetadata",
            "identifier": self.identifier,
            "content": {
                "@odata.type": "microsoft.graph.textContent",
                "data": self.data,
            },
            "name": self.name,
            "correlationId": self.correlation_id,
            "sequenceNumber": self.sequence_number,
            "isTruncated": self.is_truncated,
            "createdDateTime": self.created_date_time,
            "modifiedDateTime": self.modified_date_time,
        }


@dataclass
class ProcessContentRequest:
    entry: ContentEntry
    activity: str
    application_id: str

    def to_dict(self) -> Dict[str, Any]:
        name = self.entry.name
        return {
            "contentToProcess": {
                "contentEntries": [self.entry.to_dict()],
                "activityMetadata": {"activity": self.activity},
                "deviceMetadata": {
                    "deviceType": DEVICE_METADATA["deviceType"],
                    "operatingSystemSpecifications": dict(DEVICE_METADATA["operatingSystemSpecifications"]),
                },
                "protectedAppMetadata": {
                    "name": name,
                    "version": APP_VERSION,
                    "applicationLocation": {
                        "@odata.type": "microsoft.graph.policyLocationApplication",
                        "value": self.application_id,
                    },
                },
                "integratedAppMetadata": {
                    "name": name,
                    "version": APP_VERSION,
                },
            }
        }


def construct_process_content_request_body(content_data: str, name: str, sequence_no: int,
                                           correlation_id: str, activity: str,
                                           application_id: str) -> Dict[str, Any]:
    """Build the JSON document posted to ``processContent``.

    ``activity`` is normally ``"uploadText"`` or ``"downloadText"``; nothing is
    validated. Both timestamps are the same construction-time instant.
    """
    entry = ContentEntry(
        data=content_data,
        name=name,
        correlation_id=correlation_id,
        sequence_number=sequence_no,
    )
    return ProcessContentRequest(entry=entry, activity=activity, application_id=application_id).to_dict()
