"""
Helpers for the Microsoft Graph / Purview data security and governance APIs.

Covers protection-scope lookup, sensitivity-label retrieval, label-inheritance
computation and content-processing submission.
"""

from .config import Settings, load_settings
from .content_processing import ContentProcessingClient, ProcessContentResult, enqueue_offline_tasks
from .exceptions import ApiError, ConfigurationError, PurviewError
from .identifiers import generate_guid
from .labels import LabelClient, decode_label_response
from .payloads import construct_process_content_request_body
from .protection_scope import ProtectionScopeClient, ProtectionScopeResult

__all__ = [
    "ApiError",
    "ConfigurationError",
    "ContentProcessingClient",
    "LabelClient",
    "ProcessContentResult",
    "ProtectionScopeClient",
    "ProtectionScopeResult",
    "PurviewError",
    "Settings",
    "construct_process_content_request_body",
    "decode_label_response",
    "enqueue_offline_tasks",
    "generate_guid",
    "load_settings",
]
