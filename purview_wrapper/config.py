"""
Configuration for the Purview clients.

``Settings`` is passed explicitly into every client. ``load_settings`` is the
only place that looks at the process environment / config.json.
"""
import json
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError

DEFAULT_GRAPH_BASE_URL = "https://graph.microsoft.com/v1.0"
DEFAULT_USER_AGENT = "Purview-API-Sample"


@dataclass(frozen=True)
class Settings:
    """Endpoints and transport options shared by the clients.

    ``purview_base_url`` is only needed for protection-scope and process-content
    calls, so it may be left unset when only labels are read.
    """

    purview_base_url: Optional[str] = None
    graph_base_url: str = DEFAULT_GRAPH_BASE_URL
    timeout: Optional[float] = None
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self):
        # frozen dataclass, so normalise through object.__setattr__
        if self.purview_base_url is not None:
            object.__setattr__(self, "purview_base_url", self.purview_base_url.rstrip("/") or None)
        graph = (self.graph_base_url or "").rstrip("/")
        object.__setattr__(self, "graph_base_url", graph or DEFAULT_GRAPH_BASE_URL)


def _read_config_file(path: str) -> dict:
    if not os.path.exists(path):
        return {}
    with open(path, "r", encoding="utf-8") as fh:
        return json.load(fh)


def _parse_timeout(value) -> Optional[float]:
    if not value:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"REQUEST_TIMEOUT must be a number of seconds, got {value!r}") from None


def load_settings(config: Optional[dict] = None, config_path: str = "config.json") -> Settings:
    """Build ``Settings`` from config.json (or ``config``) with environment overrides.

    Environment variables (also picked up from a ``.env`` file):
    PURVIEW_BASE_URL, GRAPH_BASE_URL, REQUEST_TIMEOUT.
    """
    load_dotenv()
    if config is None:
        config = _read_config_file(config_path)

    purview_base_url = os.getenv("PURVIEW_BASE_URL") or config.get("purview_base_url")
    graph_base_url = os.getenv("GRAPH_BASE_URL") or config.get("graph_base_url") or DEFAULT_GRAPH_BASE_URL
    timeout = os.getenv("REQUEST_TIMEOUT") or config.get("timeout")

    return Settings(
        purview_base_url=purview_base_url or None,
        graph_base_url=graph_base_url,
        timeout=_parse_timeout(timeout),
    )
