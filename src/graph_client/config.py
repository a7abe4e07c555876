"""
Client configuration.

Configuration can be built directly, from a dictionary, or from a JSON file::

    {
        "access_token": "...",
        "timeout": 30,
        "graph_endpoint_url": "https://graph.facebook.com"
    }
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Union

from .http_client import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from .routing import GRAPH_ENDPOINT_URL, LEGACY_ENDPOINT_URL


@dataclass(frozen=True)
class ClientConfig:
    """Configuration for GraphClient.

    Attributes:
        access_token: OAuth access token, passed through opaquely
        graph_endpoint_url: Base URL of the Graph endpoint
        legacy_endpoint_url: Base URL of the legacy REST endpoint
        timeout: Transport timeout in seconds
        user_agent: User-Agent header sent by the default transport
    """
    access_token: str = field(repr=False)
    graph_endpoint_url: str = GRAPH_ENDPOINT_URL
    legacy_endpoint_url: str = LEGACY_ENDPOINT_URL
    timeout: int = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self):
        """Validate configuration values."""
        if not isinstance(self.access_token, str) or not self.access_token.strip():
            raise ValueError("access_token must be a non-empty string")
        for name in ("graph_endpoint_url", "legacy_endpoint_url"):
            url = getattr(self, name)
            if not isinstance(url, str) or not url.startswith(("https://", "http://")):
                raise ValueError(f"{name} must be an http(s) URL, got {url!r}")
        if self.timeout <= 0:
            raise ValueError("timeout must be > 0")
        if not self.user_agent:
            raise ValueError("user_agent cannot be empty")

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "ClientConfig":
        """Create config from a dictionary; missing keys take defaults.

        Raises:
            ValueError: If ``access_token`` is missing or a value is invalid
        """
        if "access_token" not in config_dict:
            raise ValueError("Configuration is missing 'access_token'")
        return cls(
            access_token=config_dict["access_token"],
            graph_endpoint_url=config_dict.get("graph_endpoint_url", GRAPH_ENDPOINT_URL),
            legacy_endpoint_url=config_dict.get("legacy_endpoint_url", LEGACY_ENDPOINT_URL),
            timeout=config_dict.get("timeout", DEFAULT_TIMEOUT),
            user_agent=config_dict.get("user_agent", DEFAULT_USER_AGENT),
        )


def load_config(config_path: Union[str, Path]) -> ClientConfig:
    """
    Load client configuration from a JSON file.

    Args:
        config_path: Path to the configuration file.

    Returns:
        The parsed ClientConfig.

    Raises:
        ValueError: If config_path is empty, the file is not valid JSON or
            does not contain a JSON object.
        FileNotFoundError: If the configuration file doesn't exist.
    """
    if not config_path:
        raise ValueError("config_path cannot be empty")

    path = Path(config_path)
    if not path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(
            f"Invalid JSON in configuration file {path} at line {e.lineno}, column {e.colno}: {e.msg}"
        )
    except UnicodeDecodeError as e:
        raise ValueError(f"File encoding error in {path}: {e}")

    if not isinstance(config, dict):
        raise ValueError(f"Configuration file must contain a JSON object, got {type(config).__name__}")

    return ClientConfig.from_dict(config)
