"""
Configuration loader for datalink connectors.
"""

import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import yaml


logger = logging.getLogger(__name__)


# Environment variable -> (dotted config key, value parser)
ENV_OVERRIDES: List[Tuple[str, str, Callable[[str], Any]]] = [
    ("DATALINK_HTTP_TIMEOUT", "http.timeout", int),
    ("DATALINK_MAX_RETRIES", "http.max_retries", int),
    ("DATALINK_RATE_LIMIT_DELAY", "http.rate_limit_delay", float),
    ("DATALINK_USER_AGENT", "http.user_agent", str),
    ("DATALINK_GITHUB_API_URL", "github.api_url", str),
    ("DATALINK_GITHUB_TOKEN_ENV", "github.token_env", str),
    ("DATALINK_LOG_LEVEL", "logging.level", str),
]


class ConnectorSettings:
    """
    Settings for connectors, upstream clients and logging.

    Loads a YAML file when given one, otherwise uses built-in defaults;
    environment variables override either.
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize settings.

        Args:
            config_path: Path to YAML config file (optional)
        """
        self.config_path = Path(config_path) if config_path else None
        self.config = self._default_config()
        if self.config_path:
            self._merge(self.config, self._load_config())
        self._apply_env_overrides()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        if not self.config_path.exists():
            raise FileNotFoundError(f"Config file not found: {self.config_path}")

        logger.info(f"Loading config from: {self.config_path}")

        with open(self.config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)

        return config or {}

    def _default_config(self) -> Dict[str, Any]:
        """Return default configuration."""
        return {
            "http": {
                "timeout": 30,
                "max_retries": 3,
                "rate_limit_delay": 0.0,
                "user_agent": "datalink/0.1",
            },
            "github": {
                "api_url": "https://api.github.com",
                "per_page": 100,
                "token_env": "GITHUB_TOKEN",
            },
            "logging": {
                "level": "INFO",
                "structured": False,
            },
        }

    def _merge(self, base: Dict[str, Any], overrides: Dict[str, Any]) -> None:
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                self._merge(base[key], value)
            else:
                base[key] = value

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides to loaded config."""
        for variable, key, parse in ENV_OVERRIDES:
            raw = os.environ.get(variable)
            if raw is None or raw == "":
                continue
            try:
                value = parse(raw)
            except ValueError:
                logger.warning(f"Ignoring invalid ${variable}={raw!r}")
                continue
            self.set(key, value)

    def get_http_config(self) -> Dict[str, Any]:
        """Get upstream HTTP client configuration."""
        return self.config.get("http", {})

    def get_github_config(self) -> Dict[str, Any]:
        """Get GitHub connector configuration."""
        return self.config.get("github", {})

    def get_logging_config(self) -> Dict[str, Any]:
        """Get logging configuration."""
        return self.config.get("logging", {})

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dotted key."""
        keys = key.split(".")
        value = self.config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default

        return value if value is not None else default

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dotted key."""
        *parents, last = key.split(".")
        node = self.config
        for k in parents:
            node = node.setdefault(k, {})
        node[last] = value
