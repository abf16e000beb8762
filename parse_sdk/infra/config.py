"""
Configuration Manager
---------------------
Loads client settings and credentials from YAML with environment
variable overrides, or from a caller-owned argparse parser.

Rules:
- Secrets never in code
- Environment wins over the config file
- No process-wide state; callers hold the resulting values
"""

from argparse import ArgumentParser, Namespace
from pathlib import Path
from typing import Any, Dict, Optional, Union
import logging
import os

import yaml

from ..api.client import DEFAULT_BASE_URL, Client, ClientConfig, Credentials

CREDENTIAL_FIELDS = ("application_id", "javascript_key", "master_key", "rest_api_key")

_TRUE_STRINGS = {"1", "true", "yes", "on"}


class ConfigManager:
    """
    Configuration loaded from YAML with environment variable overrides.

    Keys use dot notation: 'parse.application_id' reads the nested YAML
    value and is overridden by the env var PARSE_APPLICATION_ID.
    """

    def __init__(self, config_path: Union[str, Path, None] = None, env_prefix: str = ""):
        self._config_path = Path(config_path) if config_path else None
        self._env_prefix = env_prefix
        self._config: Dict[str, Any] = {}
        self._logger = logging.getLogger("parse_sdk.infra.config")

        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file."""
        if self._config_path is None:
            self._config = {}
            return

        if self._config_path.exists():
            with open(self._config_path, "r", encoding="utf-8") as f:
                self._config = yaml.safe_load(f) or {}
            self._logger.info(f"Loaded config from {self._config_path}")
        else:
            self._config = {}
            self._logger.warning(f"Config file not found: {self._config_path}")

    def env_key(self, key: str) -> str:
        env_key = key.upper().replace(".", "_")
        return f"{self._env_prefix}_{env_key}" if self._env_prefix else env_key

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.
        Environment variables override file config.
        """
        env_value = os.getenv(self.env_key(key))
        if env_value is not None:
            return env_value

        value: Any = self._config
        for part in key.split("."):
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return default

        return value

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value (runtime only, not persisted)."""
        parts = key.split(".")
        config = self._config

        for part in parts[:-1]:
            if not isinstance(config.get(part), dict):
                config[part] = {}
            config = config[part]

        config[parts[-1]] = value

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get an entire configuration section."""
        return self._config.get(section, {})

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()


def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in _TRUE_STRINGS


def load_credentials(config: ConfigManager, section: str = "parse") -> Credentials:
    """Credentials from '<section>.<field>' keys; missing fields are empty."""
    values = {
        name: str(config.get(f"{section}.{name}", "") or "")
        for name in CREDENTIAL_FIELDS
    }
    return Credentials(**values)


def load_client_config(config: ConfigManager, section: str = "parse") -> ClientConfig:
    """Client settings from '<section>.base_url', '.timeout_seconds' and '.redact'."""
    defaults = ClientConfig()
    return ClientConfig(
        base_url=str(config.get(f"{section}.base_url", DEFAULT_BASE_URL)),
        timeout_seconds=float(config.get(f"{section}.timeout_seconds", defaults.timeout_seconds)),
        redact=parse_bool(config.get(f"{section}.redact", defaults.redact)),
        user_agent=str(config.get(f"{section}.user_agent", defaults.user_agent)),
    )


def create_client(config_path: Union[str, Path, None] = None, section: str = "parse") -> Client:
    """Create a Client from a YAML file and/or the environment."""
    config = ConfigManager(config_path)
    return Client(
        load_credentials(config, section),
        config=load_client_config(config, section),
    )


def _flag_dest(name: str, field_name: str) -> str:
    return f"{name}_{field_name}".replace(".", "_").replace("-", "_")


def add_credentials_arguments(parser: ArgumentParser, name: str = "parse") -> ArgumentParser:
    """
    Add credential flags to a caller-owned parser. For name "parse":

        --parse.application-id=abc123
        --parse.javascript-key=def456
        --parse.master-key=ghi789
        --parse.rest-api-key=jkl012
    """
    labels = {
        "application_id": "Application ID",
        "javascript_key": "JavaScript Key",
        "master_key": "Master Key",
        "rest_api_key": "REST API Key",
    }
    for field_name in CREDENTIAL_FIELDS:
        parser.add_argument(
            f"--{name}.{field_name.replace('_', '-')}",
            dest=_flag_dest(name, field_name),
            default="",
            help=f"{name} {labels[field_name]}",
        )
    return parser


def credentials_from_args(args: Namespace, name: str = "parse") -> Credentials:
    """Build Credentials from flags added by add_credentials_arguments()."""
    return Credentials(**{
        field_name: getattr(args, _flag_dest(name, field_name), "") or ""
        for field_name in CREDENTIAL_FIELDS
    })
