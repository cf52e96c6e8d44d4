"""Client configuration.

Values come from a YAML file, overridden by environment variables (or a
``.env`` file), overridden by nothing else. ``indexing.yaml`` is written by
:func:`write_config` when the user connects to a management endpoint.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import ConfigurationError

DEFAULT_CONFIG_FILE = Path.home() / ".config" / "indexer-sdk" / "indexing.yaml"

_ENV_VALUES: Dict[str, str] = {}
_ENV_LOADED = False
_ENV_PATH: Path | None = None


class IndexerClientConfig(BaseModel):
    """Settings needed to reach the indexer management API."""
    api_url: Optional[str] = Field(
        None,
        description="Indexer management GraphQL endpoint"
    )
    timeout: float = Field(
        30.0,
        description="Request timeout in seconds"
    )
    log_level: str = Field(
        "INFO",
        description="Logging level"
    )

    model_config = ConfigDict(extra="forbid")


def load_env_file(path: Path | str = Path(".env"), *, force: bool = False) -> None:
    """Load .env values without modifying os.environ."""
    global _ENV_LOADED, _ENV_VALUES, _ENV_PATH
    if _ENV_LOADED and not force and Path(path) == _ENV_PATH:
        return
    env_path = Path(path)
    if env_path.exists():
        _ENV_VALUES = {k: v for k, v in dotenv_values(env_path).items() if v is not None}
    else:
        _ENV_VALUES = {}
    _ENV_LOADED = True
    _ENV_PATH = env_path


def get_env_var(name: str, default: Optional[str] = None) -> Optional[str]:
    """Retrieve a variable with environment variable overriding .env values."""
    if not _ENV_LOADED:
        load_env_file()
    val = os.getenv(name)
    if val is not None:
        return val
    if name in _ENV_VALUES:
        return _ENV_VALUES[name]
    return default


def config_path(path: Path | str | None = None) -> Path:
    if path is not None:
        return Path(path)
    override = get_env_var("INDEXER_SDK_CONFIG")
    return Path(override) if override else DEFAULT_CONFIG_FILE


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a mapping, got {type(data).__name__}")
    return data


def _apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    api_url = get_env_var("INDEXER_MANAGEMENT_URL")
    if api_url:
        config["api_url"] = api_url

    timeout = get_env_var("INDEXER_SDK_TIMEOUT")
    if timeout:
        try:
            config["timeout"] = float(timeout)
        except ValueError:
            raise ConfigurationError(f"INDEXER_SDK_TIMEOUT must be a number, got '{timeout}'") from None

    log_level = get_env_var("LOG_LEVEL")
    if log_level:
        config["log_level"] = log_level
    return config


def load_config(path: Path | str | None = None) -> IndexerClientConfig:
    """Load configuration from the YAML file and the environment."""
    data = _apply_env_overrides(_load_yaml(config_path(path)))
    try:
        return IndexerClientConfig(**data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid client configuration: {e}") from e


def load_validated_config(path: Path | str | None = None) -> IndexerClientConfig:
    """Like :func:`load_config` but require a management endpoint."""
    config = load_config(path)
    if not config.api_url:
        raise ConfigurationError(
            "Failed to load indexer client configuration:\n"
            "- 'api_url' is not set. Connect to a management endpoint first "
            "or set INDEXER_MANAGEMENT_URL"
        )
    return config


def write_config(config: IndexerClientConfig, path: Path | str | None = None) -> Path:
    target = config_path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    with open(target, "w", encoding="utf-8") as f:
        yaml.safe_dump(config.model_dump(exclude_none=True), f, sort_keys=False)
    return target
