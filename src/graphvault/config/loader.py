"""Configuration loading with environment variable merging."""

import os
import tomllib
from pathlib import Path
from typing import Any

import typer

from graphvault.config.models import Configuration
from graphvault.exceptions import ConfigError


def get_config_path(config_arg: Path | None = None) -> Path:
    """
    Get configuration file path with priority order.

    Priority:
    1. Command-line argument
    2. GRAPHVAULT_CONFIG environment variable
    3. ~/.graphvault/config.toml (user app directory)
    4. ./graphvault.toml (current working directory)

    Args:
        config_arg: Optional path from command-line argument

    Returns:
        Path to configuration file (may not exist)
    """
    # 1. Command-line argument
    if config_arg:
        return config_arg

    # 2. Environment variable
    env_config = os.getenv("GRAPHVAULT_CONFIG")
    if env_config:
        return Path(env_config)

    # 3. User app directory
    app_dir = Path(typer.get_app_dir("graphvault"))
    user_config = app_dir / "config.toml"
    if user_config.exists():
        return user_config

    # 4. Current directory
    cwd_config = Path("graphvault.toml")
    if cwd_config.exists():
        return cwd_config

    # Default (may not exist)
    return user_config


def _apply_env_overrides(hugegraph_config: dict[str, Any]) -> None:
    """Override HugeGraph connection settings from environment variables in place."""
    if url := os.getenv("GRAPHVAULT_URL"):
        hugegraph_config["url"] = url
    if graph := os.getenv("GRAPHVAULT_GRAPH"):
        hugegraph_config["graph"] = graph
    if username := os.getenv("GRAPHVAULT_USERNAME"):
        hugegraph_config["username"] = username
    if password := os.getenv("GRAPHVAULT_PASSWORD"):
        hugegraph_config["password"] = password
    if timeout_str := os.getenv("GRAPHVAULT_TIMEOUT"):
        try:
            hugegraph_config["timeout"] = int(timeout_str)
        except ValueError:
            raise ConfigError(f"Invalid GRAPHVAULT_TIMEOUT value: {timeout_str}") from None


def load_config(config_path: Path | None = None) -> Configuration:
    """
    Load and validate configuration from TOML file and environment variables.

    Environment variables override config file values (or provide all values if no file exists):
    - GRAPHVAULT_URL
    - GRAPHVAULT_GRAPH (optional, default: "hugegraph")
    - GRAPHVAULT_USERNAME / GRAPHVAULT_PASSWORD (optional, HTTP basic auth)
    - GRAPHVAULT_TIMEOUT (optional, default: 60 seconds)

    Args:
        config_path: Optional path to config file

    Returns:
        Validated Configuration object

    Raises:
        ConfigError: If config file invalid or required values missing
    """
    path = get_config_path(config_path)

    # Try to load from file if it exists
    data: dict[str, Any] = {}
    if path.exists():
        try:
            with path.open("rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML syntax in {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e

    if data:
        hugegraph_config = data.setdefault("hugegraph", {})
        if not isinstance(hugegraph_config, dict):
            raise ConfigError(f"Invalid [hugegraph] section in {path}")
        _apply_env_overrides(hugegraph_config)
        if "url" not in hugegraph_config:
            raise ConfigError(
                f"Missing HugeGraph URL: set 'url' in the [hugegraph] section of {path} "
                "or the GRAPHVAULT_URL environment variable"
            )
    else:
        # No config file, build entirely from env vars
        if not os.getenv("GRAPHVAULT_URL"):
            raise ConfigError(
                "No config file found and GRAPHVAULT_URL environment variable not set. "
                "Either create a config file or set environment variables: "
                "GRAPHVAULT_URL, GRAPHVAULT_GRAPH, GRAPHVAULT_USERNAME, GRAPHVAULT_PASSWORD"
            )
        hugegraph_config = {}
        _apply_env_overrides(hugegraph_config)
        data = {"hugegraph": hugegraph_config}

    try:
        return Configuration(**data)
    except Exception as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
