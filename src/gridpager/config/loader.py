"""Configuration loading with environment variable merging."""

import os
import tomllib
from pathlib import Path
from typing import Any

import typer

from gridpager.config.models import Configuration
from gridpager.exceptions import ConfigError


def get_config_path(config_arg: Path | None = None) -> Path:
    """
    Get configuration file path with priority order.

    Priority:
    1. Command-line argument
    2. GRIDPAGER_CONFIG environment variable
    3. <app dir>/config.toml (user configuration directory)
    4. ./gridpager.toml (current working directory)

    Args:
        config_arg: Optional path from command-line argument

    Returns:
        Path to configuration file (may not exist)
    """
    # 1. Command-line argument
    if config_arg:
        return config_arg

    # 2. Environment variable
    env_config = os.getenv("GRIDPAGER_CONFIG")
    if env_config:
        return Path(env_config)

    # 3. User config directory
    app_dir = Path(typer.get_app_dir("gridpager"))
    user_config = app_dir / "config.toml"
    if user_config.exists():
        return user_config

    # 4. Current directory
    cwd_config = Path("gridpager.toml")
    if cwd_config.exists():
        return cwd_config

    # Default (may not exist)
    return user_config


def _env_number(name: str, cast: type) -> Any:
    value = os.getenv(name)
    if value is None or value == "":
        return None
    try:
        return cast(value)
    except ValueError:
        raise ConfigError(f"Invalid {name} value: {value}") from None


def load_config(config_path: Path | None = None) -> Configuration:
    """
    Load and validate configuration from TOML file and environment variables.

    A missing config file is not an error; defaults apply. Environment
    variables override config file values:
    - GRIDPAGER_ROWS_PER_PAGE
    - GRIDPAGER_DATA_PATH
    - GRIDPAGER_FETCH_DELAY (seconds)

    Args:
        config_path: Optional path to config file

    Returns:
        Validated Configuration object

    Raises:
        ConfigError: If config file invalid or a value fails validation
    """
    path = get_config_path(config_path)

    data: dict[str, Any] = {}
    if path.exists():
        try:
            with path.open("rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML syntax in {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e

    pager = data.setdefault("pager", {})
    source = data.setdefault("source", {})
    if not isinstance(pager, dict) or not isinstance(source, dict):
        raise ConfigError(f"Sections [pager] and [source] in {path} must be tables")

    if (rows_per_page := _env_number("GRIDPAGER_ROWS_PER_PAGE", int)) is not None:
        pager["rows_per_page"] = rows_per_page
    if data_path := os.getenv("GRIDPAGER_DATA_PATH"):
        source["data_path"] = data_path
    if (delay := _env_number("GRIDPAGER_FETCH_DELAY", float)) is not None:
        source["delay_seconds"] = delay

    try:
        return Configuration(**data)
    except Exception as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
