"""Configuration I/O utilities for reading and writing TOML config files.

This module handles serialization/deserialization of PathsyncConfig to/from TOML format.
"""

import os
import platform
import tomllib  # Built-in Python 3.11+
from pathlib import Path
from typing import Any

import tomli_w

from pathsync.domain.config import PathsyncConfig


def get_global_config_path() -> Path:
    """Get the path to the global config file.

    The location is platform-dependent:
    - Linux/macOS: $XDG_CONFIG_HOME/pathsync/config.toml or ~/.config/pathsync/config.toml
    - Windows: %APPDATA%/pathsync/config.toml

    Returns:
        Path to the global config file (may not exist)
    """
    if platform.system() == "Windows":
        appdata = os.environ.get("APPDATA", "")
        if appdata:
            return Path(appdata) / "pathsync" / "config.toml"
        # Fallback to home directory
        return Path.home() / ".config" / "pathsync" / "config.toml"
    else:
        xdg_config = os.environ.get("XDG_CONFIG_HOME", "")
        if xdg_config:
            return Path(xdg_config) / "pathsync" / "config.toml"
        return Path.home() / ".config" / "pathsync" / "config.toml"


def load_config_data(path: Path) -> dict[str, Any]:
    """Load raw TOML data from a config file.

    Args:
        path: Path to config.toml file

    Returns:
        Dictionary with parsed TOML data

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file is malformed
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML in config file: {e}") from e


def config_data_to_pathsync_config(data: dict[str, Any]) -> PathsyncConfig:
    """Convert raw config data dictionary to PathsyncConfig.

    Args:
        data: Dictionary with config sections

    Returns:
        PathsyncConfig instance

    Raises:
        ValueError: If a section or value is invalid
    """
    return PathsyncConfig.from_partial(PathsyncConfig.default(), data)


def load_config(path: Path) -> PathsyncConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to config.toml file

    Returns:
        Parsed PathsyncConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file is malformed
    """
    data = load_config_data(path)
    return config_data_to_pathsync_config(data)


def config_to_data(config: PathsyncConfig) -> dict[str, Any]:
    """Convert PathsyncConfig to a TOML-serializable dictionary."""
    return {
        "registry": {
            "path": config.registry.path,
        },
        "transfer": {
            "command": config.transfer.command,
            "options": list(config.transfer.options),
            "timeout": config.transfer.timeout,
            "jobs": config.transfer.jobs,
        },
        "display": {
            "color_scheme": config.display.color_scheme,
            "progress": config.display.progress,
        },
    }


def save_config(config: PathsyncConfig, path: Path) -> None:
    """Save configuration to a TOML file.

    Args:
        config: PathsyncConfig to save
        path: Destination path for config.toml
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("wb") as f:
        tomli_w.dump(config_to_data(config), f)


def create_default_config_file(path: Path) -> None:
    """Create a default config.toml file with sensible defaults and comments.

    Args:
        path: Destination path for config.toml
    """
    # Template string keeps the comments
    template = """\
# pathsync configuration
# Created by: pathsync config init

[registry]
# Registry file location ("" = platform default,
# overridden by $PATHSYNC_REGISTRY and --registry)
path = ""

[transfer]
# scp-compatible command used for host:path destinations
command = "scp"

# Options passed before source and destination (-p keeps mtimes and modes)
options = ["-p"]

# Seconds a single remote copy may take
timeout = 300

# Number of entries transferred in parallel
jobs = 1

[display]
# Color output: "auto", "always" or "never"
color_scheme = "auto"

# Show a progress bar while syncing
progress = true
"""

    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("w", encoding="utf-8") as f:
        f.write(template)
