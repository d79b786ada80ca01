"""Configuration provider port.

Defines the interface for loading and accessing application configuration.
"""

from pathlib import Path
from typing import Protocol

from pathsync.domain.config import PathsyncConfig


class ConfigProvider(Protocol):
    """Protocol for loading and providing configuration."""

    def load(self, path: Path | None = None) -> PathsyncConfig:
        """Load configuration.

        Args:
            path: Config file to read. Defaults to the global config location.

        Returns:
            PathsyncConfig instance with loaded or default values

        Note:
            Implementations should gracefully fall back to defaults
            if config file is missing or invalid.
        """
        ...
