"""TOML-based configuration provider.

Loads configuration from ~/.config/pathsync/config.toml.

Config loading priority (highest to lowest):
1. Global: ~/.config/pathsync/config.toml (user settings)
2. Built-in defaults
"""

import logging
from pathlib import Path

from pathsync.domain.config import PathsyncConfig
from pathsync.shared.config_io import get_global_config_path, load_config_data

logger = logging.getLogger(__name__)


class TomlConfigProvider:
    """Configuration provider that loads from TOML files.

    Missing values fall back to built-in defaults. A missing file is not an
    error; an invalid one is reported as a warning and ignored.
    """

    def load(self, path: Path | None = None) -> PathsyncConfig:
        """Load configuration with default fallback.

        Args:
            path: Config file to read. Defaults to the global config path.

        Returns:
            PathsyncConfig instance with file values or defaults
        """
        config_path = path if path is not None else get_global_config_path()
        config = PathsyncConfig.default()

        if not config_path.exists():
            logger.debug("No config at %s, using defaults", config_path)
            return config

        try:
            data = load_config_data(config_path)
            config = PathsyncConfig.from_partial(config, data)
            logger.debug("Loaded config from %s", config_path)
        except (OSError, ValueError, TypeError) as e:
            logger.warning(
                "Failed to parse config at %s: %s. Using default configuration.",
                config_path,
                e,
            )
            return PathsyncConfig.default()

        return config
