"""Factory classes for adapter instantiation.

This module centralizes the creation of adapters, keeping the CLI layer free
from direct adapter imports.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathsync.domain.config import PathsyncConfig
    from pathsync.ports.config import ConfigProvider
    from pathsync.ports.registry import RegistryStore
    from pathsync.ports.transfer import Transfer


class ConfigFactory:
    """Factory for configuration providers."""

    def create_config_provider(self) -> ConfigProvider:
        from pathsync.adapters.config.toml_config_provider import TomlConfigProvider

        return TomlConfigProvider()


class RegistryFactory:
    """Factory for registry stores.

    Args:
        config: PathsyncConfig with registry settings.
    """

    def __init__(self, config: PathsyncConfig) -> None:
        self._config = config

    def registry_path(self, override: str | Path | None = None) -> Path:
        """Resolve where the registry lives.

        Args:
            override: Path given on the command line, if any.

        Returns:
            Path to registry.toml.
        """
        from pathsync.shared.registry_io import resolve_registry_path

        return resolve_registry_path(override, self._config.registry.path)

    def create_registry_store(self, override: str | Path | None = None) -> RegistryStore:
        from pathsync.adapters.registry.toml_registry_store import TomlRegistryStore

        return TomlRegistryStore(self.registry_path(override))


class TransferFactory:
    """Factory for the transfer mechanism.

    Args:
        config: PathsyncConfig with transfer settings.
    """

    def __init__(self, config: PathsyncConfig) -> None:
        self._config = config

    def create_transfer(self) -> Transfer:
        """Create the default transfer: scp for host:path, native copy otherwise."""
        from pathsync.adapters.transfer import LocalCopyTransfer, RoutingTransfer, ScpTransfer

        settings = self._config.transfer
        return RoutingTransfer(
            remote=ScpTransfer(
                command=settings.command,
                options=settings.options,
                timeout=settings.timeout,
            ),
            local=LocalCopyTransfer(),
        )
