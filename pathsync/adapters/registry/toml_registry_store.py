"""TOML file registry store.

Implements the RegistryStore port on top of registry_io.
"""

from pathlib import Path

from pathsync.domain.entities import Registry
from pathsync.shared.registry_io import load_registry, save_registry


class TomlRegistryStore:
    """Registry store persisting to a single TOML file.

    There is no inter-process lock: concurrent invocations each load, mutate
    and atomically replace the file, so the last writer wins.
    """

    def __init__(self, path: Path) -> None:
        """Initialize the store.

        Args:
            path: Location of registry.toml.
        """
        self.path = path

    def load(self) -> Registry:
        return load_registry(self.path)

    def save(self, registry: Registry) -> None:
        save_registry(registry, self.path)
