"""Registry store port.

Defines the interface for loading and saving the sync registry.
"""

from typing import Protocol

from pathsync.domain.entities import Registry


class RegistryStore(Protocol):
    """Protocol for persisting the registry."""

    def load(self) -> Registry:
        """Load the registry.

        Returns:
            The persisted registry, or an empty one if nothing is stored yet.

        Raises:
            RegistryCorruptError: If persisted state is unreadable or malformed.
        """
        ...

    def save(self, registry: Registry) -> None:
        """Persist the registry, replacing the previous state atomically.

        Args:
            registry: Registry to store.

        Raises:
            PersistenceError: If the write fails. Previous state stays intact.
        """
        ...
