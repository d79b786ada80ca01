"""Config domain models for pathsync.

Configuration is stored in ~/.config/pathsync/config.toml and represents user
preferences for where the registry lives, how transfers run and how output
is displayed. This module defines the domain models that represent validated
configuration state.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, Literal


@dataclass(frozen=True)
class RegistryConfig:
    """Configuration for the registry file.

    Attributes:
        path: Registry file location. Empty string means the platform default.
    """

    path: str = ""


@dataclass(frozen=True)
class TransferConfig:
    """Configuration for the transfer mechanism.

    Attributes:
        command: Executable used for remote copies (scp-compatible).
        options: Extra options passed before the source and destination.
        timeout: Seconds a single remote copy may take before it fails.
        jobs: Number of entries transferred in parallel.

    Raises:
        ValueError: If command is empty, options is not a list of strings,
            or timeout or jobs are not positive.
    """

    command: str = "scp"
    options: list[str] = field(default_factory=lambda: ["-p"])
    timeout: int = 300
    jobs: int = 1

    def __post_init__(self) -> None:
        """Validate transfer config after initialization."""
        if not self.command:
            raise ValueError("command must not be empty")
        if not isinstance(self.options, list) or not all(
            isinstance(option, str) for option in self.options
        ):
            raise ValueError(f"options must be a list of strings, got {self.options!r}")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.jobs <= 0:
            raise ValueError(f"jobs must be positive, got {self.jobs}")


@dataclass(frozen=True)
class DisplayConfig:
    """Configuration for output display and formatting.

    Attributes:
        color_scheme: Color output mode - "auto" (default), "always", or "never"
        progress: Show a progress bar while syncing
    """

    color_scheme: Literal["auto", "always", "never"] = "auto"
    progress: bool = True

    def __post_init__(self) -> None:
        if self.color_scheme not in ("auto", "always", "never"):
            raise ValueError(
                f"color_scheme must be auto, always or never, got {self.color_scheme!r}"
            )


@dataclass(frozen=True)
class PathsyncConfig:
    """Complete pathsync configuration.

    Attributes:
        registry: Registry location configuration
        transfer: Transfer mechanism configuration
        display: Display and formatting configuration
    """

    registry: RegistryConfig = field(default_factory=RegistryConfig)
    transfer: TransferConfig = field(default_factory=TransferConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    @staticmethod
    def default() -> PathsyncConfig:
        """Create a config with all default values."""
        return PathsyncConfig(
            registry=RegistryConfig(),
            transfer=TransferConfig(),
            display=DisplayConfig(),
        )

    @staticmethod
    def from_partial(base: PathsyncConfig, data: dict[str, Any]) -> PathsyncConfig:
        """Overlay raw TOML data on top of an existing config.

        Only keys present in ``data`` change; everything else keeps the value
        from ``base``. Each section is re-validated after the overlay.

        Args:
            base: Config providing the values for missing keys.
            data: Parsed TOML data, keyed by section name.

        Returns:
            New PathsyncConfig with overrides applied.

        Raises:
            ValueError: If a section is not a table, a key is unknown, or a
                value fails validation.
        """
        sections: dict[str, Any] = {}
        for section in fields(base):
            overrides = data.get(section.name)
            if overrides is None:
                continue
            if not isinstance(overrides, dict):
                raise ValueError(f"[{section.name}] must be a table")
            current = getattr(base, section.name)
            known = {f.name for f in fields(current)}
            unknown = sorted(set(overrides) - known)
            if unknown:
                raise ValueError(f"Unknown keys in [{section.name}]: {', '.join(unknown)}")
            sections[section.name] = replace(current, **overrides)
        return replace(base, **sections)
