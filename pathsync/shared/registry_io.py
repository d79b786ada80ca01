"""Registry file I/O utilities for reading and writing registry.toml.

This module handles serialization/deserialization of the Registry to/from
TOML. Writes go to a temporary file in the same directory which is then
renamed over the target, so an interrupted save never leaves a half-written
registry behind.

File layout::

    version = 1

    [[profiles]]
    name = "toto"

    [[profiles.entries]]
    local = "/home/me/my_local_script.sh"
    remote = "remote:./some_folder/remote_script.sh"
"""

import logging
import os
import platform
import tempfile
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

from pathsync.domain.entities import PathPair, Registry, SyncProfile
from pathsync.domain.exceptions import (
    PathsyncDomainError,
    PersistenceError,
    RegistryCorruptError,
)

FORMAT_VERSION = 1
REGISTRY_ENV_VAR = "PATHSYNC_REGISTRY"

logger = logging.getLogger(__name__)


def get_default_registry_path() -> Path:
    """Get the platform default path of the registry file.

    The location is platform-dependent:
    - Linux/macOS: $XDG_DATA_HOME/pathsync/registry.toml or
      ~/.local/share/pathsync/registry.toml
    - Windows: %APPDATA%/pathsync/registry.toml

    Returns:
        Path to the registry file (may not exist)
    """
    if platform.system() == "Windows":
        appdata = os.environ.get("APPDATA", "")
        if appdata:
            return Path(appdata) / "pathsync" / "registry.toml"
        return Path.home() / ".local" / "share" / "pathsync" / "registry.toml"

    xdg_data = os.environ.get("XDG_DATA_HOME", "")
    if xdg_data:
        return Path(xdg_data) / "pathsync" / "registry.toml"
    return Path.home() / ".local" / "share" / "pathsync" / "registry.toml"


def resolve_registry_path(override: str | Path | None = None, configured: str = "") -> Path:
    """Pick the registry location.

    Priority (highest first): explicit override, $PATHSYNC_REGISTRY,
    the configured ``registry.path``, the platform default.

    Args:
        override: Path given on the command line, if any.
        configured: ``registry.path`` from the config file ("" if unset).

    Returns:
        Path of the registry file to use.
    """
    if override:
        return Path(override).expanduser()
    from_env = os.environ.get(REGISTRY_ENV_VAR, "")
    if from_env:
        return Path(from_env).expanduser()
    if configured:
        return Path(configured).expanduser()
    return get_default_registry_path()


def registry_to_data(registry: Registry) -> dict[str, Any]:
    """Convert a Registry to a TOML-serializable dictionary."""
    return {
        "version": FORMAT_VERSION,
        "profiles": [
            {
                "name": profile.name,
                "entries": [
                    {"local": entry.local, "remote": entry.remote}
                    for entry in profile.entries
                ],
            }
            for profile in registry.profiles
        ],
    }


def _require_str(table: dict[str, Any], key: str, where: str) -> str:
    value = table.get(key)
    if not isinstance(value, str):
        raise ValueError(f"{where}: '{key}' must be a string")
    return value


def data_to_registry(data: dict[str, Any]) -> Registry:
    """Convert parsed TOML data to a Registry.

    Args:
        data: Dictionary with the registry document.

    Returns:
        Registry instance

    Raises:
        ValueError: If the document structure is invalid.
        PathsyncDomainError: If profile names are empty or duplicated.
    """
    version = data.get("version", FORMAT_VERSION)
    if version != FORMAT_VERSION:
        raise ValueError(f"unsupported registry version {version!r}")

    raw_profiles = data.get("profiles", [])
    if not isinstance(raw_profiles, list):
        raise ValueError("'profiles' must be an array of tables")

    profiles = []
    for index, raw in enumerate(raw_profiles):
        where = f"profile #{index + 1}"
        if not isinstance(raw, dict):
            raise ValueError(f"{where} must be a table")
        name = _require_str(raw, "name", where)
        raw_entries = raw.get("entries", [])
        if not isinstance(raw_entries, list):
            raise ValueError(f"{where}: 'entries' must be an array of tables")

        entries = []
        for entry_index, raw_entry in enumerate(raw_entries):
            entry_where = f"{where} entry #{entry_index + 1}"
            if not isinstance(raw_entry, dict):
                raise ValueError(f"{entry_where} must be a table")
            entries.append(
                PathPair(
                    local=_require_str(raw_entry, "local", entry_where),
                    remote=_require_str(raw_entry, "remote", entry_where),
                )
            )
        profiles.append(SyncProfile(name=name, entries=tuple(entries)))

    return Registry(profiles=tuple(profiles))


def load_registry(path: Path) -> Registry:
    """Load the registry from a TOML file.

    Args:
        path: Path to registry.toml

    Returns:
        Parsed Registry, or an empty Registry if the file doesn't exist

    Raises:
        RegistryCorruptError: If the file can't be read or is malformed
    """
    if not path.exists():
        logger.debug("No registry at %s, starting empty", path)
        return Registry()

    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, UnicodeDecodeError) as e:
        raise RegistryCorruptError(str(path), str(e)) from e
    except tomllib.TOMLDecodeError as e:
        raise RegistryCorruptError(str(path), f"invalid TOML: {e}") from e

    try:
        registry = data_to_registry(data)
    except (ValueError, PathsyncDomainError) as e:
        reason = e.message if isinstance(e, PathsyncDomainError) else str(e)
        raise RegistryCorruptError(str(path), reason) from e

    logger.debug("Loaded %d profile(s) from %s", len(registry), path)
    return registry


def atomic_write_bytes(path: Path, data: bytes) -> None:
    """Write bytes to ``path`` via a temp file and an atomic rename.

    Args:
        path: Destination file.
        data: Full file content.

    Raises:
        OSError: If any step fails. The temp file is removed and the
            destination keeps its previous content.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp_path = Path(tmp)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()


def save_registry(registry: Registry, path: Path) -> None:
    """Save the registry to a TOML file.

    Args:
        registry: Registry to save
        path: Destination path for registry.toml

    Raises:
        PersistenceError: If serialization or writing fails
    """
    try:
        content = tomli_w.dumps(registry_to_data(registry)).encode("utf-8")
        atomic_write_bytes(path, content)
    except (OSError, UnicodeEncodeError) as e:
        raise PersistenceError(str(path), str(e)) from e

    logger.debug("Saved %d profile(s) to %s", len(registry), path)
