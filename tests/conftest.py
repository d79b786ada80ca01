"""Pytest configuration and shared fixtures."""

import threading
from collections.abc import Callable
from pathlib import Path

import pytest

from pathsync.domain.entities import PathPair, Registry, SyncProfile, TransferOutcome

# ============================================================================
# Environment Isolation
# ============================================================================
# Point config and data directories at the test's tmp_path so no test reads
# or writes the real user registry.


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Redirect XDG directories into tmp_path and clear registry overrides."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg-data"))
    monkeypatch.delenv("PATHSYNC_REGISTRY", raising=False)
    monkeypatch.setattr("platform.system", lambda: "Linux")


@pytest.fixture
def registry_path(tmp_path: Path) -> Path:
    """Location for a test registry file (not created)."""
    return tmp_path / "state" / "registry.toml"


# ============================================================================
# Registry Helpers
# ============================================================================


def make_registry(profiles: dict[str, list[tuple[str, str]]]) -> Registry:
    """Build a Registry from ``{name: [(local, remote), ...]}``.

    Dict order becomes registry order.
    """
    return Registry(
        profiles=tuple(
            SyncProfile(
                name=name,
                entries=tuple(PathPair(local=local, remote=remote) for local, remote in pairs),
            )
            for name, pairs in profiles.items()
        )
    )


def create_test_files(path: Path, files: dict[str, str]) -> None:
    """Create multiple files in a directory.

    Args:
        path: Base directory for file creation.
        files: Mapping of relative file paths to file contents.
               Parent directories are created automatically.
    """
    for rel_path, content in files.items():
        file_path = path / rel_path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content)


# ============================================================================
# Transfer Doubles
# ============================================================================


class FakeTransfer:
    """Transfer double returning scripted outcomes and recording calls.

    Args:
        outcomes: Mapping of local path to the outcome (or exception) to
            produce. Unlisted paths are reported as transferred.
        on_call: Optional hook invoked with (local, remote) before answering.
    """

    def __init__(
        self,
        outcomes: dict[str, TransferOutcome | BaseException] | None = None,
        on_call: Callable[[str, str], None] | None = None,
    ) -> None:
        self.outcomes = outcomes or {}
        self.on_call = on_call
        self.calls: list[tuple[str, str]] = []
        self._lock = threading.Lock()

    def transfer(self, local: str, remote: str) -> TransferOutcome:
        with self._lock:
            self.calls.append((local, remote))
        if self.on_call is not None:
            self.on_call(local, remote)
        outcome = self.outcomes.get(local, TransferOutcome.transferred())
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@pytest.fixture
def fake_transfer() -> FakeTransfer:
    """A transfer double where every entry succeeds."""
    return FakeTransfer()
