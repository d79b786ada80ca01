"""Domain exceptions for pathsync business logic.

These exceptions represent business rule violations and domain-level errors.
They should be caught at the application boundary (CLI) and converted
to appropriate user-facing error messages.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathsync.domain.entities import PathPair


class PathsyncDomainError(Exception):
    """Base exception for all domain errors.

    Attributes:
        message: User-facing error message.
        hint: Optional actionable suggestion.
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint


class InvalidProfileNameError(PathsyncDomainError):
    """Raised when a profile name is empty or only whitespace."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Invalid profile name: {name!r}",
            hint="Profile names must contain at least one non-whitespace character",
        )
        self.name = name


class DuplicateProfileError(PathsyncDomainError):
    """Raised when creating a profile whose name is already taken."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"A sync with the name '{name}' already exists",
            hint=f"Use 'pathsync add {name} <local> <remote>' to add files to it",
        )
        self.name = name


class UnknownProfileError(PathsyncDomainError):
    """Raised when no profile matches the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Found no sync by the name '{name}'",
            hint=f"Run 'pathsync new {name}' to create it",
        )
        self.name = name


class AmbiguousProfileError(PathsyncDomainError):
    """Raised when a name prefix matches more than one profile."""

    def __init__(self, name: str, candidates: list[str]) -> None:
        listing = ", ".join(candidates)
        super().__init__(
            f"Name '{name}' is ambiguous, it matches: {listing}",
            hint="Type more of the name to select a single sync",
        )
        self.name = name
        self.candidates = candidates


class RegistryCorruptError(PathsyncDomainError):
    """Raised when the persisted registry cannot be read or parsed."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            f"Registry file {path} is unreadable: {reason}",
            hint="Fix or move the file aside; a missing registry starts empty",
        )
        self.path = path
        self.reason = reason


class PersistenceError(PathsyncDomainError):
    """Raised when the registry cannot be written to disk.

    The previous registry file is left untouched when this is raised.
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            f"Could not save registry to {path}: {reason}",
            hint="Check file permissions and free disk space",
        )
        self.path = path
        self.reason = reason


class TransferFailedError(PathsyncDomainError):
    """Raised by transfer adapters when a single entry cannot be mirrored.

    The orchestrator records it as a failed outcome for that entry only.
    """

    def __init__(self, entry: PathPair, reason: str) -> None:
        super().__init__(f"Transfer of {entry.local} -> {entry.remote} failed: {reason}")
        self.entry = entry
        self.reason = reason
