"""Domain entities and value objects.

Core domain models representing the business concepts of pathsync.
These are pure Python dataclasses with no dependencies on infrastructure.

The registry is an explicit immutable value: mutating operations return a
new ``Registry`` and leave the original untouched, so loading, changing and
saving stay visible at the call site.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

from pathsync.domain.exceptions import (
    AmbiguousProfileError,
    DuplicateProfileError,
    InvalidProfileNameError,
    UnknownProfileError,
)


@dataclass(frozen=True)
class PathPair:
    """One local-path to remote-destination mapping.

    Attributes:
        local: Path on the local filesystem (stored absolute by the CLI).
        remote: Opaque destination descriptor, e.g. ``host:path``.
    """

    local: str
    remote: str

    def __str__(self) -> str:
        return f"{self.local} -> {self.remote}"


@dataclass(frozen=True)
class SyncProfile:
    """A named collection of path pairs synchronized together.

    Attributes:
        name: Unique, non-empty profile name.
        entries: Path pairs in insertion order.
    """

    name: str
    entries: tuple[PathPair, ...] = ()

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise InvalidProfileNameError(self.name)

    def name_matches(self, query: str) -> bool:
        """Check whether ``query`` selects this profile by prefix."""
        return self.name.startswith(query)

    def with_entry(self, entry: PathPair) -> SyncProfile:
        return replace(self, entries=(*self.entries, entry))


@dataclass(frozen=True)
class Registry:
    """The full ordered mapping of profile name to SyncProfile.

    Profile order is insertion order and is preserved through persistence.
    """

    profiles: tuple[SyncProfile, ...] = ()

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for profile in self.profiles:
            if profile.name in seen:
                raise DuplicateProfileError(profile.name)
            seen.add(profile.name)

    @property
    def names(self) -> list[str]:
        return [profile.name for profile in self.profiles]

    def __len__(self) -> int:
        return len(self.profiles)

    def __contains__(self, name: object) -> bool:
        return any(profile.name == name for profile in self.profiles)

    def get(self, name: str) -> SyncProfile | None:
        """Return the profile with exactly this name, or None."""
        for profile in self.profiles:
            if profile.name == name:
                return profile
        return None

    def select(self, query: str) -> SyncProfile:
        """Select a profile by exact name or unique name prefix.

        Args:
            query: Full profile name or a prefix of one.

        Returns:
            The selected profile.

        Raises:
            UnknownProfileError: If nothing matches.
            AmbiguousProfileError: If the prefix matches several profiles.
        """
        exact = self.get(query)
        if exact is not None:
            return exact

        matches = [profile for profile in self.profiles if profile.name_matches(query)]
        if not matches:
            raise UnknownProfileError(query)
        if len(matches) > 1:
            raise AmbiguousProfileError(query, [profile.name for profile in matches])
        return matches[0]

    def create_profile(self, name: str) -> Registry:
        """Return a registry with a new empty profile appended.

        Raises:
            DuplicateProfileError: If a profile with this exact name exists.
            InvalidProfileNameError: If the name is empty.
        """
        if name in self:
            raise DuplicateProfileError(name)
        return Registry(profiles=(*self.profiles, SyncProfile(name=name)))

    def add_entry(self, name: str, local: str, remote: str) -> Registry:
        """Return a registry with ``(local, remote)`` appended to a profile.

        Entries are appended as given, duplicates included.

        Raises:
            UnknownProfileError: If no profile has this exact name.
        """
        if name not in self:
            raise UnknownProfileError(name)
        entry = PathPair(local=local, remote=remote)
        return Registry(
            profiles=tuple(
                profile.with_entry(entry) if profile.name == name else profile
                for profile in self.profiles
            )
        )

    def delete_profile(self, name: str) -> Registry:
        """Return a registry without the named profile.

        Raises:
            UnknownProfileError: If no profile has this exact name.
        """
        if name not in self:
            raise UnknownProfileError(name)
        return Registry(profiles=tuple(p for p in self.profiles if p.name != name))

    def remove_entries(
        self, name: str, local: str, remote: str | None = None
    ) -> tuple[Registry, tuple[PathPair, ...]]:
        """Return a registry without the matching entries of a profile.

        Args:
            name: Exact profile name.
            local: Local path the entries must have.
            remote: If given, the remote descriptor must match too.

        Returns:
            Tuple of (new registry, removed entries in their original order).

        Raises:
            UnknownProfileError: If no profile has this exact name.
        """
        profile = self.get(name)
        if profile is None:
            raise UnknownProfileError(name)

        def matches(entry: PathPair) -> bool:
            return entry.local == local and (remote is None or entry.remote == remote)

        removed = tuple(entry for entry in profile.entries if matches(entry))
        kept = tuple(entry for entry in profile.entries if not matches(entry))
        updated = replace(profile, entries=kept)
        return (
            Registry(profiles=tuple(updated if p.name == name else p for p in self.profiles)),
            removed,
        )


class TransferStatus(str, Enum):
    """Outcome tag for a single entry transfer."""

    TRANSFERRED = "transferred"
    UNCHANGED = "unchanged"
    FAILED = "failed"


@dataclass(frozen=True)
class TransferOutcome:
    """Result reported by a transfer mechanism for one path pair.

    Attributes:
        status: What happened to the entry.
        reason: Failure reason when status is FAILED, None otherwise.
        detail: Optional extra per-file status from the transfer mechanism.
    """

    status: TransferStatus
    reason: str | None = None
    detail: str | None = None

    @classmethod
    def transferred(cls, detail: str | None = None) -> TransferOutcome:
        return cls(status=TransferStatus.TRANSFERRED, detail=detail)

    @classmethod
    def unchanged(cls, detail: str | None = None) -> TransferOutcome:
        return cls(status=TransferStatus.UNCHANGED, detail=detail)

    @classmethod
    def failed(cls, reason: str) -> TransferOutcome:
        return cls(status=TransferStatus.FAILED, reason=reason)

    @property
    def ok(self) -> bool:
        return self.status != TransferStatus.FAILED


@dataclass(frozen=True)
class EntryResult:
    """Outcome of one entry within a sync run."""

    profile: str
    entry: PathPair
    outcome: TransferOutcome


@dataclass(frozen=True)
class RunReport:
    """Aggregated per-entry outcomes of a sync run.

    Attributes:
        results: One result per attempted entry, in (profile, entry) order.
        cancelled: True if the run was interrupted before every entry ran.
    """

    results: tuple[EntryResult, ...] = field(default_factory=tuple)
    cancelled: bool = False

    def _with_status(self, status: TransferStatus) -> list[EntryResult]:
        return [r for r in self.results if r.outcome.status == status]

    @property
    def failed(self) -> list[EntryResult]:
        return self._with_status(TransferStatus.FAILED)

    @property
    def transferred(self) -> list[EntryResult]:
        return self._with_status(TransferStatus.TRANSFERRED)

    @property
    def unchanged(self) -> list[EntryResult]:
        return self._with_status(TransferStatus.UNCHANGED)

    @property
    def success(self) -> bool:
        """True when every attempted entry succeeded and nothing was skipped."""
        return not self.cancelled and not self.failed

    def for_profile(self, name: str) -> list[EntryResult]:
        return [r for r in self.results if r.profile == name]
