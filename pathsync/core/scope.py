"""Scope resolution: which profiles belong to a working directory.

A profile is in scope for a directory when at least one of its entries has
its local path at or below that directory. Remote descriptors are never
looked at.
"""

from pathsync.core.path_matcher import is_under
from pathsync.domain.entities import PathPair, Registry, SyncProfile


def profile_in_scope(profile: SyncProfile, cwd: str) -> bool:
    """Check whether any entry of ``profile`` lives under ``cwd``.

    Stops at the first matching entry. Profiles without entries are never
    in scope.
    """
    return any(is_under(entry.local, cwd) for entry in profile.entries)


def resolve_scope(registry: Registry, cwd: str) -> list[str]:
    """Compute the names of the profiles in scope for ``cwd``.

    Args:
        registry: Registry to search.
        cwd: Absolute working directory.

    Returns:
        Profile names in registry order, each at most once.
    """
    return [profile.name for profile in registry.profiles if profile_in_scope(profile, cwd)]


def matching_entries(profile: SyncProfile, cwd: str) -> list[PathPair]:
    """List the entries of ``profile`` whose local path is under ``cwd``."""
    return [entry for entry in profile.entries if is_under(entry.local, cwd)]
