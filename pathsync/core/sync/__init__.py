"""Sync module for running transfers over selected profiles.

Contains the SyncOrchestrator, which fans the transfer mechanism out over
every entry and aggregates the per-entry outcomes.
"""

from pathsync.core.sync.orchestrator import SyncOrchestrator

__all__ = ["SyncOrchestrator"]
