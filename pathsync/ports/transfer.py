"""Transfer mechanism port.

Defines the capability the sync orchestrator uses to mirror one path pair.
Any implementation (spawned process, native copy, protocol client) can be
substituted without touching the orchestrator.
"""

from typing import Protocol

from pathsync.domain.entities import TransferOutcome


class Transfer(Protocol):
    """Protocol for mirroring a local file to a remote destination."""

    def transfer(self, local: str, remote: str) -> TransferOutcome:
        """Mirror ``local`` onto ``remote``.

        Implementations own any retry policy. They should report problems as
        a FAILED outcome; raising is tolerated and recorded as a failure.

        Args:
            local: Local file path (authoritative side).
            remote: Destination descriptor.

        Returns:
            TransferOutcome describing what happened.
        """
        ...
