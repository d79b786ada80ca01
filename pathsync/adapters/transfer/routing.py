"""Transfer that dispatches on the shape of the destination descriptor."""

from pathsync.domain.entities import TransferOutcome
from pathsync.ports.transfer import Transfer


def is_remote_descriptor(remote: str) -> bool:
    """Check whether a destination uses scp ``host:path`` syntax.

    A single letter before the colon is a Windows drive, and a separator
    before the colon means a local path that happens to contain one.

    Args:
        remote: Destination descriptor.

    Returns:
        True for ``host:path`` descriptors, False for plain local paths.
    """
    host, sep, _ = remote.partition(":")
    if not sep or not host:
        return False
    if "/" in host or "\\" in host:
        return False
    if len(host) == 1 and host.isalpha():
        return False
    return True


class RoutingTransfer:
    """Send ``host:path`` destinations to one transfer, plain paths to another."""

    def __init__(self, remote: Transfer, local: Transfer) -> None:
        self.remote = remote
        self.local = local

    def transfer(self, local: str, remote: str) -> TransferOutcome:
        target = self.remote if is_remote_descriptor(remote) else self.local
        return target.transfer(local, remote)
