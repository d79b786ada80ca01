"""Transfer adapters implementing the Transfer port."""

from pathsync.adapters.transfer.local_copy import LocalCopyTransfer
from pathsync.adapters.transfer.routing import RoutingTransfer, is_remote_descriptor
from pathsync.adapters.transfer.scp import ScpTransfer

__all__ = ["LocalCopyTransfer", "RoutingTransfer", "ScpTransfer", "is_remote_descriptor"]
