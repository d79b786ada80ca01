"""Native copy transfer for destinations on the local filesystem."""

import logging
import shutil
from pathlib import Path

from pathsync.adapters.transfer.digest import same_content
from pathsync.domain.entities import TransferOutcome

logger = logging.getLogger(__name__)


class LocalCopyTransfer:
    """Mirror a file onto another local path.

    Like ``cp``, a destination that is an existing directory receives the
    file under its own name. Metadata (mtime, mode) is copied along.
    """

    def transfer(self, local: str, remote: str) -> TransferOutcome:
        source = Path(local)
        destination = Path(remote).expanduser()

        if not source.is_file():
            return TransferOutcome.failed(f"local file not found: {local}")
        if destination.is_dir():
            destination = destination / source.name

        try:
            if destination.is_file() and same_content(source, destination):
                return TransferOutcome.unchanged()
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source, destination)
        except OSError as e:
            logger.debug("Copy %s -> %s failed", source, destination, exc_info=True)
            return TransferOutcome.failed(f"copy failed: {e}")

        return TransferOutcome.transferred(detail=str(destination))
