"""Remote transfer adapter using subprocess calls to scp."""

import logging
import subprocess
import tempfile
from collections.abc import Sequence
from pathlib import Path

from pathsync.adapters.transfer.digest import same_content
from pathsync.domain.entities import TransferOutcome

logger = logging.getLogger(__name__)

# Lines of scp stderr kept in a failure reason
_STDERR_TAIL_LINES = 3


class ScpTransfer:
    """Mirror a local file to a ``host:path`` destination with scp.

    The destination is fetched into a temporary directory first; when it
    already has the local content the entry is reported unchanged and no
    upload happens. A destination that can't be fetched is uploaded.
    """

    def __init__(
        self,
        command: str = "scp",
        options: Sequence[str] = ("-p",),
        timeout: int = 300,
    ) -> None:
        """Initialize scp transfer.

        Args:
            command: scp-compatible executable.
            options: Options passed before source and destination.
            timeout: Seconds each scp invocation may take.
        """
        self.command = command
        self.options = tuple(options)
        self.timeout = timeout

    def transfer(self, local: str, remote: str) -> TransferOutcome:
        local_path = Path(local)
        if not local_path.is_file():
            return TransferOutcome.failed(f"local file not found: {local}")

        try:
            if self._remote_matches(local_path, remote):
                return TransferOutcome.unchanged()
            self._run_scp([local, remote], check=True)
        except subprocess.CalledProcessError as e:
            return TransferOutcome.failed(self._format_scp_error(e))
        except subprocess.TimeoutExpired:
            return TransferOutcome.failed(f"{self.command} timed out after {self.timeout}s")
        except FileNotFoundError:
            return TransferOutcome.failed(f"'{self.command}' not found on PATH")

        return TransferOutcome.transferred()

    def _remote_matches(self, local_path: Path, remote: str) -> bool:
        """Fetch the remote copy and compare it with the local file."""
        with tempfile.TemporaryDirectory(prefix="pathsync-") as tmp:
            fetched = Path(tmp) / "remote"
            try:
                result = self._run_scp([remote, str(fetched)], check=False)
            except subprocess.TimeoutExpired:
                logger.debug("Fetching %s timed out, uploading unconditionally", remote)
                return False
            if result.returncode != 0 or not fetched.is_file():
                logger.debug("Could not fetch %s, uploading unconditionally", remote)
                return False
            return same_content(local_path, fetched)

    def _run_scp(self, args: list[str], check: bool) -> subprocess.CompletedProcess[bytes]:
        """Run scp with the configured options.

        Args:
            args: Source and destination.
            check: Whether to raise CalledProcessError on non-zero exit.

        Returns:
            CompletedProcess with command results.

        Raises:
            subprocess.CalledProcessError: If check=True and scp fails.
            subprocess.TimeoutExpired: If scp exceeds the timeout.
            FileNotFoundError: If the scp executable is missing.
        """
        # "--" keeps a destination starting with "-" from being read as an option
        cmd = [self.command, *self.options, "--", *args]
        logger.debug("Running %s", " ".join(cmd))
        return subprocess.run(cmd, capture_output=True, check=check, timeout=self.timeout)

    def _format_scp_error(self, error: subprocess.CalledProcessError) -> str:
        stderr = (error.stderr or b"").decode("utf-8", errors="replace").strip()
        tail = " | ".join(stderr.splitlines()[-_STDERR_TAIL_LINES:])
        message = f"{self.command} exited with status {error.returncode}"
        return f"{message}: {tail}" if tail else message
