"""Sync orchestrator that fans transfers out over the selected profiles.

Every entry of every selected profile is handed to the transfer mechanism
exactly once. Entries are independent: a failure is recorded for that entry
and the run carries on. The orchestrator never retries and never touches the
registry.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait

from pathsync.core.use_case_errors import format_error_message, log_use_case_error
from pathsync.domain.entities import (
    EntryResult,
    PathPair,
    RunReport,
    SyncProfile,
    TransferOutcome,
    TransferStatus,
)
from pathsync.ports.progress import ProgressCallback
from pathsync.ports.transfer import Transfer

logger = logging.getLogger(__name__)

_Job = tuple[str, PathPair]


class SyncOrchestrator:
    """Run the transfer for every entry of a set of profiles.

    With ``max_workers`` of 1 entries run one after another in insertion
    order. A larger value runs them on a bounded thread pool; the report is
    still ordered by (profile, entry) so output stays deterministic.

    Cancellation (``cancel()`` from another thread, or Ctrl-C) stops new
    entries from being launched while in-flight transfers finish. An
    orchestrator that has been cancelled stays cancelled.
    """

    def __init__(self, transfer: Transfer, max_workers: int = 1) -> None:
        """Initialize orchestrator.

        Args:
            transfer: Transfer mechanism invoked per entry.
            max_workers: Maximum number of concurrent transfers.

        Raises:
            ValueError: If max_workers is not positive.
        """
        if max_workers <= 0:
            raise ValueError(f"max_workers must be positive, got {max_workers}")
        self._transfer = transfer
        self._max_workers = max_workers
        self._cancel_event = threading.Event()

    def cancel(self) -> None:
        """Stop launching new entries."""
        self._cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def run(
        self,
        profiles: Iterable[SyncProfile],
        progress: ProgressCallback | None = None,
    ) -> RunReport:
        """Transfer every entry of ``profiles``.

        Args:
            profiles: Profiles to sync, in the order they should be reported.
            progress: Optional progress callback.

        Returns:
            RunReport with one result per attempted entry.
        """
        jobs: list[_Job] = [
            (profile.name, entry) for profile in profiles for entry in profile.entries
        ]
        logger.debug("Syncing %d entr(ies) with %d worker(s)", len(jobs), self._max_workers)

        if progress:
            progress.on_start(len(jobs), "Syncing")
        try:
            if self._max_workers == 1 or len(jobs) <= 1:
                results, cancelled = self._run_sequential(jobs, progress)
            else:
                results, cancelled = self._run_parallel(jobs, progress)
        finally:
            if progress:
                progress.on_complete()

        report = RunReport(results=tuple(results), cancelled=cancelled)
        logger.info(
            "Sync finished: %d transferred, %d unchanged, %d failed%s",
            len(report.transferred),
            len(report.unchanged),
            len(report.failed),
            " (cancelled)" if cancelled else "",
        )
        return report

    def _attempt(self, profile_name: str, entry: PathPair) -> EntryResult:
        """Run one transfer, turning any exception into a failed outcome."""
        try:
            outcome = self._transfer.transfer(entry.local, entry.remote)
        except (KeyboardInterrupt, SystemExit):
            raise
        except Exception as e:
            log_use_case_error(e, "transfer")
            outcome = TransferOutcome.failed(format_error_message(e, "transfer"))

        if outcome.status == TransferStatus.FAILED:
            logger.info("[%s] %s failed: %s", profile_name, entry, outcome.reason)
        else:
            logger.debug("[%s] %s %s", profile_name, entry, outcome.status.value)
        return EntryResult(profile=profile_name, entry=entry, outcome=outcome)

    def _run_sequential(
        self, jobs: list[_Job], progress: ProgressCallback | None
    ) -> tuple[list[EntryResult], bool]:
        results: list[EntryResult] = []
        try:
            for profile_name, entry in jobs:
                if self.cancelled:
                    return results, True
                results.append(self._attempt(profile_name, entry))
                if progress:
                    progress.on_progress(len(results), entry.local)
        except KeyboardInterrupt:
            logger.warning("Interrupted after %d of %d entries", len(results), len(jobs))
            self.cancel()
            return results, True
        return results, False

    def _run_parallel(
        self, jobs: list[_Job], progress: ProgressCallback | None
    ) -> tuple[list[EntryResult], bool]:
        slots: list[EntryResult | None] = [None] * len(jobs)
        pending = iter(enumerate(jobs))
        in_flight: dict[Future[EntryResult], int] = {}
        finished_count = 0

        executor = ThreadPoolExecutor(
            max_workers=self._max_workers, thread_name_prefix="pathsync-transfer"
        )

        def launch() -> None:
            # Submit lazily so a cancel stops launches rather than queued work
            while len(in_flight) < self._max_workers and not self.cancelled:
                job = next(pending, None)
                if job is None:
                    return
                index, (profile_name, entry) = job
                in_flight[executor.submit(self._attempt, profile_name, entry)] = index

        try:
            launch()
            while in_flight:
                done, _ = wait(in_flight, return_when=FIRST_COMPLETED)
                for future in done:
                    index = in_flight.pop(future)
                    slots[index] = future.result()
                    finished_count += 1
                    if progress:
                        progress.on_progress(finished_count, jobs[index][1].local)
                launch()
        except KeyboardInterrupt:
            logger.warning("Interrupted, waiting for %d in-flight transfer(s)", len(in_flight))
            self.cancel()
        finally:
            executor.shutdown(wait=True, cancel_futures=True)

        # Transfers that were in flight during an interrupt have finished now
        for future, index in in_flight.items():
            if not future.cancelled() and future.exception() is None:
                slots[index] = future.result()

        results = [result for result in slots if result is not None]
        return results, len(results) < len(jobs)
