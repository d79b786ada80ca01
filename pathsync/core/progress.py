"""Progress reporting utilities for CLI commands.

Provides Rich-based progress bars for visual feedback while syncing.
"""

from collections.abc import Generator
from contextlib import contextmanager

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
)


class RichProgressCallback:
    """Rich-based progress callback for visual progress reporting."""

    def __init__(self, progress: Progress) -> None:
        """Initialize with a Rich Progress instance.

        Args:
            progress: Rich Progress instance to use for display.
        """
        self.progress = progress
        self.task_id: int | None = None

    def on_start(self, total: int, description: str) -> None:
        """Create progress bar when operation starts."""
        self.task_id = self.progress.add_task(description, total=total, current_file="")

    def on_progress(self, current: int, item_description: str | None = None) -> None:
        """Update progress bar with the last finished item."""
        if self.task_id is not None:
            self.progress.update(
                self.task_id, completed=current, current_file=item_description or ""
            )

    def on_complete(self) -> None:
        """Mark progress as complete and hide it."""
        if self.task_id is not None:
            self.progress.remove_task(self.task_id)


@contextmanager
def progress_context(
    quiet_mode: bool = False,
) -> Generator[RichProgressCallback | None, None, None]:
    """Context manager for creating progress bars.

    The bar renders on stderr and disappears when done, so per-entry
    results printed afterwards on stdout stay clean.

    Args:
        quiet_mode: If True, returns None (no progress reporting).

    Yields:
        RichProgressCallback if not quiet, None otherwise.
    """
    if quiet_mode:
        yield None
    else:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TextColumn("[cyan]{task.fields[current_file]}"),
            console=Console(stderr=True),
            transient=True,
        ) as progress:
            yield RichProgressCallback(progress)
