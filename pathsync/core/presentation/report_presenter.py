"""Rendering of sync run reports.

Produces one line per attempted entry followed by a summary line, either as
styled text or as JSON.
"""

import json
from typing import Any

from pathsync.core.presentation.colors import PathsyncColors
from pathsync.domain.entities import EntryResult, RunReport, TransferStatus


class ReportPresenter:
    """Formats a RunReport for the terminal."""

    @staticmethod
    def format_entry(result: EntryResult) -> str:
        """Format a single entry result.

        Example:
            [toto] transferred /home/me/a.sh -> remote:./a.sh
            [toto] failed /home/me/b.sh -> remote:./b.sh (scp exited with status 1)
        """
        outcome = result.outcome
        line = (
            f"[{PathsyncColors.click_name(result.profile)}] "
            f"{PathsyncColors.click_status(outcome.status)} "
            f"{PathsyncColors.click_local(result.entry.local)} -> "
            f"{PathsyncColors.click_remote(result.entry.remote)}"
        )
        if outcome.status == TransferStatus.FAILED and outcome.reason:
            line += f" ({outcome.reason})"
        elif outcome.detail:
            line += f" ({outcome.detail})"
        return line

    @staticmethod
    def format_summary(report: RunReport) -> str:
        """Format the totals line for a run."""
        summary = (
            f"{len(report.transferred)} transferred, "
            f"{len(report.unchanged)} unchanged, "
            f"{len(report.failed)} failed"
        )
        if report.cancelled:
            return PathsyncColors.click_warning(f"Interrupted: {summary}")
        if report.failed:
            return PathsyncColors.click_error(f"✗ {summary}")
        return PathsyncColors.click_success(f"✓ {summary}")

    def render(self, report: RunReport) -> list[str]:
        """Render every entry line followed by the summary line."""
        lines = [self.format_entry(result) for result in report.results]
        lines.append(self.format_summary(report))
        return lines

    @staticmethod
    def to_data(report: RunReport) -> dict[str, Any]:
        """Convert a report to a JSON-serializable dictionary."""
        return {
            "success": report.success,
            "cancelled": report.cancelled,
            "results": [
                {
                    "profile": result.profile,
                    "local": result.entry.local,
                    "remote": result.entry.remote,
                    "status": result.outcome.status.value,
                    "reason": result.outcome.reason,
                    "detail": result.outcome.detail,
                }
                for result in report.results
            ],
        }

    def format_json(self, report: RunReport) -> str:
        return json.dumps(self.to_data(report), indent=2, ensure_ascii=False)
