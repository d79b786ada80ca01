"""Presentation layer for CLI output formatting.

Components:
- PathsyncColors: Shared color palette
- ReportPresenter: Per-entry sync results and summaries
"""

from pathsync.core.presentation.colors import PathsyncColors
from pathsync.core.presentation.report_presenter import ReportPresenter

__all__ = ["PathsyncColors", "ReportPresenter"]
