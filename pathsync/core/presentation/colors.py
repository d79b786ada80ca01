"""Centralized color definitions for all pathsync output."""

from typing import Literal

import click

from pathsync.domain.entities import TransferStatus

# Type alias for color values
ClickColor = Literal["black", "red", "green", "yellow", "blue", "magenta", "cyan", "white"]


class PathsyncColors:
    """Centralized color palette for consistent output across pathsync."""

    NAME_FG = "green"  # Profile names
    LOCAL_FG = "yellow"  # Local paths
    REMOTE_FG = "blue"  # Remote descriptors

    SUCCESS_FG = "green"
    WARNING_FG = "yellow"
    ERROR_FG = "red"

    STATUS_FG: dict[TransferStatus, ClickColor] = {
        TransferStatus.TRANSFERRED: "green",
        TransferStatus.UNCHANGED: "white",
        TransferStatus.FAILED: "red",
    }

    @staticmethod
    def click_name(text: str) -> str:
        return click.style(text, fg=PathsyncColors.NAME_FG, bold=True)

    @staticmethod
    def click_local(text: str) -> str:
        return click.style(text, fg=PathsyncColors.LOCAL_FG)

    @staticmethod
    def click_remote(text: str) -> str:
        return click.style(text, fg=PathsyncColors.REMOTE_FG)

    @staticmethod
    def click_status(status: TransferStatus) -> str:
        """Style a transfer status tag, dimming unchanged entries."""
        return click.style(
            status.value,
            fg=PathsyncColors.STATUS_FG[status],
            dim=status == TransferStatus.UNCHANGED,
            bold=status == TransferStatus.FAILED,
        )

    @staticmethod
    def click_success(text: str) -> str:
        return click.style(text, fg=PathsyncColors.SUCCESS_FG)

    @staticmethod
    def click_warning(text: str) -> str:
        return click.style(text, fg=PathsyncColors.WARNING_FG)

    @staticmethod
    def click_error(text: str) -> str:
        return click.style(text, fg=PathsyncColors.ERROR_FG)


def resolve_color(color_scheme: str) -> bool | None:
    """Map a color_scheme setting to click's ``color`` argument.

    Args:
        color_scheme: "auto", "always" or "never".

    Returns:
        None to let click detect a terminal, True to force, False to strip.
    """
    if color_scheme == "always":
        return True
    if color_scheme == "never":
        return False
    return None
