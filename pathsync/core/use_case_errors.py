"""Error formatting and logging shared by core operations.

Design principles:
1. KeyboardInterrupt and SystemExit are always re-raised (never caught)
2. PathsyncDomainError subclasses carry user-friendly messages
3. Unexpected exceptions are logged and converted to generic error messages

The sync orchestrator relies on this to turn an exception raised by a
transfer into a failure reason for that single entry.
"""

import logging

from pathsync.domain.exceptions import PathsyncDomainError, TransferFailedError

logger = logging.getLogger(__name__)


def format_error_message(exception: Exception, operation_name: str) -> str:
    """Format an exception into a user-friendly error message.

    Handles different exception types appropriately:
    - TransferFailedError: Uses the failure reason
    - PathsyncDomainError: Uses the error's message directly
    - OSError: Adds context about permissions/disk space
    - ValueError/RuntimeError: Includes exception message with operation context
    - Other exceptions: Returns a generic "internal error" message

    Args:
        exception: The exception that was caught.
        operation_name: Name of the operation for error messages (e.g., "transfer").

    Returns:
        User-friendly error message string.

    Example:
        try:
            outcome = transfer.transfer(local, remote)
        except (KeyboardInterrupt, SystemExit):
            raise
        except Exception as e:
            outcome = TransferOutcome.failed(format_error_message(e, "transfer"))
    """
    if isinstance(exception, TransferFailedError):
        return exception.reason
    elif isinstance(exception, PathsyncDomainError):
        return exception.message
    elif isinstance(exception, OSError):
        return (
            f"I/O error: {exception}. "
            "Check file permissions, disk space, and filesystem access."
        )
    elif isinstance(exception, (ValueError, RuntimeError)):
        return f"{operation_name.capitalize()} error: {exception}"
    else:
        return f"Internal error during {operation_name}. Check logs for details."


def log_use_case_error(exception: Exception, operation_name: str) -> None:
    """Log an exception with appropriate severity.

    - PathsyncDomainError: ERROR level (expected domain errors)
    - OSError/ValueError/RuntimeError: ERROR level
    - Other exceptions: EXCEPTION level (includes traceback)

    Args:
        exception: The exception that was caught.
        operation_name: Name of the operation for log messages.
    """
    if isinstance(exception, PathsyncDomainError):
        logger.error(str(exception))
    elif isinstance(exception, OSError):
        logger.error("I/O error during %s: %s", operation_name, exception)
    elif isinstance(exception, (ValueError, RuntimeError)):
        logger.error("Error during %s: %s", operation_name, exception)
    else:
        logger.exception("Unexpected error during %s", operation_name)
