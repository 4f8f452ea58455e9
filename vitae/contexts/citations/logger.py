"""
Citations context logger.

Provides logging interface for the citations context with automatic [cite] prefix.
All citations modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[cite]"


def _log_success(message: str) -> None:
    """Log success message with [cite] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [cite] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [cite] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_batch_result(fetched: int, total: int, elapsed_time: float) -> None:
    """Log completion of a citation fetch batch."""
    _log_success(f"Resolved {fetched} of {total} citations over the network ({elapsed_time:.2f}s)")
