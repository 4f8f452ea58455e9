"""
Projects context logger.

Provides logging interface for the projects context with automatic [projects] prefix.
All projects modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[projects]"


def _log_info(message: str) -> None:
    """Log info message with [projects] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [projects] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [projects] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [projects] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_import_result(description: str, count: int, elapsed_time: float) -> None:
    """Log how many projects one import directive produced."""
    _log_info(f"Imported {count} projects from {description} ({elapsed_time:.2f}s)")


def log_selection(mode: str, policy, count: int) -> None:
    """Log the final project selection."""
    policy_name = policy.value if policy is not None else "insertion order"
    _log_success(f"Selected {count} projects (mode: {mode}, order: {policy_name})")
