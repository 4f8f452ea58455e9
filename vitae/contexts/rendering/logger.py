"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[render]"


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_render_result(name: str, references: int, publications: int, elapsed_time: float) -> None:
    """Log the outcome of a two-pass render."""
    _log_success(
        f"{name}: rendered with {references} references and {publications} publications ({elapsed_time:.2f}s)"
    )
