"""
Intake context logger.

Provides logging interface for the intake context with automatic [intake] prefix.
"""

from loguru import logger

CONTEXT_PREFIX = "[intake]"


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def log_cache_hit(key: str, input_path) -> None:
    _log_info(f"Using cached resolution {key[:12]} for {input_path}")


def log_resolution_result(name: str, projects: int, references: int, elapsed_time: float) -> None:
    """Log the outcome of resolving one person."""
    _log_info(f"Resolved {name}: {projects} projects, {references} references ({elapsed_time:.2f}s)")
