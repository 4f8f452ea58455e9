"""
loguru setup for a vitae run.

Console output goes to stderr so stdout stays reserved for the rendered HTML.
Each context prefixes its own messages through contexts/{context}/logger.py;
this module only configures sinks and writes the run's provenance header.
"""

import os
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from loguru import logger

from vitae import __version__

load_dotenv()
LOG_LEVEL = os.getenv("VITAE_LOG_LEVEL", "WARNING").upper()
LOGS_PATH = os.getenv("LOGS_PATH")

CONSOLE_FORMAT = "<level>{level: <7}</level> | <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"

LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}

# Environment settings echoed into the provenance header
PROVENANCE_VARIABLES = (
    "VITAE_CACHE_DIR",
    "VITAE_TEMPLATE_PATH",
    "VITAE_FETCH_WORKERS",
    "VITAE_HTTP_TIMEOUT",
    "GITHUB_API_URL",
)


def setup_logger(
    context_name: str,
    log_dir: Optional[Path] = None,
    level: str = LOG_LEVEL,
    extra_provenance: dict = None,
    level_colors: dict = {},
) -> Optional[Path]:
    """
    Replace loguru's default sink with a stderr sink and an optional file sink.

    Args:
        context_name: Stem of the log file (e.g., "build" -> build.log)
        log_dir: Directory for the DEBUG file sink; falls back to LOGS_PATH
        level: Minimum level on stderr (VITAE_LOG_LEVEL by default)
        extra_provenance: Run-specific entries for the header, e.g. the input file
        level_colors: Per-level color markup overriding LEVEL_COLORS

    Returns:
        The log file path, or None when logging only to stderr

    Example:
        setup_logger("build", extra_provenance={"Input": "person.yaml"})
    """
    if log_dir is None and LOGS_PATH:
        log_dir = Path(LOGS_PATH)

    logger.remove()
    for level_name, color in {**LEVEL_COLORS, **level_colors}.items():
        logger.level(level_name, color=color)

    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    log_file = None
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"{context_name}.log"
        logger.add(log_file, format=FILE_FORMAT, level="DEBUG")

    log_provenance(extra_provenance)
    return log_file


def log_provenance(extra_context: dict = None) -> None:
    """Write the run header (version, command, interpreter, configured environment) at debug level."""
    logger.debug(f"vitae {__version__} | python {sys.version.split()[0]}")
    logger.debug(f"argv: {' '.join(sys.argv)}")
    logger.debug(f"cwd: {Path.cwd()}")
    for name in PROVENANCE_VARIABLES:
        value = os.getenv(name)
        if value is not None:
            logger.debug(f"env {name}={value}")
    for key, value in (extra_context or {}).items():
        logger.debug(f"{key}: {value}")
