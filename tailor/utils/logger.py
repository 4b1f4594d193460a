"""
Loguru setup for the API server and the command-line script.

Modules log through loguru directly (contexts through their own prefixed
wrappers in contexts/{context}/logger.py); this module only decides where the
records go. Until setup_logger is called loguru's default stderr sink is used.
"""

import platform
import sys
from pathlib import Path
from typing import Mapping, Optional

from loguru import logger

from tailor import __version__

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {thread.name} | {message}"
CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>"

LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[Mapping[str, object]] = None,
    level_colors: Optional[Mapping[str, str]] = None,
    console: bool = True,
) -> Path:
    """
    Replace loguru's sinks with a run log file and, optionally, the console.

    The file sink records DEBUG and above (including section-level rewrite
    details); the console sink records INFO and above on stderr so stdout
    stays free for command output. A provenance header opens every run.

    Args:
        context_name: Log file stem, e.g. "api" or "optimize"
        log_dir: Directory for the log file (created if missing)
        extra_provenance: Run settings to record in the header
        level_colors: Console color overrides per level
        console: Also log to stderr

    Returns:
        Path to the log file

    Example:
        log_file = setup_logger("optimize", Path("logs"), {"Rewrite strategy": "rules"})
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()

    for level_name, color in {**LEVEL_COLORS, **(level_colors or {})}.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    if console:
        logger.add(sys.stderr, format=CONSOLE_FORMAT, level="INFO", colorize=True)

    log_provenance(extra_provenance)
    return log_file


def log_provenance(extra_context: Optional[Mapping[str, object]] = None) -> None:
    """Log what is running, where, and with which settings."""
    logger.info("=" * 80)
    logger.info(f"tailor {__version__} on Python {platform.python_version()}")
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    for key, value in (extra_context or {}).items():
        logger.info(f"{key}: {value}")
    logger.info("=" * 80)
