"""
Reporting context logger.

Provides logging interface for reporting context with automatic [report] prefix.
"""

from loguru import logger

CONTEXT_PREFIX = "[report]"


def _log_debug(message: str) -> None:
    """Log debug message with [report] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_signal(name: str, before: int, after: int) -> None:
    """Log one compared signal and whether it improved."""
    verdict = "improved" if after > before else "unchanged"
    _log_debug(f"{name}: {before} -> {after} ({verdict})")
