"""
Targeting context logger.

Provides logging interface for targeting context with automatic [target] prefix.
All targeting modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[target]"


def _log_info(message: str) -> None:
    """Log info message with [target] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [target] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [target] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level targeting-specific logging helpers


def log_job_profile(job) -> None:
    """Log the skills and keywords found in a job description."""
    _log_info(f"Job profile: {len(job.skills)} skills, {len(job.keywords)} keywords")
    _log_debug(f"  Skills: {', '.join(job.skills) or '(none)'}")
    _log_debug(f"  Keywords: {', '.join(sorted(job.keywords)) or '(none)'}")
    if not job.skills:
        _log_warning("No catalog skills in job description; skills match will be 0")
