"""
Tailoring context logger.

Provides logging interface for tailoring context with automatic [tailor] prefix.
All tailoring modules should import from this module, not from loguru directly.
"""

from loguru import logger

from tailor.utils.text_processing import truncate_display

CONTEXT_PREFIX = "[tailor]"


def _log_info(message: str) -> None:
    """Log info message with [tailor] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [tailor] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [tailor] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level tailoring-specific logging helpers


def log_rewrite_start(strategy_name: str, original: str, job_description: str) -> None:
    """Log start of a rewrite with input sizes."""
    _log_info(f"Rewriting with '{strategy_name}' strategy")
    _log_debug(f"  Resume: {len(original)} chars, job description: {len(job_description)} chars")


def log_section_rewrite(section, rewritten: str) -> None:
    """Log whether a section's body changed."""
    if rewritten == section.content:
        _log_debug(f"  {section.original_title!r} <{section.section_type.value}>: unchanged")
    else:
        added = len(rewritten) - len(section.content)
        _log_debug(f"  {section.original_title!r} <{section.section_type.value}>: {added:+d} chars")


def log_rewrite_result(strategy_name: str, optimized: str, elapsed_time: float) -> None:
    """Log outcome of a rewrite."""
    _log_info(f"'{strategy_name}' rewrite produced {len(optimized)} chars ({elapsed_time:.2f}s)")
    _log_debug(f"  Preview: {truncate_display(optimized, 120)!r}")


def log_provider_failure(provider_name: str, error: Exception) -> None:
    """Log the raw provider error. Never forwarded to the caller."""
    _log_error(f"Text-completion call to {provider_name} failed: {type(error).__name__}: {error}")
