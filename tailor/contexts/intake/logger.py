"""
Intake context logger.

Provides logging interface for intake context with automatic [intake] prefix.
All intake modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[intake]"


def _log_info(message: str) -> None:
    """Log info message with [intake] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [intake] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [intake] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [intake] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level intake-specific logging helpers


def log_extraction_result(filename: str, media_type: str, num_bytes: int, text: str) -> None:
    """Log outcome of text extraction, warning when nothing was recovered."""
    if text.strip():
        _log_info(f"Extracted {len(text)} chars from {filename} ({media_type}, {num_bytes} bytes)")
    else:
        _log_warning(
            f"No text layer found in {filename} ({media_type}, {num_bytes} bytes); "
            "scores will be near zero"
        )


def log_segmentation_result(sections, discarded_lines: int) -> None:
    """Log the section outline produced by the segmenter."""
    outline = ", ".join(f"{s.original_title!r}<{s.section_type.value}>" for s in sections)
    _log_info(f"Segmented {len(sections)} sections")
    _log_debug(f"  Outline: {outline or '(none)'}")
    if discarded_lines:
        _log_debug(f"  Discarded {discarded_lines} lines before the first heading")
