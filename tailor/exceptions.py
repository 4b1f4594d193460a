"""
Exception hierarchy for the optimization pipeline.

Every failure that reaches the request boundary is an OptimizationError.
Each carries a ``public_message`` that is safe to return to a caller; the
full ``str(exc)`` may include internal detail and is only logged.
"""

from typing import Optional


class OptimizationError(Exception):
    """
    Base class for pipeline failures.

    Attributes:
        message: Error description (may contain internal detail)
        public_message: Message safe to show to the requester
        status_code: HTTP status the request boundary maps this error to
    """

    status_code = 500
    default_public_message = "Failed to optimize resume"

    def __init__(self, message: str, public_message: Optional[str] = None):
        self.message = message
        self.public_message = public_message or self.default_public_message
        super().__init__(message)


class InvalidRequest(OptimizationError):
    """Missing job description or résumé, or an upload that cannot be accepted."""

    status_code = 400

    def __init__(self, message: str, public_message: Optional[str] = None):
        # Validation messages describe the caller's own input, so they are public
        super().__init__(message, public_message or message)


class UnsupportedFormat(InvalidRequest):
    """
    Upload is not a PDF or DOCX document.

    Attributes:
        media_type: Declared or sniffed media type, if known
        filename: Uploaded filename, if known
    """

    def __init__(
        self,
        message: str,
        media_type: Optional[str] = None,
        filename: Optional[str] = None,
    ):
        self.media_type = media_type
        self.filename = filename

        parts = [message]
        if filename:
            parts.append(f"File: {filename}")
        if media_type:
            parts.append(f"Media type: {media_type}")

        super().__init__(
            "\n".join(parts),
            public_message=f"{message}. Supported formats: PDF, DOCX",
        )


class DocumentTooLarge(InvalidRequest):
    """Upload exceeds the configured size limit."""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        limit_mb = limit / (1024 * 1024)
        super().__init__(
            f"Resume file is too large ({size} bytes, limit {limit} bytes)",
            public_message=f"Resume file is too large (max {limit_mb:g}MB)",
        )


class ExtractionFailure(OptimizationError):
    """Document could not be turned into text."""

    default_public_message = "Failed to read resume document"


class CorruptDocument(ExtractionFailure):
    """
    Parser raised while decoding the document.

    Attributes:
        media_type: Media type the parser was run for
        original_error: The exception raised by the parser
    """

    def __init__(self, media_type: str, original_error: Exception):
        self.media_type = media_type
        self.original_error = original_error
        super().__init__(
            f"Could not parse {media_type} document\n"
            f"Original error: {type(original_error).__name__}: {original_error}"
        )


class DocumentReadError(ExtractionFailure):
    """Operating-system failure while staging or reading the upload."""

    def __init__(self, original_error: OSError):
        self.original_error = original_error
        super().__init__(f"Could not read document: {original_error}")


class ExternalServiceFailure(OptimizationError):
    """
    Text-completion service errored, timed out, or returned nothing usable.

    The provider's raw error is kept on ``original_error`` for logging and is
    never part of ``public_message``.
    """

    default_public_message = "Resume rewriting service is unavailable"

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.provider = provider
        self.original_error = original_error

        parts = [message]
        if provider:
            parts.append(f"Provider: {provider}")
        if original_error:
            parts.append(f"Original error: {type(original_error).__name__}: {original_error}")

        super().__init__("\n".join(parts))


class OptimizationCancelled(OptimizationError):
    """Caller went away before the pipeline finished."""

    default_public_message = "Request was cancelled"

    def __init__(self, stage: str):
        self.stage = stage
        super().__init__(f"Optimization cancelled before stage: {stage}")
