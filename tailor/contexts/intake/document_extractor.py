"""
Plain-text extraction from uploaded résumé documents.

Main class:
    DocumentExtractor: Validates an upload and decodes its text layer.

Helper functions:
    sniff_media_type: Media type from MIME type, filename and magic bytes.
    staged_file: Temporary on-disk copy of an upload, always removed on exit.
    read_pdf_text: Text layer of a PDF (pdfplumber).
    read_docx_text: Paragraph text of a DOCX (python-docx).
"""

import os
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Iterator, Optional, Union

import pdfplumber
from docx import Document

from tailor.config import DEFAULT_MAX_UPLOAD_BYTES
from tailor.contexts.intake.logger import _log_debug, log_extraction_result
from tailor.exceptions import (
    CorruptDocument,
    DocumentReadError,
    DocumentTooLarge,
    InvalidRequest,
    UnsupportedFormat,
)


class MediaType(Enum):
    """Document formats recognized at intake. Only PDF and DOCX are extractable."""

    PDF = "pdf"
    DOCX = "docx"
    DOC = "doc"  # legacy binary Word, recognized so it can be rejected by name
    UNKNOWN = "unknown"


SUPPORTED_MEDIA_TYPES = (MediaType.PDF, MediaType.DOCX)

DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

MIME_TYPES = {
    "application/pdf": MediaType.PDF,
    "application/x-pdf": MediaType.PDF,
    DOCX_MIME: MediaType.DOCX,
    "application/msword": MediaType.DOC,
}

EXTENSIONS = {
    ".pdf": MediaType.PDF,
    ".docx": MediaType.DOCX,
    ".doc": MediaType.DOC,
}

# Leading bytes of each container format
MAGIC_NUMBERS = (
    (b"%PDF", MediaType.PDF),
    (b"PK\x03\x04", MediaType.DOCX),
    (b"\xd0\xcf\x11\xe0", MediaType.DOC),
)


def sniff_media_type(
    data: bytes, filename: Optional[str] = None, content_type: Optional[str] = None
) -> MediaType:
    """
    Determine the media type of an upload.

    Checks the declared MIME type first, then the filename extension, then the
    magic bytes. Generic MIME types (application/octet-stream) fall through.

    Returns:
        MediaType, UNKNOWN if nothing matched
    """
    if content_type:
        mime = content_type.split(";")[0].strip().lower()
        if mime in MIME_TYPES:
            return MIME_TYPES[mime]

    if filename:
        suffix = Path(filename).suffix.lower()
        if suffix in EXTENSIONS:
            return EXTENSIONS[suffix]

    for magic, media_type in MAGIC_NUMBERS:
        if data.startswith(magic):
            return media_type

    return MediaType.UNKNOWN


@dataclass(frozen=True)
class RawDocument:
    """
    Uploaded résumé bytes plus their media type.

    Ephemeral: built per request and dropped once text is extracted.
    """

    data: bytes
    media_type: MediaType
    filename: Optional[str] = None

    @classmethod
    def from_upload(
        cls, data: bytes, filename: Optional[str] = None, content_type: Optional[str] = None
    ) -> "RawDocument":
        """Wrap uploaded bytes, sniffing the media type."""
        return cls(data, sniff_media_type(data, filename, content_type), filename)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "RawDocument":
        """
        Read a document from disk.

        Raises:
            DocumentReadError: If the file cannot be read
        """
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise DocumentReadError(e)
        return cls.from_upload(data, filename=path.name)

    @property
    def display_name(self) -> str:
        return self.filename or f"<{self.media_type.value} upload>"


@contextmanager
def staged_file(data: bytes, suffix: str = "") -> Iterator[Path]:
    """
    Write bytes to a temporary file and remove it when the block exits.

    The file is deleted on every exit path, including exceptions raised
    inside the block.

    Raises:
        DocumentReadError: If the temporary file cannot be created or written
    """
    path = None
    try:
        try:
            fd, temp_path = tempfile.mkstemp(prefix="tailor_", suffix=suffix)
            path = Path(temp_path)
            with os.fdopen(fd, "wb") as f:
                f.write(data)
        except OSError as e:
            raise DocumentReadError(e)
        yield path
    finally:
        if path is not None:
            path.unlink(missing_ok=True)
            _log_debug(f"Removed staged file {path.name}")


def read_pdf_text(path: Path) -> str:
    """Decode the embedded text layer of every page. Image-only PDFs give ''."""
    with pdfplumber.open(path) as pdf:
        pages = [page.extract_text() or "" for page in pdf.pages]
    return "\n".join(pages).strip()


def read_docx_text(path: Path) -> str:
    """Paragraph text, one paragraph per line. Styling, images and tables are ignored."""
    document = Document(str(path))
    return "\n".join(paragraph.text for paragraph in document.paragraphs).strip()


class DocumentExtractor:
    """
    Converts an uploaded PDF or DOCX into plain text.

    Args:
        max_bytes: Largest accepted upload; larger ones are rejected before parsing

    Example:
        >>> extractor = DocumentExtractor()
        >>> text = extractor.extract(RawDocument.from_path("resume.pdf"))
    """

    def __init__(self, max_bytes: int = DEFAULT_MAX_UPLOAD_BYTES):
        self.max_bytes = max_bytes
        self._readers: Dict[MediaType, Callable[[Path], str]] = {
            MediaType.PDF: read_pdf_text,
            MediaType.DOCX: read_docx_text,
        }

    def validate(self, document: RawDocument) -> None:
        """
        Check an upload can be extracted, without parsing it.

        Raises:
            UnsupportedFormat: If the media type is not PDF or DOCX
            InvalidRequest: If the upload is empty
            DocumentTooLarge: If the upload exceeds max_bytes
        """
        if document.media_type not in SUPPORTED_MEDIA_TYPES:
            if document.media_type is MediaType.DOC:
                message = "Legacy .doc files are not supported"
            else:
                message = "Unsupported resume file type"
            raise UnsupportedFormat(
                message, media_type=document.media_type.value, filename=document.filename
            )

        if not document.data:
            raise InvalidRequest("Resume file is empty")

        if len(document.data) > self.max_bytes:
            raise DocumentTooLarge(len(document.data), self.max_bytes)

    def extract(self, document: RawDocument) -> str:
        """
        Extract plain text from a document.

        Args:
            document: Uploaded bytes and media type

        Returns:
            Decoded text ('' for a PDF with no text layer)

        Raises:
            UnsupportedFormat, InvalidRequest, DocumentTooLarge: Upload rejected
            CorruptDocument: Parser failed on the bytes
            DocumentReadError: Temporary copy could not be written or read
        """
        self.validate(document)

        reader = self._readers[document.media_type]
        suffix = f".{document.media_type.value}"

        with staged_file(document.data, suffix=suffix) as path:
            try:
                text = reader(path)
            except OSError as e:
                raise DocumentReadError(e)
            except Exception as e:
                raise CorruptDocument(document.media_type.value, e)

        log_extraction_result(
            document.display_name, document.media_type.value, len(document.data), text
        )
        return text


def extract_text(document: RawDocument, max_bytes: int = DEFAULT_MAX_UPLOAD_BYTES) -> str:
    """Extract plain text with a default-configured DocumentExtractor."""
    return DocumentExtractor(max_bytes=max_bytes).extract(document)
