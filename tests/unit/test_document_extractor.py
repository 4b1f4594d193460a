"""Unit tests for document text extraction and upload validation."""

import tempfile

import pytest

from tailor.contexts.intake.document_extractor import (
    DocumentExtractor,
    MediaType,
    RawDocument,
    sniff_media_type,
    staged_file,
)
from tailor.exceptions import (
    CorruptDocument,
    DocumentTooLarge,
    InvalidRequest,
    UnsupportedFormat,
)

OLE_HEADER = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1" + b"\x00" * 64


@pytest.fixture
def isolated_tempdir(tmp_path, monkeypatch):
    """Route tempfile.mkstemp into tmp_path so leftover files can be counted."""
    monkeypatch.setattr(tempfile, "tempdir", str(tmp_path))
    return tmp_path


# -----------------------------------------------------------------------------
# Media type sniffing
# -----------------------------------------------------------------------------


@pytest.mark.unit
def test_sniff_prefers_declared_mime_type():
    assert sniff_media_type(b"", "resume.bin", "application/pdf") is MediaType.PDF


@pytest.mark.unit
def test_sniff_ignores_mime_parameters(docx_mime):
    assert sniff_media_type(b"", None, f"{docx_mime}; charset=binary") is MediaType.DOCX


@pytest.mark.unit
def test_sniff_falls_back_to_extension_for_generic_mime():
    media_type = sniff_media_type(b"", "Resume.DOCX", "application/octet-stream")
    assert media_type is MediaType.DOCX


@pytest.mark.unit
def test_sniff_falls_back_to_magic_bytes():
    assert sniff_media_type(b"%PDF-1.7\n...") is MediaType.PDF
    assert sniff_media_type(b"PK\x03\x04rest") is MediaType.DOCX
    assert sniff_media_type(OLE_HEADER) is MediaType.DOC
    assert sniff_media_type(b"plain text") is MediaType.UNKNOWN


# -----------------------------------------------------------------------------
# Validation
# -----------------------------------------------------------------------------


@pytest.mark.unit
def test_legacy_doc_is_rejected_by_name():
    document = RawDocument.from_upload(OLE_HEADER, "resume.doc", "application/msword")

    with pytest.raises(UnsupportedFormat) as exc_info:
        DocumentExtractor().extract(document)

    assert "Legacy .doc" in exc_info.value.public_message
    assert exc_info.value.status_code == 400


@pytest.mark.unit
def test_unknown_format_is_rejected():
    document = RawDocument.from_upload(b"just some text", "resume.txt", "text/plain")

    with pytest.raises(UnsupportedFormat):
        DocumentExtractor().extract(document)


@pytest.mark.unit
def test_empty_upload_is_rejected():
    document = RawDocument(b"", MediaType.PDF, "resume.pdf")

    with pytest.raises(InvalidRequest, match="empty"):
        DocumentExtractor().extract(document)


@pytest.mark.unit
def test_oversized_upload_is_rejected_before_parsing(isolated_tempdir):
    document = RawDocument(b"%PDF" + b"0" * 2048, MediaType.PDF, "resume.pdf")

    with pytest.raises(DocumentTooLarge) as exc_info:
        DocumentExtractor(max_bytes=1024).extract(document)

    assert exc_info.value.size == 2052
    assert exc_info.value.limit == 1024
    assert list(isolated_tempdir.iterdir()) == []


@pytest.mark.unit
def test_default_limit_message_names_megabytes():
    error = DocumentTooLarge(size=6 * 1024 * 1024, limit=5 * 1024 * 1024)
    assert error.public_message == "Resume file is too large (max 5MB)"


# -----------------------------------------------------------------------------
# Extraction
# -----------------------------------------------------------------------------


@pytest.mark.unit
def test_extract_docx_paragraphs(make_docx):
    data = make_docx(["Experience", "- Built a design system", "Skills", "Python, SQL"])
    document = RawDocument.from_upload(data, "resume.docx")

    text = DocumentExtractor().extract(document)

    assert text.splitlines() == ["Experience", "- Built a design system", "Skills", "Python, SQL"]


@pytest.mark.unit
def test_extract_pdf_text_layer(make_pdf):
    data = make_pdf(["Experience", "Python developer", "Skills"])
    document = RawDocument.from_upload(data, "resume.pdf", "application/pdf")

    text = DocumentExtractor().extract(document)
    lines = text.splitlines()

    assert lines[0] == "Experience"
    assert "Python" in lines[1]
    assert lines[-1] == "Skills"


@pytest.mark.unit
def test_pdf_without_text_layer_gives_empty_text(make_pdf):
    document = RawDocument.from_upload(make_pdf([]), "scan.pdf")

    assert DocumentExtractor().extract(document) == ""


@pytest.mark.unit
def test_extraction_is_idempotent(make_docx):
    document = RawDocument.from_upload(make_docx(["Summary", "Backend engineer"]), "r.docx")
    extractor = DocumentExtractor()

    assert extractor.extract(document) == extractor.extract(document)


@pytest.mark.unit
def test_corrupt_docx_raises_corrupt_document():
    document = RawDocument(b"PK\x03\x04 definitely not a zip archive", MediaType.DOCX, "r.docx")

    with pytest.raises(CorruptDocument) as exc_info:
        DocumentExtractor().extract(document)

    assert exc_info.value.status_code == 500
    assert exc_info.value.public_message == "Failed to read resume document"


# -----------------------------------------------------------------------------
# Temporary file cleanup
# -----------------------------------------------------------------------------


@pytest.mark.unit
def test_staged_file_removed_after_success(isolated_tempdir, make_docx):
    document = RawDocument.from_upload(make_docx(["Skills", "Go"]), "resume.docx")

    DocumentExtractor().extract(document)

    assert list(isolated_tempdir.glob("tailor_*")) == []


@pytest.mark.unit
def test_staged_file_removed_after_parser_failure(isolated_tempdir):
    document = RawDocument(b"PK\x03\x04 broken", MediaType.DOCX, "resume.docx")

    with pytest.raises(CorruptDocument):
        DocumentExtractor().extract(document)

    assert list(isolated_tempdir.glob("tailor_*")) == []


@pytest.mark.unit
def test_staged_file_removed_when_block_raises(isolated_tempdir):
    with pytest.raises(RuntimeError):
        with staged_file(b"data", suffix=".pdf") as path:
            assert path.exists()
            assert path.read_bytes() == b"data"
            raise RuntimeError("boom")

    assert not path.exists()
