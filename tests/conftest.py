"""Shared fixtures: hand-built PDF and DOCX documents and a sample résumé."""

import io

import pytest
from docx import Document

DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

SAMPLE_JOB_DESCRIPTION = "Looking for a React, TypeScript, and AWS engineer."

# Body lines are bullets, contain a colon, or run past 50 characters so the
# generic-heading rule only fires on the real headings.
SAMPLE_RESUME_LINES = [
    "Summary",
    "Frontend developer with five years building accessible web apps for retail clients.",
    "Experience",
    "Senior Web Developer | Shopfront Retail Group | 2019 - Present",
    "- Worked on the checkout flow and helped cut cart abandonment by 15%",
    "- Was responsible for the design system shared by four product teams",
    "Education",
    "B.S. in Computer Science, State University of New York, 2014 - 2018",
    "Certifications",
    "- Certified Accessibility Professional, issued by the IAAP in 2021",
    "Skills",
    "React, JavaScript, HTML, CSS",
]


def _pdf_escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_pdf(lines) -> bytes:
    """
    Single-page PDF with one Helvetica text line per entry.

    Object offsets in the xref table are computed, so the file is well formed.
    """
    operators = ["BT", "/F1 10 Tf", "14 TL", "72 720 Td"]
    for line in lines:
        operators.append(f"({_pdf_escape(line)}) Tj T*")
    operators.append("ET")
    stream = "\n".join(operators).encode("latin-1")

    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] /Contents 4 0 R "
        b"/Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica /Encoding /WinAnsiEncoding >>",
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_offset = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\n" % (len(objects) + 1)
    out += b"startxref\n%d\n%%%%EOF\n" % xref_offset
    return bytes(out)


def build_docx(lines) -> bytes:
    """DOCX with one paragraph per entry."""
    document = Document()
    for line in lines:
        document.add_paragraph(line)
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def sample_resume_lines():
    return list(SAMPLE_RESUME_LINES)


@pytest.fixture
def sample_resume_text():
    return "\n".join(SAMPLE_RESUME_LINES)


@pytest.fixture
def sample_job_description():
    return SAMPLE_JOB_DESCRIPTION


@pytest.fixture
def make_pdf():
    return build_pdf


@pytest.fixture
def make_docx():
    return build_docx


@pytest.fixture
def sample_docx_bytes():
    return build_docx(SAMPLE_RESUME_LINES)


@pytest.fixture
def docx_mime():
    return DOCX_MIME
