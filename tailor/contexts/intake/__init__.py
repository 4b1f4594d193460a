"""
Intake Context

Responsibilities:
- Accepts uploaded résumé documents (PDF, DOCX) and decodes their text
- Enforces upload limits and cleans up temporary files
- Segments résumé text into labeled sections and reassembles them

Owns: Document extraction, section heading recognition
Never: Scores or rewrites content
"""

from tailor.contexts.intake.document_extractor import (
    DocumentExtractor,
    MediaType,
    RawDocument,
    extract_text,
)
from tailor.contexts.intake.section_patterns import SectionType
from tailor.contexts.intake.segmenter import (
    ResumeSection,
    SectionSegmenter,
    assemble,
    segment,
)

__all__ = [
    "DocumentExtractor",
    "MediaType",
    "RawDocument",
    "extract_text",
    "SectionType",
    "ResumeSection",
    "SectionSegmenter",
    "assemble",
    "segment",
]
