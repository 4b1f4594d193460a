"""
Résumé section segmentation.

Splits plain résumé text into an ordered list of labeled sections with a
single top-to-bottom pass over its lines, and reassembles sections back
into text.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from tailor.contexts.intake.logger import log_segmentation_result
from tailor.contexts.intake.section_patterns import (
    DEFAULT_HEADING_CATALOG,
    GenericHeadingRules,
    HeadingCatalog,
    SectionType,
    is_generic_heading,
    match_section_type,
)

SECTION_SEPARATOR = "\n\n"


@dataclass(frozen=True)
class ResumeSection:
    """
    One labeled block of a résumé.

    Attributes:
        section_type: Section label (summary, experience, ...)
        original_title: Heading text exactly as it appeared (stripped)
        content: Body lines joined with newlines, trimmed
    """

    section_type: SectionType
    original_title: str
    content: str

    def render(self) -> str:
        """Heading and body as they appear in an assembled document."""
        if not self.content:
            return self.original_title
        return f"{self.original_title}\n{self.content}"

    def with_content(self, content: str) -> "ResumeSection":
        """Copy of this section with a different body."""
        return ResumeSection(self.section_type, self.original_title, content)


def assemble(sections: Sequence[ResumeSection]) -> str:
    """Join rendered sections in order, separated by a blank line."""
    return SECTION_SEPARATOR.join(section.render() for section in sections)


class SectionSegmenter:
    """
    Splits résumé text into sections using heading recognition.

    Rules:
    - A line matching the heading catalog opens a section of that type.
    - Any other line passing the generic-heading heuristic opens an ``other``
      section titled with the line's exact text, unless it sits directly
      under a heading that has no body yet (then it is body text).
    - Remaining non-blank lines belong to the most recently opened section.
    - Lines before the first heading are discarded.
    - A section is emitted when the next heading opens, even if it is empty.
      At end of input the last section is emitted only if it has content.
    - Repeated headings of the same type yield separate sections.

    Args:
        catalog: Heading synonyms per section type
        generic_rules: Limits of the generic-heading heuristic
    """

    def __init__(
        self,
        catalog: HeadingCatalog = DEFAULT_HEADING_CATALOG,
        generic_rules: GenericHeadingRules = GenericHeadingRules(),
    ):
        self.catalog = catalog
        self.generic_rules = generic_rules

    def classify_heading(self, line: str, allow_generic: bool = True) -> Optional[SectionType]:
        """Section type opened by this line, or None if it is body text."""
        section_type = match_section_type(line, self.catalog)
        if section_type is not None:
            return section_type
        if allow_generic and is_generic_heading(line, self.generic_rules):
            return SectionType.OTHER
        return None

    def split(self, text: str) -> Tuple[List[ResumeSection], int]:
        """
        Segment text, also reporting how many lines preceded the first heading.

        Returns:
            (sections in document order, number of discarded non-blank lines)
        """
        sections: List[ResumeSection] = []
        current_type: Optional[SectionType] = None
        current_title = ""
        current_lines: List[str] = []
        discarded = 0

        def close_section(at_end: bool = False) -> None:
            content = "\n".join(current_lines).strip()
            if current_type is None or (at_end and not content):
                return
            sections.append(ResumeSection(current_type, current_title, content))

        for line in text.splitlines():
            if not line.strip():
                continue

            # A heading with no body yet takes the next non-catalog line as body
            awaiting_body = current_type is not None and not current_lines
            section_type = self.classify_heading(line, allow_generic=not awaiting_body)
            if section_type is not None:
                close_section()
                current_type = section_type
                current_title = line.strip()
                current_lines = []
            elif current_type is None:
                discarded += 1
            else:
                current_lines.append(line.rstrip())

        close_section(at_end=True)
        return sections, discarded

    def segment(self, text: str) -> List[ResumeSection]:
        """Segment text into ordered sections."""
        sections, discarded = self.split(text)
        log_segmentation_result(sections, discarded)
        return sections


def segment(text: str) -> List[ResumeSection]:
    """Segment text with the default heading catalog."""
    return SectionSegmenter().segment(text)
