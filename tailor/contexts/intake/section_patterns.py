"""
Pattern matching for résumé section heading identification.

This module provides the heading catalog and helper functions used to decide
whether a line of résumé text opens a new section, and of which type.

Pattern classes follow the same convention throughout the package:
- Dataclasses with frozen=True for immutability
- Class-level constants for patterns
- Helper functions that use these patterns
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


class SectionType(Enum):
    """Labels a résumé section can carry."""

    SUMMARY = "summary"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    SKILLS = "skills"
    OTHER = "other"


# =============================================================================
# HEADING CATALOG
# =============================================================================


@dataclass(frozen=True)
class HeadingCatalog:
    """
    Heading synonyms per section type.

    A line is a heading of a type when its normalized text equals one of
    that type's synonyms. Types are checked in field order and the first
    match wins; the synonym lists do not overlap, so order only matters for
    custom catalogs.

    These aren't meant to be exhaustive. They cover the headings seen most
    often on real résumés.
    """

    SUMMARY: Tuple[str, ...] = (
        "summary",
        "professional summary",
        "profile",
        "professional profile",
        "objective",
        "career objective",
        "about me",
        "executive summary",
        "career summary",
    )

    EXPERIENCE: Tuple[str, ...] = (
        "experience",
        "work history",
        "employment",
        "employment history",
        "professional experience",
        "work experience",
        "career history",
        "relevant experience",
    )

    EDUCATION: Tuple[str, ...] = (
        "education",
        "academic background",
        "qualifications",
        "education and training",
        "academic history",
    )

    SKILLS: Tuple[str, ...] = (
        "skills",
        "technical skills",
        "core competencies",
        "key skills",
        "competencies",
        "areas of expertise",
        "core skills",
    )

    def by_type(self) -> Dict[SectionType, Tuple[str, ...]]:
        """Synonym lists keyed by section type, in checking order."""
        return {
            SectionType.SUMMARY: self.SUMMARY,
            SectionType.EXPERIENCE: self.EXPERIENCE,
            SectionType.EDUCATION: self.EDUCATION,
            SectionType.SKILLS: self.SKILLS,
        }


DEFAULT_HEADING_CATALOG = HeadingCatalog()


@dataclass(frozen=True)
class GenericHeadingRules:
    """
    Limits of the generic-heading heuristic for headings outside the catalog.

    A short line that starts with a capital letter and has no colon is taken
    as a custom heading (e.g. "Certifications"). Short capitalized sentences
    are misread as headings too; that is a known limitation of the rule.
    """

    MAX_LENGTH: int = 50
    FORBIDDEN_CHAR: str = ":"


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================


def normalize_heading(line: str) -> str:
    """
    Normalize a candidate heading line for catalog matching.

    Lowercases, strips, collapses internal whitespace and drops a single
    trailing colon ("Experience:" -> "experience").
    """
    normalized = line.strip().lower()
    normalized = re.sub(r"\s+", " ", normalized)
    if normalized.endswith(":"):
        normalized = normalized[:-1].rstrip()
    return normalized


def match_section_type(
    line: str, catalog: HeadingCatalog = DEFAULT_HEADING_CATALOG
) -> Optional[SectionType]:
    """
    Match a line against the heading catalog.

    Args:
        line: Raw résumé line
        catalog: Heading synonyms per section type

    Returns:
        SectionType of the first matching type, or None
    """
    normalized = normalize_heading(line)
    if not normalized:
        return None

    for section_type, synonyms in catalog.by_type().items():
        if normalized in synonyms:
            return section_type

    return None


def is_generic_heading(line: str, rules: GenericHeadingRules = GenericHeadingRules()) -> bool:
    """
    Check the generic-heading heuristic on a stripped line.

    True when the line is at most MAX_LENGTH characters, starts with an
    uppercase letter and contains no colon.
    """
    stripped = line.strip()
    return (
        bool(stripped)
        and len(stripped) <= rules.MAX_LENGTH
        and stripped[0].isupper()
        and rules.FORBIDDEN_CHAR not in stripped
    )
