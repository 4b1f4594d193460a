"""
Skill and keyword extraction.

Both extractors are pure: the same text always yields the same set. They
are configured once from the catalog and hold no mutable state.

Usage:
    from tailor.contexts.targeting.extraction import extract_skills, extract_keywords

    extract_skills("Looking for a React, TypeScript, and AWS engineer.")
    # {"react", "typescript", "aws"}
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import FrozenSet, Iterable, List, Optional, Set, Tuple

from tailor.catalog import Catalog, SkillEntry, load_catalog
from tailor.contexts.targeting.logger import log_job_profile
from tailor.utils.token_processing import Tokenizer

# Keywords must be longer than this
MIN_KEYWORD_LENGTH = 3

# Characters that continue a skill term ("c++", "c#", "node.js" are terms in their own right)
_TERM_CHARS = r"\w#+"


def compile_surface_form(form: str) -> str:
    """
    Regex source matching one surface form as a whole term.

    Internal spaces match any run of whitespace. The term may not be glued
    to word characters, '#' or '+' on either side, or follow a '.', so
    "java" does not match inside "javascript" and ".net" does not match
    inside "asp.net".
    """
    body = re.escape(form).replace(r"\ ", r"\s+")
    return rf"(?<![{_TERM_CHARS}.]){body}(?![{_TERM_CHARS}])"


def _compile_entry(entry: SkillEntry) -> re.Pattern:
    # Longest form first so alternation prefers "ruby on rails" over "ruby"
    forms = sorted(entry.surface_forms, key=len, reverse=True)
    return re.compile("|".join(compile_surface_form(f) for f in forms), re.IGNORECASE)


class SkillExtractor:
    """
    Recognizes catalog skills in text.

    Every catalog entry is compiled to one case-insensitive pattern. A match
    of any surface form contributes the entry's canonical token. Categories
    are scanned in catalog order; the result is a set, so a skill listed in
    several categories is counted once.

    Args:
        catalog: Skill vocabulary (default: bundled catalog)
    """

    def __init__(self, catalog: Optional[Catalog] = None):
        self.catalog = catalog or load_catalog()
        self._patterns: Tuple[Tuple[str, re.Pattern], ...] = tuple(
            (entry.canonical, _compile_entry(entry)) for entry in self.catalog.skills
        )

    def extract(self, text: str) -> Set[str]:
        """Canonical lower-cased skill tokens found in text."""
        return {canonical for canonical, pattern in self._patterns if pattern.search(text)}

    def extract_ordered(self, text: str) -> List[str]:
        """Skills found in text, in catalog order, each listed once."""
        found = (canonical for canonical, pattern in self._patterns if pattern.search(text))
        return list(dict.fromkeys(found))


class KeywordExtractor:
    """
    Significant words of a text.

    Tokenizes on word boundaries, lowercases, and drops stop words, tokens
    of length <= 2 and purely numeric tokens.

    Args:
        stop_words: Words to drop (default: catalog stop words)
    """

    def __init__(self, stop_words: Optional[Iterable[str]] = None):
        if stop_words is None:
            stop_words = load_catalog().stop_words
        self.tokenizer = Tokenizer(
            stopwords=stop_words,
            min_token_length=MIN_KEYWORD_LENGTH,
            drop_numeric=True,
        )

    def extract(self, text: str) -> Set[str]:
        return self.tokenizer.token_set(text)


# Unfiltered tokenizer for "is this word present in the text" checks
_presence_tokenizer = Tokenizer()


def content_tokens(text: str) -> Set[str]:
    """Every lower-cased word token of text, without filtering."""
    return _presence_tokenizer.token_set(text)


@lru_cache(maxsize=1)
def default_skill_extractor() -> SkillExtractor:
    return SkillExtractor()


@lru_cache(maxsize=1)
def default_keyword_extractor() -> KeywordExtractor:
    return KeywordExtractor()


def extract_skills(text: str) -> Set[str]:
    """Skills in text, using the bundled catalog."""
    return default_skill_extractor().extract(text)


def extract_keywords(text: str) -> Set[str]:
    """Keywords in text, using the bundled stop-word list."""
    return default_keyword_extractor().extract(text)


@dataclass(frozen=True)
class JobProfile:
    """
    Skills and keywords of one job description, extracted once per request.

    Attributes:
        text: Job description as given
        skills: Job skills in catalog order
        keywords: Job keywords
    """

    text: str
    skills: Tuple[str, ...]
    keywords: FrozenSet[str]

    @property
    def skill_set(self) -> Set[str]:
        return set(self.skills)

    @property
    def terms(self) -> Set[str]:
        """Skills and keywords together."""
        return set(self.skills) | set(self.keywords)


def build_job_profile(
    text: str,
    skill_extractor: Optional[SkillExtractor] = None,
    keyword_extractor: Optional[KeywordExtractor] = None,
) -> JobProfile:
    """Extract the skills and keywords of a job description."""
    skill_extractor = skill_extractor or default_skill_extractor()
    keyword_extractor = keyword_extractor or default_keyword_extractor()
    job = JobProfile(
        text=text,
        skills=tuple(skill_extractor.extract_ordered(text)),
        keywords=frozenset(keyword_extractor.extract(text)),
    )
    log_job_profile(job)
    return job
