"""
Rule-based résumé rewriting.

Each section is rewritten according to its type:

- summary: one sentence naming missing job terms is appended
- experience: weak verbs are strengthened and one missing job term may be
  appended to achievement lines; company/date lines pass through verbatim
- skills: missing job skills are appended on a labeled line
- education, other: returned unchanged

Rewriting only ever adds text or swaps verb phrases. Nothing is deleted or
reordered, and experience sections keep their line count.
"""

import re
import time
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional, Sequence, Union

from tailor.catalog import RewriteRules, load_catalog
from tailor.contexts.intake.section_patterns import SectionType
from tailor.contexts.intake.segmenter import (
    ResumeSection,
    SectionSegmenter,
    assemble,
)
from tailor.contexts.tailoring.logger import (
    log_rewrite_result,
    log_rewrite_start,
    log_section_rewrite,
)
from tailor.contexts.tailoring.strategy import RewriteStrategy
from tailor.contexts.targeting.extraction import (
    JobProfile,
    KeywordExtractor,
    SkillExtractor,
    build_job_profile,
    content_tokens,
    default_keyword_extractor,
    default_skill_extractor,
)
from tailor.utils.text_processing import (
    append_clause,
    append_sentence,
    compile_word_alternation,
    join_terms,
    match_case,
)

# =============================================================================
# EXPERIENCE LINE PATTERNS
# =============================================================================


@dataclass(frozen=True)
class ExperienceLinePatterns:
    """
    Regex patterns for classifying lines of an experience section.

    Header lines (company, title, dates) are never rewritten. Candidate
    lines are bullets or lines carrying a past-tense/gerund verb.
    """

    BULLET: str = r"^\s*[-•*▪●]"

    # "developed", "leading", ...
    VERB_TOKEN: str = r"\b[A-Za-z]{2,}(?:ed|ing)\b"

    # "2019 - 2021", "2019 – Present", "2020 to current"
    DATE_RANGE: str = (
        r"\b(?:19|20)\d{2}\s*(?:-|–|—|to)\s*(?:(?:19|20)\d{2}|present|current|now)\b"
    )

    # "Jan 2020", "September 2018"
    MONTH_YEAR: str = (
        r"\b(?:jan|feb|mar|apr|may|jun|jul|aug|sep|sept|oct|nov|dec)[a-z]*\.?\s+(?:19|20)\d{2}\b"
    )

    # "Acme Corp | Remote", "Engineer @ Acme"
    COMPANY_SEPARATOR: str = r"\s[|@]\s"

    # "Software Engineer at Acme Corp"
    TITLE_AT_COMPANY: str = r"^[A-Z][^.!?]*\sat\s[A-Z]"

    # "Senior Engineer, Acme Corp"
    TITLE_COMMA_COMPANY: str = r"^[A-Z][\w&.'/ -]*,\s*[A-Z][\w&.' -]*$"


_PATTERNS = ExperienceLinePatterns()
_BULLET = re.compile(_PATTERNS.BULLET)
_VERB_TOKEN = re.compile(_PATTERNS.VERB_TOKEN)
_HEADER_PATTERNS = (
    re.compile(_PATTERNS.DATE_RANGE, re.IGNORECASE),
    re.compile(_PATTERNS.MONTH_YEAR, re.IGNORECASE),
    re.compile(_PATTERNS.COMPANY_SEPARATOR),
    re.compile(_PATTERNS.TITLE_AT_COMPANY),
    re.compile(_PATTERNS.TITLE_COMMA_COMPANY),
)


def _phrase_pattern(phrase: str) -> str:
    """Whole-word regex for a phrase; internal spaces match any whitespace."""
    return r"\b" + re.escape(phrase).replace(r"\ ", r"\s+") + r"\b"


def is_bullet_line(line: str) -> bool:
    return bool(_BULLET.match(line))


def is_experience_header(line: str) -> bool:
    """Company, title or date line. Bullet lines are never headers."""
    if is_bullet_line(line):
        return False
    return any(pattern.search(line.strip()) for pattern in _HEADER_PATTERNS)


def is_candidate_line(line: str) -> bool:
    """Achievement line eligible for rewriting."""
    if is_experience_header(line):
        return False
    return is_bullet_line(line) or bool(_VERB_TOKEN.search(line))


# =============================================================================
# SECTION REWRITER
# =============================================================================


class SectionRewriter:
    """
    Rewrites one résumé section at a time against a job profile.

    Args:
        rules: Verb table, marker words and phrasing (default: bundled catalog)
        skill_extractor: Skill recognizer (default: bundled catalog)
        keyword_extractor: Keyword extractor (default: bundled stop words)

    Example:
        >>> rewriter = SectionRewriter()
        >>> rewriter.optimize_section(section, "Looking for a React and AWS engineer.")
    """

    def __init__(
        self,
        rules: Optional[RewriteRules] = None,
        skill_extractor: Optional[SkillExtractor] = None,
        keyword_extractor: Optional[KeywordExtractor] = None,
    ):
        self.rules = rules or load_catalog().rewrite
        self.skill_extractor = skill_extractor or default_skill_extractor()
        self.keyword_extractor = keyword_extractor or default_keyword_extractor()

        self._verb_patterns = tuple(
            (re.compile(_phrase_pattern(weak), re.IGNORECASE), strong)
            for weak, strong in self.rules.verb_replacements
        )
        self._marker_pattern = compile_word_alternation(self.rules.marker_words)
        self._handlers: Dict[SectionType, Callable[[str, JobProfile], str]] = {
            SectionType.SUMMARY: self._rewrite_summary,
            SectionType.EXPERIENCE: self._rewrite_experience,
            SectionType.SKILLS: self._rewrite_skills,
        }

    def profile(self, job: Union[str, JobProfile]) -> JobProfile:
        if isinstance(job, JobProfile):
            return job
        return build_job_profile(job, self.skill_extractor, self.keyword_extractor)

    def optimize_section(self, section: ResumeSection, job: Union[str, JobProfile]) -> str:
        """
        Rewrite a section's body for a job.

        Args:
            section: Section to rewrite
            job: Job description text, or its already extracted profile

        Returns:
            Rewritten body. Education and other sections come back unchanged.
        """
        handler = self._handlers.get(section.section_type)
        if handler is None:
            return section.content
        return handler(section.content, self.profile(job))

    def rewrite_sections(
        self, sections: Sequence[ResumeSection], job: Union[str, JobProfile]
    ) -> List[ResumeSection]:
        """Rewrite every section, keeping order and titles."""
        job = self.profile(job)
        rewritten = []
        for section in sections:
            content = self.optimize_section(section, job)
            log_section_rewrite(section, content)
            rewritten.append(section.with_content(content))
        return rewritten

    # -------------------------------------------------------------------------
    # Missing terms
    # -------------------------------------------------------------------------

    def missing_terms(self, content: str, job: JobProfile) -> List[str]:
        """
        Job terms absent from content: skills in catalog order, then keywords sorted.

        Keywords that are themselves job skills are only listed once.
        """
        present_skills = self.skill_extractor.extract(content)
        tokens = content_tokens(content)

        missing = [skill for skill in job.skills if skill not in present_skills]
        missing.extend(
            keyword
            for keyword in sorted(job.keywords)
            if keyword not in tokens and keyword not in job.skill_set
        )
        return missing

    def mentions_job_term(self, line: str, job: JobProfile) -> bool:
        if self.skill_extractor.extract(line) & job.skill_set:
            return True
        return bool(self.keyword_extractor.extract(line) & job.keywords)

    def has_marker_word(self, line: str) -> bool:
        """Line already introduces its tooling ("using ...")."""
        return self._marker_pattern is not None and bool(self._marker_pattern.search(line))

    # -------------------------------------------------------------------------
    # Section handlers
    # -------------------------------------------------------------------------

    def _rewrite_summary(self, content: str, job: JobProfile) -> str:
        terms = self.missing_terms(content, job)[: self.rules.summary_max_terms]
        if not terms:
            return content
        return append_sentence(content, f"{self.rules.summary_lead} {join_terms(terms)}.")

    def _rewrite_experience(self, content: str, job: JobProfile) -> str:
        to_inject: Iterator[str] = iter(self.missing_terms(content, job))
        lines = []
        for line in content.split("\n"):
            if is_candidate_line(line):
                line = self.strengthen_verbs(line)
                if not self.mentions_job_term(line, job) and not self.has_marker_word(line):
                    term = next(to_inject, None)
                    if term is not None:
                        line = append_clause(line, f"{self.rules.injection_prefix} {term}")
            lines.append(line)
        return "\n".join(lines)

    def _rewrite_skills(self, content: str, job: JobProfile) -> str:
        declared = self.skill_extractor.extract(content)
        missing = [skill for skill in job.skills if skill not in declared]
        if not missing:
            return content
        addendum = f"{self.rules.skills_addendum_label}: {', '.join(missing)}"
        return f"{content}\n{addendum}" if content else addendum

    def strengthen_verbs(self, line: str) -> str:
        """Apply the weak-to-strong verb table with whole-word, case-insensitive matching."""
        for pattern, strong in self._verb_patterns:
            line = pattern.sub(lambda m, strong=strong: match_case(m.group(0), strong), line)
        return line


# =============================================================================
# STRATEGY
# =============================================================================


class RuleBasedStrategy(RewriteStrategy):
    """
    Deterministic rewrite: segment, rewrite each section by type, reassemble.

    Args:
        segmenter: Section segmenter (default: bundled heading catalog)
        rewriter: Section rewriter (default: bundled catalog)
    """

    name = "rules"

    def __init__(
        self,
        segmenter: Optional[SectionSegmenter] = None,
        rewriter: Optional[SectionRewriter] = None,
    ):
        self.segmenter = segmenter or SectionSegmenter()
        self.rewriter = rewriter or SectionRewriter()

    def rewrite(self, original: str, job_description: str) -> str:
        log_rewrite_start(self.name, original, job_description)
        start_time = time.time()

        sections = self.segmenter.segment(original)
        optimized = assemble(self.rewriter.rewrite_sections(sections, job_description))

        log_rewrite_result(self.name, optimized, time.time() - start_time)
        return optimized
