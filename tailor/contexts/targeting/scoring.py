"""
Scoring engine: skill match, keyword overlap and an ATS-compatibility heuristic.

All functions are deterministic and side-effect free. They are run on the
original and on the optimized text; the result reports the optimized
values as the improvement metrics and the original ones as the baseline.

The ATS score is a coarse local proxy built from a few formatting signals.
It is not an emulation of any real applicant tracking system.
"""

import re
from dataclasses import dataclass
from typing import AbstractSet, Optional

from tailor.contexts.targeting.extraction import (
    JobProfile,
    SkillExtractor,
    content_tokens,
    default_skill_extractor,
)

FULL_SCORE = 100


@dataclass(frozen=True)
class AtsPatterns:
    """
    Signals and weights of the ATS heuristic.

    Score = BASE_SCORE plus each bonus whose pattern is found, capped at MAX_SCORE.
    """

    BASE_SCORE: int = 85
    MAX_SCORE: int = 100

    # Standard section words anywhere in the text
    SECTION_WORDS: str = r"education|experience|skills"
    SECTION_WORDS_BONUS: int = 5

    # A line starting with a bullet marker, possibly indented
    BULLET_LINE: str = r"^[ \t]*[-•]"
    BULLET_LINE_BONUS: int = 5

    ACHIEVEMENT_VERBS: str = r"\b(?:increased|decreased|improved|reduced|achieved|delivered)\b"
    ACHIEVEMENT_VERBS_BONUS: int = 3

    # "35%", "$1.2M", "$40,000", "500 users", "12 clients"
    QUANTIFIED: str = (
        r"\d+(?:\.\d+)?\s*%"
        r"|\$\s?\d[\d,]*(?:\.\d+)?"
        r"|\b\d[\d,]*\+?\s+(?:users|customers|clients|projects)\b"
    )
    QUANTIFIED_BONUS: int = 2


ATS_PATTERNS = AtsPatterns()

_ATS_CHECKS = (
    (re.compile(ATS_PATTERNS.SECTION_WORDS, re.IGNORECASE), ATS_PATTERNS.SECTION_WORDS_BONUS),
    (re.compile(ATS_PATTERNS.BULLET_LINE, re.MULTILINE), ATS_PATTERNS.BULLET_LINE_BONUS),
    (
        re.compile(ATS_PATTERNS.ACHIEVEMENT_VERBS, re.IGNORECASE),
        ATS_PATTERNS.ACHIEVEMENT_VERBS_BONUS,
    ),
    (re.compile(ATS_PATTERNS.QUANTIFIED, re.IGNORECASE), ATS_PATTERNS.QUANTIFIED_BONUS),
)


@dataclass(frozen=True)
class ImprovementMetrics:
    """Three percentages in [0, 100] describing how well a résumé fits a job."""

    skills_match: int
    ats_compatibility: int
    keyword_optimization: int

    def to_dict(self) -> dict:
        """Payload form with the response's camelCase field names."""
        return {
            "skillsMatch": self.skills_match,
            "atsCompatibility": self.ats_compatibility,
            "keywordOptimization": self.keyword_optimization,
        }


def _percentage(found: int, total: int) -> int:
    return round(100 * found / total)


def skill_match(resume_skills: AbstractSet[str], job_skills: AbstractSet[str]) -> int:
    """
    Share of job skills the résumé covers.

    A job with no recognizable skills is a vacuous full match (100).
    """
    if not job_skills:
        return FULL_SCORE
    return _percentage(len(set(resume_skills) & set(job_skills)), len(job_skills))


def keyword_match(content: str, job_keywords: AbstractSet[str]) -> int:
    """
    Share of job keywords present as a token anywhere in content.

    An empty keyword set is a vacuous full match (100).
    """
    if not job_keywords:
        return FULL_SCORE
    tokens = content_tokens(content)
    return _percentage(sum(1 for keyword in job_keywords if keyword in tokens), len(job_keywords))


def ats_score(content: str) -> int:
    """Heuristic ATS-compatibility score of content, in [BASE_SCORE, MAX_SCORE]."""
    total = ATS_PATTERNS.BASE_SCORE
    for pattern, bonus in _ATS_CHECKS:
        if pattern.search(content):
            total += bonus
    return min(total, ATS_PATTERNS.MAX_SCORE)


def compute_metrics(
    content: str,
    job: JobProfile,
    skill_extractor: Optional[SkillExtractor] = None,
) -> ImprovementMetrics:
    """
    Score a résumé text against a job profile.

    Args:
        content: Résumé text
        job: Skills and keywords of the job description
        skill_extractor: Extractor for the résumé's skills (default: bundled catalog)
    """
    skill_extractor = skill_extractor or default_skill_extractor()
    return ImprovementMetrics(
        skills_match=skill_match(skill_extractor.extract(content), job.skill_set),
        ats_compatibility=ats_score(content),
        keyword_optimization=keyword_match(content, job.keywords),
    )
