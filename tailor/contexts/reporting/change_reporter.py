"""
Human-readable changelog of an optimization.

Compares the original and optimized résumé texts on three signals and emits
one statement per signal that improved, always in the same order:

1. skills present in the optimized text but not the original
2. more strong action verbs
3. more job keywords present
"""

from typing import List, Optional

from tailor.catalog import RewriteRules, load_catalog
from tailor.contexts.targeting.extraction import (
    JobProfile,
    SkillExtractor,
    build_job_profile,
    content_tokens,
    default_skill_extractor,
)
from tailor.contexts.reporting.logger import log_signal
from tailor.utils.text_processing import compile_word_alternation

ADDED_SKILLS_TEMPLATE = "Added relevant skills: {skills}"
STRONGER_VERBS_MESSAGE = "Strengthened action verbs for greater impact"
ADDED_KEYWORDS_TEMPLATE = "Added {count} job-specific keywords"


class ChangeReporter:
    """
    Diffs two résumé texts into improvement statements.

    Args:
        rules: Source of the strong action verb list (default: bundled catalog)
        skill_extractor: Skill recognizer (default: bundled catalog)
    """

    def __init__(
        self,
        rules: Optional[RewriteRules] = None,
        skill_extractor: Optional[SkillExtractor] = None,
    ):
        rules = rules or load_catalog().rewrite
        self.skill_extractor = skill_extractor or default_skill_extractor()
        self._strong_verbs = compile_word_alternation(rules.strong_verbs)

    def count_strong_verbs(self, text: str) -> int:
        if self._strong_verbs is None:
            return 0
        return len(self._strong_verbs.findall(text))

    @staticmethod
    def count_job_keywords(text: str, job: JobProfile) -> int:
        """Number of distinct job keywords present as tokens of text."""
        tokens = content_tokens(text)
        return sum(1 for keyword in job.keywords if keyword in tokens)

    def diff(self, original: str, optimized: str, job: JobProfile) -> List[str]:
        """
        Improvement statements for optimized relative to original.

        Returns:
            Statements in fixed order (skills, verbs, keywords); empty if nothing improved
        """
        changes = []

        added_skills = self.skill_extractor.extract(optimized) - self.skill_extractor.extract(
            original
        )
        if added_skills:
            changes.append(ADDED_SKILLS_TEMPLATE.format(skills=", ".join(sorted(added_skills))))

        verbs_before = self.count_strong_verbs(original)
        verbs_after = self.count_strong_verbs(optimized)
        log_signal("Strong verbs", verbs_before, verbs_after)
        if verbs_after > verbs_before:
            changes.append(STRONGER_VERBS_MESSAGE)

        keywords_before = self.count_job_keywords(original, job)
        keywords_after = self.count_job_keywords(optimized, job)
        log_signal("Job keywords", keywords_before, keywords_after)
        if keywords_after > keywords_before:
            changes.append(ADDED_KEYWORDS_TEMPLATE.format(count=keywords_after - keywords_before))

        return changes


def diff(original: str, optimized: str, job_description: str) -> List[str]:
    """Improvement statements using the bundled catalog."""
    return ChangeReporter().diff(original, optimized, build_job_profile(job_description))
