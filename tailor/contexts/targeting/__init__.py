"""
Targeting Context

Responsibilities:
- Recognizes skills and significant keywords in résumés and job descriptions
- Scores how well a résumé text covers a job's skills and keywords
- Computes the ATS-compatibility heuristic

Owns: Skill/keyword extraction, scoring model
Never: Reads documents or changes résumé text
"""

from tailor.contexts.targeting.extraction import (
    JobProfile,
    KeywordExtractor,
    SkillExtractor,
    build_job_profile,
    extract_keywords,
    extract_skills,
)
from tailor.contexts.targeting.scoring import (
    ImprovementMetrics,
    ats_score,
    compute_metrics,
    keyword_match,
    skill_match,
)

__all__ = [
    "JobProfile",
    "KeywordExtractor",
    "SkillExtractor",
    "build_job_profile",
    "extract_keywords",
    "extract_skills",
    "ImprovementMetrics",
    "ats_score",
    "compute_metrics",
    "keyword_match",
    "skill_match",
]
