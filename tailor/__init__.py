"""
TAILOR - Targeted Alignment of Individual Listings to Optimized Résumés

Takes a résumé document and a job description, rewrites the résumé toward the
job, and scores the result before and after.

Architecture:
- Intake Context: Document text extraction and section segmentation
- Targeting Context: Skill and keyword extraction, scoring
- Tailoring Context: Rule-based or LLM résumé rewriting
- Reporting Context: Human-readable change statements
"""

__version__ = "0.1.0"
