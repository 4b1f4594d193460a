"""
Reporting Context

Responsibilities:
- Describes what an optimization changed in plain language

Owns: Changelog statements
Never: Modifies résumé text
"""

from tailor.contexts.reporting.change_reporter import ChangeReporter, diff

__all__ = ["ChangeReporter", "diff"]
