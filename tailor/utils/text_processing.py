"""Text processing utilities for formatting, display and line-level edits."""

import difflib
import re
from typing import List, Optional, Pattern, Sequence, Tuple

# Sentence-ending punctuation kept at the end of a line when a clause is appended
_TRAILING_PUNCTUATION = (".", ";", "!")


def truncate_display(text: str, max_len: int) -> str:
    """
    Truncate text for display with ellipsis if needed.

    Args:
        text: Text to truncate
        max_len: Maximum length including ellipsis

    Returns:
        Original text if within max_len, otherwise truncated with "..."

    Example:
        >>> truncate_display("short", 10)
        "short"
        >>> truncate_display("this is a very long string", 10)
        "this is..."
    """
    return text if len(text) <= max_len else text[: max_len - 3] + "..."


def join_terms(terms: Sequence[str]) -> str:
    """
    Join terms as an English list.

    Example:
        >>> join_terms(["aws"])
        "aws"
        >>> join_terms(["aws", "docker", "sql"])
        "aws, docker and sql"
    """
    if not terms:
        return ""
    if len(terms) == 1:
        return terms[0]
    return f"{', '.join(terms[:-1])} and {terms[-1]}"


def match_case(source: str, replacement: str) -> str:
    """Capitalize replacement's first letter when source starts with a capital."""
    if source[:1].isupper():
        return replacement[:1].upper() + replacement[1:]
    return replacement


def append_clause(line: str, clause: str) -> str:
    """
    Append a clause to a line, keeping any sentence-ending punctuation last.

    Example:
        >>> append_clause("- Built dashboards.", "utilizing tableau")
        "- Built dashboards utilizing tableau."
    """
    stripped = line.rstrip()
    if stripped.endswith(_TRAILING_PUNCTUATION):
        return f"{stripped[:-1]} {clause}{stripped[-1]}"
    return f"{stripped} {clause}"


def append_sentence(text: str, sentence: str) -> str:
    """Append a sentence to the end of text, closing the last sentence first if needed."""
    stripped = text.rstrip()
    if stripped and not stripped.endswith((".", "!", "?")):
        stripped += "."
    return f"{stripped} {sentence}" if stripped else sentence


def get_meaningful_diff(
    text1: str, text2: str, context_lines: int = 0
) -> Tuple[List[str], int]:
    """
    Compare two texts ignoring blank lines.

    Args:
        text1: Original text
        text2: Revised text
        context_lines: Number of context lines around differences (default: 0)

    Returns:
        Tuple of (diff_lines, num_differences):
        - diff_lines: List of unified diff output lines
        - num_differences: Count of added/removed lines (excluding headers)
    """
    lines1 = [line for line in text1.splitlines() if line.strip()]
    lines2 = [line for line in text2.splitlines() if line.strip()]

    if lines1 == lines2:
        return [], 0

    diff = list(
        difflib.unified_diff(
            lines1, lines2, fromfile="original", tofile="optimized", lineterm="", n=context_lines
        )
    )

    # Count actual differences (lines starting with + or -, excluding headers)
    num_diffs = sum(1 for line in diff if line.startswith(("+", "-")))
    header_lines = sum(1 for line in diff if line.startswith(("---", "+++")))
    num_diffs -= header_lines

    return diff, num_diffs


def compile_word_alternation(words: Sequence[str]) -> Optional[Pattern]:
    """
    Case-insensitive whole-word pattern matching any of words.

    Returns:
        Compiled pattern, or None for an empty word list (which would match everywhere)
    """
    if not words:
        return None
    return re.compile(r"\b(?:" + "|".join(re.escape(w) for w in words) + r")\b", re.IGNORECASE)
