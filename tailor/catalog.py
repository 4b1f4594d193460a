"""
Matching catalog: skill vocabulary, stop words and rewrite tables.

The catalog is data, not code. It is read once from YAML (the bundled
``tailor/data/catalog.yaml`` unless another path is given) into frozen
dataclasses that are handed to the extractors and rewriters at construction.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional, Tuple

from omegaconf import OmegaConf

from tailor.config import Settings

DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "catalog.yaml"


@dataclass(frozen=True)
class SkillEntry:
    """One canonical skill token and every surface form that maps to it."""

    category: str
    canonical: str
    surface_forms: Tuple[str, ...]


@dataclass(frozen=True)
class RewriteRules:
    """
    Tables used by the rule-based rewriter and the change reporter.

    Attributes:
        verb_replacements: (weak phrase, strong replacement) pairs, longest phrase first
        marker_words: Words that mark a line as already naming its tooling
        injection_prefix: Word introducing an appended keyword clause
        summary_lead: Sentence opening for the summary augmentation
        summary_max_terms: Most terms the summary augmentation may name
        skills_addendum_label: Label of the line appended to a skills section
        strong_verbs: Action verbs counted by the change reporter
    """

    verb_replacements: Tuple[Tuple[str, str], ...]
    marker_words: Tuple[str, ...]
    injection_prefix: str
    summary_lead: str
    summary_max_terms: int
    skills_addendum_label: str
    strong_verbs: Tuple[str, ...]


@dataclass(frozen=True)
class Catalog:
    skills: Tuple[SkillEntry, ...]
    stop_words: frozenset
    rewrite: RewriteRules

    @property
    def categories(self) -> Tuple[str, ...]:
        seen = []
        for entry in self.skills:
            if entry.category not in seen:
                seen.append(entry.category)
        return tuple(seen)


def _build_skills(raw_skills: Dict[str, Dict[str, list]]) -> Tuple[SkillEntry, ...]:
    entries = []
    for category, skills in raw_skills.items():
        for canonical, synonyms in skills.items():
            canonical = str(canonical).lower()
            forms = [canonical] + [str(s).lower() for s in (synonyms or [])]
            # Keep order, drop duplicates
            entries.append(SkillEntry(category, canonical, tuple(dict.fromkeys(forms))))
    return tuple(entries)


def _build_rewrite_rules(raw: dict) -> RewriteRules:
    replacements = sorted(
        ((str(weak).lower(), str(strong)) for weak, strong in raw["verb_replacements"].items()),
        key=lambda pair: len(pair[0]),
        reverse=True,
    )
    return RewriteRules(
        verb_replacements=tuple(replacements),
        marker_words=tuple(str(w).lower() for w in raw["marker_words"]),
        injection_prefix=str(raw["injection_prefix"]),
        summary_lead=str(raw["summary_lead"]),
        summary_max_terms=int(raw["summary_max_terms"]),
        skills_addendum_label=str(raw["skills_addendum_label"]),
        strong_verbs=tuple(str(v).lower() for v in raw["strong_verbs"]),
    )


def parse_catalog(config: dict) -> Catalog:
    """
    Build a Catalog from a plain dict with ``skills``, ``stop_words`` and ``rewrite`` keys.

    Raises:
        KeyError: If a required top-level key is missing
    """
    return Catalog(
        skills=_build_skills(config["skills"]),
        stop_words=frozenset(str(w).lower() for w in config["stop_words"]),
        rewrite=_build_rewrite_rules(config["rewrite"]),
    )


@lru_cache(maxsize=None)
def load_catalog(path: Optional[Path] = None) -> Catalog:
    """
    Load and cache the catalog.

    Args:
        path: YAML file to read (default: TAILOR_CATALOG_PATH, else bundled catalog)

    Returns:
        Immutable Catalog, shared by every caller asking for the same path
    """
    catalog_path = Path(path) if path else (Settings.from_env().catalog_path or DEFAULT_CATALOG_PATH)
    config = OmegaConf.to_container(OmegaConf.load(catalog_path), resolve=True)
    return parse_catalog(config)
