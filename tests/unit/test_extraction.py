"""Unit tests for skill and keyword extraction."""

import pytest

from tailor.catalog import parse_catalog
from tailor.contexts.targeting.extraction import (
    KeywordExtractor,
    SkillExtractor,
    build_job_profile,
    compile_surface_form,
    extract_keywords,
    extract_skills,
)


@pytest.mark.unit
def test_extract_skills_from_job_description(sample_job_description):
    assert extract_skills(sample_job_description) == {"react", "typescript", "aws"}


@pytest.mark.unit
def test_surface_forms_map_to_canonical_token():
    skills = extract_skills("Deployed on Amazon Web Services with K8s and Postgres")
    assert skills == {"aws", "kubernetes", "postgresql"}


@pytest.mark.unit
def test_skill_matching_is_case_insensitive():
    assert extract_skills("PYTHON and Docker") == {"python", "docker"}


@pytest.mark.unit
@pytest.mark.parametrize(
    "text,absent",
    [
        ("Senior JavaScript developer", "java"),
        ("Reactive streams in production", "react"),
        ("Updated the gitignore file", "git"),
    ],
)
def test_skill_terms_do_not_match_inside_other_words(text, absent):
    assert absent not in extract_skills(text)


@pytest.mark.unit
def test_symbol_skills_are_recognized():
    assert extract_skills("Comfortable with C# and C++") == {"c#", "c++"}
    assert ".net" in extract_skills("Built APIs on ASP.NET")


@pytest.mark.unit
def test_multi_word_skill_spans_whitespace():
    assert "project management" in extract_skills("Strong project\nmanagement background")


@pytest.mark.unit
def test_skill_in_several_categories_counted_once():
    catalog = parse_catalog(
        {
            "skills": {"first": {"sql": []}, "second": {"sql": ["structured query language"]}},
            "stop_words": [],
            "rewrite": {
                "verb_replacements": {},
                "marker_words": [],
                "injection_prefix": "using",
                "summary_lead": "Skilled in",
                "summary_max_terms": 3,
                "skills_addendum_label": "More",
                "strong_verbs": [],
            },
        }
    )
    extractor = SkillExtractor(catalog)

    assert extractor.extract("SQL and structured query language") == {"sql"}
    assert extractor.extract_ordered("SQL") == ["sql"]


@pytest.mark.unit
def test_extract_keywords_filters_stop_words_short_and_numeric_tokens(sample_job_description):
    assert extract_keywords(sample_job_description) == {"react", "typescript", "aws", "engineer"}
    assert extract_keywords("5 years of Go at 3 startups in 2020") == {"startups"}


@pytest.mark.unit
def test_keyword_extractor_custom_stop_words():
    extractor = KeywordExtractor(stop_words={"engineer"})
    assert extractor.extract("Data engineer for the analytics team") == {
        "data",
        "for",
        "the",
        "analytics",
        "team",
    }


@pytest.mark.unit
def test_extractors_are_pure(sample_job_description):
    assert extract_skills(sample_job_description) == extract_skills(sample_job_description)
    assert extract_keywords(sample_job_description) == extract_keywords(sample_job_description)


@pytest.mark.unit
def test_job_profile_orders_skills_by_catalog(sample_job_description):
    job = build_job_profile(sample_job_description)

    assert job.skills == ("typescript", "react", "aws")
    assert job.keywords == frozenset({"react", "typescript", "aws", "engineer"})
    assert job.terms == {"react", "typescript", "aws", "engineer"}


@pytest.mark.unit
def test_compile_surface_form_escapes_symbols():
    assert compile_surface_form("c++").count(r"\+") == 2
