"""
Integration tests for the optimization pipeline.
Tests: document bytes -> extracted text -> rewrite -> scores -> key changes.
"""

import threading

import pytest

from tailor.contexts.intake import RawDocument
from tailor.contexts.intake.segmenter import segment
from tailor.contexts.tailoring import LLMRewriteStrategy, RewriteStrategy
from tailor.exceptions import (
    ExternalServiceFailure,
    InvalidRequest,
    OptimizationCancelled,
    UnsupportedFormat,
)
from tailor.optimizer import ResumeOptimizer, optimize_resume


class ExplodingExtractor:
    """Fails the test if the pipeline ever reaches extraction."""

    def extract(self, document):
        raise AssertionError("document should not have been parsed")


class FailingStrategy(RewriteStrategy):
    name = "failing"

    def rewrite(self, original, job_description):
        raise ExternalServiceFailure("Text-completion call failed", provider="fake")


@pytest.mark.integration
def test_docx_scenario_before_and_after(sample_docx_bytes, sample_job_description, docx_mime):
    document = RawDocument.from_upload(sample_docx_bytes, "resume.docx", docx_mime)

    result = optimize_resume(document, sample_job_description)

    assert result.baseline.skills_match == 33
    assert result.improvements.skills_match == 100
    assert result.improvements.keyword_optimization > result.baseline.keyword_optimization
    assert result.strategy == "rules"
    assert "Additional: typescript, aws" in result.optimized_content
    assert list(result.key_changes) == [
        "Added relevant skills: aws, typescript",
        "Strengthened action verbs for greater impact",
        "Added 2 job-specific keywords",
    ]


@pytest.mark.integration
def test_pdf_upload_is_optimized(make_pdf, sample_resume_lines, sample_job_description):
    document = RawDocument.from_upload(make_pdf(sample_resume_lines), "resume.pdf")

    result = optimize_resume(document, sample_job_description)

    assert "Experience" in result.original_content
    assert result.improvements.skills_match == 100


@pytest.mark.integration
def test_custom_section_survives_optimization(sample_docx_bytes, sample_job_description):
    document = RawDocument.from_upload(sample_docx_bytes, "resume.docx")

    result = optimize_resume(document, sample_job_description)

    certifications = [
        s for s in segment(result.optimized_content) if s.original_title == "Certifications"
    ]
    assert len(certifications) == 1
    assert certifications[0].content == (
        "- Certified Accessibility Professional, issued by the IAAP in 2021"
    )


@pytest.mark.integration
def test_result_payload_shape(sample_docx_bytes, sample_job_description):
    document = RawDocument.from_upload(sample_docx_bytes, "resume.docx")

    payload = optimize_resume(document, sample_job_description).to_dict()

    assert payload["success"] is True
    assert set(payload) == {
        "success",
        "originalContent",
        "optimizedContent",
        "improvements",
        "baseline",
        "keyChanges",
        "strategy",
    }
    assert set(payload["improvements"]) == {
        "skillsMatch",
        "atsCompatibility",
        "keywordOptimization",
    }


@pytest.mark.integration
@pytest.mark.parametrize("job_description", [None, "", "   \n\t"])
def test_blank_job_description_rejected_before_parsing(job_description):
    optimizer = ResumeOptimizer(extractor=ExplodingExtractor())
    document = RawDocument.from_upload(b"%PDF-1.4", "resume.pdf")

    with pytest.raises(InvalidRequest, match="Job description is required"):
        optimizer.optimize(document, job_description)


@pytest.mark.integration
def test_missing_document_rejected(sample_job_description):
    with pytest.raises(InvalidRequest, match="Resume file is required"):
        optimize_resume(None, sample_job_description)


@pytest.mark.integration
def test_legacy_doc_rejected(sample_job_description):
    document = RawDocument.from_upload(b"\xd0\xcf\x11\xe0" + b"\x00" * 32, "resume.doc")

    with pytest.raises(UnsupportedFormat):
        optimize_resume(document, sample_job_description)


@pytest.mark.integration
def test_strategy_failure_propagates(sample_docx_bytes, sample_job_description):
    document = RawDocument.from_upload(sample_docx_bytes, "resume.docx")

    with pytest.raises(ExternalServiceFailure):
        optimize_resume(document, sample_job_description, strategy=FailingStrategy())


@pytest.mark.integration
def test_misconfigured_llm_strategy_fails_cleanly(sample_docx_bytes, sample_job_description):
    document = RawDocument.from_upload(sample_docx_bytes, "resume.docx")
    strategy = LLMRewriteStrategy(provider_name="nonexistent")

    with pytest.raises(ExternalServiceFailure):
        optimize_resume(document, sample_job_description, strategy=strategy)


@pytest.mark.integration
def test_cancelled_request_stops_before_extraction(sample_job_description):
    cancel_event = threading.Event()
    cancel_event.set()
    optimizer = ResumeOptimizer(extractor=ExplodingExtractor())
    document = RawDocument.from_upload(b"%PDF-1.4", "resume.pdf")

    with pytest.raises(OptimizationCancelled) as exc_info:
        optimizer.optimize(document, sample_job_description, cancel_event=cancel_event)

    assert exc_info.value.stage == "extraction"
