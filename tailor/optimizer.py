"""
Résumé optimization pipeline.

Runs the contexts in order for one request:

    extract (intake) -> rewrite (tailoring) -> score before/after (targeting)
    -> describe changes (reporting)

The pipeline is stateless. A request either produces a complete
OptimizationResult or raises an OptimizationError; partial results are
never returned.
"""

import threading
import time
from dataclasses import dataclass
from typing import Optional, Tuple

from loguru import logger

from tailor.config import DEFAULT_MAX_UPLOAD_BYTES
from tailor.contexts.intake import DocumentExtractor, RawDocument
from tailor.contexts.reporting import ChangeReporter
from tailor.contexts.tailoring import RewriteStrategy, RuleBasedStrategy
from tailor.contexts.targeting import ImprovementMetrics, build_job_profile, compute_metrics
from tailor.exceptions import InvalidRequest, OptimizationCancelled
from tailor.utils.text_processing import get_meaningful_diff


@dataclass(frozen=True)
class OptimizationResult:
    """
    Outcome of one optimize request.

    Attributes:
        original_content: Text extracted from the uploaded résumé
        optimized_content: Rewritten résumé text
        improvements: Scores of the optimized text
        key_changes: Improvement statements, in reporting order
        baseline: Scores of the original text
        strategy: Name of the rewrite strategy that produced optimized_content
    """

    original_content: str
    optimized_content: str
    improvements: ImprovementMetrics
    key_changes: Tuple[str, ...]
    baseline: ImprovementMetrics
    strategy: str

    def to_dict(self) -> dict:
        """Success payload with the response's camelCase field names."""
        return {
            "success": True,
            "originalContent": self.original_content,
            "optimizedContent": self.optimized_content,
            "improvements": self.improvements.to_dict(),
            "baseline": self.baseline.to_dict(),
            "keyChanges": list(self.key_changes),
            "strategy": self.strategy,
        }


def error_payload(message: str) -> dict:
    """Failure payload. Never carries any result fields."""
    return {"success": False, "error": message}


def validate_job_description(job_description: Optional[str]) -> str:
    """
    Reject a missing or blank job description.

    Raises:
        InvalidRequest: If the job description is missing or only whitespace
    """
    if job_description is None or not job_description.strip():
        raise InvalidRequest("Job description is required")
    return job_description.strip()


def _check_cancelled(cancel_event: Optional[threading.Event], stage: str) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise OptimizationCancelled(stage)


class ResumeOptimizer:
    """
    Wires the pipeline stages together.

    Args:
        strategy: Rewrite strategy (default: rule-based)
        extractor: Document extractor (default: 5 MiB upload limit)
        reporter: Change reporter (default: bundled catalog)
    """

    def __init__(
        self,
        strategy: Optional[RewriteStrategy] = None,
        extractor: Optional[DocumentExtractor] = None,
        reporter: Optional[ChangeReporter] = None,
    ):
        self.strategy = strategy or RuleBasedStrategy()
        self.extractor = extractor or DocumentExtractor()
        self.reporter = reporter or ChangeReporter()

    def optimize(
        self,
        document: Optional[RawDocument],
        job_description: Optional[str],
        cancel_event: Optional[threading.Event] = None,
    ) -> OptimizationResult:
        """
        Optimize a résumé document for a job description.

        Inputs are validated before any parsing. ``cancel_event`` is checked
        before each stage.

        Raises:
            InvalidRequest: Missing input or unacceptable upload
            ExtractionFailure: Document could not be read
            ExternalServiceFailure: LLM strategy failed
            OptimizationCancelled: cancel_event was set
        """
        job_description = validate_job_description(job_description)
        if document is None:
            raise InvalidRequest("Resume file is required")

        start_time = time.time()
        logger.info(f"Optimizing {document.display_name} with '{self.strategy.name}' strategy")

        _check_cancelled(cancel_event, "extraction")
        original = self.extractor.extract(document)

        _check_cancelled(cancel_event, "rewrite")
        optimized = self.strategy.rewrite(original, job_description)

        _check_cancelled(cancel_event, "scoring")
        job = build_job_profile(job_description)
        baseline = compute_metrics(original, job)
        improvements = compute_metrics(optimized, job)

        _check_cancelled(cancel_event, "reporting")
        key_changes = tuple(self.reporter.diff(original, optimized, job))

        _, changed_lines = get_meaningful_diff(original, optimized)
        logger.success(
            f"Optimized {document.display_name} ({time.time() - start_time:.2f}s): "
            f"{changed_lines} changed lines, skills {baseline.skills_match}% -> "
            f"{improvements.skills_match}%, keywords {baseline.keyword_optimization}% -> "
            f"{improvements.keyword_optimization}%, ATS {improvements.ats_compatibility}%"
        )
        for change in key_changes:
            logger.debug(f"  {change}")

        return OptimizationResult(
            original_content=original,
            optimized_content=optimized,
            improvements=improvements,
            key_changes=key_changes,
            baseline=baseline,
            strategy=self.strategy.name,
        )


def optimize_resume(
    document: Optional[RawDocument],
    job_description: Optional[str],
    strategy: Optional[RewriteStrategy] = None,
    cancel_event: Optional[threading.Event] = None,
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
) -> OptimizationResult:
    """
    Optimize a résumé document for a job description.

    Convenience wrapper building a ResumeOptimizer per call.

    Example:
        >>> document = RawDocument.from_path("resume.docx")
        >>> result = optimize_resume(document, "Looking for a React and AWS engineer.")
        >>> result.improvements.skills_match
        100
    """
    optimizer = ResumeOptimizer(
        strategy=strategy, extractor=DocumentExtractor(max_bytes=max_upload_bytes)
    )
    return optimizer.optimize(document, job_description, cancel_event=cancel_event)
