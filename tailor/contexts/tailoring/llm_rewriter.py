"""
Résumé rewriting delegated to an external text-completion service.

The whole résumé and job description are sent in one fixed two-part prompt
and the completion is used as the optimized text as-is (minus a wrapping
code fence). There is no fallback: if the service errors, times out or
returns nothing, the rewrite fails.
"""

import time
from typing import Optional

from tailor.config import DEFAULT_LLM_TIMEOUT_S
from tailor.contexts.tailoring.logger import (
    log_provider_failure,
    log_rewrite_result,
    log_rewrite_start,
)
from tailor.contexts.tailoring.strategy import RewriteStrategy
from tailor.exceptions import ExternalServiceFailure
from tailor.utils.llm import LLMProvider, get_provider, strip_code_fences

# =============================================================================
# PROMPT TEMPLATES
# =============================================================================

SYSTEM_PROMPT = """\
You are an expert resume optimizer who tailors resumes to specific job descriptions.
You keep every fact from the original resume (employers, titles, dates, degrees) and
never invent experience. You return only the revised resume text, with no commentary."""

_USER_PROMPT_TEMPLATE = """\
Optimize the following resume for the job description below.
Improve action verbs, keyword usage, and formatting for ATS compatibility.
Keep the section headings and their order.

---
Job Description:
{job_description}

---
Resume:
{resume}"""


def build_user_prompt(original: str, job_description: str) -> str:
    """Embed the job description and résumé verbatim in the user prompt."""
    return _USER_PROMPT_TEMPLATE.format(job_description=job_description, resume=original)


class LLMRewriteStrategy(RewriteStrategy):
    """
    Rewrite by prompting an LLM provider.

    The provider is created on first use so that configuration problems
    (missing SDK, missing API key) surface as a request failure rather than
    at import time.

    Args:
        provider: Ready-made provider (skips provider construction)
        provider_name: "openai" or "anthropic" (default: LLM_PROVIDER env var)
        model: Model name (default: provider-specific)
        timeout_s: Timeout for one completion call in seconds
    """

    name = "llm"

    def __init__(
        self,
        provider: Optional[LLMProvider] = None,
        provider_name: Optional[str] = None,
        model: Optional[str] = None,
        timeout_s: float = DEFAULT_LLM_TIMEOUT_S,
    ):
        self._provider = provider
        self.provider_name = provider_name
        self.model = model
        self.timeout_s = timeout_s

    def get_provider(self) -> LLMProvider:
        """
        Provider used for completions, built on first call.

        Raises:
            ExternalServiceFailure: If the provider cannot be configured
        """
        if self._provider is None:
            try:
                self._provider = get_provider(
                    provider_name=self.provider_name, model=self.model, timeout_s=self.timeout_s
                )
            except (ImportError, ValueError) as e:
                log_provider_failure(self.provider_name or "default provider", e)
                raise ExternalServiceFailure(
                    "Text-completion provider is not configured",
                    provider=self.provider_name,
                    original_error=e,
                ) from e
        return self._provider

    def rewrite(self, original: str, job_description: str) -> str:
        """
        Ask the provider for an optimized résumé.

        Raises:
            ExternalServiceFailure: On provider error, timeout or empty completion
        """
        provider = self.get_provider()
        log_rewrite_start(f"{self.name}:{provider.name}", original, job_description)
        start_time = time.time()

        try:
            response = provider.generate(
                system_prompt=SYSTEM_PROMPT,
                user_prompt=build_user_prompt(original, job_description),
            )
        except Exception as e:
            log_provider_failure(provider.name, e)
            raise ExternalServiceFailure(
                "Text-completion call failed", provider=provider.name, original_error=e
            ) from e

        optimized = strip_code_fences(response.content or "")
        if not optimized:
            raise ExternalServiceFailure("Text-completion returned no text", provider=provider.name)

        log_rewrite_result(f"{self.name}:{provider.name}", optimized, time.time() - start_time)
        return optimized
