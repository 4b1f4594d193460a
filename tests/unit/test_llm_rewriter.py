"""Unit tests for the LLM rewrite strategy, using an in-process fake provider."""

import pytest

from tailor.config import Settings
from tailor.contexts.tailoring import (
    LLMRewriteStrategy,
    RuleBasedStrategy,
    get_strategy,
)
from tailor.contexts.tailoring.llm_rewriter import SYSTEM_PROMPT, build_user_prompt
from tailor.exceptions import ExternalServiceFailure
from tailor.utils import llm
from tailor.utils.llm import LLMProvider, LLMResponse, call_with_retries, strip_code_fences


class ProviderDown(Exception):
    pass


class FakeProvider(LLMProvider):
    """Records prompts and returns a canned completion, or raises."""

    _provider_prefix = "fake"
    _retryable = (TimeoutError,)
    _retry_label = "Fake provider busy"

    def __init__(self, completion: str = "", error: Exception = None):
        self.update_model("test-model")
        self.timeout_s = 1.0
        self.completion = completion
        self.error = error
        self.calls = []
        self.timeouts = []

    def _call_api(self, system_prompt: str, user_prompt: str, timeout_s: float) -> LLMResponse:
        self.calls.append((system_prompt, user_prompt))
        self.timeouts.append(timeout_s)
        if self.error is not None:
            raise self.error
        return LLMResponse(
            content=self.completion, model=self.model, input_tokens=10, output_tokens=20
        )


@pytest.mark.unit
def test_prompt_embeds_job_and_resume_verbatim():
    prompt = build_user_prompt("RESUME BODY", "JOB BODY")

    assert "Improve action verbs, keyword usage, and formatting for ATS compatibility." in prompt
    assert prompt.index("JOB BODY") < prompt.index("RESUME BODY")


@pytest.mark.unit
def test_rewrite_returns_completion():
    provider = FakeProvider(completion="```\nOptimized resume\n```")
    strategy = LLMRewriteStrategy(provider=provider)

    assert strategy.rewrite("Original resume", "Job text") == "Optimized resume"
    (system_prompt, user_prompt), = provider.calls
    assert system_prompt == SYSTEM_PROMPT
    assert "Original resume" in user_prompt and "Job text" in user_prompt


@pytest.mark.unit
def test_provider_error_becomes_external_service_failure():
    provider = FakeProvider(error=ProviderDown("503 upstream secret detail"))
    strategy = LLMRewriteStrategy(provider=provider)

    with pytest.raises(ExternalServiceFailure) as exc_info:
        strategy.rewrite("Original resume", "Job text")

    error = exc_info.value
    assert isinstance(error.original_error, ProviderDown)
    assert error.provider == "fake/test-model"
    assert "secret detail" not in error.public_message
    assert error.status_code == 500


@pytest.mark.unit
def test_empty_completion_is_a_failure():
    strategy = LLMRewriteStrategy(provider=FakeProvider(completion="   "))

    with pytest.raises(ExternalServiceFailure, match="no text"):
        strategy.rewrite("Original resume", "Job text")


@pytest.mark.unit
def test_unknown_provider_is_a_configuration_failure():
    strategy = LLMRewriteStrategy(provider_name="nonexistent")

    with pytest.raises(ExternalServiceFailure, match="not configured"):
        strategy.rewrite("Original resume", "Job text")


@pytest.mark.unit
def test_strip_code_fences():
    assert strip_code_fences("```markdown\nText\n```") == "Text"
    assert strip_code_fences("Plain text") == "Plain text"


@pytest.mark.unit
def test_get_strategy_by_name():
    settings = Settings(llm_provider="anthropic", llm_model="some-model", llm_timeout_s=5.0)

    assert isinstance(get_strategy("rules", settings=settings), RuleBasedStrategy)

    llm = get_strategy("LLM", settings=settings)
    assert isinstance(llm, LLMRewriteStrategy)
    assert (llm.provider_name, llm.model, llm.timeout_s) == ("anthropic", "some-model", 5.0)


@pytest.mark.unit
def test_get_strategy_defaults_to_settings():
    assert get_strategy(settings=Settings()).name == "rules"
    assert get_strategy(settings=Settings(rewrite_strategy="llm")).name == "llm"


@pytest.mark.unit
def test_get_strategy_rejects_unknown_name():
    with pytest.raises(ValueError, match="Unknown rewrite strategy"):
        get_strategy("magic", settings=Settings())


@pytest.mark.unit
def test_retries_transient_errors_within_budget(monkeypatch):
    delays = []
    monkeypatch.setattr(llm.time, "sleep", delays.append)
    outcomes = iter([TimeoutError("busy"), "done"])

    def operation(timeout_s):
        outcome = next(outcomes)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    assert call_with_retries(operation, (TimeoutError,), "Busy", budget_s=60.0) == "done"
    assert delays == [llm.BASE_DELAY_S]


@pytest.mark.unit
def test_no_retry_past_budget(monkeypatch):
    monkeypatch.setattr(llm.time, "sleep", lambda delay: pytest.fail("should not sleep"))
    calls = []

    def operation(timeout_s):
        calls.append(1)
        raise TimeoutError("busy")

    with pytest.raises(TimeoutError):
        call_with_retries(operation, (TimeoutError,), "Busy", budget_s=0.5)
    assert len(calls) == 1


@pytest.mark.unit
def test_non_retryable_error_raised_immediately():
    provider = FakeProvider(error=ProviderDown("bad request"))

    with pytest.raises(ProviderDown):
        provider.generate("system", "user")
    assert len(provider.calls) == 1


@pytest.mark.unit
def test_each_attempt_gets_remaining_budget(monkeypatch):
    readings = [100.0, 100.0, 102.0, 103.0]
    monkeypatch.setattr(
        llm.time, "monotonic", lambda: readings.pop(0) if len(readings) > 1 else readings[0]
    )
    monkeypatch.setattr(llm.time, "sleep", lambda delay: None)
    timeouts = []

    def operation(timeout_s):
        timeouts.append(timeout_s)
        if len(timeouts) == 1:
            raise TimeoutError("busy")
        return "done"

    assert call_with_retries(operation, (TimeoutError,), "Busy", budget_s=10.0) == "done"
    assert timeouts == [10.0, 7.0]


@pytest.mark.unit
def test_provider_passes_its_timeout_to_first_attempt():
    provider = FakeProvider(completion="text")

    provider.generate("system", "user")

    (timeout_s,) = provider.timeouts
    assert 0 < timeout_s <= provider.timeout_s
