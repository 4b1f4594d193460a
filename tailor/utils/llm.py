"""
Text-completion provider clients.

One interface over the Anthropic and OpenAI SDKs. Each call, retries included,
is bounded by the provider's ``timeout_s``. Every attempt gets only the time
left in that budget as its request timeout, and a retry is only attempted
while its backoff still fits.

SDKs are imported on first use, so the rule-based path never needs them.
"""

import importlib
import os
import re
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple, Type, TypeVar

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

MAX_ATTEMPTS = 3
BASE_DELAY_S = 1.0
MAX_OUTPUT_TOKENS = 4096

T = TypeVar("T")


def call_with_retries(
    operation: Callable[[float], T],
    retryable: Tuple[Type[Exception], ...],
    label: str,
    budget_s: float,
) -> T:
    """
    Run operation, retrying transient failures with exponential backoff.

    Each attempt receives the seconds left in budget_s as its timeout. A
    retry is skipped (and the last error raised) when its delay would use up
    the rest of the budget.

    Args:
        operation: API call taking its timeout in seconds
        retryable: Exception types worth retrying
        label: What went wrong, for the retry log line (e.g. "Rate limited")
        budget_s: Total seconds the call and its retries may take
    """
    start = time.monotonic()
    for attempt in range(1, MAX_ATTEMPTS + 1):
        try:
            return operation(budget_s - (time.monotonic() - start))
        except retryable:
            delay = BASE_DELAY_S * (2 ** (attempt - 1))
            elapsed = time.monotonic() - start
            if attempt == MAX_ATTEMPTS or elapsed + delay >= budget_s:
                raise
            logger.warning(f"{label}, retry {attempt}/{MAX_ATTEMPTS - 1} in {delay:.1f}s")
            time.sleep(delay)


def _import_sdk(module_name: str):
    try:
        return importlib.import_module(module_name)
    except ImportError as e:
        raise ImportError(
            f"{module_name} package required for LLM rewriting. "
            f"Install with: pip install 'tailor[llm]'"
        ) from e


def _require_api_key(env_var: str) -> str:
    api_key = os.getenv(env_var)
    if not api_key:
        raise ValueError(f"{env_var} environment variable not set")
    return api_key


@dataclass
class LLMResponse:
    """One completion and its token usage."""

    content: str
    model: str
    input_tokens: int
    output_tokens: int


class LLMProvider(ABC):
    """
    Base class for completion providers.

    Subclasses set ``_provider_prefix``, ``_retryable`` and ``_retry_label``,
    call ``update_model`` and set ``timeout_s`` in ``__init__``, and implement
    ``_call_api`` as a single request without retries, bounded by its
    ``timeout_s`` argument.
    """

    _provider_prefix: str
    _retryable: Tuple[Type[Exception], ...] = ()
    _retry_label: str = "Provider busy"

    name: str
    model: str
    timeout_s: float

    def update_model(self, model: str):
        """Switch model; ``name`` becomes "<provider>/<model>"."""
        self.model = model
        self.name = f"{self._provider_prefix}/{model}"

    @abstractmethod
    def _call_api(self, system_prompt: str, user_prompt: str, timeout_s: float) -> LLMResponse:
        pass

    def generate(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        """Complete a system + user prompt pair within this provider's timeout."""
        response = call_with_retries(
            lambda remaining_s: self._call_api(system_prompt, user_prompt, remaining_s),
            self._retryable,
            f"{self.name}: {self._retry_label}",
            self.timeout_s,
        )
        logger.debug(
            f"{self.name}: {response.input_tokens} input tokens, "
            f"{response.output_tokens} output tokens"
        )
        return response


class AnthropicProvider(LLMProvider):
    """Anthropic Messages API."""

    _provider_prefix = "anthropic"
    _retry_label = "API overloaded"

    def __init__(self, model: str = "claude-sonnet-4-20250514", timeout_s: float = 60.0):
        anthropic = _import_sdk("anthropic")
        api_key = _require_api_key("ANTHROPIC_API_KEY")

        self.timeout_s = timeout_s
        # SDK retries off; call_with_retries owns the retry budget
        self.client = anthropic.Anthropic(api_key=api_key, timeout=timeout_s, max_retries=0)
        self._retryable = (anthropic.RateLimitError, anthropic.InternalServerError)
        self.update_model(model)

    def _call_api(self, system_prompt: str, user_prompt: str, timeout_s: float) -> LLMResponse:
        response = self.client.messages.create(
            model=self.model,
            timeout=timeout_s,
            max_tokens=MAX_OUTPUT_TOKENS,
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
        )
        text = "".join(block.text for block in response.content if block.type == "text")
        return LLMResponse(
            content=text,
            model=self.model,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
        )


class OpenAIProvider(LLMProvider):
    """OpenAI Chat Completions API."""

    _provider_prefix = "openai"
    _retry_label = "Rate limited"

    def __init__(self, model: str = "gpt-4o", timeout_s: float = 60.0):
        openai = _import_sdk("openai")
        api_key = _require_api_key("OPENAI_API_KEY")

        self.timeout_s = timeout_s
        self.client = openai.OpenAI(api_key=api_key, timeout=timeout_s, max_retries=0)
        self._retryable = (openai.RateLimitError,)
        self.update_model(model)

    def _call_api(self, system_prompt: str, user_prompt: str, timeout_s: float) -> LLMResponse:
        response = self.client.chat.completions.create(
            model=self.model,
            timeout=timeout_s,
            max_tokens=MAX_OUTPUT_TOKENS,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        )
        usage = response.usage
        return LLMResponse(
            content=response.choices[0].message.content or "",
            model=self.model,
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
        )


PROVIDERS: Dict[str, Type[LLMProvider]] = {
    "anthropic": AnthropicProvider,
    "openai": OpenAIProvider,
}


def get_provider(
    provider_name: Optional[str] = None, model: Optional[str] = None, timeout_s: float = 60.0
) -> LLMProvider:
    """
    Build a provider client.

    Args:
        provider_name: Key of PROVIDERS (default: LLM_PROVIDER env var, else "openai")
        model: Model name (default: the provider's default)
        timeout_s: Budget for one completion, retries included

    Raises:
        ValueError: Unknown provider or missing API key
        ImportError: Provider SDK not installed
    """
    provider_name = (provider_name or os.getenv("LLM_PROVIDER", "openai")).lower()
    if provider_name not in PROVIDERS:
        raise ValueError(
            f"Unknown provider: {provider_name}. Use one of {', '.join(sorted(PROVIDERS))}"
        )

    kwargs = {"timeout_s": timeout_s}
    if model:
        kwargs["model"] = model
    return PROVIDERS[provider_name](**kwargs)


def strip_code_fences(text: str) -> str:
    """Remove a markdown code fence wrapped around a whole completion."""
    text = text.strip()
    text = re.sub(r"^```[a-zA-Z]*\s*\n?", "", text)
    text = re.sub(r"\n?\s*```$", "", text)
    return text.strip()
