"""
Tailoring Context

Responsibilities:
- Rewrites résumé text to fit a job description
- Provides two interchangeable strategies: deterministic rules and LLM delegation
- Selects a strategy by name from configuration

Owns: Verb strengthening, term injection, LLM prompt
Never: Scores the result or reports changes
"""

from typing import Optional

from tailor.config import Settings
from tailor.contexts.tailoring.llm_rewriter import LLMRewriteStrategy
from tailor.contexts.tailoring.section_rewriter import (
    RuleBasedStrategy,
    SectionRewriter,
)
from tailor.contexts.tailoring.strategy import RewriteStrategy

STRATEGY_NAMES = (RuleBasedStrategy.name, LLMRewriteStrategy.name)


def get_strategy(name: Optional[str] = None, settings: Optional[Settings] = None) -> RewriteStrategy:
    """
    Build a rewrite strategy.

    Args:
        name: "rules" or "llm" (default: settings.rewrite_strategy)
        settings: Provider, model and timeout for the LLM strategy (default: from env)

    Returns:
        RewriteStrategy instance

    Raises:
        ValueError: If the name is not a known strategy
    """
    settings = settings or Settings.from_env()
    name = (name or settings.rewrite_strategy).lower()

    if name == RuleBasedStrategy.name:
        return RuleBasedStrategy()
    elif name == LLMRewriteStrategy.name:
        return LLMRewriteStrategy(
            provider_name=settings.llm_provider,
            model=settings.llm_model,
            timeout_s=settings.llm_timeout_s,
        )
    else:
        raise ValueError(f"Unknown rewrite strategy: {name}. Use one of {', '.join(STRATEGY_NAMES)}")


__all__ = [
    "RewriteStrategy",
    "RuleBasedStrategy",
    "SectionRewriter",
    "LLMRewriteStrategy",
    "STRATEGY_NAMES",
    "get_strategy",
]
