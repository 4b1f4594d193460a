"""
Runtime settings read from the environment (and a local .env file).

Variables:
    TAILOR_REWRITE_STRATEGY: "rules" (default) or "llm"
    LLM_PROVIDER: "openai" (default) or "anthropic"
    LLM_MODEL: Model name (default: provider-specific)
    LLM_TIMEOUT_S: Timeout for one text-completion call in seconds (default: 60)
    MAX_UPLOAD_BYTES: Largest accepted résumé upload (default: 5 MiB)
    LOGS_PATH: Directory for file logs (unset = console only)
    TAILOR_CATALOG_PATH: Alternative catalog YAML (default: bundled catalog)
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_MAX_UPLOAD_BYTES = 5 * 1024 * 1024
DEFAULT_LLM_TIMEOUT_S = 60.0


def _optional_path(value: Optional[str]) -> Optional[Path]:
    return Path(value) if value else None


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, immutable once built."""

    rewrite_strategy: str = "rules"
    llm_provider: str = "openai"
    llm_model: Optional[str] = None
    llm_timeout_s: float = DEFAULT_LLM_TIMEOUT_S
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    logs_path: Optional[Path] = None
    catalog_path: Optional[Path] = None

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables, falling back to defaults."""
        return cls(
            rewrite_strategy=os.getenv("TAILOR_REWRITE_STRATEGY", "rules").lower(),
            llm_provider=os.getenv("LLM_PROVIDER", "openai").lower(),
            llm_model=os.getenv("LLM_MODEL") or None,
            llm_timeout_s=float(os.getenv("LLM_TIMEOUT_S", DEFAULT_LLM_TIMEOUT_S)),
            max_upload_bytes=int(os.getenv("MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES)),
            logs_path=_optional_path(os.getenv("LOGS_PATH")),
            catalog_path=_optional_path(os.getenv("TAILOR_CATALOG_PATH")),
        )
