"""
Shared utilities for TAILOR.

Common functionality used across contexts:
- Text processing and tokenization
- LLM provider clients
- Logging setup
"""
