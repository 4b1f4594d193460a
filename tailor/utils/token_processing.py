"""
Standardized text tokenization utilities.

Provides configurable word tokenization with optional filtering steps:
- Lowercasing
- Stopword removal (caller-supplied list)
- Minimum length filtering
- Numeric token removal

Usage:
    from tailor.utils.token_processing import Tokenizer

    tokenizer = Tokenizer(stopwords={"the", "and"}, min_token_length=3)
    tokens = tokenizer.tokenize("The React and AWS engineer")
    # ["react", "aws", "engineer"]
"""

from typing import Iterable, Optional

from nltk.tokenize import RegexpTokenizer

# Word-boundary tokenization: runs of letters, digits and underscores
WORD_PATTERN = r"\w+"


class Tokenizer:
    """
    Configurable tokenizer with a filtering pipeline.

    Pipeline order:
    1. Tokenization (word boundary regex)
    2. Lowercase
    3. Stopword removal
    4. Min length filtering
    5. Numeric token removal

    The tokenizer is callable, so it can be passed anywhere a
    ``text -> list[str]`` function is expected.
    """

    def __init__(
        self,
        stopwords: Optional[Iterable[str]] = None,
        lowercase: bool = True,
        min_token_length: int = 1,
        drop_numeric: bool = False,
        pattern: str = WORD_PATTERN,
    ):
        """
        Initialize tokenizer.

        Args:
            stopwords: Tokens to drop (compared after lowercasing). None keeps everything.
            lowercase: Whether to lowercase tokens
            min_token_length: Minimum token length to keep
            drop_numeric: Whether to drop tokens made only of digits
            pattern: Regex describing one token
        """
        self.stopwords = frozenset(w.lower() for w in stopwords) if stopwords else frozenset()
        self.lowercase = lowercase
        self.min_token_length = min_token_length
        self.drop_numeric = drop_numeric
        self._tokenizer = RegexpTokenizer(pattern)

    def tokenize(self, text: str) -> list[str]:
        """Split text into tokens and apply the filtering pipeline."""
        tokens = self._tokenizer.tokenize(text)

        if self.lowercase:
            tokens = [t.lower() for t in tokens]

        if self.stopwords:
            tokens = [t for t in tokens if t.lower() not in self.stopwords]

        if self.min_token_length > 1:
            tokens = [t for t in tokens if len(t) >= self.min_token_length]

        if self.drop_numeric:
            tokens = [t for t in tokens if not t.isdigit()]

        return tokens

    def token_set(self, text: str) -> set[str]:
        """Distinct tokens of text."""
        return set(self.tokenize(text))

    def __call__(self, text: str) -> list[str]:
        return self.tokenize(text)

    def get_config_dict(self) -> dict:
        """Tokenizer settings, for logging."""
        return {
            "stopwords": len(self.stopwords),
            "lowercase": self.lowercase,
            "min_token_length": self.min_token_length,
            "drop_numeric": self.drop_numeric,
        }
