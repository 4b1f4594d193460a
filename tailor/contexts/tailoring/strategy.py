"""Common interface of the résumé rewrite strategies."""

from abc import ABC, abstractmethod


class RewriteStrategy(ABC):
    """
    Turns an original résumé text into an optimized one for a job description.

    Subclasses must:
    - Set the ``name`` class attribute (used in configuration and logs)
    - Implement rewrite()

    Scoring and change reporting run on whatever text a strategy returns,
    so they never depend on which strategy produced it.
    """

    name: str

    @abstractmethod
    def rewrite(self, original: str, job_description: str) -> str:
        """Return the optimized résumé text."""
        pass
