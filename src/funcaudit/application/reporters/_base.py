"""Base reporter class for output formatting.

Concrete reporters inherit from this.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from funcaudit.domain.findings import AnalysisResult


class BaseReporter(ABC):
    """Base class for reporters.

    Concrete reporters must implement the render() method and return the
    document as plain lines, so it can be persisted after streaming.

    Example:
        class CountReporter(BaseReporter):
            def render(self, result: AnalysisResult) -> tuple[str, ...]:
                return (f"Trackable: {result.summary.trackable}",)
    """

    @abstractmethod
    def render(self, result: AnalysisResult) -> tuple[str, ...]:
        """Render analysis result.

        Implementation decides whether lines are also streamed somewhere.

        Args:
            result: Complete analysis result

        Returns:
            Document lines without trailing newlines
        """
