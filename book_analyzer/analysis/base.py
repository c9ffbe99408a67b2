from abc import ABC, abstractmethod

from book_analyzer.analysis.models import SemanticAnalysis


class BaseAnalyzer(ABC):
    """Contract for all semantic analysis adapters."""

    @abstractmethod
    async def analyze(self, text: str) -> SemanticAnalysis:
        """Classify and summarize book text with an external service.

        Args:
            text: Plain text extracted from the uploaded book.

        Returns:
            SemanticAnalysis with classification codes and summary.

        Raises:
            AnalyzerError: on timeout, provider failure or malformed response.
        """
