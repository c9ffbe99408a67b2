from abc import ABC, abstractmethod

from book_analyzer.extraction.models import ExtractionResult


class BaseExtractor(ABC):
    """Contract for all book extraction adapters."""

    @abstractmethod
    def extract(self, content: bytes) -> ExtractionResult:
        """Extract text and structural metadata from raw file bytes.

        Args:
            content: Raw file content in the adapter's format.

        Returns:
            ExtractionResult whose ``text`` is always a string (possibly empty).

        Raises:
            ExtractionError: if the bytes cannot be parsed as this format.
        """
