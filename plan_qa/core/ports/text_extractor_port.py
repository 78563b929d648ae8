"""Text Extractor Port Interface."""

from abc import ABC, abstractmethod


class TextExtractorPort(ABC):
    """Abstract interface for turning document bytes into text."""

    #: Separator placed between pages in extracted text.
    PAGE_BREAK = "\f"

    @abstractmethod
    def extract(self, data: bytes) -> str:
        """Extract text, pages separated by :attr:`PAGE_BREAK`.

        Raises:
            PDFExtractionError: The input is corrupt or encrypted.
        """
        ...
