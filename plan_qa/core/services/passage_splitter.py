"""Split extracted document text into overlapping, page-tagged passages."""

import logging

from ..domain import Document, Passage
from ..domain.utils import collapse_whitespace
from ..ports.text_extractor_port import TextExtractorPort

logger = logging.getLogger(__name__)

DEFAULT_PASSAGE_SIZE = 1000
DEFAULT_PASSAGE_OVERLAP = 180


def passage_id(document_id: str, page: int, window_index: int) -> str:
    """Build the deterministic id of a passage."""
    return f"{document_id}-p{page}-c{window_index}"


def split_pages(text: str) -> list[str]:
    """Split extracted text on the extractor's page-break marker.

    Text without a marker is a single page. Blank pages are kept so that
    page numbers stay physical.
    """
    return text.split(TextExtractorPort.PAGE_BREAK)


def window_text(text: str, size: int, overlap: int) -> list[str]:
    """Slice text into fixed-size windows with ``overlap`` shared characters.

    The final window may be shorter than ``size``. Text shorter than ``size``
    is returned as one window; empty text returns no windows.
    """
    if not text:
        return []

    windows = []
    start = 0
    while start < len(text):
        end = min(len(text), start + size)
        windows.append(text[start:end])
        if end >= len(text):
            break
        start = end - overlap
    return windows


class PassageSplitter:
    """Turns a :class:`Document` into an ordered list of :class:`Passage`."""

    def __init__(
        self,
        passage_size: int = DEFAULT_PASSAGE_SIZE,
        passage_overlap: int = DEFAULT_PASSAGE_OVERLAP,
    ) -> None:
        """Initialize the splitter.

        Args:
            passage_size: Window length in characters (must be positive).
            passage_overlap: Characters shared by consecutive windows
                (must be less than passage_size).

        Raises:
            ValueError: If the window configuration cannot make progress.
        """
        if passage_size <= 0:
            raise ValueError("passage_size must be positive")
        if passage_overlap < 0:
            raise ValueError("passage_overlap must be non-negative")
        if passage_overlap >= passage_size:
            raise ValueError("passage_overlap must be less than passage_size")

        self.passage_size = passage_size
        self.passage_overlap = passage_overlap

    def split(self, document: Document) -> list[Passage]:
        """Split one document into passages.

        Never raises on malformed documents; missing or non-string text
        yields an empty list.

        Args:
            document: Document with extracted text.

        Returns:
            Passages in page order, then window order.
        """
        raw_text = getattr(document, "raw_text", None)
        if not isinstance(raw_text, str) or not raw_text:
            return []

        pages = split_pages(raw_text)
        if len(pages) == 1 and len(raw_text) > self.passage_size * 4:
            logger.debug(
                "No page markers in %s; citing every passage as page 1", document.display_name
            )

        passages: list[Passage] = []
        for page_number, page_text in enumerate(pages, start=1):
            compact = collapse_whitespace(page_text)
            for index, window in enumerate(
                window_text(compact, self.passage_size, self.passage_overlap)
            ):
                passages.append(
                    Passage(
                        id=passage_id(document.id, page_number, index),
                        document_id=document.id,
                        page=page_number,
                        text=window,
                        display_name=document.display_name,
                        project_name=document.project_name,
                    )
                )

        return passages

    def split_all(self, documents: list[Document]) -> list[Passage]:
        """Split several documents, preserving document order."""
        passages: list[Passage] = []
        for document in documents:
            doc_passages = self.split(document)
            logger.debug("Split %s into %d passages", document.display_name, len(doc_passages))
            passages.extend(doc_passages)
        return passages
