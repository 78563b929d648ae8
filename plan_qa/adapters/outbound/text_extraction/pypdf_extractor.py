"""PDF text extraction with pypdf."""

import io
import logging

from pypdf import PdfReader

from ....core.domain.exceptions import PDFExtractionError
from ....core.ports.text_extractor_port import TextExtractorPort

logger = logging.getLogger(__name__)


class PyPDFTextExtractor(TextExtractorPort):
    """Extracts page text from PDF bytes.

    Pages are joined with :attr:`PAGE_BREAK` so the passage splitter can cite
    physical page numbers. Pages with no extractable text (scans) contribute
    an empty page rather than shifting later page numbers.
    """

    def extract(self, data: bytes) -> str:
        if not data:
            raise PDFExtractionError("PDF is empty")

        try:
            reader = PdfReader(io.BytesIO(data))
            if reader.is_encrypted and not reader.decrypt(""):
                raise PDFExtractionError("PDF is encrypted")

            pages = []
            for page in reader.pages:
                text = page.extract_text() or ""
                # a stray form feed inside a page would shift page numbers
                pages.append(text.replace(self.PAGE_BREAK, " "))
        except PDFExtractionError:
            raise
        except Exception as exc:
            raise PDFExtractionError(str(exc) or type(exc).__name__, cause=exc) from exc

        logger.debug("Extracted %d pages", len(pages))
        return self.PAGE_BREAK.join(pages)
