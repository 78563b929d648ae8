"""Unit tests for pypdf text extraction."""

from unittest.mock import MagicMock, patch

import pytest

from plan_qa.adapters.outbound.text_extraction.pypdf_extractor import PyPDFTextExtractor
from plan_qa.core.domain.exceptions import PDFExtractionError

pytestmark = pytest.mark.unit

READER_PATH = "plan_qa.adapters.outbound.text_extraction.pypdf_extractor.PdfReader"


def fake_reader(page_texts, encrypted=False, decrypts=True):
    reader = MagicMock()
    reader.is_encrypted = encrypted
    reader.decrypt.return_value = 1 if decrypts else 0
    pages = []
    for text in page_texts:
        page = MagicMock()
        page.extract_text.return_value = text
        pages.append(page)
    reader.pages = pages
    return reader


class TestPyPDFTextExtractor:
    def test_pages_are_joined_with_form_feed(self):
        with patch(READER_PATH, return_value=fake_reader(["Cover", "Garage size: 24x24 ft", "Roof"])):
            text = PyPDFTextExtractor().extract(b"%PDF")

        assert text == "Cover\fGarage size: 24x24 ft\fRoof"

    def test_pages_without_text_keep_their_slot(self):
        with patch(READER_PATH, return_value=fake_reader(["Cover", None, "", "Notes"])):
            text = PyPDFTextExtractor().extract(b"%PDF")

        assert text.split("\f") == ["Cover", "", "", "Notes"]

    def test_form_feed_inside_a_page_is_neutralized(self):
        with patch(READER_PATH, return_value=fake_reader(["a\fb", "c"])):
            text = PyPDFTextExtractor().extract(b"%PDF")

        assert text == "a b\fc"

    def test_blank_pdf_has_no_text(self, minimal_pdf_bytes):
        assert PyPDFTextExtractor().extract(minimal_pdf_bytes).strip() == ""

    def test_empty_bytes_are_rejected(self):
        with pytest.raises(PDFExtractionError, match="PDF is empty"):
            PyPDFTextExtractor().extract(b"")

    def test_garbage_bytes_are_rejected(self):
        with pytest.raises(PDFExtractionError) as exc_info:
            PyPDFTextExtractor().extract(b"this is not a pdf at all")

        assert exc_info.value.cause is not None

    def test_encrypted_pdf_is_rejected(self):
        with patch(READER_PATH, return_value=fake_reader(["secret"], encrypted=True, decrypts=False)):
            with pytest.raises(PDFExtractionError, match="encrypted"):
                PyPDFTextExtractor().extract(b"%PDF")

    def test_encrypted_pdf_with_empty_password_is_read(self):
        with patch(READER_PATH, return_value=fake_reader(["open"], encrypted=True, decrypts=True)):
            assert PyPDFTextExtractor().extract(b"%PDF") == "open"
