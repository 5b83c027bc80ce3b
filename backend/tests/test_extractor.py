import pytest

from conftest import build_pdf
from sortir.core.exceptions import ExtractionError
from sortir.services.extractor import extract_text


class TestExtractText:
    """Test cases for PDF text extraction."""

    def test_extracts_page_text(self, invoice_pdf):
        assert "Invoice #42 due June 1" in extract_text(invoice_pdf)

    def test_pages_are_joined_in_document_order(self):
        text = extract_text(build_pdf(["Alpha section", "Bravo section", "Charlie section"]))

        assert text.index("Alpha") < text.index("Bravo") < text.index("Charlie")

    def test_image_only_pdf_is_rejected(self, image_only_pdf):
        with pytest.raises(ExtractionError) as exc_info:
            extract_text(image_only_pdf)

        assert exc_info.value.detail == "No extractable text found in PDF"
        assert exc_info.value.status_code == 422

    def test_corrupt_bytes_are_rejected(self):
        with pytest.raises(ExtractionError) as exc_info:
            extract_text(b"this is not a pdf at all")

        assert exc_info.value.detail == "Could not read PDF file"
        assert exc_info.value.reason

    def test_blank_pages_next_to_text_pages_still_extract(self):
        text = extract_text(build_pdf([None, "Only this page has text"]))

        assert "Only this page has text" in text
